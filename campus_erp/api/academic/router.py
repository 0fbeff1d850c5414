from fastapi import APIRouter
from campus_erp.api.academic.endpoints import (
    student,
    professor,
    timetable,
    attendance,
    marks,
    groups,
    notifications,
)

api_router = APIRouter()

# Profiles
api_router.include_router(student.router)
api_router.include_router(professor.router)

# Not implemented yet, placeholders keep the portal routes stable
api_router.include_router(timetable.router)
api_router.include_router(attendance.router)
api_router.include_router(marks.router)
api_router.include_router(groups.router)
api_router.include_router(notifications.router)
