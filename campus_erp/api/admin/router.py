from fastapi import APIRouter
from campus_erp.api.admin.endpoints import auth, students, professors, academic

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(students.router)
api_router.include_router(professors.router)
api_router.include_router(academic.router)
