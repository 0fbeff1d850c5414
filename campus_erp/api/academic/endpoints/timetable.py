"""
Timetable API Endpoints - not implemented yet
"""

from fastapi import APIRouter

router = APIRouter(prefix="/timetable", tags=["Timetable"])


@router.get("/my")
async def get_my_timetable():
    return {"message": "Get my timetable - to be implemented"}


@router.get("/today")
async def get_today_schedule():
    return {"message": "Get today's schedule - to be implemented"}


@router.get("/week")
async def get_week_schedule():
    return {"message": "Get week schedule - to be implemented"}


@router.get("/class/{class_id}")
async def get_class_timetable(class_id: str):
    return {"message": "Get class timetable - to be implemented"}


@router.get("/professor/{professor_id}")
async def get_professor_timetable(professor_id: str):
    return {"message": "Get professor timetable - to be implemented"}


@router.get("/assigned-classes")
async def get_assigned_classes():
    return {"message": "Get assigned classes - to be implemented"}
