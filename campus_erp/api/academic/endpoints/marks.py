"""
Marks API Endpoints - not implemented yet
"""

from fastapi import APIRouter

router = APIRouter(prefix="/marks", tags=["Marks"])


@router.post("")
async def enter_marks():
    return {"message": "Enter marks - to be implemented"}


@router.get("/my")
async def get_my_marks():
    return {"message": "Get my marks - to be implemented"}


@router.post("/components")
async def create_assessment_component():
    return {"message": "Create assessment component - to be implemented"}
