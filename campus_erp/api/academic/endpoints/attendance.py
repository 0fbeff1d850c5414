"""
Attendance API Endpoints - not implemented yet
"""

from fastapi import APIRouter

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("")
async def mark_attendance():
    return {"message": "Mark attendance - to be implemented"}


@router.get("/session/{session_id}")
async def get_attendance_session(session_id: str):
    return {"message": "Get attendance session - to be implemented"}


@router.put("/session/{session_id}")
async def update_attendance_session(session_id: str):
    return {"message": "Update attendance session - to be implemented"}


@router.get("/my")
async def get_my_attendance():
    return {"message": "Get my attendance - to be implemented"}
