"""
Student API Endpoints (academic backend)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campus_erp.core.database import SupabaseClient, get_db
from campus_erp.services.profile_service import get_profile_resolver

router = APIRouter(prefix="/student", tags=["Student"])


@router.get("/profile")
async def get_student_profile(
    user_id: Optional[str] = Query(None, description="Auth user id of the student"),
    db: SupabaseClient = Depends(get_db),
):
    """Flattened student profile with class, branch, batch, semester, guardian and address"""
    profile = await get_profile_resolver(db).resolve_student(user_id)
    return {"success": True, "data": profile.model_dump()}
