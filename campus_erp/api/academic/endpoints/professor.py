"""
Professor API Endpoints (academic backend)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campus_erp.core.database import SupabaseClient, get_db
from campus_erp.services.profile_service import get_profile_resolver

router = APIRouter(prefix="/professor", tags=["Professor"])


@router.get("/profile")
async def get_professor_profile(
    user_id: Optional[str] = Query(None, description="Auth user id of the professor"),
    db: SupabaseClient = Depends(get_db),
):
    """Flattened professor profile with department"""
    profile = await get_profile_resolver(db).resolve_professor(user_id)
    return {"success": True, "data": profile.model_dump()}
