"""
Professor Directory API Endpoints (admin backend)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campus_erp.core.config import settings
from campus_erp.core.database import SupabaseClient, get_db
from campus_erp.schemas.professor import ProfessorCreate, ProfessorUpdate
from campus_erp.schemas.common import AccountStatus
from campus_erp.services.professor_service import get_professor_service

router = APIRouter(prefix="/professors", tags=["Professors"])


@router.get("")
async def list_professors(
    search: Optional[str] = Query(None, description="Matches employee id or designation"),
    department: Optional[str] = Query(None, description="Department id"),
    status: Optional[AccountStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: SupabaseClient = Depends(get_db),
):
    """List professors with pagination"""
    professors, pagination = await get_professor_service(db).list_page(
        page,
        limit,
        search=search,
        status=status.value if status else None,
        filters={"department_id": department},
    )
    return {"success": True, "data": professors, "pagination": pagination}


@router.get("/{professor_id}")
async def get_professor(professor_id: str, db: SupabaseClient = Depends(get_db)):
    professor = await get_professor_service(db).get(professor_id)
    return {"success": True, "data": professor}


@router.post("", status_code=201)
async def create_professor(data: ProfessorCreate, db: SupabaseClient = Depends(get_db)):
    """Register a professor; the initial password is returned once"""
    created = await get_professor_service(db).create_professor(data)
    return {"success": True, "message": "Professor created successfully", "data": created}


@router.put("/{professor_id}")
async def update_professor(professor_id: str, data: ProfessorUpdate, db: SupabaseClient = Depends(get_db)):
    professor = await get_professor_service(db).update_professor(professor_id, data)
    return {"success": True, "message": "Professor updated successfully", "data": professor}


@router.delete("/{professor_id}")
async def delete_professor(professor_id: str, db: SupabaseClient = Depends(get_db)):
    await get_professor_service(db).soft_delete(professor_id)
    return {"success": True, "message": "Professor deleted successfully"}
