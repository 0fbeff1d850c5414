"""
Student Directory API Endpoints (admin backend)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campus_erp.core.config import settings
from campus_erp.core.database import SupabaseClient, get_db
from campus_erp.schemas.common import AccountStatus
from campus_erp.schemas.student import StudentCreate, StudentUpdate
from campus_erp.services.student_service import get_student_service

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("")
async def list_students(
    search: Optional[str] = Query(None, description="Matches roll or enrollment number"),
    batch: Optional[int] = Query(None, description="Admission year"),
    status: Optional[AccountStatus] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: SupabaseClient = Depends(get_db),
):
    """List students with pagination"""
    students, pagination = await get_student_service(db).list_page(
        page,
        limit,
        search=search,
        status=status.value if status else None,
        filters={"admission_year": batch},
    )
    return {"success": True, "data": students, "pagination": pagination}


@router.get("/{student_id}")
async def get_student(student_id: str, db: SupabaseClient = Depends(get_db)):
    student = await get_student_service(db).get(student_id)
    return {"success": True, "data": student}


@router.post("", status_code=201)
async def create_student(data: StudentCreate, db: SupabaseClient = Depends(get_db)):
    """Register a student; the initial password is returned once"""
    created = await get_student_service(db).create_student(data)
    return {"success": True, "message": "Student registered successfully", "data": created}


@router.put("/{student_id}")
async def update_student(student_id: str, data: StudentUpdate, db: SupabaseClient = Depends(get_db)):
    student = await get_student_service(db).update_student(student_id, data)
    return {"success": True, "message": "Student updated successfully", "data": student}


@router.delete("/{student_id}")
async def delete_student(student_id: str, db: SupabaseClient = Depends(get_db)):
    """Soft delete: the user is deactivated, rows are kept"""
    await get_student_service(db).soft_delete(student_id)
    return {"success": True, "message": "Student deleted successfully"}
