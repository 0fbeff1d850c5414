"""
Academic Catalogue API Endpoints (admin backend)
Batches, courses, branches and classes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campus_erp.core.database import SupabaseClient, get_db
from campus_erp.schemas.academic import (
    BatchCreate,
    BranchCreate,
    ClassCreate,
    ClassUpdate,
    CourseCreate,
    CourseUpdate,
)
from campus_erp.services.academic_service import get_academic_service

router = APIRouter(prefix="/academic", tags=["Academic"])


# ==================== Batches ====================

@router.get("/batches")
async def list_batches(db: SupabaseClient = Depends(get_db)):
    return {"success": True, "data": await get_academic_service(db).list_batches()}


@router.get("/batches/{batch_id}")
async def get_batch(batch_id: str, db: SupabaseClient = Depends(get_db)):
    return {"success": True, "data": await get_academic_service(db).get_batch(batch_id)}


@router.post("/batches", status_code=201)
async def create_batch(data: BatchCreate, db: SupabaseClient = Depends(get_db)):
    batch = await get_academic_service(db).create_batch(data)
    return {"success": True, "message": "Batch created", "data": batch}


# ==================== Courses ====================

@router.get("/courses")
async def list_courses(db: SupabaseClient = Depends(get_db)):
    """Active courses by name"""
    return {"success": True, "data": await get_academic_service(db).list_courses()}


@router.post("/courses", status_code=201)
async def create_course(data: CourseCreate, db: SupabaseClient = Depends(get_db)):
    course = await get_academic_service(db).create_course(data)
    return {"success": True, "message": "Course created", "data": course}


@router.get("/courses/{course_id}")
async def get_course(course_id: str, db: SupabaseClient = Depends(get_db)):
    return {"success": True, "data": await get_academic_service(db).get_course(course_id)}


@router.put("/courses/{course_id}")
async def update_course(course_id: str, data: CourseUpdate, db: SupabaseClient = Depends(get_db)):
    course = await get_academic_service(db).update_course(course_id, data)
    return {"success": True, "message": "Course updated", "data": course}


@router.delete("/courses/{course_id}")
async def delete_course(course_id: str, db: SupabaseClient = Depends(get_db)):
    await get_academic_service(db).delete_course(course_id)
    return {"success": True, "message": "Course deleted successfully"}


# ==================== Branches ====================

@router.get("/branches")
async def list_branches(
    course_id: Optional[str] = Query(None),
    db: SupabaseClient = Depends(get_db),
):
    """Active branches by name, optionally for one course"""
    return {"success": True, "data": await get_academic_service(db).list_branches(course_id)}


@router.post("/branches", status_code=201)
async def create_branch(data: BranchCreate, db: SupabaseClient = Depends(get_db)):
    branch = await get_academic_service(db).create_branch(data)
    return {"success": True, "message": "Branch created", "data": branch}


# ==================== Classes ====================

@router.get("/classes")
async def list_classes(
    batch_id: Optional[str] = Query(None),
    branch_id: Optional[str] = Query(None),
    db: SupabaseClient = Depends(get_db),
):
    """Classes by name with their batch and branch"""
    classes = await get_academic_service(db).list_classes(batch_id, branch_id)
    return {"success": True, "data": classes}


@router.get("/classes/{class_id}")
async def get_class(class_id: str, db: SupabaseClient = Depends(get_db)):
    return {"success": True, "data": await get_academic_service(db).get_class(class_id)}


@router.post("/classes", status_code=201)
async def create_class(data: ClassCreate, db: SupabaseClient = Depends(get_db)):
    created = await get_academic_service(db).create_class(data)
    return {"success": True, "message": "Class created", "data": created}


@router.put("/classes/{class_id}")
async def update_class(class_id: str, data: ClassUpdate, db: SupabaseClient = Depends(get_db)):
    updated = await get_academic_service(db).update_class(class_id, data)
    return {"success": True, "message": "Class updated", "data": updated}
