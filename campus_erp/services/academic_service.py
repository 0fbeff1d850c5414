"""
Academic Catalogue Service
Batches, courses, branches and classes managed from the admin portal
"""

from typing import Any, Dict, List, Optional

from campus_erp.core.exceptions import (
    DatabaseError,
    DuplicateRecordError,
    ResourceNotFoundError,
    UpstreamError,
)
from campus_erp.schemas.academic import (
    BatchCreate,
    BranchCreate,
    ClassCreate,
    ClassUpdate,
    CourseCreate,
    CourseUpdate,
)
from campus_erp.services.base import SupabaseService, is_missing_row


CLASS_LIST_SELECT = "*, batches(id, batch_name), branches(id, branch_name, branch_code)"

CLASS_DETAIL_SELECT = (
    "*, batches(id, batch_name, batch_year), "
    "branches(id, branch_name, branch_code, course_id), "
    "class_incharge:class_incharge_id(id, users(full_name)), "
    "class_representative:class_representative_id(id, users(full_name))"
)


class AcademicCatalogService(SupabaseService):
    """Service for the academic catalogue tables"""

    async def _list(self, resource: str, query) -> List[Dict[str, Any]]:
        try:
            result = await query.execute()
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to fetch {resource}", cause=exc) from exc
        return result.data or []

    async def _insert(self, table: str, resource: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await self.db.table(table).insert(payload).select().single()
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to create {resource}", cause=exc) from exc

    async def _check_unique(self, table: str, message: str, field: str, **filters: Any) -> None:
        try:
            taken = await self._exists(table, **filters)
        except DatabaseError as exc:
            raise UpstreamError(f"Failed to check existing {table}", cause=exc) from exc
        if taken:
            raise DuplicateRecordError(message, field=field)

    # =====================================================
    # BATCHES
    # =====================================================

    async def list_batches(self) -> List[Dict[str, Any]]:
        query = self.db.table("batches").select("*").order("batch_year", desc=True)
        return await self._list("batches", query)

    async def get_batch(self, batch_id: str) -> Dict[str, Any]:
        return await self._get_or_404("batches", batch_id, "Batch")

    async def create_batch(self, data: BatchCreate) -> Dict[str, Any]:
        return await self._insert("batches", "batch", {**data.model_dump(), "is_active": True})

    # =====================================================
    # COURSES
    # =====================================================

    async def list_courses(self) -> List[Dict[str, Any]]:
        query = self.db.table("courses").select("*").eq("is_active", True).order("course_name")
        return await self._list("courses", query)

    async def get_course(self, course_id: str) -> Dict[str, Any]:
        return await self._get_or_404("courses", course_id, "Course")

    async def create_course(self, data: CourseCreate) -> Dict[str, Any]:
        await self._check_unique(
            "courses", "Course code already exists", "course_code", course_code=data.course_code
        )
        return await self._insert("courses", "course", {**data.model_dump(), "is_active": True})

    async def update_course(self, course_id: str, data: CourseUpdate) -> Dict[str, Any]:
        existing = await self._get_or_404("courses", course_id, "Course")
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return existing
        try:
            return await self.db.table("courses").update(changes).eq("id", course_id).select().single()
        except DatabaseError as exc:
            raise UpstreamError("Failed to update course", cause=exc) from exc

    async def delete_course(self, course_id: str) -> None:
        """Soft delete: the course stays referenced by branches and batches"""
        await self._get_or_404("courses", course_id, "Course", columns="id")
        try:
            await self.db.table("courses").update({"is_active": False}).eq("id", course_id).execute()
        except DatabaseError as exc:
            raise UpstreamError("Failed to delete course", cause=exc) from exc

    # =====================================================
    # BRANCHES
    # =====================================================

    async def list_branches(self, course_id: Optional[str] = None) -> List[Dict[str, Any]]:
        query = self.db.table("branches").select("*").eq("is_active", True)
        if course_id:
            query = query.eq("course_id", course_id)
        return await self._list("branches", query.order("branch_name"))

    async def create_branch(self, data: BranchCreate) -> Dict[str, Any]:
        payload = data.model_dump(mode="json")
        await self._check_unique(
            "branches",
            "Branch code already exists for this course",
            "branch_code",
            branch_code=payload["branch_code"],
            course_id=payload["course_id"],
        )
        return await self._insert("branches", "branch", {**payload, "is_active": True})

    # =====================================================
    # CLASSES
    # =====================================================

    async def list_classes(
        self,
        batch_id: Optional[str] = None,
        branch_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = self.db.table("classes").select(CLASS_LIST_SELECT)
        if batch_id:
            query = query.eq("batch_id", batch_id)
        if branch_id:
            query = query.eq("branch_id", branch_id)
        return await self._list("classes", query.order("class_name"))

    async def get_class(self, class_id: str) -> Dict[str, Any]:
        return await self._get_or_404("classes", class_id, "Class", columns=CLASS_DETAIL_SELECT)

    async def create_class(self, data: ClassCreate) -> Dict[str, Any]:
        payload = data.model_dump(mode="json")
        await self._check_unique(
            "classes",
            "Section already exists for this batch and branch",
            "section",
            batch_id=payload["batch_id"],
            branch_id=payload["branch_id"],
            section=payload["section"],
        )
        return await self._insert("classes", "class", {**payload, "is_active": True})

    async def update_class(self, class_id: str, data: ClassUpdate) -> Dict[str, Any]:
        changes = data.model_dump(mode="json", exclude_unset=True)
        if not changes:
            return await self._get_or_404("classes", class_id, "Class")
        try:
            return await self.db.table("classes").update(changes).eq("id", class_id).select().single()
        except DatabaseError as exc:
            if is_missing_row(exc):
                raise ResourceNotFoundError("Class", class_id) from exc
            raise UpstreamError("Failed to update class", cause=exc) from exc


def get_academic_service(db) -> AcademicCatalogService:
    return AcademicCatalogService(db)
