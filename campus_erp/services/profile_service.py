"""
Profile Aggregation Service
Builds the flattened student / professor profile from the hosted tables.

Only the role-specific profile row is required. Every other lookup (user,
enrollment, branch, batch, semester, guardian, address, department) is
enrichment: when it finds nothing, or fails, its field group comes back
null and the rest of the profile is still returned.

Lookups that only depend on the profile row run concurrently; the class
dimension lookups (branch, batch, semester) run concurrently once the
active enrollment is known.
"""

import asyncio
from typing import Any, Awaitable, Dict, Optional

from campus_erp.core.database import first_related
from campus_erp.core.exceptions import (
    DatabaseError,
    EnrichmentError,
    MissingParameterError,
    ProfileNotFoundError,
    UpstreamError,
)
from campus_erp.core.logging_config import logger
from campus_erp.schemas.profile import ProfessorProfileData, StudentProfileData
from campus_erp.services.base import SupabaseService, is_missing_row


USER_COLUMNS = "id, email, full_name, phone, role"
ENROLLMENT_COLUMNS = """
    class_id,
    joined_on,
    classes (
        class_label,
        batch_id,
        branch_id,
        section_id,
        semester_id
    )
"""
ADDRESS_COLUMNS = """
    address_type,
    addresses (
        address_line1,
        address_line2,
        city,
        state,
        pincode
    )
"""


def format_address(address: Optional[Dict[str, Any]]) -> Optional[str]:
    """`line1[, line2], city, state - pincode`"""
    if not address:
        return None
    line = address.get("address_line1") or ""
    if address.get("address_line2"):
        line = f"{line}, {address['address_line2']}"
    return (
        f"{line}, {address.get('city') or ''}, "
        f"{address.get('state') or ''} - {address.get('pincode') or ''}"
    )


class ProfileResolver(SupabaseService):
    """Resolves profile DTOs for the academic backend"""

    async def _enrich(self, lookup: str, pending: Awaitable[Optional[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
        """Await a secondary lookup; a failure is logged and reads as "no row" """
        try:
            return await pending
        except Exception as exc:
            error = EnrichmentError(lookup, exc)
            logger.warning(
                error.message,
                extra={
                    "event_type": "enrichment_failed",
                    "lookup": lookup,
                    "error_type": type(exc).__name__,
                    "error_code": getattr(exc, "code", None),
                }
            )
            return None

    async def _fetch_profile(self, table: str, role: str, user_id: str) -> Dict[str, Any]:
        try:
            return await self.db.table(table).select("*").eq("user_id", user_id).single()
        except DatabaseError as exc:
            if is_missing_row(exc):
                raise ProfileNotFoundError(role, user_id) from exc
            logger.log_error_with_context(exc, context=f"{role} profile lookup", exc_info=False, user_id=user_id)
            raise UpstreamError(f"Failed to fetch {role} profile", cause=exc) from exc
        except Exception as exc:
            logger.log_error_with_context(exc, context=f"{role} profile lookup", user_id=user_id)
            raise UpstreamError(f"Failed to fetch {role} profile", cause=exc) from exc

    async def _fetch_by_id(self, table: str, columns: str, row_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not row_id:
            return None
        return await self.db.table(table).select(columns).eq("id", row_id).maybe_single()

    async def _fetch_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._fetch_by_id("users", USER_COLUMNS, user_id)

    # =====================================================
    # STUDENT
    # =====================================================

    async def _fetch_enrollment(self, student_id: str) -> Optional[Dict[str, Any]]:
        # More than one active row also lands here as "no single row"
        return await (
            self.db.table("class_students")
            .select(ENROLLMENT_COLUMNS)
            .eq("student_id", student_id)
            .eq("is_active", True)
            .maybe_single()
        )

    async def _fetch_guardian(self, student_id: str) -> Optional[Dict[str, Any]]:
        return await (
            self.db.table("guardians")
            .select("*")
            .eq("student_id", student_id)
            .limit(1)
            .maybe_single()
        )

    async def _fetch_primary_address(self, user_id: str) -> Optional[Dict[str, Any]]:
        link = await (
            self.db.table("user_addresses")
            .select(ADDRESS_COLUMNS)
            .eq("user_id", user_id)
            .eq("is_primary", True)
            .maybe_single()
        )
        return first_related(link.get("addresses")) if link else None

    async def _resolve_class(self, student_id: str) -> Dict[str, Any]:
        """Active enrollment plus the branch, batch and semester of its class"""
        enrollment = await self._enrich("class_students", self._fetch_enrollment(student_id))
        class_info = first_related(enrollment.get("classes")) if enrollment else None
        class_info = class_info or {}

        branch, batch, semester = await asyncio.gather(
            self._enrich("branches", self._fetch_by_id(
                "branches", "branch_name, branch_code", class_info.get("branch_id"))),
            self._enrich("batches", self._fetch_by_id(
                "batches", "batch_name, batch_year", class_info.get("batch_id"))),
            self._enrich("semesters", self._fetch_by_id(
                "semesters", "semester_number, semester_type", class_info.get("semester_id"))),
        )

        return {
            "enrollment": enrollment or {},
            "class": class_info,
            "branch": branch or {},
            "batch": batch or {},
            "semester": semester or {},
        }

    async def resolve_student(self, user_id: Optional[str]) -> StudentProfileData:
        if not user_id or not user_id.strip():
            raise MissingParameterError("user_id")

        profile = await self._fetch_profile("student_profiles", "student", user_id)

        user, academic, guardian, address = await asyncio.gather(
            self._enrich("users", self._fetch_user(user_id)),
            self._resolve_class(profile["id"]),
            self._enrich("guardians", self._fetch_guardian(profile["id"])),
            self._enrich("user_addresses", self._fetch_primary_address(user_id)),
        )
        user = user or {}
        guardian = guardian or {}
        enrollment = academic["enrollment"]

        return StudentProfileData(
            id=profile["id"],
            user_id=profile["user_id"],
            roll_number=profile.get("roll_number"),
            enrollment_number=profile.get("enrollment_number"),
            gender=profile.get("gender"),
            date_of_birth=profile.get("date_of_birth"),
            blood_group=profile.get("blood_group"),
            category=profile.get("category"),
            is_hosteller=profile.get("is_hosteller"),
            admission_year=profile.get("admission_year"),
            class_id=enrollment.get("class_id"),
            class_label=academic["class"].get("class_label"),
            enrolled_on=enrollment.get("joined_on"),
            semester=academic["semester"].get("semester_number"),
            department=academic["branch"].get("branch_name"),
            department_code=academic["branch"].get("branch_code"),
            academic_year=academic["batch"].get("batch_name"),
            batch_year=academic["batch"].get("batch_year"),
            guardian_name=guardian.get("guardian_name"),
            guardian_phone=guardian.get("phone"),
            guardian_email=guardian.get("email"),
            guardian_relationship=guardian.get("relationship"),
            address=format_address(address),
            email=user.get("email"),
            full_name=user.get("full_name"),
            phone=user.get("phone"),
            role=user.get("role"),
        )

    # =====================================================
    # PROFESSOR
    # =====================================================

    async def resolve_professor(self, user_id: Optional[str]) -> ProfessorProfileData:
        if not user_id or not user_id.strip():
            raise MissingParameterError("user_id")

        profile = await self._fetch_profile("professor_profiles", "professor", user_id)

        user, department = await asyncio.gather(
            self._enrich("users", self._fetch_user(user_id)),
            self._enrich("departments", self._fetch_by_id(
                "departments", "id, department_name, department_code", profile.get("department_id"))),
        )
        user = user or {}
        department = department or {}

        return ProfessorProfileData(
            id=profile["id"],
            user_id=profile["user_id"],
            employee_id=profile.get("employee_id"),
            department_id=profile.get("department_id"),
            department_name=department.get("department_name"),
            department_code=department.get("department_code"),
            designation=profile.get("designation"),
            qualification=profile.get("qualification"),
            specialization=profile.get("specialization"),
            joining_date=profile.get("joined_date"),
            employment_type=profile.get("employment_type"),
            experience_years=profile.get("experience_years"),
            email=user.get("email"),
            full_name=user.get("full_name"),
            phone=user.get("phone"),
            role=user.get("role"),
        )


def get_profile_resolver(db) -> ProfileResolver:
    return ProfileResolver(db)
