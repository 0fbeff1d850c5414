"""
Professor Service
Admin directory operations on professors
"""

from typing import Any, Dict

from campus_erp.schemas.professor import ProfessorCreate, ProfessorUpdate
from campus_erp.services.directory_service import (
    DirectoryService,
    is_active,
    joined_department,
    joined_user,
)


class ProfessorService(DirectoryService):
    role = "professor"
    resource = "Professor"
    profile_table = "professor_profiles"
    list_columns = """
        id,
        user_id,
        employee_id,
        designation,
        specialization,
        qualification,
        joined_date,
        department_id,
        created_at,
        users!inner(id, full_name, email, phone, is_active),
        departments(id, department_name, department_code)
    """
    search_columns = ("employee_id", "designation")
    unique_column = "employee_id"
    unique_label = "Employee ID"

    def serialize_list_item(self, row: Dict[str, Any]) -> Dict[str, Any]:
        user = joined_user(row)
        department = joined_department(row) or {}
        return {
            "id": row.get("id"),
            "user_id": row.get("user_id"),
            "employee_id": row.get("employee_id"),
            "full_name": user.get("full_name") or "",
            "email": user.get("email") or "",
            "phone": user.get("phone") or None,
            "department_id": row.get("department_id"),
            "department_name": department.get("department_name"),
            "department_code": department.get("department_code"),
            "designation": row.get("designation"),
            "specialization": row.get("specialization"),
            "qualification": row.get("qualification"),
            "joined_date": row.get("joined_date"),
            "is_active": is_active(user),
            "created_at": row.get("created_at"),
        }

    def serialize_detail(self, row: Dict[str, Any]) -> Dict[str, Any]:
        user = joined_user(row)
        return {
            "id": row.get("id"),
            "user_id": row.get("user_id"),
            "employee_id": row.get("employee_id"),
            "full_name": user.get("full_name"),
            "email": user.get("email"),
            "phone": user.get("phone"),
            "department_id": row.get("department_id"),
            "department": joined_department(row),
            "designation": row.get("designation"),
            "specialization": row.get("specialization"),
            "qualification": row.get("qualification"),
            "joined_date": row.get("joined_date"),
            "experience_years": row.get("experience_years"),
            "is_active": user.get("is_active"),
        }

    async def create_professor(self, data: ProfessorCreate) -> Dict[str, Any]:
        fields = data.model_dump(mode="json")
        return await self.register(
            email=fields["email"],
            password=fields["password"] or f"Prof@{fields['employee_id']}",
            full_name=fields["full_name"],
            phone=fields["phone"],
            unique_value=fields["employee_id"],
            profile_fields={
                "department_id": fields["department_id"],
                "designation": fields["designation"],
                "specialization": fields["specialization"],
                "qualification": fields["qualification"],
                "joined_date": fields["joined_date"],
            },
        )

    async def update_professor(self, professor_id: str, data: ProfessorUpdate) -> Dict[str, Any]:
        return await self.update(professor_id, data.model_dump(mode="json", exclude_unset=True))


def get_professor_service(db) -> ProfessorService:
    return ProfessorService(db)
