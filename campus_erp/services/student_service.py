"""
Student Service
Admin directory operations on students
"""

from typing import Any, Dict

from campus_erp.schemas.student import StudentCreate, StudentUpdate
from campus_erp.services.directory_service import (
    DirectoryService,
    is_active,
    joined_department,
    joined_user,
)


class StudentService(DirectoryService):
    role = "student"
    resource = "Student"
    profile_table = "student_profiles"
    list_columns = """
        id,
        user_id,
        roll_number,
        enrollment_number,
        admission_year,
        gender,
        date_of_birth,
        department_id,
        created_at,
        users!inner(id, full_name, email, phone, is_active),
        departments(id, department_name, department_code)
    """
    search_columns = ("roll_number", "enrollment_number")
    unique_column = "roll_number"
    unique_label = "Roll number"

    def serialize_list_item(self, row: Dict[str, Any]) -> Dict[str, Any]:
        user = joined_user(row)
        department = joined_department(row) or {}
        return {
            "id": row.get("id"),
            "user_id": row.get("user_id"),
            "roll_number": row.get("roll_number"),
            "enrollment_number": row.get("enrollment_number"),
            "full_name": user.get("full_name") or "",
            "email": user.get("email") or "",
            "phone": user.get("phone") or None,
            "department_id": row.get("department_id"),
            "department_name": department.get("department_name"),
            "admission_year": row.get("admission_year"),
            "gender": row.get("gender"),
            "date_of_birth": row.get("date_of_birth"),
            "is_active": is_active(user),
            "created_at": row.get("created_at"),
        }

    def serialize_detail(self, row: Dict[str, Any]) -> Dict[str, Any]:
        user = joined_user(row)
        return {
            "id": row.get("id"),
            "user_id": row.get("user_id"),
            "roll_number": row.get("roll_number"),
            "enrollment_number": row.get("enrollment_number"),
            "full_name": user.get("full_name"),
            "email": user.get("email"),
            "phone": user.get("phone"),
            "department_id": row.get("department_id"),
            "department": joined_department(row),
            "admission_year": row.get("admission_year"),
            "gender": row.get("gender"),
            "date_of_birth": row.get("date_of_birth"),
            "is_active": user.get("is_active"),
        }

    async def create_student(self, data: StudentCreate) -> Dict[str, Any]:
        fields = data.model_dump(mode="json")
        return await self.register(
            email=fields["email"],
            password=fields["password"] or f"Student@{fields['roll_number']}",
            full_name=fields["full_name"],
            phone=fields["phone"],
            unique_value=fields["roll_number"],
            profile_fields={
                "enrollment_number": fields["enrollment_number"],
                "admission_year": fields["admission_year"],
                "gender": fields["gender"],
                "date_of_birth": fields["date_of_birth"],
                "department_id": fields["department_id"],
            },
        )

    async def update_student(self, student_id: str, data: StudentUpdate) -> Dict[str, Any]:
        return await self.update(student_id, data.model_dump(mode="json", exclude_unset=True))


def get_student_service(db) -> StudentService:
    return StudentService(db)
