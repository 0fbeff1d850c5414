"""
Profile Schemas - flattened profile DTOs returned by the academic backend
"""

from typing import Optional

from pydantic import BaseModel


class StudentProfileData(BaseModel):
    """Student profile merged from profile, user, enrollment, class dimensions, guardian and address"""
    id: str
    user_id: str
    roll_number: Optional[str] = None
    enrollment_number: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    blood_group: Optional[str] = None
    category: Optional[str] = None
    is_hosteller: Optional[bool] = None
    admission_year: Optional[int] = None

    # Class
    class_id: Optional[str] = None
    class_label: Optional[str] = None
    enrolled_on: Optional[str] = None
    semester: Optional[int] = None

    # Branch
    department: Optional[str] = None
    department_code: Optional[str] = None

    # Batch
    academic_year: Optional[str] = None
    batch_year: Optional[int] = None

    # Guardian
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    guardian_email: Optional[str] = None
    guardian_relationship: Optional[str] = None

    address: Optional[str] = None

    # User
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None


class ProfessorProfileData(BaseModel):
    """Professor profile merged from profile, user and department"""
    id: str
    user_id: str
    employee_id: Optional[str] = None
    department_id: Optional[str] = None
    department_name: Optional[str] = None
    department_code: Optional[str] = None
    designation: Optional[str] = None
    qualification: Optional[str] = None
    specialization: Optional[str] = None
    joining_date: Optional[str] = None
    employment_type: Optional[str] = None
    experience_years: Optional[int] = None

    # User
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
