"""
Student Schemas - admin directory requests
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from campus_erp.schemas.common import BlankAsMissingModel


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class StudentCreate(BlankAsMissingModel):
    """Schema for registering a student (auth user + users row + profile)"""
    full_name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6, description="Defaults to Student@<roll_number>")
    phone: Optional[str] = None
    roll_number: str = Field(..., min_length=1)
    enrollment_number: Optional[str] = None
    admission_year: int = Field(..., ge=2000, le=2100)
    gender: Optional[Gender] = None
    date_of_birth: Optional[str] = None
    department_id: Optional[UUID] = None


class StudentUpdate(BlankAsMissingModel):
    """Partial update; email and roll number are immutable"""
    full_name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = None
    enrollment_number: Optional[str] = None
    admission_year: Optional[int] = Field(None, ge=2000, le=2100)
    gender: Optional[Gender] = None
    date_of_birth: Optional[str] = None
    department_id: Optional[UUID] = None
