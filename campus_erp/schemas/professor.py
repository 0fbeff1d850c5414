"""
Professor Schemas - admin directory requests
"""

from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from campus_erp.schemas.common import BlankAsMissingModel


class ProfessorCreate(BlankAsMissingModel):
    """Schema for registering a professor (auth user + users row + profile)"""
    full_name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6, description="Defaults to Prof@<employee_id>")
    phone: Optional[str] = None
    employee_id: str = Field(..., min_length=1)
    department_id: Optional[UUID] = None
    designation: Optional[str] = None
    specialization: Optional[str] = None
    qualification: Optional[str] = None
    joined_date: Optional[str] = None


class ProfessorUpdate(BlankAsMissingModel):
    """Partial update; email and employee id are immutable"""
    full_name: Optional[str] = Field(None, min_length=2)
    phone: Optional[str] = None
    department_id: Optional[UUID] = None
    designation: Optional[str] = None
    specialization: Optional[str] = None
    qualification: Optional[str] = None
    joined_date: Optional[str] = None
