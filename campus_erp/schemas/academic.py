"""
Academic Catalogue Schemas - batches, courses, branches, classes
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class BatchCreate(BaseModel):
    batch_name: str = Field(..., min_length=1)
    batch_year: int = Field(..., ge=2000, le=2100)


class CourseCreate(BaseModel):
    course_name: str = Field(..., min_length=1)
    course_code: str = Field(..., min_length=1)
    duration_years: int = Field(default=4, ge=1, le=6)
    total_semesters: int = Field(default=8, ge=1, le=12)


class CourseUpdate(BaseModel):
    course_name: Optional[str] = Field(None, min_length=1)
    course_code: Optional[str] = Field(None, min_length=1)
    duration_years: Optional[int] = Field(None, ge=1, le=6)
    total_semesters: Optional[int] = Field(None, ge=1, le=12)
    is_active: Optional[bool] = None


class BranchCreate(BaseModel):
    branch_name: str = Field(..., min_length=1)
    branch_code: str = Field(..., min_length=1)
    course_id: UUID


class ClassCreate(BaseModel):
    class_name: str = Field(..., min_length=1)
    section: str = Field(..., min_length=1, max_length=2)
    current_semester: int = Field(default=1, ge=1, le=12)
    batch_id: UUID
    branch_id: UUID


class ClassUpdate(BaseModel):
    """Semester and class roles; a blank role id clears the assignment"""

    current_semester: Optional[int] = Field(None, ge=1, le=12)
    class_incharge_id: Optional[UUID] = None
    class_representative_id: Optional[UUID] = None

    @field_validator("class_incharge_id", "class_representative_id", mode="before")
    @classmethod
    def blank_clears(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value
