# Pydantic schemas
from campus_erp.schemas.common import AccountStatus, BlankAsMissingModel, Pagination, build_pagination
from campus_erp.schemas.profile import StudentProfileData, ProfessorProfileData
from campus_erp.schemas.student import Gender, StudentCreate, StudentUpdate
from campus_erp.schemas.professor import ProfessorCreate, ProfessorUpdate
from campus_erp.schemas.academic import BatchCreate, CourseCreate, CourseUpdate, BranchCreate

__all__ = [
    "BlankAsMissingModel",
    "Pagination",
    "build_pagination",
    "StudentProfileData",
    "ProfessorProfileData",
    "Gender",
    "AccountStatus",
    "StudentCreate",
    "StudentUpdate",
    "ProfessorCreate",
    "ProfessorUpdate",
    "BatchCreate",
    "CourseCreate",
    "CourseUpdate",
    "BranchCreate",
]
