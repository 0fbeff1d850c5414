from campus_erp.services.profile_service import ProfileResolver
from campus_erp.services.account_service import AccountService
from campus_erp.services.student_service import StudentService
from campus_erp.services.professor_service import ProfessorService
from campus_erp.services.academic_service import AcademicCatalogService

__all__ = [
    "ProfileResolver",
    "AccountService",
    "StudentService",
    "ProfessorService",
    "AcademicCatalogService",
]
