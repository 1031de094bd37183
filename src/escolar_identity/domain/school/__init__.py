"""School (tenant) domain."""

from escolar_identity.domain.school.school import School
from escolar_identity.domain.school.school_repository import SchoolRepository

__all__ = ["School", "SchoolRepository"]
