"""School repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from escolar_identity.domain.school.school import School


class SchoolRepository(ABC):
    """Repository interface for schools."""

    @abstractmethod
    async def find_by_id(self, school_id: UUID) -> Optional[School]:
        """Find a school by its ID."""

    @abstractmethod
    async def save(self, school: School) -> None:
        """Insert or update a school."""
