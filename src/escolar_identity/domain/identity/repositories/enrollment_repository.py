"""Enrollment repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID


class EnrollmentRepository(ABC):
    """Associates student identities with classes."""

    @abstractmethod
    async def enroll(self, identity_id: UUID, class_id: UUID) -> None:
        """Enroll a student in a class."""

    @abstractmethod
    async def list_class_ids(self, identity_id: UUID) -> list[UUID]:
        """List the classes a student is enrolled in."""
