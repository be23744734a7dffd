"""Status domain service."""

from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import Status as StatusEntity
from budgetit.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    not_found,
)


class StatusService:
    """Service for managing workflow statuses."""

    def __init__(self, db: Database):
        """Initialize status service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_status(
        self, capability: Capability, name: str, description: str, priority: int
    ) -> str:
        """Create a new status.

        Args:
            capability: Caller capability (needs admin)
            name: Status name
            description: Human readable description
            priority: Sort priority (lower first)

        Returns:
            Status UUID

        Raises:
            AuthorizationError: If the caller lacks the admin flag
            ValidationError: If name is empty
        """
        capability.require("admin")
        if not name.strip():
            raise ValidationError("Status name cannot be empty")
        return self.db.create_status(name=name.strip(), description=description, priority=priority)

    def get_status(self, status_uuid: str) -> Optional[StatusEntity]:
        return self.db.get_status(status_uuid)

    def list_statuses(self) -> list[StatusEntity]:
        return self.db.list_statuses()

    def delete_status(self, capability: Capability, status_uuid: str) -> None:
        """Delete a status no project or task references.

        Raises:
            AuthorizationError: If the caller lacks the admin flag
            NotFoundError: If the status does not exist
            DependencyError: If projects or tasks still use it
        """
        capability.require("admin")
        if self.db.get_status(status_uuid) is None:
            raise NotFoundError(not_found("Status", status_uuid))

        counts = self.db.count_status_references(status_uuid)
        if any(counts.values()):
            raise DependencyError(delete_blocked("status", status_uuid, counts))

        self.db.delete_status(status_uuid)
