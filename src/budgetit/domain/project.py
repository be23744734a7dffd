"""Project domain service."""

import logging
from datetime import datetime
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import Project as ProjectEntity
from budgetit.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    not_found,
)

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for managing projects and the budget each one owns."""

    def __init__(self, db: Database):
        """Initialize project service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_references(
        self, client_uuid: str, status_uuid: str, user_uuid: Optional[str]
    ) -> None:
        if self.db.get_client(client_uuid) is None:
            raise NotFoundError(not_found("Client", client_uuid))
        if self.db.get_status(status_uuid) is None:
            raise NotFoundError(not_found("Status", status_uuid))
        if user_uuid is None:
            return

        user = self.db.get_user(user_uuid)
        if user is None:
            raise NotFoundError(not_found("User", user_uuid))
        auth = self.db.get_auth(user.auth_uuid)
        if auth is None or not auth.project:
            raise ValidationError(f"User '{user.username}' cannot be responsible for projects")

    def create_project(
        self,
        capability: Capability,
        name: str,
        description: str,
        client_uuid: str,
        status_uuid: str,
        user_uuid: Optional[str] = None,
        active: bool = True,
    ) -> str:
        """Create a project and its empty budget.

        Args:
            capability: Caller capability (needs project)
            name: Project name
            description: Project description
            client_uuid: Client the project is for
            status_uuid: Initial status
            user_uuid: Responsible user, whose role must grant the project flag
            active: Whether the project is active

        Returns:
            Project UUID

        Raises:
            AuthorizationError: If the caller lacks the project flag
            NotFoundError: If client, status or user do not exist
            ValidationError: If name is empty or the user cannot own projects
        """
        capability.require("project")
        if not name.strip():
            raise ValidationError("Project name cannot be empty")
        self._check_references(client_uuid, status_uuid, user_uuid)

        project_uuid = self.db.create_project(
            name=name.strip(),
            description=description,
            client_uuid=client_uuid,
            status_uuid=status_uuid,
            user_uuid=user_uuid,
            active=active,
        )
        logger.info("Created project %s", project_uuid)
        return project_uuid

    def update_project(
        self,
        capability: Capability,
        project_uuid: str,
        name: str,
        description: str,
        client_uuid: str,
        status_uuid: str,
        user_uuid: Optional[str] = None,
        active: bool = True,
    ) -> None:
        """Update a project. Its budget is left untouched.

        Raises:
            AuthorizationError: If the caller lacks the project flag
            NotFoundError: If the project or a referenced record does not exist
            ValidationError: If name is empty or the user cannot own projects
        """
        capability.require("project")
        self.require_project(project_uuid)
        if not name.strip():
            raise ValidationError("Project name cannot be empty")
        self._check_references(client_uuid, status_uuid, user_uuid)

        self.db.update_project(
            project_uuid=project_uuid,
            name=name.strip(),
            description=description,
            client_uuid=client_uuid,
            status_uuid=status_uuid,
            user_uuid=user_uuid,
            active=active,
        )

    def delete_project(self, capability: Capability, project_uuid: str) -> None:
        """Delete a project with no live tasks and no ledger transactions.

        Planned budget tasks and the budget itself go with it.

        Raises:
            AuthorizationError: If the caller lacks the project flag
            NotFoundError: If the project does not exist
            DependencyError: If live tasks or transactions reference it
        """
        capability.require("project")
        self.require_project(project_uuid)

        counts = self.db.count_project_dependents(project_uuid)
        if any(counts.values()):
            raise DependencyError(delete_blocked("project", project_uuid, counts))

        with self.db.unit_of_work():
            self.db.delete_project(project_uuid)
        logger.info("Deleted project %s", project_uuid)

    def get_project(self, project_uuid: str) -> Optional[ProjectEntity]:
        return self.db.get_project(project_uuid)

    def require_project(self, project_uuid: str) -> ProjectEntity:
        """Get a project or raise NotFoundError."""
        project = self.db.get_project(project_uuid)
        if project is None:
            raise NotFoundError(not_found("Project", project_uuid))
        return project

    def list_projects(
        self,
        name: Optional[str] = None,
        active: Optional[bool] = None,
        client_uuid: Optional[str] = None,
        status_uuid: Optional[str] = None,
        description: Optional[str] = None,
        user_uuid: Optional[str] = None,
        register_min: Optional[datetime] = None,
        register_max: Optional[datetime] = None,
    ) -> list[ProjectEntity]:
        """List projects, newest first, with optional filters."""
        return self.db.list_projects(
            name=name,
            description=description,
            active=active,
            client_uuid=client_uuid,
            status_uuid=status_uuid,
            user_uuid=user_uuid,
            register_min=register_min,
            register_max=register_max,
        )
