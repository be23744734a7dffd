"""Roles and caller capabilities."""

from dataclasses import dataclass
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.entities import Auth as AuthEntity
from budgetit.domain.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
    missing_capability,
    not_found,
)

CAPABILITY_FLAGS = ("admin", "project", "personal", "financial")


@dataclass(frozen=True)
class Capability:
    """The four independent permission gates of a caller.

    Built once at the boundary (REST request, CLI invocation) and passed into
    every service operation that writes.
    """

    admin: bool = False
    project: bool = False
    personal: bool = False
    financial: bool = False

    @classmethod
    def from_auth(cls, auth: AuthEntity) -> "Capability":
        return cls(
            admin=auth.admin,
            project=auth.project,
            personal=auth.personal,
            financial=auth.financial,
        )

    def allows(self, flag: str) -> bool:
        if flag not in CAPABILITY_FLAGS:
            raise ValueError(f"Unknown capability flag '{flag}'")
        return getattr(self, flag)

    def require(self, flag: str) -> None:
        """Raise AuthorizationError unless the flag is granted."""
        if not self.allows(flag):
            raise AuthorizationError(missing_capability(flag))


Capability.FULL = Capability(admin=True, project=True, personal=True, financial=True)


class AuthService:
    """Service for managing roles and resolving caller capabilities."""

    def __init__(self, db: Database):
        """Initialize auth service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_role(
        self,
        capability: Capability,
        name: str,
        admin: bool = False,
        project: bool = False,
        personal: bool = False,
        financial: bool = False,
    ) -> str:
        """Create a new role.

        Args:
            capability: Caller capability (needs admin)
            name: Unique role name
            admin: Grants role and status management
            project: Grants project, budget and task management
            personal: Grants user management
            financial: Grants ledger transactions

        Returns:
            Role UUID

        Raises:
            AuthorizationError: If the caller lacks the admin flag
            ValidationError: If name is empty or already taken
        """
        capability.require("admin")
        name = name.strip()
        if not name:
            raise ValidationError("Role name cannot be empty")
        if self.db.get_auth_by_name(name) is not None:
            raise ValidationError(f"Role with name '{name}' already exists")

        return self.db.create_auth(
            name=name,
            admin=admin,
            project=project,
            personal=personal,
            financial=financial,
        )

    def resolve_role(self, identifier: str) -> AuthEntity:
        """Find a role by UUID or name.

        Raises:
            NotFoundError: If neither matches
        """
        auth = self.db.get_auth(identifier) or self.db.get_auth_by_name(identifier)
        if auth is None:
            raise NotFoundError(not_found("Role", identifier))
        return auth

    def list_roles(self) -> list[AuthEntity]:
        """List all roles."""
        return self.db.list_auths()

    def capability_for_user(self, user_uuid: Optional[str]) -> Capability:
        """Resolve the capability of a user through its role.

        Args:
            user_uuid: Caller user UUID

        Returns:
            Capability built from the user's role

        Raises:
            AuthorizationError: If no user is given, or the user is inactive
            NotFoundError: If the user or its role does not exist
        """
        if not user_uuid:
            raise AuthorizationError("Missing caller identity")

        user = self.db.get_user(user_uuid)
        if user is None:
            raise NotFoundError(not_found("User", user_uuid))
        if not user.active:
            raise AuthorizationError(f"User '{user.username}' is inactive")

        auth = self.db.get_auth(user.auth_uuid)
        if auth is None:
            raise NotFoundError(not_found("Role", user.auth_uuid))
        return Capability.from_auth(auth)
