"""Clients, suppliers and users."""

from decimal import Decimal
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import (
    EnterpriseInput,
    Party,
    PersonInput,
    User as UserEntity,
)
from budgetit.domain.errors import NotFoundError, ValidationError, not_found


def _check_backing(person: Optional[PersonInput], enterprise: Optional[EnterpriseInput]) -> None:
    if (person is None) == (enterprise is None):
        raise ValidationError("Exactly one of person or enterprise is required")
    if person is not None and not person.cpf.strip():
        raise ValidationError("Person CPF cannot be empty")
    if enterprise is not None and not enterprise.cnpj.strip():
        raise ValidationError("Enterprise CNPJ cannot be empty")


def _check_documents_free(
    db: Database,
    person: Optional[PersonInput],
    enterprise: Optional[EnterpriseInput] = None,
) -> None:
    if person is not None and db.get_person_by_cpf(person.cpf) is not None:
        raise ValidationError(f"Person with CPF '{person.cpf}' already exists")
    if enterprise is not None and db.get_enterprise_by_cnpj(enterprise.cnpj) is not None:
        raise ValidationError(f"Enterprise with CNPJ '{enterprise.cnpj}' already exists")


class PartyService:
    """Service for clients, suppliers and users."""

    def __init__(self, db: Database):
        """Initialize party service.

        Args:
            db: Database instance
        """
        self.db = db

    # Clients
    def create_client(
        self,
        capability: Capability,
        person: Optional[PersonInput] = None,
        enterprise: Optional[EnterpriseInput] = None,
    ) -> str:
        """Create a client backed by exactly one person or enterprise.

        Returns:
            Client UUID

        Raises:
            AuthorizationError: If the caller lacks the project flag
            ValidationError: If both or neither backing records are given, or the
                CPF or CNPJ is already registered
        """
        capability.require("project")
        _check_backing(person, enterprise)
        _check_documents_free(self.db, person, enterprise)
        return self.db.create_client(person=person, enterprise=enterprise)

    def get_client(self, client_uuid: str) -> Optional[Party]:
        return self.db.get_client(client_uuid)

    def list_clients(self, active: Optional[bool] = None) -> list[Party]:
        return self.db.list_clients(active=active)

    # Suppliers
    def create_supplier(
        self,
        capability: Capability,
        person: Optional[PersonInput] = None,
        enterprise: Optional[EnterpriseInput] = None,
    ) -> str:
        """Create a supplier backed by exactly one person or enterprise.

        Returns:
            Supplier UUID

        Raises:
            AuthorizationError: If the caller lacks the project flag
            ValidationError: If both or neither backing records are given, or the
                CPF or CNPJ is already registered
        """
        capability.require("project")
        _check_backing(person, enterprise)
        _check_documents_free(self.db, person, enterprise)
        return self.db.create_supplier(person=person, enterprise=enterprise)

    def get_supplier(self, supplier_uuid: str) -> Optional[Party]:
        return self.db.get_supplier(supplier_uuid)

    def list_suppliers(self, active: Optional[bool] = None) -> list[Party]:
        return self.db.list_suppliers(active=active)

    # Users
    def create_user(
        self,
        capability: Capability,
        username: str,
        auth_uuid: str,
        person: PersonInput,
        hourly_rate: Optional[Decimal] = None,
    ) -> str:
        """Create a user bound to a role.

        Args:
            capability: Caller capability (needs personal)
            username: Unique login name
            auth_uuid: Role UUID
            person: Personal data of the user
            hourly_rate: Default hourly rate, if any

        Returns:
            User UUID

        Raises:
            AuthorizationError: If the caller lacks the personal flag
            NotFoundError: If the role does not exist
            ValidationError: If the username is empty or taken, or the CPF
                is already registered
        """
        capability.require("personal")
        username = username.strip()
        if not username:
            raise ValidationError("Username cannot be empty")
        if self.db.get_user_by_username(username) is not None:
            raise ValidationError(f"User with username '{username}' already exists")
        if self.db.get_auth(auth_uuid) is None:
            raise NotFoundError(not_found("Role", auth_uuid))
        _check_documents_free(self.db, person)
        if hourly_rate is not None and hourly_rate < 0:
            raise ValidationError("Hourly rate cannot be negative")

        return self.db.create_user(
            username=username,
            auth_uuid=auth_uuid,
            person=person,
            hourly_rate=hourly_rate,
        )

    def get_user(self, user_uuid: str) -> Optional[UserEntity]:
        return self.db.get_user(user_uuid)

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()

    def resolve_user(self, identifier: str) -> UserEntity:
        """Find a user by UUID or username.

        Raises:
            NotFoundError: If neither matches
        """
        user = self.db.get_user(identifier) or self.db.get_user_by_username(identifier)
        if user is None:
            raise NotFoundError(not_found("User", identifier))
        return user
