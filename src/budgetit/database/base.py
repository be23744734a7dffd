"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from budgetit.domain.entities import (
    Auth,
    Budget,
    DoneInput,
    Enterprise,
    EnterpriseInput,
    LedgerKind,
    Party,
    Person,
    PersonInput,
    Project,
    Status,
    Task,
    TaskDraft,
    Transaction,
    User,
)


class Database(ABC):
    """Abstract database interface for budgetit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Group every write issued inside the block into one transaction.

        The block commits once on normal exit and rolls back everything on
        any exception. Nested blocks join the outermost one.
        """
        pass

    # Auth operations
    @abstractmethod
    def create_auth(
        self, name: str, admin: bool, project: bool, personal: bool, financial: bool
    ) -> str:
        """Create a role. Returns role UUID."""
        pass

    @abstractmethod
    def get_auth(self, auth_uuid: str) -> Optional[Auth]:
        """Get role by UUID."""
        pass

    @abstractmethod
    def get_auth_by_name(self, name: str) -> Optional[Auth]:
        """Get role by name."""
        pass

    @abstractmethod
    def list_auths(self) -> list[Auth]:
        """List all roles."""
        pass

    # Status operations
    @abstractmethod
    def create_status(self, name: str, description: str, priority: int) -> str:
        """Create a status. Returns status UUID."""
        pass

    @abstractmethod
    def get_status(self, status_uuid: str) -> Optional[Status]:
        """Get status by UUID."""
        pass

    @abstractmethod
    def list_statuses(self) -> list[Status]:
        """List all statuses ordered by priority."""
        pass

    @abstractmethod
    def count_status_references(self, status_uuid: str) -> dict[str, int]:
        """Count projects and tasks referencing a status."""
        pass

    @abstractmethod
    def delete_status(self, status_uuid: str) -> None:
        """Delete a status."""
        pass

    # Client and supplier operations
    @abstractmethod
    def get_person_by_cpf(self, cpf: str) -> Optional[Person]:
        """Get a person by CPF."""
        pass

    @abstractmethod
    def get_enterprise_by_cnpj(self, cnpj: str) -> Optional[Enterprise]:
        """Get an enterprise by CNPJ."""
        pass

    @abstractmethod
    def create_client(
        self,
        person: Optional[PersonInput] = None,
        enterprise: Optional[EnterpriseInput] = None,
    ) -> str:
        """Create a client backed by a person or an enterprise. Returns client UUID."""
        pass

    @abstractmethod
    def get_client(self, client_uuid: str) -> Optional[Party]:
        """Get client by UUID."""
        pass

    @abstractmethod
    def list_clients(self, active: Optional[bool] = None) -> list[Party]:
        """List clients, optionally filtered by active flag."""
        pass

    @abstractmethod
    def create_supplier(
        self,
        person: Optional[PersonInput] = None,
        enterprise: Optional[EnterpriseInput] = None,
    ) -> str:
        """Create a supplier backed by a person or an enterprise. Returns supplier UUID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_uuid: str) -> Optional[Party]:
        """Get supplier by UUID."""
        pass

    @abstractmethod
    def list_suppliers(self, active: Optional[bool] = None) -> list[Party]:
        """List suppliers, optionally filtered by active flag."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self,
        username: str,
        auth_uuid: str,
        person: PersonInput,
        hourly_rate: Optional[Decimal] = None,
    ) -> str:
        """Create a user. Returns user UUID."""
        pass

    @abstractmethod
    def get_user(self, user_uuid: str) -> Optional[User]:
        """Get user by UUID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Project operations
    @abstractmethod
    def create_project(
        self,
        name: str,
        description: str,
        client_uuid: str,
        status_uuid: str,
        user_uuid: Optional[str] = None,
        active: bool = True,
    ) -> str:
        """Create a project together with its empty budget. Returns project UUID."""
        pass

    @abstractmethod
    def get_project(self, project_uuid: str) -> Optional[Project]:
        """Get project by UUID."""
        pass

    @abstractmethod
    def list_projects(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        active: Optional[bool] = None,
        client_uuid: Optional[str] = None,
        status_uuid: Optional[str] = None,
        budget_uuid: Optional[str] = None,
        user_uuid: Optional[str] = None,
        register_min: Optional[datetime] = None,
        register_max: Optional[datetime] = None,
    ) -> list[Project]:
        """List projects with optional filters."""
        pass

    @abstractmethod
    def update_project(
        self,
        project_uuid: str,
        name: str,
        description: str,
        client_uuid: str,
        status_uuid: str,
        user_uuid: Optional[str] = None,
        active: bool = True,
    ) -> None:
        """Update project fields. The budget is never touched."""
        pass

    @abstractmethod
    def count_project_dependents(self, project_uuid: str) -> dict[str, int]:
        """Count live tasks and ledger transactions of a project."""
        pass

    @abstractmethod
    def delete_project(self, project_uuid: str) -> None:
        """Delete a project, its planned tasks and its budget."""
        pass

    # Budget operations
    @abstractmethod
    def get_budget(self, budget_uuid: str) -> Optional[Budget]:
        """Get budget by UUID, with its planned tasks."""
        pass

    @abstractmethod
    def list_budgets(
        self,
        project_uuid: Optional[str] = None,
        register_min: Optional[datetime] = None,
        register_max: Optional[datetime] = None,
    ) -> list[Budget]:
        """List budgets, optionally only the one owned by a project or stamped in a range."""
        pass

    @abstractmethod
    def stamp_budget_register(self, budget_uuid: str, when: datetime) -> bool:
        """Set budget register if unset. Returns True when it was stamped."""
        pass

    # Task operations
    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Task]:
        """Get task by internal ID."""
        pass

    @abstractmethod
    def get_task_by_sub_uuid(self, sub_uuid: str) -> Optional[Task]:
        """Get the task owning an expense or activity sub-record UUID."""
        pass

    @abstractmethod
    def find_live_mirror(self, original_task_id: int) -> Optional[Task]:
        """Get the live task cloned from a planned task, if any."""
        pass

    @abstractmethod
    def list_tasks(
        self,
        project_uuid: Optional[str] = None,
        budget_uuid: Optional[str] = None,
        live: bool = False,
    ) -> list[Task]:
        """List tasks.

        Args:
            project_uuid: Only tasks of this project
            budget_uuid: Only planned tasks of this budget
            live: Only live tasks (budget_uuid IS NULL); ignored when
                budget_uuid is given
        """
        pass

    @abstractmethod
    def create_task(self, draft: TaskDraft) -> Task:
        """Create a task row and its expense or activity sub-record."""
        pass

    @abstractmethod
    def update_task(self, task_id: int, draft: TaskDraft) -> Task:
        """Overwrite a task row and its sub-record from a draft."""
        pass

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        """Delete a task and its sub-record. Fails if dones reference it."""
        pass

    # Done operations
    @abstractmethod
    def create_done(self, task_id: int, done: DoneInput) -> str:
        """Create a done row and its expense or activity sub-record. Returns done UUID."""
        pass

    # Ledger operations
    @abstractmethod
    def create_transaction(
        self,
        kind: LedgerKind,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        project_uuid: Optional[str] = None,
        supplier_uuid: Optional[str] = None,
        client_uuid: Optional[str] = None,
        installment: Optional[Decimal] = None,
        months: Optional[int] = None,
    ) -> str:
        """Create a ledger transaction with its kind record. Returns transaction UUID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_uuid: str) -> Optional[Transaction]:
        """Get transaction by UUID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        project_uuid: Optional[str] = None,
        kind: Optional[LedgerKind] = None,
    ) -> list[Transaction]:
        """List transactions ordered by date, with optional filters."""
        pass
