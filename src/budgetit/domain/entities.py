"""Domain model entities for budgetit.

These are pure data classes representing business concepts, independent of
database schema. Services and reports only ever see these; the ORM rows stay
inside the database layer.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TaskKind(Enum):
    """Whether a task belongs to a budget plan or to live project work."""

    PLANNED = "planned"
    LIVE = "live"


class LedgerKind(Enum):
    """Kind of a project ledger transaction."""

    EXPENSE = "expense"
    INCOME = "income"
    REFUND = "refund"
    LOAN = "loan"
    BILL = "bill"


@dataclass(frozen=True)
class Auth:
    """Role with four independent capability flags."""

    id: int
    uuid: str
    name: str
    admin: bool
    project: bool
    personal: bool
    financial: bool


@dataclass(frozen=True)
class Person:
    """Natural person contact record."""

    id: int
    uuid: str
    cpf: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Enterprise:
    """Legal entity contact record."""

    id: int
    uuid: str
    cnpj: str
    fantasy: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Party:
    """Client or supplier, backed by exactly one person or enterprise."""

    id: int
    uuid: str
    active: bool
    person: Optional[Person] = None
    enterprise: Optional[Enterprise] = None

    @property
    def display_name(self) -> str:
        if self.enterprise is not None:
            return self.enterprise.fantasy
        if self.person is not None:
            return self.person.name
        return self.uuid


@dataclass(frozen=True)
class User:
    """Application user bound to a role."""

    id: int
    uuid: str
    username: str
    active: bool
    auth_uuid: str
    person: Person
    hourly_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class Status:
    """Workflow status shared by projects and tasks."""

    id: int
    uuid: str
    name: str
    description: str
    priority: int


@dataclass(frozen=True)
class Project:
    """Project domain entity. Always owns exactly one budget."""

    id: int
    uuid: str
    name: str
    description: str
    register: datetime
    active: bool
    client_uuid: str
    status_uuid: str
    budget_uuid: str
    user_uuid: Optional[str] = None


@dataclass(frozen=True)
class TaskExpense:
    """Expense extension of a task: a fixed amount."""

    id: int
    uuid: str
    amount: Decimal


@dataclass(frozen=True)
class TaskActivity:
    """Activity extension of a task: an hourly rate over the task duration."""

    id: int
    uuid: str
    hourly_rate: Decimal


@dataclass(frozen=True)
class DoneExpense:
    """Realized expense."""

    id: int
    uuid: str
    amount: Decimal
    date: datetime
    supplier_uuid: str


@dataclass(frozen=True)
class DoneActivity:
    """Realized worked period."""

    id: int
    uuid: str
    begin_date: datetime
    end_date: datetime
    hourly_rate: Decimal


@dataclass(frozen=True)
class Done:
    """Realization record against one task."""

    id: int
    uuid: str
    name: str
    description: str
    register: datetime
    user_uuid: str
    task_id: int
    expense: Optional[DoneExpense] = None
    activity: Optional[DoneActivity] = None


@dataclass(frozen=True)
class Task:
    """Task domain entity.

    A task with ``budget_uuid`` set is a planned row of a budget; otherwise it
    is live project work, optionally pointing back to the planned task it was
    cloned from through ``original_task_id``.
    """

    id: int
    uuid: str
    name: str
    description: str
    finished: bool
    begin_date: datetime
    end_date: datetime
    revenue: Decimal
    status_uuid: str
    project_uuid: str
    user_uuid: Optional[str] = None
    budget_uuid: Optional[str] = None
    original_task_id: Optional[int] = None
    expense: Optional[TaskExpense] = None
    activity: Optional[TaskActivity] = None
    dones: tuple[Done, ...] = ()

    @property
    def kind(self) -> TaskKind:
        return TaskKind.PLANNED if self.budget_uuid is not None else TaskKind.LIVE

    @property
    def origin_id(self) -> Optional[int]:
        """Planned task this live task was cloned from, if any."""
        if self.kind is TaskKind.PLANNED:
            return None
        return self.original_task_id

    @property
    def sub_uuid(self) -> str:
        """UUID of the expense or activity sub-record."""
        if self.expense is not None:
            return self.expense.uuid
        if self.activity is not None:
            return self.activity.uuid
        return ""


@dataclass(frozen=True)
class Budget:
    """Budget domain entity with its planned tasks."""

    id: int
    uuid: str
    register: Optional[datetime] = None
    tasks: tuple[Task, ...] = ()


@dataclass(frozen=True)
class Transaction:
    """Project ledger transaction with its kind-specific fields flattened."""

    id: int
    uuid: str
    kind: LedgerKind
    name: str
    description: str
    register: datetime
    date: datetime
    amount: Decimal
    user_uuid: str
    project_uuid: Optional[str] = None
    supplier_uuid: Optional[str] = None
    client_uuid: Optional[str] = None
    installment: Optional[Decimal] = None
    months: Optional[int] = None


# Inputs


@dataclass(frozen=True)
class PersonInput:
    cpf: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class EnterpriseInput:
    cnpj: str
    fantasy: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class ExpenseInput:
    """Expense sub-record of a submitted task. Empty uuid means new."""

    uuid: str
    amount: Decimal


@dataclass(frozen=True)
class ActivityInput:
    """Activity sub-record of a submitted task. Empty uuid means new."""

    uuid: str
    hourly_rate: Decimal


@dataclass(frozen=True)
class TaskInput:
    """One entry of a submitted task list."""

    name: str
    description: str
    begin_date: datetime
    end_date: datetime
    revenue: Decimal
    status_uuid: str
    project_uuid: str
    finished: bool = False
    user_uuid: Optional[str] = None
    budget_uuid: Optional[str] = None
    expense: Optional[ExpenseInput] = None
    activity: Optional[ActivityInput] = None

    @property
    def sub_uuid(self) -> str:
        if self.expense is not None:
            return self.expense.uuid
        if self.activity is not None:
            return self.activity.uuid
        return ""


@dataclass(frozen=True)
class TaskDraft:
    """Complete state of a task row and its sub-record, ready to be written.

    Exactly one of ``amount`` (expense) and ``hourly_rate`` (activity) is set.
    """

    name: str
    description: str
    finished: bool
    begin_date: datetime
    end_date: datetime
    revenue: Decimal
    status_uuid: str
    project_uuid: str
    user_uuid: Optional[str] = None
    budget_uuid: Optional[str] = None
    original_task_id: Optional[int] = None
    amount: Optional[Decimal] = None
    hourly_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class DoneExpenseInput:
    task_uuid: str
    amount: Decimal
    date: datetime
    supplier_uuid: str


@dataclass(frozen=True)
class DoneActivityInput:
    task_uuid: str
    begin_date: datetime
    end_date: datetime
    hourly_rate: Decimal


@dataclass(frozen=True)
class DoneInput:
    """Realization request; exactly one of expense/activity is expected."""

    name: str
    description: str
    user_uuid: str
    expense: Optional[DoneExpenseInput] = None
    activity: Optional[DoneActivityInput] = None


# Reports


@dataclass(frozen=True)
class MoneyTotals:
    """Cost/revenue pair with their sum."""

    cost: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.cost + self.revenue


@dataclass(frozen=True)
class LedgerTotals:
    """Income/expense totals of the project ledger."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def revenue(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class DateRange:
    """First and last recorded activity of a project."""

    begin: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class ProjectReport:
    """Aggregated figures of one project."""

    project: Project
    dates: DateRange
    budget: MoneyTotals
    tx: LedgerTotals
    proj: MoneyTotals


@dataclass(frozen=True)
class ReconciliationResult:
    """Task uuids touched by one reconciliation call."""

    created: tuple[str, ...] = ()
    updated: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    mirrors_skipped: tuple[str, ...] = ()
