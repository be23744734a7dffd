"""SQLAlchemy models for budgetit database."""

from uuid import uuid4
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from budgetit.utils.date_parser import now

Base = declarative_base()


def _new_uuid() -> str:
    return str(uuid4())


class Auth(Base):
    """Role model with capability flags."""

    __tablename__ = "auths"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, unique=True, nullable=False)
    admin = Column(Boolean, default=False, nullable=False)
    project = Column(Boolean, default=False, nullable=False)
    personal = Column(Boolean, default=False, nullable=False)
    financial = Column(Boolean, default=False, nullable=False)


class Person(Base):
    """Natural person model."""

    __tablename__ = "persons"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    cpf = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)


class Enterprise(Base):
    """Legal entity model."""

    __tablename__ = "enterprises"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    cnpj = Column(String, unique=True, nullable=False)
    fantasy = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)


class Client(Base):
    """Client model, backed by a person or an enterprise."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    active = Column(Boolean, default=True, nullable=False)
    person_id = Column(Integer, ForeignKey("persons.id"), nullable=True)
    enterprise_id = Column(Integer, ForeignKey("enterprises.id"), nullable=True)

    # Relationships
    person = relationship("Person")
    enterprise = relationship("Enterprise")


class Supplier(Base):
    """Supplier model, backed by a person or an enterprise."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    active = Column(Boolean, default=True, nullable=False)
    person_id = Column(Integer, ForeignKey("persons.id"), nullable=True)
    enterprise_id = Column(Integer, ForeignKey("enterprises.id"), nullable=True)

    # Relationships
    person = relationship("Person")
    enterprise = relationship("Enterprise")


class User(Base):
    """Application user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    username = Column(String, unique=True, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    hourly_rate = Column(Numeric(12, 2), nullable=True)
    auth_uuid = Column(String, ForeignKey("auths.uuid"), nullable=False)
    person_id = Column(Integer, ForeignKey("persons.id"), nullable=False)

    # Relationships
    auth = relationship("Auth")
    person = relationship("Person")


class Status(Base):
    """Workflow status model."""

    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    priority = Column(Integer, nullable=False)


class Budget(Base):
    """Budget model. ``register`` stays null until the first task update."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    register = Column(DateTime, nullable=True)

    # Relationships
    tasks = relationship("Task", back_populates="budget", order_by="Task.id")


class Project(Base):
    """Project model."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    register = Column(DateTime, default=now, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    user_uuid = Column(String, ForeignKey("users.uuid"), nullable=True)
    client_uuid = Column(String, ForeignKey("clients.uuid"), nullable=False)
    status_uuid = Column(String, ForeignKey("statuses.uuid"), nullable=False)
    budget_uuid = Column(String, ForeignKey("budgets.uuid"), unique=True, nullable=False)


class Task(Base):
    """Task model, planned (budget_uuid set) or live (budget_uuid null)."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    finished = Column(Boolean, default=False, nullable=False)
    begin_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    revenue = Column(Numeric(12, 2), nullable=False)
    status_uuid = Column(String, ForeignKey("statuses.uuid"), nullable=False)
    project_uuid = Column(String, ForeignKey("projects.uuid"), nullable=False)
    user_uuid = Column(String, ForeignKey("users.uuid"), nullable=True)
    budget_uuid = Column(String, ForeignKey("budgets.uuid"), nullable=True)
    # Weak back-link to the planned task this row was cloned from (no FK)
    original_task_id = Column(Integer, nullable=True, index=True)

    # Relationships
    budget = relationship("Budget", back_populates="tasks")
    expense = relationship(
        "TaskExpense", uselist=False, back_populates="task", cascade="all, delete-orphan"
    )
    activity = relationship(
        "TaskActivity", uselist=False, back_populates="task", cascade="all, delete-orphan"
    )
    dones = relationship("Done", back_populates="task", order_by="Done.id")


class TaskExpense(Base):
    """Expense extension of a task (shares the task id)."""

    __tablename__ = "task_expenses"

    id = Column(Integer, ForeignKey("tasks.id"), primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    task = relationship("Task", back_populates="expense")


class TaskActivity(Base):
    """Activity extension of a task (shares the task id)."""

    __tablename__ = "task_activities"

    id = Column(Integer, ForeignKey("tasks.id"), primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    hourly_rate = Column(Numeric(12, 2), nullable=False)

    # Relationships
    task = relationship("Task", back_populates="activity")


class Done(Base):
    """Realization record against a task. Append-only."""

    __tablename__ = "dones"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    register = Column(DateTime, default=now, nullable=False)
    user_uuid = Column(String, ForeignKey("users.uuid"), nullable=False)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False)

    # Relationships
    task = relationship("Task", back_populates="dones")
    expense = relationship("DoneExpense", uselist=False, cascade="all, delete-orphan")
    activity = relationship("DoneActivity", uselist=False, cascade="all, delete-orphan")


class DoneExpense(Base):
    """Realized expense (shares the done id)."""

    __tablename__ = "done_expenses"

    id = Column(Integer, ForeignKey("dones.id"), primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(DateTime, nullable=False)
    supplier_uuid = Column(String, ForeignKey("suppliers.uuid"), nullable=False)


class DoneActivity(Base):
    """Realized worked period (shares the done id)."""

    __tablename__ = "done_activities"

    id = Column(Integer, ForeignKey("dones.id"), primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    begin_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    hourly_rate = Column(Numeric(12, 2), nullable=False)


class Transaction(Base):
    """Ledger transaction model; the kind lives in one extension table."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    uuid = Column(String, unique=True, nullable=False, default=_new_uuid)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    register = Column(DateTime, default=now, nullable=False)
    date = Column(DateTime, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    user_uuid = Column(String, ForeignKey("users.uuid"), nullable=False)
    project_uuid = Column(String, ForeignKey("projects.uuid"), nullable=True)

    # Relationships
    expense = relationship("Expense", uselist=False, cascade="all, delete-orphan")
    income = relationship("Income", uselist=False, cascade="all, delete-orphan")
    refund = relationship("Refund", uselist=False, cascade="all, delete-orphan")
    loan = relationship("Loan", uselist=False, cascade="all, delete-orphan")
    bill = relationship("Bill", uselist=False, cascade="all, delete-orphan")


class Expense(Base):
    """Expense paid to a supplier."""

    __tablename__ = "expenses"

    id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    supplier_uuid = Column(String, ForeignKey("suppliers.uuid"), nullable=False)


class Income(Base):
    """Income received from a client."""

    __tablename__ = "incomes"

    id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    client_uuid = Column(String, ForeignKey("clients.uuid"), nullable=False)


class Refund(Base):
    """Refund involving a client and/or a supplier."""

    __tablename__ = "refunds"

    id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    client_uuid = Column(String, ForeignKey("clients.uuid"), nullable=True)
    supplier_uuid = Column(String, ForeignKey("suppliers.uuid"), nullable=True)


class Loan(Base):
    """Loan taken from a supplier, repaid in monthly installments."""

    __tablename__ = "loans"

    id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    supplier_uuid = Column(String, ForeignKey("suppliers.uuid"), nullable=False)
    installment = Column(Numeric(12, 2), nullable=False)
    months = Column(Integer, nullable=False)


class Bill(Base):
    """Bill issued by a supplier."""

    __tablename__ = "bills"

    id = Column(Integer, ForeignKey("transactions.id"), primary_key=True)
    supplier_uuid = Column(String, ForeignKey("suppliers.uuid"), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
