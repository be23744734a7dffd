"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so services never see ORM rows and
the schema can change without touching the business rules.
"""

from typing import Optional

from budgetit.domain import entities as domain
from budgetit.database.models import (
    Auth as ORMAuth,
    Person as ORMPerson,
    Enterprise as ORMEnterprise,
    Client as ORMClient,
    Supplier as ORMSupplier,
    User as ORMUser,
    Status as ORMStatus,
    Project as ORMProject,
    Budget as ORMBudget,
    Task as ORMTask,
    Done as ORMDone,
    Transaction as ORMTransaction,
)


def auth_to_domain(orm_auth: ORMAuth) -> domain.Auth:
    """Convert SQLAlchemy Auth model to domain Auth entity."""
    return domain.Auth(
        id=orm_auth.id,
        uuid=orm_auth.uuid,
        name=orm_auth.name,
        admin=orm_auth.admin,
        project=orm_auth.project,
        personal=orm_auth.personal,
        financial=orm_auth.financial,
    )


def person_to_domain(orm_person: Optional[ORMPerson]) -> Optional[domain.Person]:
    """Convert SQLAlchemy Person model to domain Person entity."""
    if orm_person is None:
        return None
    return domain.Person(
        id=orm_person.id,
        uuid=orm_person.uuid,
        cpf=orm_person.cpf,
        name=orm_person.name,
        email=orm_person.email,
        phone=orm_person.phone,
        address=orm_person.address,
    )


def enterprise_to_domain(orm_enterprise: Optional[ORMEnterprise]) -> Optional[domain.Enterprise]:
    """Convert SQLAlchemy Enterprise model to domain Enterprise entity."""
    if orm_enterprise is None:
        return None
    return domain.Enterprise(
        id=orm_enterprise.id,
        uuid=orm_enterprise.uuid,
        cnpj=orm_enterprise.cnpj,
        fantasy=orm_enterprise.fantasy,
        name=orm_enterprise.name,
        email=orm_enterprise.email,
        phone=orm_enterprise.phone,
        address=orm_enterprise.address,
    )


def party_to_domain(orm_party: ORMClient | ORMSupplier) -> domain.Party:
    """Convert SQLAlchemy Client or Supplier model to domain Party entity."""
    return domain.Party(
        id=orm_party.id,
        uuid=orm_party.uuid,
        active=orm_party.active,
        person=person_to_domain(orm_party.person),
        enterprise=enterprise_to_domain(orm_party.enterprise),
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        uuid=orm_user.uuid,
        username=orm_user.username,
        active=orm_user.active,
        auth_uuid=orm_user.auth_uuid,
        person=person_to_domain(orm_user.person),
        hourly_rate=orm_user.hourly_rate,
    )


def status_to_domain(orm_status: ORMStatus) -> domain.Status:
    """Convert SQLAlchemy Status model to domain Status entity."""
    return domain.Status(
        id=orm_status.id,
        uuid=orm_status.uuid,
        name=orm_status.name,
        description=orm_status.description,
        priority=orm_status.priority,
    )


def project_to_domain(orm_project: ORMProject) -> domain.Project:
    """Convert SQLAlchemy Project model to domain Project entity."""
    return domain.Project(
        id=orm_project.id,
        uuid=orm_project.uuid,
        name=orm_project.name,
        description=orm_project.description,
        register=orm_project.register,
        active=orm_project.active,
        client_uuid=orm_project.client_uuid,
        status_uuid=orm_project.status_uuid,
        budget_uuid=orm_project.budget_uuid,
        user_uuid=orm_project.user_uuid,
    )


def done_to_domain(orm_done: ORMDone) -> domain.Done:
    """Convert SQLAlchemy Done model (with its sub-record) to domain Done entity."""
    expense = None
    if orm_done.expense is not None:
        expense = domain.DoneExpense(
            id=orm_done.expense.id,
            uuid=orm_done.expense.uuid,
            amount=orm_done.expense.amount,
            date=orm_done.expense.date,
            supplier_uuid=orm_done.expense.supplier_uuid,
        )
    activity = None
    if orm_done.activity is not None:
        activity = domain.DoneActivity(
            id=orm_done.activity.id,
            uuid=orm_done.activity.uuid,
            begin_date=orm_done.activity.begin_date,
            end_date=orm_done.activity.end_date,
            hourly_rate=orm_done.activity.hourly_rate,
        )
    return domain.Done(
        id=orm_done.id,
        uuid=orm_done.uuid,
        name=orm_done.name,
        description=orm_done.description,
        register=orm_done.register,
        user_uuid=orm_done.user_uuid,
        task_id=orm_done.task_id,
        expense=expense,
        activity=activity,
    )


def task_to_domain(orm_task: ORMTask) -> domain.Task:
    """Convert SQLAlchemy Task model (with sub-record and dones) to domain Task entity."""
    expense = None
    if orm_task.expense is not None:
        expense = domain.TaskExpense(
            id=orm_task.expense.id,
            uuid=orm_task.expense.uuid,
            amount=orm_task.expense.amount,
        )
    activity = None
    if orm_task.activity is not None:
        activity = domain.TaskActivity(
            id=orm_task.activity.id,
            uuid=orm_task.activity.uuid,
            hourly_rate=orm_task.activity.hourly_rate,
        )
    return domain.Task(
        id=orm_task.id,
        uuid=orm_task.uuid,
        name=orm_task.name,
        description=orm_task.description,
        finished=orm_task.finished,
        begin_date=orm_task.begin_date,
        end_date=orm_task.end_date,
        revenue=orm_task.revenue,
        status_uuid=orm_task.status_uuid,
        project_uuid=orm_task.project_uuid,
        user_uuid=orm_task.user_uuid,
        budget_uuid=orm_task.budget_uuid,
        original_task_id=orm_task.original_task_id,
        expense=expense,
        activity=activity,
        dones=tuple(done_to_domain(done) for done in orm_task.dones),
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model (with its planned tasks) to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        uuid=orm_budget.uuid,
        register=orm_budget.register,
        tasks=tuple(task_to_domain(task) for task in orm_budget.tasks),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity.

    The kind-specific columns of whichever extension row is present are
    flattened onto the entity.
    """
    fields = {}
    if orm_transaction.expense is not None:
        kind = domain.LedgerKind.EXPENSE
        fields["supplier_uuid"] = orm_transaction.expense.supplier_uuid
    elif orm_transaction.income is not None:
        kind = domain.LedgerKind.INCOME
        fields["client_uuid"] = orm_transaction.income.client_uuid
    elif orm_transaction.refund is not None:
        kind = domain.LedgerKind.REFUND
        fields["client_uuid"] = orm_transaction.refund.client_uuid
        fields["supplier_uuid"] = orm_transaction.refund.supplier_uuid
    elif orm_transaction.loan is not None:
        kind = domain.LedgerKind.LOAN
        fields["supplier_uuid"] = orm_transaction.loan.supplier_uuid
        fields["installment"] = orm_transaction.loan.installment
        fields["months"] = orm_transaction.loan.months
    elif orm_transaction.bill is not None:
        kind = domain.LedgerKind.BILL
        fields["supplier_uuid"] = orm_transaction.bill.supplier_uuid
    else:
        raise ValueError(f"Transaction {orm_transaction.uuid} has no kind record")

    return domain.Transaction(
        id=orm_transaction.id,
        uuid=orm_transaction.uuid,
        kind=kind,
        name=orm_transaction.name,
        description=orm_transaction.description,
        register=orm_transaction.register,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        user_uuid=orm_transaction.user_uuid,
        project_uuid=orm_transaction.project_uuid,
        **fields,
    )
