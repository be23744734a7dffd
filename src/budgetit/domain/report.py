"""Project money reports.

Three figures are reported per project: the budget plan, actual progress of
live work, and the raw ledger.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from budgetit.database.base import Database
from budgetit.domain.entities import (
    Budget,
    DateRange,
    LedgerKind,
    LedgerTotals,
    MoneyTotals,
    Project,
    ProjectReport,
    Task,
    TaskKind,
    Transaction,
)
from budgetit.domain.errors import NotFoundError, not_found
from budgetit.utils.date_parser import whole_hours

ZERO = Decimal("0")


def task_hours(task: Task) -> int:
    """Whole hours a task is planned to last."""
    return whole_hours(task.begin_date, task.end_date)


def planned_cost(task: Task) -> Decimal:
    """Planned cost: the expense amount, or hours times the activity rate."""
    if task.expense is not None:
        return task.expense.amount
    if task.activity is not None:
        return task_hours(task) * task.activity.hourly_rate
    return ZERO


def planned_revenue(task: Task) -> Decimal:
    """Planned revenue; activity revenue is per hour."""
    if task.activity is not None:
        return task_hours(task) * task.revenue
    return task.revenue


def realized_cost(task: Task) -> Decimal:
    """Sum of what has been realized against a task."""
    cost = ZERO
    for done in task.dones:
        if done.expense is not None:
            cost += done.expense.amount
        elif done.activity is not None:
            hours = whole_hours(done.activity.begin_date, done.activity.end_date)
            cost += hours * done.activity.hourly_rate
    return cost


def budget_totals(tasks: Iterable[Task]) -> MoneyTotals:
    """Plan totals of a budget's tasks."""
    cost = ZERO
    revenue = ZERO
    for task in tasks:
        cost += planned_cost(task)
        revenue += planned_revenue(task)
    return MoneyTotals(cost=cost, revenue=revenue)


def task_revenue_contribution(task: Task) -> tuple[Decimal, Decimal]:
    """Realized cost and recognized revenue of one live task.

    Revenue is recognized in proportion to the realized share of the planned
    cost until the task is finished or over budget, at which point the full
    variance is booked. Tasks that were never planned only ever book their
    cost as negative revenue.

    Returns:
        Tuple of (cost, revenue contribution)
    """
    prev = planned_cost(task)
    revn = planned_revenue(task)
    cost = realized_cost(task)
    ratio = cost / (prev or 1)
    settled = task.finished or ratio >= 1

    if task.origin_id is None:
        unforeseen = cost if settled else cost * ratio
        return cost, -unforeseen
    if settled:
        return cost, prev - cost
    return cost, revn * ratio


def project_totals(tasks: Iterable[Task]) -> MoneyTotals:
    """Actual totals over live tasks that have at least one realization."""
    cost = ZERO
    revenue = ZERO
    for task in tasks:
        if task.kind is not TaskKind.LIVE or not task.dones:
            continue
        task_cost, task_revenue = task_revenue_contribution(task)
        cost += task_cost
        revenue += task_revenue
    return MoneyTotals(cost=cost, revenue=revenue)


def transaction_totals(transactions: Iterable[Transaction]) -> LedgerTotals:
    """Ledger totals.

    Bills count as expense like paid expenses. Loans book the full repayment
    obligation as expense at once.
    """
    income = ZERO
    expense = ZERO
    for tx in transactions:
        if tx.kind is LedgerKind.INCOME:
            income += tx.amount
        elif tx.kind is LedgerKind.EXPENSE:
            expense += tx.amount
        elif tx.kind is LedgerKind.REFUND:
            income -= tx.amount
            expense += tx.amount
        elif tx.kind is LedgerKind.LOAN:
            income += tx.amount
            expense += tx.months * tx.installment
        elif tx.kind is LedgerKind.BILL:
            expense += tx.amount
    return LedgerTotals(income=income, expense=expense)


def date_range(
    project: Project,
    budget: Optional[Budget],
    tasks: Iterable[Task],
    transactions: Iterable[Transaction],
) -> DateRange:
    """First and last recorded activity of a project."""
    dates = [project.register]
    if budget is not None and budget.register is not None:
        dates.append(budget.register)
    for task in tasks:
        dates.extend([task.begin_date, task.end_date])
        dates.extend(done.register for done in task.dones)
    dates.extend(tx.date for tx in transactions)

    dates = [value for value in dates if value is not None]
    if not dates:
        return DateRange()
    return DateRange(begin=min(dates), end=max(dates))


class ReportService:
    """Service for building project reports."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_report(self, project: Project) -> ProjectReport:
        """Aggregate the budget, live work and ledger of a project."""
        budget = self.db.get_budget(project.budget_uuid)
        tasks = self.db.list_tasks(project_uuid=project.uuid)
        transactions = self.db.list_transactions(project_uuid=project.uuid)

        return ProjectReport(
            project=project,
            dates=date_range(project, budget, tasks, transactions),
            budget=budget_totals(budget.tasks if budget is not None else ()),
            tx=transaction_totals(transactions),
            proj=project_totals(tasks),
        )

    def project_report(self, project_uuid: str) -> ProjectReport:
        """Report on one project.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = self.db.get_project(project_uuid)
        if project is None:
            raise NotFoundError(not_found("Project", project_uuid))
        return self.build_report(project)

    def select_projects(
        self,
        key: str,
        name: Optional[str] = None,
        active: Optional[bool] = None,
        client_uuid: Optional[str] = None,
        status_uuid: Optional[str] = None,
        description: Optional[str] = None,
        user_uuid: Optional[str] = None,
        register_min: Optional[datetime] = None,
        register_max: Optional[datetime] = None,
    ) -> list[ProjectReport]:
        """Report on every matching project.

        Args:
            key: ``"all"`` or a project UUID
            name: Substring the project name must contain
            active: Active flag filter
            client_uuid: Client filter
            status_uuid: Status filter
            description: Substring the project description must contain
            user_uuid: Responsible user filter
            register_min: Earliest project register
            register_max: Latest project register

        Returns:
            One report per project, newest project first
        """
        projects = self.db.list_projects(
            name=name,
            description=description,
            active=active,
            client_uuid=client_uuid,
            status_uuid=status_uuid,
            user_uuid=user_uuid,
            register_min=register_min,
            register_max=register_max,
        )
        if key != "all":
            projects = [project for project in projects if project.uuid == key]
        return [self.build_report(project) for project in projects]
