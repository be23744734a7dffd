"""Request dependencies: database, services and caller capability."""

from typing import Optional

from fastapi import Header, Request

from budgetit.domain.auth import AuthService, Capability
from budgetit.domain.budget import BudgetService
from budgetit.domain.ledger import LedgerService
from budgetit.domain.project import ProjectService
from budgetit.domain.report import ReportService
from budgetit.domain.task import TaskService


async def get_capability(
    request: Request,
    x_user_uuid: Optional[str] = Header(default=None),
) -> Capability:
    """Resolve the caller's role once per request."""
    return AuthService(request.app.state.db).capability_for_user(x_user_uuid)


async def get_caller_uuid(x_user_uuid: Optional[str] = Header(default=None)) -> Optional[str]:
    return x_user_uuid


async def get_budget_service(request: Request) -> BudgetService:
    return BudgetService(request.app.state.db, request.app.state.mirror_policy)


async def get_task_service(request: Request) -> TaskService:
    return TaskService(request.app.state.db)


async def get_project_service(request: Request) -> ProjectService:
    return ProjectService(request.app.state.db)


async def get_report_service(request: Request) -> ReportService:
    return ReportService(request.app.state.db)


async def get_ledger_service(request: Request) -> LedgerService:
    return LedgerService(request.app.state.db)
