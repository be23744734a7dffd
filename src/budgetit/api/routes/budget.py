"""Budget endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from budgetit.api.deps import get_budget_service, get_capability
from budgetit.api.schemas import BudgetTasksUpdate
from budgetit.api.serializers import budget_to_dict
from budgetit.domain.auth import Capability
from budgetit.domain.budget import BudgetService
from budgetit.utils.date_parser import to_naive

router = APIRouter(prefix="/budget", tags=["budget"])


@router.get("/select/{key}", dependencies=[Depends(get_capability)])
async def select_budgets(
    key: str,
    project_uuid: Optional[str] = Query(default=None, alias="projectUuid"),
    register_min: Optional[datetime] = Query(default=None, alias="registerMin"),
    register_max: Optional[datetime] = Query(default=None, alias="registerMax"),
    service: BudgetService = Depends(get_budget_service),
):
    """List budgets (``key`` is ``all`` or a budget uuid) with nested tasks."""
    budgets = service.select_budgets(
        key,
        project_uuid,
        register_min=to_naive(register_min) if register_min else None,
        register_max=to_naive(register_max) if register_max else None,
    )
    return [budget_to_dict(budget) for budget in budgets]


@router.put("/task/update", status_code=status.HTTP_201_CREATED)
async def update_budget_tasks(
    body: BudgetTasksUpdate,
    capability: Capability = Depends(get_capability),
    service: BudgetService = Depends(get_budget_service),
):
    """Replace the planned task list of a budget."""
    service.update_tasks(capability, body.uuid, body.to_inputs())
    return {"message": "Budget tasks updated."}
