"""Live task and realization endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from budgetit.api.deps import get_capability, get_task_service
from budgetit.api.schemas import DoneCreate, TasksUpdate
from budgetit.api.serializers import task_to_dict
from budgetit.domain.auth import Capability
from budgetit.domain.task import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/select", dependencies=[Depends(get_capability)])
async def select_tasks(
    project_uuid: Optional[str] = Query(default=None, alias="projectUuid"),
    service: TaskService = Depends(get_task_service),
):
    """List live tasks with their realizations."""
    return [task_to_dict(task) for task in service.select_tasks(project_uuid)]


@router.put("/update", status_code=status.HTTP_201_CREATED)
async def update_tasks(
    body: TasksUpdate,
    capability: Capability = Depends(get_capability),
    service: TaskService = Depends(get_task_service),
):
    """Replace the live task list of a project."""
    service.update_tasks(capability, body.to_inputs())
    return {"message": "Project tasks updated."}


@router.post("/done/create", status_code=status.HTTP_201_CREATED)
async def create_done(
    body: DoneCreate,
    capability: Capability = Depends(get_capability),
    service: TaskService = Depends(get_task_service),
):
    """Append a realization against a live task."""
    service.record_done(capability, body.to_input())
    return {"message": "Done recorded."}
