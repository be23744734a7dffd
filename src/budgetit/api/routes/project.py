"""Project endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from budgetit.api.deps import get_capability, get_project_service, get_report_service
from budgetit.api.schemas import ProjectCreate, ProjectUpdate
from budgetit.api.serializers import report_to_dict
from budgetit.domain.auth import Capability
from budgetit.domain.project import ProjectService
from budgetit.domain.report import ReportService
from budgetit.utils.date_parser import to_naive

router = APIRouter(prefix="/project", tags=["project"])


@router.get("/select/{key}", dependencies=[Depends(get_capability)])
async def select_projects(
    key: str,
    name: Optional[str] = Query(default=None),
    description: Optional[str] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    user_uuid: Optional[str] = Query(default=None, alias="userUuid"),
    client_uuid: Optional[str] = Query(default=None, alias="clientUuid"),
    status_uuid: Optional[str] = Query(default=None, alias="statusUuid"),
    register_min: Optional[datetime] = Query(default=None, alias="registerMin"),
    register_max: Optional[datetime] = Query(default=None, alias="registerMax"),
    service: ReportService = Depends(get_report_service),
):
    """Project reports (``key`` is ``all`` or a project uuid)."""
    reports = service.select_projects(
        key,
        name=name,
        description=description,
        active=active,
        user_uuid=user_uuid,
        client_uuid=client_uuid,
        status_uuid=status_uuid,
        register_min=to_naive(register_min) if register_min else None,
        register_max=to_naive(register_max) if register_max else None,
    )
    return [report_to_dict(report) for report in reports]


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    capability: Capability = Depends(get_capability),
    service: ProjectService = Depends(get_project_service),
):
    service.create_project(
        capability,
        name=body.name,
        description=body.description,
        client_uuid=body.client_uuid,
        status_uuid=body.status_uuid,
        user_uuid=body.user_uuid,
        active=body.active,
    )
    return {"message": "Project created."}


@router.put("/update", status_code=status.HTTP_201_CREATED)
async def update_project(
    body: ProjectUpdate,
    capability: Capability = Depends(get_capability),
    service: ProjectService = Depends(get_project_service),
):
    """Update project fields; its budget is left alone."""
    service.update_project(
        capability,
        body.uuid,
        name=body.name,
        description=body.description,
        client_uuid=body.client_uuid,
        status_uuid=body.status_uuid,
        user_uuid=body.user_uuid,
        active=body.active,
    )
    return {"message": "Project updated."}


@router.delete("/delete/{project_uuid}", status_code=status.HTTP_201_CREATED)
async def delete_project(
    project_uuid: str,
    capability: Capability = Depends(get_capability),
    service: ProjectService = Depends(get_project_service),
):
    service.delete_project(capability, project_uuid)
    return {"message": "Project deleted."}
