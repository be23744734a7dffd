"""Live task domain service."""

import logging
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import (
    DoneInput,
    ReconciliationResult,
    Task,
    TaskInput,
    TaskKind,
)
from budgetit.domain.errors import NotFoundError, ValidationError, not_found
from budgetit.domain.reconciliation import TaskReconciler

logger = logging.getLogger(__name__)


class TaskService:
    """Service for live project tasks and their realizations."""

    def __init__(self, db: Database):
        """Initialize task service.

        Args:
            db: Database instance
        """
        self.db = db
        self.reconciler = TaskReconciler(db)

    def select_tasks(self, project_uuid: Optional[str] = None) -> list[Task]:
        """List live tasks, optionally of one project."""
        return self.db.list_tasks(project_uuid=project_uuid, live=True)

    def update_tasks(
        self, capability: Capability, tasks: list[TaskInput]
    ) -> ReconciliationResult:
        """Replace the live task list of a project.

        Live tasks left out of the list are deleted unless something has been
        realized against them.

        Args:
            capability: Caller capability (needs project)
            tasks: Complete live task list of one project

        Returns:
            Uuids of the tasks created, updated and deleted

        Raises:
            AuthorizationError: If the caller lacks the project flag
            NotFoundError: If a referenced record or updated sub-record does not exist
            ConflictError: If tasks span several projects
            ValidationError: If a task is malformed
        """
        capability.require("project")
        return self.reconciler.reconcile_live(tasks)

    def record_done(self, capability: Capability, done: DoneInput) -> str:
        """Append a realization against a live task.

        The target task is addressed by the uuid of its expense or activity
        sub-record, and the realization must be of the same kind.

        Args:
            capability: Caller capability (needs project)
            done: Realization with exactly one of expense or activity

        Returns:
            Done UUID

        Raises:
            AuthorizationError: If the caller lacks the project flag
            ValidationError: If the realization is malformed or targets a planned task
            NotFoundError: If the task sub-record, user or supplier does not exist
        """
        capability.require("project")
        if (done.expense is None) == (done.activity is None):
            raise ValidationError("Exactly one of done expense or done activity is required")
        if not done.name.strip():
            raise ValidationError("Done name cannot be empty")

        sub = done.expense if done.expense is not None else done.activity
        task = self.db.get_task_by_sub_uuid(sub.task_uuid)
        if task is None:
            raise NotFoundError(not_found("Task", sub.task_uuid))
        if task.kind is not TaskKind.LIVE:
            raise ValidationError(
                f"Task '{task.name}' is a planned task; realize its live counterpart instead"
            )

        if done.expense is not None:
            if task.expense is None:
                raise ValidationError(f"Task '{task.name}' is not an expense task")
            if self.db.get_supplier(done.expense.supplier_uuid) is None:
                raise NotFoundError(not_found("Supplier", done.expense.supplier_uuid))
            if done.expense.amount < 0:
                raise ValidationError("Done amount cannot be negative")
        else:
            if task.activity is None:
                raise ValidationError(f"Task '{task.name}' is not an activity task")
            if done.activity.end_date < done.activity.begin_date:
                raise ValidationError("Done activity ends before it begins")

        if self.db.get_user(done.user_uuid) is None:
            raise NotFoundError(not_found("User", done.user_uuid))

        done_uuid = self.db.create_done(task.id, done)
        logger.info("Recorded done %s against task %s", done_uuid, task.uuid)
        return done_uuid
