"""Task list reconciliation.

A caller submits the complete task list of a budget (planned tasks) or of a
project (live tasks). Each entry carries exactly one expense or activity
sub-record; an empty sub-record uuid marks a new task, anything else an
existing one. Storage is converged to the list: new entries are created,
known ones overwritten, and persisted tasks missing from the list deleted.

Planned tasks project into live work: every planned task created here gets a
live clone pointing back to it through ``original_task_id``, and updates to
the planned task are mirrored onto that clone.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional

from budgetit.database.base import Database
from budgetit.domain.entities import (
    Project,
    ReconciliationResult,
    Task,
    TaskDraft,
    TaskInput,
)
from budgetit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    not_found,
    single_owner_required,
)
from budgetit.utils.date_parser import now

logger = logging.getLogger(__name__)

EXPENSE = "expense"
ACTIVITY = "activity"


class MirrorPolicy(Enum):
    """What to do when a planned task update finds no live clone to mirror onto."""

    LENIENT = "lenient"  # log a warning and skip
    STRICT = "strict"  # fail the whole call


@dataclass(frozen=True)
class TaskPartition:
    """Submitted tasks split into create and update buckets, in submission order."""

    create: tuple[TaskInput, ...] = ()
    update: tuple[TaskInput, ...] = ()

    @property
    def create_expenses(self) -> tuple[TaskInput, ...]:
        return tuple(task for task in self.create if task.expense is not None)

    @property
    def update_expenses(self) -> tuple[TaskInput, ...]:
        return tuple(task for task in self.update if task.expense is not None)

    @property
    def create_activities(self) -> tuple[TaskInput, ...]:
        return tuple(task for task in self.create if task.activity is not None)

    @property
    def update_activities(self) -> tuple[TaskInput, ...]:
        return tuple(task for task in self.update if task.activity is not None)

    def update_uuids(self, sub_type: str) -> frozenset[str]:
        """Sub-record uuids kept by the update bucket of one sub-type."""
        if sub_type == EXPENSE:
            return frozenset(task.expense.uuid for task in self.update_expenses)
        return frozenset(task.activity.uuid for task in self.update_activities)


def sub_type_of(task: TaskInput | Task) -> Optional[str]:
    """Return ``"expense"`` or ``"activity"``, or None when the sub-record is missing."""
    if task.expense is not None:
        return EXPENSE
    if task.activity is not None:
        return ACTIVITY
    return None


def partition_tasks(tasks: Iterable[TaskInput]) -> TaskPartition:
    """Split tasks into create/update buckets by sub-record uuid emptiness.

    Raises:
        ValidationError: If a task has both or neither sub-records
    """
    create: list[TaskInput] = []
    update: list[TaskInput] = []
    for task in tasks:
        if (task.expense is None) == (task.activity is None):
            raise ValidationError(
                f"Task '{task.name}' must have exactly one of expense or activity"
            )
        if task.sub_uuid == "":
            create.append(task)
        else:
            update.append(task)

    return TaskPartition(create=tuple(create), update=tuple(update))


def single_value(values: Iterable[Optional[str]], label: str) -> str:
    """Return the only distinct value, or raise ConflictError."""
    distinct = set(values)
    if len(distinct) != 1 or None in distinct:
        raise ConflictError(single_owner_required(label, {v for v in distinct if v}))
    return distinct.pop()


def select_deletions(
    persisted: Iterable[Task],
    partition: TaskPartition,
    project_uuid: str,
    budget_uuid: Optional[str] = None,
    require_no_dones: bool = False,
) -> list[Task]:
    """Pick the persisted tasks a submitted list drops.

    A task is selected when it belongs to the target project and budget
    (``budget_uuid=None`` targets live tasks), its sub-record uuid is not in
    the update bucket of its sub-type and, if ``require_no_dones``, nothing has
    been realized against it.
    """
    kept = {
        EXPENSE: partition.update_uuids(EXPENSE),
        ACTIVITY: partition.update_uuids(ACTIVITY),
    }
    selected = []
    for task in persisted:
        if task.project_uuid != project_uuid or task.budget_uuid != budget_uuid:
            continue
        sub_type = sub_type_of(task)
        if sub_type is not None and task.sub_uuid in kept[sub_type]:
            continue
        if require_no_dones and task.dones:
            continue
        selected.append(task)
    return selected


def draft_from_input(
    task: TaskInput,
    project_uuid: str,
    budget_uuid: Optional[str] = None,
    original_task_id: Optional[int] = None,
) -> TaskDraft:
    """Build the row state of a submitted task."""
    return TaskDraft(
        name=task.name,
        description=task.description,
        finished=task.finished,
        begin_date=task.begin_date,
        end_date=task.end_date,
        revenue=task.revenue,
        status_uuid=task.status_uuid,
        project_uuid=project_uuid,
        user_uuid=task.user_uuid,
        budget_uuid=budget_uuid,
        original_task_id=original_task_id,
        amount=task.expense.amount if task.expense is not None else None,
        hourly_rate=task.activity.hourly_rate if task.activity is not None else None,
    )


def clone_to_live(draft: TaskDraft, origin_id: int) -> TaskDraft:
    """Project a planned task draft into its live counterpart.

    Every field is carried over; only the budget link is dropped and the
    back-link to the planned task set.
    """
    return replace(draft, budget_uuid=None, original_task_id=origin_id)


class TaskReconciler:
    """Converges stored tasks to a submitted list inside one unit of work."""

    def __init__(self, db: Database, mirror_policy: MirrorPolicy = MirrorPolicy.LENIENT):
        self.db = db
        self.mirror_policy = mirror_policy

    def reconcile_budget(
        self, budget_uuid: str, tasks: list[TaskInput]
    ) -> ReconciliationResult:
        """Converge the planned tasks of a budget, mirroring onto live clones.

        Tasks without a budget uuid are taken as belonging to the addressed
        budget.

        Raises:
            NotFoundError: If the budget, a referenced record or an updated
                sub-record does not exist (or a live clone, under the strict
                mirror policy)
            ConflictError: If tasks span several projects or budgets, or the
                budget does not belong to the tasks' project
            ValidationError: If a task is malformed
        """
        budget = self.db.get_budget(budget_uuid)
        if budget is None:
            raise NotFoundError(not_found("Budget", budget_uuid))

        tasks = [
            task if task.budget_uuid else replace(task, budget_uuid=budget_uuid)
            for task in tasks
        ]
        project_uuid = single_value((task.project_uuid for task in tasks), "project")
        if single_value((task.budget_uuid for task in tasks), "budget") != budget_uuid:
            raise ConflictError(single_owner_required("budget", {budget_uuid, tasks[0].budget_uuid}))

        project = self._check_references(project_uuid, tasks)
        if project.budget_uuid != budget_uuid:
            raise ConflictError(
                f"Budget '{budget_uuid}' does not belong to project '{project_uuid}'"
            )

        partition = partition_tasks(tasks)
        persisted = self.db.list_tasks(project_uuid=project_uuid, budget_uuid=budget_uuid)
        deletions = select_deletions(persisted, partition, project_uuid, budget_uuid)
        self._log_buckets("budget", budget_uuid, partition, deletions)

        created: list[str] = []
        updated: list[str] = []
        deleted: list[str] = []
        skipped: list[str] = []
        try:
            with self.db.unit_of_work():
                self.db.stamp_budget_register(budget_uuid, now())

                for task in partition.create:
                    draft = draft_from_input(task, project_uuid, budget_uuid)
                    planned = self.db.create_task(draft)
                    live = self.db.create_task(clone_to_live(draft, planned.id))
                    created.extend([planned.uuid, live.uuid])

                for task in partition.update:
                    target = self._resolve_target(task, project_uuid, budget_uuid)
                    draft = draft_from_input(task, project_uuid, budget_uuid)
                    updated.append(self.db.update_task(target.id, draft).uuid)

                    mirror = self.db.find_live_mirror(target.id)
                    if mirror is None:
                        self._handle_missing_mirror(target)
                        skipped.append(target.uuid)
                        continue
                    updated.append(self.db.update_task(mirror.id, clone_to_live(draft, target.id)).uuid)

                for task in deletions:
                    mirror = self.db.find_live_mirror(task.id)
                    if mirror is not None and not mirror.dones:
                        self.db.delete_task(mirror.id)
                        deleted.append(mirror.uuid)
                    self.db.delete_task(task.id)
                    deleted.append(task.uuid)
        except Exception as e:
            logger.error("Budget %s task update rolled back: %s", budget_uuid, e)
            raise

        return ReconciliationResult(
            created=tuple(created),
            updated=tuple(updated),
            deleted=tuple(deleted),
            mirrors_skipped=tuple(skipped),
        )

    def reconcile_live(self, tasks: list[TaskInput]) -> ReconciliationResult:
        """Converge the live tasks of a project.

        Live tasks with realizations are never deleted.

        Raises:
            NotFoundError: If a referenced record or an updated sub-record
                does not exist
            ConflictError: If tasks span several projects
            ValidationError: If a task is malformed
        """
        project_uuid = single_value((task.project_uuid for task in tasks), "project")
        self._check_references(project_uuid, tasks)

        partition = partition_tasks(tasks)
        persisted = self.db.list_tasks(project_uuid=project_uuid, live=True)
        deletions = select_deletions(persisted, partition, project_uuid, require_no_dones=True)
        self._log_buckets("project", project_uuid, partition, deletions)

        created: list[str] = []
        updated: list[str] = []
        try:
            with self.db.unit_of_work():
                for task in partition.create:
                    created.append(self.db.create_task(draft_from_input(task, project_uuid)).uuid)

                for task in partition.update:
                    target = self._resolve_target(task, project_uuid, None)
                    # Live rows keep their back-link to the planned task
                    draft = draft_from_input(task, project_uuid, None, target.original_task_id)
                    updated.append(self.db.update_task(target.id, draft).uuid)

                for task in deletions:
                    self.db.delete_task(task.id)
        except Exception as e:
            logger.error("Project %s task update rolled back: %s", project_uuid, e)
            raise

        return ReconciliationResult(
            created=tuple(created),
            updated=tuple(updated),
            deleted=tuple(task.uuid for task in deletions),
        )

    def _check_references(self, project_uuid: str, tasks: list[TaskInput]) -> Project:
        project = self.db.get_project(project_uuid)
        if project is None:
            raise NotFoundError(not_found("Project", project_uuid))

        for status_uuid in sorted({task.status_uuid for task in tasks}):
            if self.db.get_status(status_uuid) is None:
                raise NotFoundError(not_found("Status", status_uuid))
        for user_uuid in sorted({task.user_uuid for task in tasks if task.user_uuid}):
            if self.db.get_user(user_uuid) is None:
                raise NotFoundError(not_found("User", user_uuid))
        for task in tasks:
            if not task.name.strip():
                raise ValidationError("Task name cannot be empty")
            if task.end_date < task.begin_date:
                raise ValidationError(f"Task '{task.name}' ends before it begins")
        return project

    def _resolve_target(
        self, task: TaskInput, project_uuid: str, budget_uuid: Optional[str]
    ) -> Task:
        """Find the stored task an update entry addresses."""
        target = self.db.get_task_by_sub_uuid(task.sub_uuid)
        if (
            target is None
            or sub_type_of(target) != sub_type_of(task)
            or target.project_uuid != project_uuid
            or target.budget_uuid != budget_uuid
        ):
            raise NotFoundError(not_found(f"Task {sub_type_of(task)}", task.sub_uuid))
        return target

    def _handle_missing_mirror(self, planned: Task) -> None:
        if self.mirror_policy is MirrorPolicy.STRICT:
            raise NotFoundError(f"Live task cloned from planned task '{planned.uuid}' not found")
        logger.warning(
            "Planned task %s has no live clone; mirror update skipped", planned.uuid
        )

    def _log_buckets(self, scope: str, uuid: str, partition: TaskPartition, deletions: list) -> None:
        logger.info(
            "Reconciling %s %s: %d to create, %d to update, %d to delete",
            scope,
            uuid,
            len(partition.create),
            len(partition.update),
            len(deletions),
        )
