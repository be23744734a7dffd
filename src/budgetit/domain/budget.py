"""Budget domain service."""

from datetime import datetime
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import Budget, ReconciliationResult, TaskInput
from budgetit.domain.errors import NotFoundError, not_found
from budgetit.domain.reconciliation import MirrorPolicy, TaskReconciler


class BudgetService:
    """Service for budgets and their planned tasks."""

    def __init__(self, db: Database, mirror_policy: MirrorPolicy = MirrorPolicy.LENIENT):
        """Initialize budget service.

        Args:
            db: Database instance
            mirror_policy: Behavior when a planned task has lost its live clone
        """
        self.db = db
        self.reconciler = TaskReconciler(db, mirror_policy)

    def select_budgets(
        self,
        key: str,
        project_uuid: Optional[str] = None,
        register_min: Optional[datetime] = None,
        register_max: Optional[datetime] = None,
    ) -> list[Budget]:
        """Select budgets with their planned tasks.

        Args:
            key: ``"all"`` or a budget UUID
            project_uuid: Only the budget of this project
            register_min: Earliest budget register
            register_max: Latest budget register

        Returns:
            Matching budgets (empty when nothing matches)
        """
        budgets = self.db.list_budgets(
            project_uuid=project_uuid,
            register_min=register_min,
            register_max=register_max,
        )
        if key == "all":
            return budgets
        return [budget for budget in budgets if budget.uuid == key]

    def get_budget(self, budget_uuid: str) -> Budget:
        """Get a budget or raise NotFoundError."""
        budget = self.db.get_budget(budget_uuid)
        if budget is None:
            raise NotFoundError(not_found("Budget", budget_uuid))
        return budget

    def update_tasks(
        self, capability: Capability, budget_uuid: str, tasks: list[TaskInput]
    ) -> ReconciliationResult:
        """Replace the planned task list of a budget.

        New planned tasks get a live clone; updates are mirrored onto it;
        planned tasks left out of the list are deleted with their clone,
        unless the clone already has realizations.

        Args:
            capability: Caller capability (needs project)
            budget_uuid: Budget being edited
            tasks: Complete planned task list

        Returns:
            Uuids of the tasks created, updated, deleted and mirrors skipped

        Raises:
            AuthorizationError: If the caller lacks the project flag
            NotFoundError: If the budget or a referenced record does not exist
            ConflictError: If tasks span several projects or budgets
            ValidationError: If a task is malformed
        """
        capability.require("project")
        return self.reconciler.reconcile_budget(budget_uuid, tasks)
