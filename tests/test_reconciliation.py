"""Tests for task list reconciliation of budgets and live project work."""

from datetime import datetime
from decimal import Decimal
import pytest

from budgetit.domain.auth import Capability
from budgetit.domain.entities import (
    Done,
    DoneExpense,
    DoneExpenseInput,
    DoneInput,
    Task,
    TaskExpense,
    TaskActivity,
    TaskKind,
)
from budgetit.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from budgetit.domain.reconciliation import (
    clone_to_live,
    draft_from_input,
    partition_tasks,
    select_deletions,
    single_value,
)

FULL = Capability.FULL
BEGIN = datetime(2024, 1, 15, 8, 0)


def _task(task_id, sub_uuid, expense=True, budget_uuid=None, project_uuid="p1", dones=()):
    """Build a stored task entity."""
    return Task(
        id=task_id,
        uuid=f"task-{task_id}",
        name=f"Task {task_id}",
        description="",
        finished=False,
        begin_date=BEGIN,
        end_date=BEGIN,
        revenue=Decimal("0"),
        status_uuid="s1",
        project_uuid=project_uuid,
        budget_uuid=budget_uuid,
        expense=TaskExpense(id=task_id, uuid=sub_uuid, amount=Decimal("10")) if expense else None,
        activity=None if expense else TaskActivity(id=task_id, uuid=sub_uuid, hourly_rate=Decimal("10")),
        dones=dones,
    )


def _done(task_id):
    return Done(
        id=1,
        uuid="done-1",
        name="Compra",
        description="",
        register=BEGIN,
        user_uuid="u1",
        task_id=task_id,
        expense=DoneExpense(id=1, uuid="de-1", amount=Decimal("5"), date=BEGIN, supplier_uuid="s"),
    )


# Pure helpers


def test_partition_by_sub_type_and_uuid(make_task):
    """Test tasks land in exactly one bucket each."""
    tasks = [
        make_task("new expense", amount="10"),
        make_task("old expense", amount="10", sub_uuid="e1"),
        make_task("new activity", hourly_rate="50"),
        make_task("old activity", hourly_rate="50", sub_uuid="a1"),
        make_task("another new expense", amount="20"),
    ]

    partition = partition_tasks(tasks)

    assert [t.name for t in partition.create_expenses] == ["new expense", "another new expense"]
    assert [t.name for t in partition.update_expenses] == ["old expense"]
    assert [t.name for t in partition.create_activities] == ["new activity"]
    assert [t.name for t in partition.update_activities] == ["old activity"]
    assert len(partition.create) + len(partition.update) == len(tasks)


def test_partition_keeps_submission_order(make_task):
    """Test mixed sub-types are created and updated in the order submitted."""
    tasks = [
        make_task("activity first", hourly_rate="50"),
        make_task("expense second", amount="10"),
        make_task("kept activity", hourly_rate="50", sub_uuid="a1"),
        make_task("kept expense", amount="10", sub_uuid="e1"),
    ]

    partition = partition_tasks(tasks)

    assert [t.name for t in partition.create] == ["activity first", "expense second"]
    assert [t.name for t in partition.update] == ["kept activity", "kept expense"]


def test_partition_rejects_both_or_neither_sub_record(make_task):
    """Test a task must carry exactly one of expense or activity."""
    with pytest.raises(ValidationError):
        partition_tasks([make_task("neither")])
    with pytest.raises(ValidationError):
        partition_tasks([make_task("both", amount="10", hourly_rate="10")])


def test_single_value():
    """Test exactly one distinct non-empty value is required."""
    assert single_value(["p1", "p1"], "project") == "p1"
    with pytest.raises(ConflictError, match="single project"):
        single_value(["p1", "p2"], "project")
    with pytest.raises(ConflictError):
        single_value([], "project")
    with pytest.raises(ConflictError):
        single_value([None], "project")


def test_select_deletions_keeps_updated_uuids_per_sub_type(make_task):
    """Test persisted tasks whose sub uuid is kept are not selected."""
    persisted = [
        _task(1, "e1"),
        _task(2, "e2"),
        _task(3, "a1", expense=False),
        # Same uuid under the other sub-type is not kept
        _task(4, "a2"),
    ]
    partition = partition_tasks(
        [
            make_task("keep", amount="10", sub_uuid="e1"),
            make_task("keep", hourly_rate="10", sub_uuid="a1"),
            make_task("keep", hourly_rate="10", sub_uuid="a2"),
        ]
    )

    selected = select_deletions(persisted, partition, "p1")

    assert [task.id for task in selected] == [2, 4]


def test_select_deletions_scopes_to_project_and_budget(make_task):
    """Test only tasks of the target project and budget are selected."""
    persisted = [
        _task(1, "e1", budget_uuid="b1"),
        _task(2, "e2", budget_uuid="b2"),
        _task(3, "e3", budget_uuid="b1", project_uuid="p2"),
        _task(4, "e4"),
    ]
    partition = partition_tasks([make_task("new", amount="10")])

    assert [t.id for t in select_deletions(persisted, partition, "p1", "b1")] == [1]
    assert [t.id for t in select_deletions(persisted, partition, "p1")] == [4]


def test_select_deletions_spares_tasks_with_dones(make_task):
    """Test realized tasks are spared when required."""
    persisted = [_task(1, "e1", dones=(_done(1),)), _task(2, "e2")]
    partition = partition_tasks([make_task("new", amount="10")])

    selected = select_deletions(persisted, partition, "p1", require_no_dones=True)

    assert [task.id for task in selected] == [2]


def test_clone_to_live_carries_every_field(make_task):
    """Test the live clone differs from the planned draft only in its links."""
    draft = draft_from_input(make_task("Pintura", hourly_rate="55", revenue="80"), "p1", "b1")

    clone = clone_to_live(draft, origin_id=7)

    assert clone.budget_uuid is None
    assert clone.original_task_id == 7
    assert clone.hourly_rate == Decimal("55")
    assert clone.revenue == Decimal("80")
    assert clone.name == draft.name
    assert clone.begin_date == draft.begin_date
    assert draft.budget_uuid == "b1"


# Budget reconciliation


def test_budget_create_adds_planned_task_and_live_clone(budget_service, temp_db, sample_project, make_task):
    """Test each new planned task is stored together with its live clone."""
    budget_uuid = sample_project.budget_uuid

    result = budget_service.update_tasks(
        FULL,
        budget_uuid,
        [make_task("Compra", amount="100", revenue="20"), make_task("Pintura", hourly_rate="50")],
    )

    assert len(result.created) == 4
    planned = temp_db.list_tasks(project_uuid=sample_project.uuid, budget_uuid=budget_uuid)
    live = temp_db.list_tasks(project_uuid=sample_project.uuid, live=True)
    assert [task.name for task in planned] == ["Compra", "Pintura"]
    assert all(task.kind is TaskKind.PLANNED for task in planned)
    assert [task.original_task_id for task in live] == [task.id for task in planned]
    assert live[0].expense.amount == Decimal("100")
    assert live[1].activity.hourly_rate == Decimal("50")
    assert live[0].expense.uuid != planned[0].expense.uuid


def test_budget_register_stamped_once(budget_service, sample_project, make_task):
    """Test the budget keeps the time of its first edit."""
    budget_uuid = sample_project.budget_uuid
    assert budget_service.get_budget(budget_uuid).register is None

    budget_service.update_tasks(FULL, budget_uuid, [make_task("Compra", amount="100")])
    first = budget_service.get_budget(budget_uuid).register
    assert first is not None

    planned = budget_service.get_budget(budget_uuid).tasks[0]
    budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="120", sub_uuid=planned.sub_uuid)]
    )
    assert budget_service.get_budget(budget_uuid).register == first


def test_budget_update_is_mirrored(budget_service, temp_db, sample_project, make_task):
    """Test updates to a planned task are copied onto its live clone."""
    budget_uuid = sample_project.budget_uuid
    budget_service.update_tasks(FULL, budget_uuid, [make_task("Compra", amount="100")])
    planned = budget_service.get_budget(budget_uuid).tasks[0]

    result = budget_service.update_tasks(
        FULL,
        budget_uuid,
        [make_task("Compra de tinta", amount="150", sub_uuid=planned.sub_uuid, finished=True)],
    )

    mirror = temp_db.find_live_mirror(planned.id)
    assert planned.uuid in result.updated
    assert mirror.uuid in result.updated
    assert mirror.name == "Compra de tinta"
    assert mirror.expense.amount == Decimal("150")
    assert mirror.finished is True
    assert mirror.budget_uuid is None
    assert budget_service.get_budget(budget_uuid).tasks[0].expense.amount == Decimal("150")


def test_budget_omitted_task_deleted_with_clone(budget_service, temp_db, sample_project, make_task):
    """Test planned tasks left out of the list go away with their clone."""
    budget_uuid = sample_project.budget_uuid
    budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="100"), make_task("Pintura", hourly_rate="50")]
    )
    keep, drop = budget_service.get_budget(budget_uuid).tasks
    drop_mirror = temp_db.find_live_mirror(drop.id)

    result = budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="100", sub_uuid=keep.sub_uuid)]
    )

    assert set(result.deleted) == {drop.uuid, drop_mirror.uuid}
    assert [t.uuid for t in budget_service.get_budget(budget_uuid).tasks] == [keep.uuid]
    assert temp_db.get_task(drop_mirror.id) is None
    assert temp_db.find_live_mirror(keep.id) is not None


def test_budget_delete_keeps_realized_clone(
    budget_service, task_service, temp_db, sample_project, sample_user, sample_supplier, make_task
):
    """Test a live clone with realizations survives its planned task."""
    budget_uuid = sample_project.budget_uuid
    budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="100"), make_task("Frete", amount="30")]
    )
    keep, drop = budget_service.get_budget(budget_uuid).tasks
    mirror = temp_db.find_live_mirror(drop.id)
    task_service.record_done(
        FULL,
        DoneInput(
            name="Frete pago",
            description="",
            user_uuid=sample_user,
            expense=DoneExpenseInput(
                task_uuid=mirror.sub_uuid, amount=Decimal("35"), date=BEGIN, supplier_uuid=sample_supplier
            ),
        ),
    )

    result = budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="100", sub_uuid=keep.sub_uuid)]
    )

    assert result.deleted == (drop.uuid,)
    survivor = temp_db.get_task(mirror.id)
    assert survivor is not None
    assert len(survivor.dones) == 1


def test_budget_missing_mirror_lenient(budget_service, temp_db, sample_project, make_task):
    """Test a lost live clone is skipped and reported under the lenient policy."""
    budget_uuid = sample_project.budget_uuid
    budget_service.update_tasks(FULL, budget_uuid, [make_task("Compra", amount="100")])
    planned = budget_service.get_budget(budget_uuid).tasks[0]
    temp_db.delete_task(temp_db.find_live_mirror(planned.id).id)

    result = budget_service.update_tasks(
        FULL, budget_uuid, [make_task("Compra", amount="130", sub_uuid=planned.sub_uuid)]
    )

    assert result.mirrors_skipped == (planned.uuid,)
    assert result.updated == (planned.uuid,)
    assert budget_service.get_budget(budget_uuid).tasks[0].expense.amount == Decimal("130")


def test_budget_missing_mirror_strict_rolls_back(strict_budget_service, temp_db, sample_project, make_task):
    """Test a lost live clone fails the whole call under the strict policy."""
    budget_uuid = sample_project.budget_uuid
    strict_budget_service.update_tasks(FULL, budget_uuid, [make_task("Compra", amount="100")])
    planned = strict_budget_service.get_budget(budget_uuid).tasks[0]
    temp_db.delete_task(temp_db.find_live_mirror(planned.id).id)

    with pytest.raises(NotFoundError, match="Live task"):
        strict_budget_service.update_tasks(
            FULL,
            budget_uuid,
            [
                make_task("Frete", amount="40"),
                make_task("Compra", amount="130", sub_uuid=planned.sub_uuid),
            ],
        )

    tasks = strict_budget_service.get_budget(budget_uuid).tasks
    assert [task.name for task in tasks] == ["Compra"]
    assert tasks[0].expense.amount == Decimal("100")


def test_budget_failure_rolls_back_everything(budget_service, temp_db, sample_project, make_task):
    """Test nothing persists when a later step of the call fails."""
    budget_uuid = sample_project.budget_uuid

    with pytest.raises(NotFoundError):
        budget_service.update_tasks(
            FULL,
            budget_uuid,
            [make_task("Compra", amount="100"), make_task("Fantasma", amount="10", sub_uuid="missing")],
        )

    assert temp_db.list_tasks(project_uuid=sample_project.uuid) == []
    assert budget_service.get_budget(budget_uuid).register is None


def test_budget_update_of_wrong_sub_type_not_found(budget_service, sample_project, make_task):
    """Test an update addresses a sub-record of its own sub-type."""
    budget_uuid = sample_project.budget_uuid
    budget_service.update_tasks(FULL, budget_uuid, [make_task("Compra", amount="100")])
    planned = budget_service.get_budget(budget_uuid).tasks[0]

    with pytest.raises(NotFoundError):
        budget_service.update_tasks(
            FULL, budget_uuid, [make_task("Compra", hourly_rate="10", sub_uuid=planned.sub_uuid)]
        )


def test_budget_rejects_tasks_of_several_projects(
    budget_service, project_service, sample_project, sample_client, sample_status, make_task
):
    """Test a task list must belong to a single project."""
    other = project_service.create_project(
        FULL, "Outro", "", client_uuid=sample_client, status_uuid=sample_status
    )

    with pytest.raises(ConflictError, match="single project"):
        budget_service.update_tasks(
            FULL,
            sample_project.budget_uuid,
            [make_task("A", amount="1"), make_task("B", amount="1", project_uuid=other)],
        )


def test_budget_rejects_foreign_budget(
    budget_service, project_service, sample_project, sample_client, sample_status, make_task
):
    """Test tasks cannot be filed under another project's budget."""
    other = project_service.get_project(
        project_service.create_project(
            FULL, "Outro", "", client_uuid=sample_client, status_uuid=sample_status
        )
    )

    with pytest.raises(ConflictError):
        budget_service.update_tasks(FULL, other.budget_uuid, [make_task("A", amount="1")])
    with pytest.raises(ConflictError):
        budget_service.update_tasks(
            FULL,
            sample_project.budget_uuid,
            [make_task("A", amount="1", budget_uuid=other.budget_uuid)],
        )


def test_budget_rejects_empty_list(budget_service, sample_project):
    """Test an empty list has no project to reconcile."""
    with pytest.raises(ConflictError):
        budget_service.update_tasks(FULL, sample_project.budget_uuid, [])


def test_budget_unknown(budget_service, make_task):
    """Test an unknown budget is reported."""
    with pytest.raises(NotFoundError):
        budget_service.update_tasks(FULL, "missing", [make_task("A", amount="1")])


def test_budget_update_requires_project_capability(budget_service, sample_project, make_task):
    """Test the project flag gates budget edits."""
    with pytest.raises(AuthorizationError):
        budget_service.update_tasks(
            Capability(financial=True), sample_project.budget_uuid, [make_task("A", amount="1")]
        )


def test_budget_rejects_inverted_dates(budget_service, sample_project, make_task):
    """Test a task cannot end before it begins."""
    task = make_task("A", amount="1", begin=datetime(2024, 1, 2), end=datetime(2024, 1, 1))

    with pytest.raises(ValidationError, match="ends before"):
        budget_service.update_tasks(FULL, sample_project.budget_uuid, [task])


def test_select_budgets(budget_service, sample_project, make_task):
    """Test selecting all budgets or one by uuid."""
    budget_service.update_tasks(FULL, sample_project.budget_uuid, [make_task("A", amount="1")])

    assert [b.uuid for b in budget_service.select_budgets("all")] == [sample_project.budget_uuid]
    selected = budget_service.select_budgets(sample_project.budget_uuid)
    assert len(selected) == 1
    assert [task.name for task in selected[0].tasks] == ["A"]
    assert budget_service.select_budgets("missing") == []
    assert len(budget_service.select_budgets("all", project_uuid=sample_project.uuid)) == 1


# Live reconciliation


def test_live_create_update_delete(task_service, temp_db, sample_project, make_task):
    """Test live tasks converge to the submitted list."""
    task_service.update_tasks(
        FULL, [make_task("Visita", hourly_rate="90"), make_task("Material", amount="200")]
    )
    visit, material = task_service.select_tasks(sample_project.uuid)
    assert (visit.name, material.name) == ("Visita", "Material")
    assert visit.activity is not None
    assert visit.origin_id is None

    result = task_service.update_tasks(
        FULL, [make_task("Visita técnica", hourly_rate="95", sub_uuid=visit.sub_uuid)]
    )

    assert result.updated == (visit.uuid,)
    assert result.deleted == (material.uuid,)
    (remaining,) = task_service.select_tasks(sample_project.uuid)
    assert remaining.name == "Visita técnica"
    assert remaining.activity.hourly_rate == Decimal("95")


def test_live_update_keeps_planned_link(budget_service, task_service, temp_db, sample_project, make_task):
    """Test editing a live clone keeps its link to the planned task."""
    budget_service.update_tasks(FULL, sample_project.budget_uuid, [make_task("Compra", amount="100")])
    planned = budget_service.get_budget(sample_project.budget_uuid).tasks[0]
    (live,) = task_service.select_tasks(sample_project.uuid)

    task_service.update_tasks(FULL, [make_task("Compra", amount="110", sub_uuid=live.sub_uuid)])

    (live,) = task_service.select_tasks(sample_project.uuid)
    assert live.origin_id == planned.id
    assert live.expense.amount == Decimal("110")
    assert budget_service.get_budget(sample_project.budget_uuid).tasks[0].expense.amount == Decimal("100")


def test_live_update_cannot_address_planned_task(budget_service, task_service, sample_project, make_task):
    """Test planned sub-records are not reachable through live updates."""
    budget_service.update_tasks(FULL, sample_project.budget_uuid, [make_task("Compra", amount="100")])
    planned = budget_service.get_budget(sample_project.budget_uuid).tasks[0]

    with pytest.raises(NotFoundError):
        task_service.update_tasks(FULL, [make_task("Compra", amount="1", sub_uuid=planned.sub_uuid)])


def test_live_rejects_empty_list(task_service):
    """Test an empty list has no project to reconcile."""
    with pytest.raises(ConflictError):
        task_service.update_tasks(FULL, [])


def test_live_requires_project_capability(task_service, make_task):
    """Test the project flag gates live task edits."""
    with pytest.raises(AuthorizationError):
        task_service.update_tasks(Capability(), [make_task("A", amount="1")])
