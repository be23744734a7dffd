"""Budget commands."""

import click
from budgetit.api.schemas import BudgetTasksUpdate
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.cli.payloads import load_json, task_list
from budgetit.domain.budget import BudgetService
from budgetit.domain.report import budget_totals, planned_cost, planned_revenue
from budgetit.utils.date_parser import format_datetime
from budgetit.utils.money import format_brl


def echo_result(result) -> None:
    """Print the outcome of a task list update."""
    click.echo(
        f"Created {len(result.created)}, updated {len(result.updated)}, "
        f"deleted {len(result.deleted)} task(s)."
    )
    for task_uuid in result.mirrors_skipped:
        click.echo(f"Warning: planned task {task_uuid} has no live clone to update", err=True)


@click.group()
def budget_group():
    """Manage project budgets."""
    pass


@budget_group.command("show")
@click.argument("key", default="all", metavar="[BUDGET_UUID]")
@click.option("--project", "project_uuid", help="Only the budget of this project")
@click.pass_context
def show_budgets(ctx, key, project_uuid):
    """Show budgets with their planned tasks."""
    service = BudgetService(ctx.obj["db"])

    budgets = service.select_budgets(key, project_uuid=project_uuid)
    if not budgets:
        click.echo("No budgets found.")
        return

    for budget in budgets:
        click.echo(f"\nBudget {budget.uuid} (last edited: {format_datetime(budget.register) or '-'})")
        click.echo("-" * 90)
        for task in budget.tasks:
            kind = "expense" if task.expense is not None else "activity"
            click.echo(
                f"{task.sub_uuid} | {task.name:25s} | {kind:8s} | "
                f"cost {format_brl(planned_cost(task)):>14s} | "
                f"revenue {format_brl(planned_revenue(task)):>14s}"
            )
        totals = budget_totals(budget.tasks)
        click.echo(
            f"Total {format_brl(totals.total)} "
            f"(cost {format_brl(totals.cost)}, revenue {format_brl(totals.revenue)})"
        )


@budget_group.command("update")
@click.argument("budget_uuid", metavar="BUDGET_UUID")
@click.argument("tasks_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def update_budget(ctx, budget_uuid, tasks_file):
    """Replace the planned tasks of a budget with the tasks in TASKS_FILE.

    TASKS_FILE is JSON: a task list, or an object with a "tasks" list, in the
    same camelCase shape the REST API accepts. Tasks whose expense or activity
    uuid is empty are created; the others are updated; planned tasks missing
    from the file are deleted.
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = BudgetService(db, ctx.obj["mirror_policy"])

    try:
        body = BudgetTasksUpdate.model_validate(
            {"uuid": budget_uuid, "tasks": task_list(load_json(tasks_file))}
        )
        result = service.update_tasks(capability, body.uuid, body.to_inputs())
        echo_result(result)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
