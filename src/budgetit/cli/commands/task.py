"""Live task commands."""

import click
from budgetit.api.schemas import TasksUpdate
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.cli.commands.budget import echo_result
from budgetit.cli.payloads import load_json, task_list
from budgetit.domain.report import planned_cost, realized_cost
from budgetit.domain.task import TaskService
from budgetit.utils.date_parser import format_datetime
from budgetit.utils.money import format_brl


@click.group()
def task_group():
    """Manage live project tasks."""
    pass


@task_group.command("list")
@click.option("--project", "project_uuid", help="Only tasks of this project")
@click.pass_context
def list_tasks(ctx, project_uuid):
    """List live tasks with planned and realized cost."""
    service = TaskService(ctx.obj["db"])

    tasks = service.select_tasks(project_uuid)
    if not tasks:
        click.echo("No tasks found.")
        return

    click.echo("\nTasks:")
    click.echo("-" * 110)
    for task in tasks:
        origin = "planned" if task.origin_id is not None else "ad hoc"
        state = "done" if task.finished else "open"
        click.echo(
            f"{task.sub_uuid} | {task.name:25s} | {format_datetime(task.begin_date)} | "
            f"{origin:7s} | {state:4s} | "
            f"{format_brl(realized_cost(task))} of {format_brl(planned_cost(task))}"
        )


@task_group.command("update")
@click.argument("tasks_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def update_tasks(ctx, tasks_file):
    """Replace the live tasks of a project with the tasks in TASKS_FILE.

    Live tasks missing from the file are deleted unless work has already been
    recorded against them.
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = TaskService(db)

    try:
        body = TasksUpdate.model_validate({"tasks": task_list(load_json(tasks_file))})
        result = service.update_tasks(capability, body.to_inputs())
        echo_result(result)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register task commands with main CLI."""
    cli.add_command(task_group, name="task")
