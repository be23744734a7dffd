"""Commands for recording work done against live tasks."""

import click
from budgetit.api.schemas import DoneCreate
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.cli.payloads import load_json
from budgetit.domain.task import TaskService


@click.group()
def done_group():
    """Record realized work."""
    pass


@done_group.command("create")
@click.argument("done_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def create_done(ctx, done_file):
    """Record the realization described in DONE_FILE.

    DONE_FILE is a JSON object with name, userUuid and exactly one of
    doneExpense or doneActivity, each carrying the taskUuid of the live
    task's expense or activity.
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = TaskService(db)

    try:
        body = DoneCreate.model_validate(load_json(done_file))
        done_uuid = service.record_done(capability, body.to_input())
        click.echo(f"Recorded done '{body.name}' (UUID: {done_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register done commands with main CLI."""
    cli.add_command(done_group, name="done")
