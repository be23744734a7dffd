"""Status management commands."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.status import StatusService


@click.group()
def status_group():
    """Manage workflow statuses."""
    pass


@status_group.command("create")
@click.argument("name", metavar="STATUS_NAME")
@click.option("--description", default="", help="Status description")
@click.option("--priority", type=int, default=0, show_default=True, help="Sort priority")
@click.pass_context
def create_status(ctx, name: str, description: str, priority: int):
    """Create a new status."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = StatusService(db)

    try:
        status_uuid = service.create_status(capability, name, description, priority)
        click.echo(f"Created status '{name}' (UUID: {status_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@status_group.command("list")
@click.pass_context
def list_statuses(ctx):
    """List statuses by priority."""
    db = ctx.obj["db"]
    service = StatusService(db)

    statuses = service.list_statuses()
    if not statuses:
        click.echo("No statuses found.")
        return

    click.echo("\nStatuses:")
    click.echo("-" * 90)
    for status in statuses:
        click.echo(f"{status.uuid} | {status.priority:3d} | {status.name:22s} | {status.description}")


@status_group.command("delete")
@click.argument("status_uuid", metavar="STATUS_UUID")
@click.pass_context
def delete_status(ctx, status_uuid: str):
    """Delete a status that no project or task uses."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = StatusService(db)

    try:
        service.delete_status(capability, status_uuid)
        click.echo(f"Deleted status {status_uuid}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register status commands with main CLI."""
    cli.add_command(status_group, name="status")
