"""Role management commands."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.auth import AuthService


@click.group()
def auth_group():
    """Manage roles and their capability flags."""
    pass


@auth_group.command("create")
@click.argument("name", metavar="ROLE_NAME")
@click.option("--admin", is_flag=True, help="Manage roles and statuses")
@click.option("--project", is_flag=True, help="Manage projects, budgets and tasks")
@click.option("--personal", is_flag=True, help="Manage users")
@click.option("--financial", is_flag=True, help="Record ledger transactions")
@click.pass_context
def create_role(ctx, name: str, admin: bool, project: bool, personal: bool, financial: bool):
    """Create a new role.

    Examples:
        budgetit auth create "Consultor" --project --financial
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = AuthService(db)

    try:
        auth_uuid = service.create_role(
            capability,
            name,
            admin=admin,
            project=project,
            personal=personal,
            financial=financial,
        )
        click.echo(f"Created role '{name}' (UUID: {auth_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@auth_group.command("list")
@click.pass_context
def list_roles(ctx):
    """List all roles."""
    db = ctx.obj["db"]
    service = AuthService(db)

    roles = service.list_roles()
    if not roles:
        click.echo("No roles found.")
        return

    click.echo("\nRoles:")
    click.echo("-" * 90)
    for role in roles:
        flags = [
            flag
            for flag in ("admin", "project", "personal", "financial")
            if getattr(role, flag)
        ]
        click.echo(f"{role.uuid} | {role.name:20s} | {', '.join(flags) or '-'}")


def register_commands(cli):
    """Register role commands with main CLI."""
    cli.add_command(auth_group, name="auth")
