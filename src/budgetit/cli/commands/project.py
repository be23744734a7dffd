"""Project commands."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.project import ProjectService
from budgetit.domain.report import ReportService
from budgetit.utils.date_parser import format_datetime
from budgetit.utils.money import format_brl


@click.group()
def project_group():
    """Manage projects."""
    pass


@project_group.command("create")
@click.argument("name", metavar="PROJECT_NAME")
@click.option("--client", "client_uuid", required=True, help="Client UUID")
@click.option("--status", "status_uuid", required=True, help="Status UUID")
@click.option("--user", "user_uuid", help="Responsible user UUID")
@click.option("--description", default="", help="Project description")
@click.pass_context
def create_project(ctx, name, client_uuid, status_uuid, user_uuid, description):
    """Create a project together with its empty budget."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = ProjectService(db)

    try:
        project_uuid = service.create_project(
            capability,
            name=name,
            description=description,
            client_uuid=client_uuid,
            status_uuid=status_uuid,
            user_uuid=user_uuid,
        )
        project = service.get_project(project_uuid)
        click.echo(f"Created project '{name}' (UUID: {project_uuid})")
        click.echo(f"Budget UUID: {project.budget_uuid}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@project_group.command("list")
@click.option("--name", help="Only projects whose name contains this text")
@click.option("--active/--inactive", default=None, help="Filter by active flag")
@click.option("--client", "client_uuid", help="Only projects of this client")
@click.option("--status", "status_uuid", help="Only projects with this status")
@click.pass_context
def list_projects(ctx, name, active, client_uuid, status_uuid):
    """List projects, newest first."""
    service = ProjectService(ctx.obj["db"])

    projects = service.list_projects(
        name=name, active=active, client_uuid=client_uuid, status_uuid=status_uuid
    )
    if not projects:
        click.echo("No projects found.")
        return

    click.echo("\nProjects:")
    click.echo("-" * 90)
    for project in projects:
        state = "active" if project.active else "inactive"
        click.echo(
            f"{project.uuid} | {project.name:25s} | {format_datetime(project.register)} | {state}"
        )


@project_group.command("update")
@click.argument("project_uuid", metavar="PROJECT_UUID")
@click.option("--name", help="New project name")
@click.option("--description", help="New description")
@click.option("--client", "client_uuid", help="New client UUID")
@click.option("--status", "status_uuid", help="New status UUID")
@click.option("--user", "user_uuid", help="New responsible user UUID")
@click.option("--active/--inactive", default=None, help="Set the active flag")
@click.pass_context
def update_project(ctx, project_uuid, name, description, client_uuid, status_uuid, user_uuid, active):
    """Update a project. Options left out keep their current value."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = ProjectService(db)

    try:
        project = service.require_project(project_uuid)
        service.update_project(
            capability,
            project_uuid,
            name=name if name is not None else project.name,
            description=description if description is not None else project.description,
            client_uuid=client_uuid or project.client_uuid,
            status_uuid=status_uuid or project.status_uuid,
            user_uuid=user_uuid or project.user_uuid,
            active=active if active is not None else project.active,
        )
        click.echo(f"Updated project {project_uuid}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@project_group.command("delete")
@click.argument("project_uuid", metavar="PROJECT_UUID")
@click.pass_context
def delete_project(ctx, project_uuid):
    """Delete a project without live tasks or transactions."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = ProjectService(db)

    try:
        service.delete_project(capability, project_uuid)
        click.echo(f"Deleted project {project_uuid}")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@project_group.command("report")
@click.argument("key", default="all", metavar="[PROJECT_UUID]")
@click.pass_context
def report_projects(ctx, key):
    """Show budget, progress and ledger figures of projects.

    Without PROJECT_UUID every project is reported.
    """
    service = ReportService(ctx.obj["db"])

    reports = service.select_projects(key)
    if not reports:
        click.echo("No projects found.")
        return

    for report in reports:
        click.echo(f"\n{report.project.name} ({report.project.uuid})")
        click.echo("-" * 60)
        click.echo(
            f"Dates:    {format_datetime(report.dates.begin) or '-'} -> "
            f"{format_datetime(report.dates.end) or '-'}"
        )
        click.echo(
            f"Budget:   total {format_brl(report.budget.total)} | "
            f"cost {format_brl(report.budget.cost)} | revenue {format_brl(report.budget.revenue)}"
        )
        click.echo(
            f"Progress: total {format_brl(report.proj.total)} | "
            f"cost {format_brl(report.proj.cost)} | revenue {format_brl(report.proj.revenue)}"
        )
        click.echo(
            f"Ledger:   income {format_brl(report.tx.income)} | "
            f"expense {format_brl(report.tx.expense)} | revenue {format_brl(report.tx.revenue)}"
        )


def register_commands(cli):
    """Register project commands with main CLI."""
    cli.add_command(project_group, name="project")
