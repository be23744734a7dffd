"""Main CLI entry point."""

import logging

import click
from budgetit.database.factories import create_sqlite_database
from budgetit.domain.reconciliation import MirrorPolicy

# Import and register all commands at module level
from budgetit.cli.commands import (
    seed,
    auth,
    status,
    party,
    project,
    budget,
    task,
    done,
    transaction,
    serve,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETIT_DB_PATH environment variable)",
    envvar="BUDGETIT_DB_PATH",
)
@click.option(
    "--mirror-policy",
    type=click.Choice([policy.value for policy in MirrorPolicy]),
    default=MirrorPolicy.LENIENT.value,
    show_default=True,
    envvar="BUDGETIT_MIRROR_POLICY",
    help="What to do when a planned task update finds no live clone",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BUDGETIT_LOG_LEVEL",
    help="Logging verbosity",
)
@click.option(
    "--as-user",
    envvar="BUDGETIT_USER",
    help="Act as this user (UUID or username); without it commands run with full access",
)
@click.pass_context
def cli(ctx, db_path: str | None, mirror_policy: str, log_level: str, as_user: str | None):
    """Budgetit - Project budgeting application.

    Plan project budgets as tasks, track realized work against them and
    compare both with the project ledger.
    """
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["mirror_policy"] = MirrorPolicy(mirror_policy)
        ctx.obj["as_user"] = as_user


# Register all commands
seed.register_commands(cli)
auth.register_commands(cli)
status.register_commands(cli)
party.register_commands(cli)
project.register_commands(cli)
budget.register_commands(cli)
task.register_commands(cli)
done.register_commands(cli)
transaction.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
