"""Ledger transaction commands."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.entities import LedgerKind
from budgetit.domain.ledger import LedgerService
from budgetit.domain.party import PartyService
from budgetit.domain.report import transaction_totals
from budgetit.utils.date_parser import format_datetime, parse_datetime
from budgetit.utils.money import format_brl, parse_brl


def _common_options(func):
    """Options shared by every transaction kind."""
    options = [
        click.argument("name", metavar="NAME"),
        click.option("--amount", required=True, help="Amount (e.g., 1500.00 or 'R$ 1.500,00')"),
        click.option(
            "--date", "date_str", default="now", show_default=True,
            help="Transaction date (ISO-8601, 'dd/mm/yy HH:MM', 'now' or 'today')",
        ),
        click.option("--description", default="", help="Transaction description"),
        click.option("--project", "project_uuid", help="Project the transaction belongs to"),
        click.option("--user", help="Booking user UUID or username (defaults to --as-user)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _common_fields(ctx, name, amount, date_str, description, project_uuid, user):
    """Resolve the fields every transaction kind needs."""
    user = user or ctx.obj.get("as_user")
    if not user:
        raise ValueError("A booking user is required (use --user or --as-user)")

    return dict(
        name=name,
        description=description,
        date=parse_datetime(date_str),
        amount=parse_brl(amount),
        user_uuid=PartyService(ctx.obj["db"]).resolve_user(user).uuid,
        project_uuid=project_uuid,
    )


def _record(ctx, kind: LedgerKind, create, **fields) -> None:
    try:
        transaction_uuid = create(**fields)
        click.echo(f"Recorded {kind.value} (UUID: {transaction_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage project ledger transactions."""
    pass


@transaction_group.command("expense")
@_common_options
@click.option("--supplier", "supplier_uuid", required=True, help="Supplier UUID")
@click.pass_context
def create_expense(ctx, supplier_uuid, **common):
    """Record money paid to a supplier."""
    capability = resolve_capability_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    def create():
        return service.create_expense(
            capability, supplier_uuid=supplier_uuid, **_common_fields(ctx, **common)
        )

    _record(ctx, LedgerKind.EXPENSE, create)


@transaction_group.command("income")
@_common_options
@click.option("--client", "client_uuid", required=True, help="Client UUID")
@click.pass_context
def create_income(ctx, client_uuid, **common):
    """Record money received from a client."""
    capability = resolve_capability_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    def create():
        return service.create_income(
            capability, client_uuid=client_uuid, **_common_fields(ctx, **common)
        )

    _record(ctx, LedgerKind.INCOME, create)


@transaction_group.command("refund")
@_common_options
@click.option("--client", "client_uuid", help="Client UUID")
@click.option("--supplier", "supplier_uuid", help="Supplier UUID")
@click.pass_context
def create_refund(ctx, client_uuid, supplier_uuid, **common):
    """Record a refund involving a client and/or a supplier."""
    capability = resolve_capability_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    def create():
        return service.create_refund(
            capability,
            client_uuid=client_uuid,
            supplier_uuid=supplier_uuid,
            **_common_fields(ctx, **common),
        )

    _record(ctx, LedgerKind.REFUND, create)


@transaction_group.command("loan")
@_common_options
@click.option("--supplier", "supplier_uuid", required=True, help="Lender supplier UUID")
@click.option("--installment", required=True, help="Monthly installment amount")
@click.option("--months", required=True, type=int, help="Number of monthly installments")
@click.pass_context
def create_loan(ctx, supplier_uuid, installment, months, **common):
    """Record a loan taken from a supplier."""
    capability = resolve_capability_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    def create():
        return service.create_loan(
            capability,
            supplier_uuid=supplier_uuid,
            installment=parse_brl(installment),
            months=months,
            **_common_fields(ctx, **common),
        )

    _record(ctx, LedgerKind.LOAN, create)


@transaction_group.command("bill")
@_common_options
@click.option("--supplier", "supplier_uuid", required=True, help="Issuing supplier UUID")
@click.pass_context
def create_bill(ctx, supplier_uuid, **common):
    """Record a bill issued by a supplier."""
    capability = resolve_capability_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    def create():
        return service.create_bill(
            capability, supplier_uuid=supplier_uuid, **_common_fields(ctx, **common)
        )

    _record(ctx, LedgerKind.BILL, create)


@transaction_group.command("list")
@click.option("--project", "project_uuid", help="Only transactions of this project")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in LedgerKind]),
    help="Only transactions of this kind",
)
@click.pass_context
def list_transactions(ctx, project_uuid, kind):
    """List transactions by date."""
    service = LedgerService(ctx.obj["db"])

    transactions = service.list_transactions(
        project_uuid=project_uuid, kind=LedgerKind(kind) if kind else None
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("\nTransactions:")
    click.echo("-" * 90)
    for tx in transactions:
        click.echo(
            f"{format_datetime(tx.date)} | {tx.kind.value:7s} | {tx.name:25s} | "
            f"{format_brl(tx.amount):>14s}"
        )
    totals = transaction_totals(transactions)
    click.echo(
        f"Income {format_brl(totals.income)} | expense {format_brl(totals.expense)} | "
        f"revenue {format_brl(totals.revenue)}"
    )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
