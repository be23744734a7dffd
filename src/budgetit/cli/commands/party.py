"""Client, supplier and user commands."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.auth import AuthService
from budgetit.domain.entities import EnterpriseInput, PersonInput
from budgetit.domain.party import PartyService
from budgetit.utils.money import parse_brl


def _backing_options(func):
    """Options describing the person or enterprise behind a client or supplier."""
    options = [
        click.option("--cpf", help="CPF, for a person"),
        click.option("--cnpj", help="CNPJ, for an enterprise"),
        click.option("--name", required=True, help="Person name or enterprise legal name"),
        click.option("--fantasy", help="Enterprise trade name (defaults to --name)"),
        click.option("--email", required=True, help="Contact e-mail"),
        click.option("--phone", help="Contact phone"),
        click.option("--address", help="Postal address"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _backing_inputs(cpf, cnpj, name, fantasy, email, phone, address):
    person = None
    enterprise = None
    if cpf is not None:
        person = PersonInput(cpf=cpf, name=name, email=email, phone=phone, address=address)
    if cnpj is not None:
        enterprise = EnterpriseInput(
            cnpj=cnpj,
            fantasy=fantasy or name,
            name=name,
            email=email,
            phone=phone,
            address=address,
        )
    return person, enterprise


def _echo_parties(title: str, parties) -> None:
    if not parties:
        click.echo(f"No {title.lower()} found.")
        return

    click.echo(f"\n{title}:")
    click.echo("-" * 80)
    for party in parties:
        document = party.enterprise.cnpj if party.enterprise else party.person.cpf
        state = "active" if party.active else "inactive"
        click.echo(f"{party.uuid} | {party.display_name:25s} | {document:18s} | {state}")


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@_backing_options
@click.pass_context
def create_client(ctx, cpf, cnpj, name, fantasy, email, phone, address):
    """Create a client backed by a person (--cpf) or an enterprise (--cnpj).

    Examples:
        budgetit client create --cnpj 12.345.678/0001-90 --name "Alpha Inc" --email contact@alpha.com
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = PartyService(db)

    try:
        person, enterprise = _backing_inputs(cpf, cnpj, name, fantasy, email, phone, address)
        client_uuid = service.create_client(capability, person=person, enterprise=enterprise)
        click.echo(f"Created client '{name}' (UUID: {client_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List clients."""
    _echo_parties("Clients", PartyService(ctx.obj["db"]).list_clients())


@click.group()
def supplier_group():
    """Manage suppliers."""
    pass


@supplier_group.command("create")
@_backing_options
@click.pass_context
def create_supplier(ctx, cpf, cnpj, name, fantasy, email, phone, address):
    """Create a supplier backed by a person (--cpf) or an enterprise (--cnpj)."""
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = PartyService(db)

    try:
        person, enterprise = _backing_inputs(cpf, cnpj, name, fantasy, email, phone, address)
        supplier_uuid = service.create_supplier(capability, person=person, enterprise=enterprise)
        click.echo(f"Created supplier '{name}' (UUID: {supplier_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@supplier_group.command("list")
@click.pass_context
def list_suppliers(ctx):
    """List suppliers."""
    _echo_parties("Suppliers", PartyService(ctx.obj["db"]).list_suppliers())


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("username", metavar="USERNAME")
@click.option("--role", "role", required=True, help="Role name or UUID")
@click.option("--cpf", required=True, help="CPF of the user")
@click.option("--name", required=True, help="Full name")
@click.option("--email", required=True, help="Contact e-mail")
@click.option("--phone", help="Contact phone")
@click.option("--address", help="Postal address")
@click.option("--hourly-rate", help="Default hourly rate (e.g., 150 or 'R$ 150,00')")
@click.pass_context
def create_user(ctx, username, role, cpf, name, email, phone, address, hourly_rate):
    """Create a user bound to a role.

    Examples:
        budgetit user create jdoe --role Consultor --cpf 123.456.789-00 --name "John Doe" --email john@example.com
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    service = PartyService(db)

    try:
        auth_uuid = AuthService(db).resolve_role(role).uuid
        user_uuid = service.create_user(
            capability,
            username=username,
            auth_uuid=auth_uuid,
            person=PersonInput(cpf=cpf, name=name, email=email, phone=phone, address=address),
            hourly_rate=parse_brl(hourly_rate) if hourly_rate else None,
        )
        click.echo(f"Created user '{username}' (UUID: {user_uuid})")
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List users."""
    users = PartyService(ctx.obj["db"]).list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for user in users:
        state = "active" if user.active else "inactive"
        click.echo(f"{user.uuid} | {user.username:15s} | {user.person.name:25s} | {state}")


def register_commands(cli):
    """Register client, supplier and user commands with main CLI."""
    cli.add_command(client_group, name="client")
    cli.add_command(supplier_group, name="supplier")
    cli.add_command(user_group, name="user")
