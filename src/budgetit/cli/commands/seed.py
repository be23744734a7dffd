"""Install default roles and statuses."""

import click
from budgetit.cli.capability import resolve_capability_or_exit
from budgetit.domain.auth import AuthService
from budgetit.domain.status import StatusService


# name, admin, project, personal, financial
DEFAULT_ROLES = [
    ("Administrador", True, True, True, True),
    ("Sócio", True, True, False, True),
    ("Consultor", False, True, False, True),
    ("RH", False, False, True, True),
    ("Financeiro", False, False, False, True),
    ("Estagiário", False, False, False, False),
]

# name, description, priority
DEFAULT_STATUSES = [
    ("Planejamento", "Está em fase de definição e planejamento", 5),
    ("Negociação", "Está em fase orçamento e negociação", 6),
    ("Aguardando Aprovação", "O projeto aguarda aprovação antes de iniciar", 7),
    ("Não Iniciado", "O projeto foi aprovado, mas ainda não começou", 4),
    ("Em Andamento", "O projeto está em execução", 3),
    ("Suspenso", "O projeto foi temporariamente interrompido", 1),
    ("Atrasado", "O projeto está em execução, mas atrasado em relação ao cronograma", 2),
    (
        "Aguardando Recursos",
        "O projeto não pode continuar ou começar porque está aguardando recursos",
        3,
    ),
    ("Concluído", "O projeto foi concluído com sucesso", 9),
    ("Cancelado", "O projeto foi encerrado antes de ser concluído", 10),
    ("Encerrado", "O projeto foi oficialmente fechado", 8),
]


@click.command("seed")
@click.pass_context
def seed(ctx):
    """Install the default roles and statuses.

    Roles and statuses that already exist (by name) are left alone, so the
    command can be run repeatedly.
    """
    db = ctx.obj["db"]
    capability = resolve_capability_or_exit(ctx)
    auth_service = AuthService(db)
    status_service = StatusService(db)

    try:
        existing_roles = {role.name for role in auth_service.list_roles()}
        roles_created = 0
        for name, admin, project, personal, financial in DEFAULT_ROLES:
            if name in existing_roles:
                continue
            auth_service.create_role(
                capability,
                name,
                admin=admin,
                project=project,
                personal=personal,
                financial=financial,
            )
            roles_created += 1

        existing_statuses = {status.name for status in status_service.list_statuses()}
        statuses_created = 0
        for name, description, priority in DEFAULT_STATUSES:
            if name in existing_statuses:
                continue
            status_service.create_status(capability, name, description, priority)
            statuses_created += 1
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Created {roles_created} role(s) and {statuses_created} status(es).")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
