"""Tests for CLI commands."""

import json
import re
import pytest

from budgetit.cli.main import cli
from budgetit.cli.commands.seed import DEFAULT_ROLES, DEFAULT_STATUSES

UUID_PATTERN = re.compile(r"UUID: ([0-9a-f-]{36})")


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def _uuid(output):
    match = UUID_PATTERN.search(output)
    assert match is not None, output
    return match.group(1)


def _write_tasks(tmp_path, tasks):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"tasks": tasks}), encoding="utf-8")
    return str(path)


@pytest.fixture
def task_payload(sample_project, sample_status):
    """One planned expense task in request shape."""
    return {
        "name": "Compra",
        "beginDate": "2024-01-15T08:00:00",
        "endDate": "2024-01-15T10:00:00",
        "revenue": "R$ 200,00",
        "statusUuid": sample_status,
        "projectUuid": sample_project.uuid,
        "taskExpense": {"uuid": "", "amount": "R$ 1.000,00"},
    }


def test_seed_is_idempotent(cli_runner, temp_db):
    """Test seeding twice creates the defaults once."""
    result = _invoke(cli_runner, temp_db, "seed")
    assert result.exit_code == 0
    assert f"Created {len(DEFAULT_ROLES)} role(s) and {len(DEFAULT_STATUSES)} status(es)." in result.output

    result = _invoke(cli_runner, temp_db, "seed")
    assert result.exit_code == 0
    assert "Created 0 role(s) and 0 status(es)." in result.output

    result = _invoke(cli_runner, temp_db, "auth", "list")
    assert "Administrador" in result.output


def test_status_create_list_delete(cli_runner, temp_db):
    """Test managing statuses."""
    result = _invoke(cli_runner, temp_db, "status", "create", "Em Andamento", "--priority", "3")
    assert result.exit_code == 0
    status_uuid = _uuid(result.output)

    result = _invoke(cli_runner, temp_db, "status", "list")
    assert "Em Andamento" in result.output

    result = _invoke(cli_runner, temp_db, "status", "delete", status_uuid)
    assert result.exit_code == 0
    result = _invoke(cli_runner, temp_db, "status", "list")
    assert "No statuses found" in result.output


def test_client_and_user_create(cli_runner, temp_db, sample_roles):
    """Test creating parties from the command line."""
    result = _invoke(
        cli_runner, temp_db, "client", "create",
        "--cnpj", "12.345.678/0001-90", "--name", "Acme Ltda", "--fantasy", "Acme",
        "--email", "contato@acme.com.br",
    )
    assert result.exit_code == 0
    assert "Created client 'Acme Ltda'" in result.output

    result = _invoke(
        cli_runner, temp_db, "user", "create", "maria",
        "--role", "Administrador", "--cpf", "999.888.777-66", "--name", "Maria Silva",
        "--email", "maria@example.com", "--hourly-rate", "R$ 80,00",
    )
    assert result.exit_code == 0
    assert "Created user 'maria'" in result.output

    result = _invoke(cli_runner, temp_db, "user", "list")
    assert "Maria Silva" in result.output


def test_client_create_needs_document(cli_runner, temp_db):
    """Test a client must be a person or an enterprise."""
    result = _invoke(cli_runner, temp_db, "client", "create", "--name", "X", "--email", "x@example.com")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_client_create_duplicate_document(cli_runner, temp_db):
    """Test registering the same CPF twice reports an error."""
    args = ("client", "create", "--cpf", "999", "--name", "Ana", "--email", "ana@example.com")

    assert _invoke(cli_runner, temp_db, *args).exit_code == 0
    result = _invoke(cli_runner, temp_db, *args)

    assert result.exit_code == 1
    assert "Error: Person with CPF '999' already exists" in result.output


def test_project_create_and_list(cli_runner, temp_db, sample_client, sample_status):
    """Test creating a project prints its budget."""
    result = _invoke(
        cli_runner, temp_db, "project", "create", "Reforma",
        "--client", sample_client, "--status", sample_status,
    )
    assert result.exit_code == 0
    assert "Created project 'Reforma'" in result.output
    assert "Budget UUID:" in result.output

    result = _invoke(cli_runner, temp_db, "project", "list", "--active")
    assert "Reforma" in result.output


def test_project_update(cli_runner, temp_db, sample_project):
    """Test editing a project keeps the fields not given."""
    result = _invoke(
        cli_runner, temp_db, "project", "update", sample_project.uuid,
        "--name", "Reforma da Filial", "--inactive",
    )
    assert result.exit_code == 0
    assert f"Updated project {sample_project.uuid}" in result.output

    result = _invoke(cli_runner, temp_db, "project", "list", "--inactive")
    assert "Reforma da Filial" in result.output
    result = _invoke(cli_runner, temp_db, "project", "list", "--active")
    assert "No projects found." in result.output


def test_project_update_unknown(cli_runner, temp_db):
    """Test updating a missing project is reported."""
    result = _invoke(cli_runner, temp_db, "project", "update", "missing", "--name", "X")

    assert result.exit_code == 1
    assert "Error: Project 'missing' not found" in result.output


def test_budget_update_show_and_report(cli_runner, temp_db, tmp_path, sample_project, task_payload):
    """Test editing a budget from a JSON file."""
    tasks_file = _write_tasks(tmp_path, [task_payload])

    result = _invoke(cli_runner, temp_db, "budget", "update", sample_project.budget_uuid, tasks_file)
    assert result.exit_code == 0
    assert "Created 2, updated 0, deleted 0 task(s)." in result.output

    result = _invoke(cli_runner, temp_db, "budget", "show", "--project", sample_project.uuid)
    assert result.exit_code == 0
    assert "Compra" in result.output
    assert "Total R$ 1.200,00" in result.output

    result = _invoke(cli_runner, temp_db, "task", "list", "--project", sample_project.uuid)
    assert "R$ 0,00 of R$ 1.000,00" in result.output

    result = _invoke(cli_runner, temp_db, "project", "report", sample_project.uuid)
    assert result.exit_code == 0
    assert "total R$ 1.200,00" in result.output


def test_budget_update_conflict(cli_runner, temp_db, tmp_path, sample_project, task_payload):
    """Test reconciliation errors are reported."""
    other = {**task_payload, "projectUuid": "other"}
    tasks_file = _write_tasks(tmp_path, [task_payload, other])

    result = _invoke(cli_runner, temp_db, "budget", "update", sample_project.budget_uuid, tasks_file)

    assert result.exit_code == 1
    assert "single project" in result.output


def test_budget_update_invalid_json(cli_runner, temp_db, tmp_path, sample_project):
    """Test unreadable task files are reported."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = _invoke(cli_runner, temp_db, "budget", "update", sample_project.budget_uuid, str(path))

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output


def test_done_create(cli_runner, temp_db, tmp_path, task_service, sample_project, sample_user, sample_supplier, make_task):
    """Test recording a realization from a JSON file."""
    from budgetit.domain.auth import Capability

    task_service.update_tasks(Capability.FULL, [make_task("Material", amount="300")])
    (task,) = task_service.select_tasks(sample_project.uuid)
    path = tmp_path / "done.json"
    path.write_text(
        json.dumps(
            {
                "name": "Nota 7",
                "userUuid": sample_user,
                "doneExpense": {
                    "taskUuid": task.sub_uuid,
                    "amount": "R$ 120,00",
                    "date": "2024-01-20T14:00:00",
                    "supplierUuid": sample_supplier,
                },
            }
        ),
        encoding="utf-8",
    )

    result = _invoke(cli_runner, temp_db, "done", "create", str(path))

    assert result.exit_code == 0
    assert "Recorded done 'Nota 7'" in result.output
    result = _invoke(cli_runner, temp_db, "task", "list", "--project", sample_project.uuid)
    assert "R$ 120,00 of R$ 300,00" in result.output


def test_transaction_income_and_list(cli_runner, temp_db, sample_client, sample_project):
    """Test ledger entries booked on the acting user."""
    result = _invoke(
        cli_runner, temp_db, "--as-user", "maria", "transaction", "income", "Sinal",
        "--amount", "R$ 800,00", "--date", "2024-02-01", "--client", sample_client,
        "--project", sample_project.uuid,
    )
    assert result.exit_code == 0
    assert "Recorded income" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--kind", "income")
    assert "Sinal" in result.output
    assert "Income R$ 800,00" in result.output


def test_transaction_bill(cli_runner, temp_db, sample_supplier, sample_project):
    """Test supplier bills count as expense in the listing."""
    result = _invoke(
        cli_runner, temp_db, "--as-user", "maria", "transaction", "bill", "Conta de luz",
        "--amount", "R$ 320,50", "--date", "2024-02-28", "--supplier", sample_supplier,
        "--project", sample_project.uuid,
    )
    assert result.exit_code == 0
    assert "Recorded bill" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "list", "--kind", "bill")
    assert "Conta de luz" in result.output
    assert "expense R$ 320,50" in result.output


def test_transaction_needs_booking_user(cli_runner, temp_db, sample_client):
    """Test a transaction must be booked on someone."""
    result = _invoke(
        cli_runner, temp_db, "transaction", "income", "Sinal",
        "--amount", "10", "--client", sample_client,
    )

    assert result.exit_code == 1
    assert "booking user" in result.output


def test_as_user_without_capability(cli_runner, temp_db, intern_user, sample_client, sample_status):
    """Test commands run with the acting user's role."""
    result = _invoke(
        cli_runner, temp_db, "--as-user", "pedro", "project", "create", "Reforma",
        "--client", sample_client, "--status", sample_status,
    )

    assert result.exit_code == 1
    assert "not authorized" in result.output


def test_as_user_unknown(cli_runner, temp_db):
    """Test an unknown acting user is reported."""
    result = _invoke(cli_runner, temp_db, "--as-user", "ghost", "status", "create", "X")

    assert result.exit_code == 1
    assert "User 'ghost' not found" in result.output
