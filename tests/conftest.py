"""Shared pytest fixtures for budgetit tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from budgetit.database.factories import create_sqlite_database
from budgetit.domain.auth import AuthService, Capability
from budgetit.domain.budget import BudgetService
from budgetit.domain.entities import (
    ActivityInput,
    EnterpriseInput,
    ExpenseInput,
    PersonInput,
    TaskInput,
)
from budgetit.domain.ledger import LedgerService
from budgetit.domain.party import PartyService
from budgetit.domain.project import ProjectService
from budgetit.domain.reconciliation import MirrorPolicy
from budgetit.domain.report import ReportService
from budgetit.domain.status import StatusService
from budgetit.domain.task import TaskService

FULL = Capability.FULL


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def auth_service(temp_db):
    return AuthService(temp_db)


@pytest.fixture
def status_service(temp_db):
    return StatusService(temp_db)


@pytest.fixture
def party_service(temp_db):
    return PartyService(temp_db)


@pytest.fixture
def project_service(temp_db):
    return ProjectService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with the lenient mirror policy."""
    return BudgetService(temp_db)


@pytest.fixture
def strict_budget_service(temp_db):
    """Create a BudgetService that fails on a missing live clone."""
    return BudgetService(temp_db, MirrorPolicy.STRICT)


@pytest.fixture
def task_service(temp_db):
    return TaskService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    return LedgerService(temp_db)


@pytest.fixture
def report_service(temp_db):
    return ReportService(temp_db)


@pytest.fixture
def sample_roles(auth_service):
    """Create a full-access role and a read-only role."""
    return {
        "admin": auth_service.create_role(
            FULL, "Administrador", admin=True, project=True, personal=True, financial=True
        ),
        "intern": auth_service.create_role(FULL, "Estagiário"),
    }


@pytest.fixture
def sample_status(status_service):
    """Create a sample status."""
    return status_service.create_status(FULL, "Em Andamento", "O projeto está em execução", 3)


@pytest.fixture
def sample_client(party_service):
    """Create a client backed by an enterprise."""
    return party_service.create_client(
        FULL,
        enterprise=EnterpriseInput(
            cnpj="12.345.678/0001-90",
            fantasy="Acme",
            name="Acme Engenharia Ltda",
            email="contato@acme.com.br",
        ),
    )


@pytest.fixture
def sample_supplier(party_service):
    """Create a supplier backed by a person."""
    return party_service.create_supplier(
        FULL,
        person=PersonInput(cpf="111.222.333-44", name="João Fornecedor", email="joao@example.com"),
    )


@pytest.fixture
def sample_user(party_service, sample_roles):
    """Create a user with the full-access role."""
    return party_service.create_user(
        FULL,
        username="maria",
        auth_uuid=sample_roles["admin"],
        person=PersonInput(cpf="999.888.777-66", name="Maria Silva", email="maria@example.com"),
        hourly_rate=Decimal("80.00"),
    )


@pytest.fixture
def intern_user(party_service, sample_roles):
    """Create a user whose role grants nothing."""
    return party_service.create_user(
        FULL,
        username="pedro",
        auth_uuid=sample_roles["intern"],
        person=PersonInput(cpf="555.444.333-22", name="Pedro Souza", email="pedro@example.com"),
    )


@pytest.fixture
def sample_project(project_service, sample_client, sample_status, sample_user):
    """Create a sample project (and with it, its budget)."""
    project_uuid = project_service.create_project(
        FULL,
        name="Reforma da Sede",
        description="Reforma completa do escritório",
        client_uuid=sample_client,
        status_uuid=sample_status,
        user_uuid=sample_user,
    )
    return project_service.get_project(project_uuid)


@pytest.fixture
def make_task(sample_project, sample_status):
    """Build TaskInput objects for the sample project.

    Pass ``amount`` for an expense task or ``hourly_rate`` for an activity
    task; ``sub_uuid`` addresses an existing sub-record.
    """

    def _make(
        name="Task",
        amount=None,
        hourly_rate=None,
        sub_uuid="",
        revenue="0",
        begin=datetime(2024, 1, 15, 8, 0),
        end=datetime(2024, 1, 15, 18, 0),
        budget_uuid=None,
        project_uuid=None,
        finished=False,
    ):
        return TaskInput(
            name=name,
            description="",
            begin_date=begin,
            end_date=end,
            revenue=Decimal(revenue),
            status_uuid=sample_status,
            project_uuid=project_uuid or sample_project.uuid,
            finished=finished,
            budget_uuid=budget_uuid,
            expense=ExpenseInput(uuid=sub_uuid, amount=Decimal(amount)) if amount is not None else None,
            activity=(
                ActivityInput(uuid=sub_uuid, hourly_rate=Decimal(hourly_rate))
                if hourly_rate is not None
                else None
            ),
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def api_client(temp_db, sample_user):
    """REST test client acting as the full-access sample user."""
    from fastapi.testclient import TestClient

    from budgetit.api.app import create_app

    client = TestClient(create_app(temp_db))
    client.headers.update({"X-User-Uuid": sample_user})
    return client
