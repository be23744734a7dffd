"""Project ledger transactions: expenses, incomes, refunds, loans and bills."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from budgetit.database.base import Database
from budgetit.domain.auth import Capability
from budgetit.domain.entities import LedgerKind, Transaction
from budgetit.domain.errors import NotFoundError, ValidationError, not_found

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for recording and listing ledger transactions."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_common(
        self,
        capability: Capability,
        name: str,
        amount: Decimal,
        user_uuid: str,
        project_uuid: Optional[str],
    ) -> None:
        capability.require("financial")
        if not name.strip():
            raise ValidationError("Transaction name cannot be empty")
        if amount < 0:
            raise ValidationError("Transaction amount cannot be negative")
        if self.db.get_user(user_uuid) is None:
            raise NotFoundError(not_found("User", user_uuid))
        if project_uuid is not None and self.db.get_project(project_uuid) is None:
            raise NotFoundError(not_found("Project", project_uuid))

    def _require_supplier(self, supplier_uuid: str) -> None:
        if self.db.get_supplier(supplier_uuid) is None:
            raise NotFoundError(not_found("Supplier", supplier_uuid))

    def _require_client(self, client_uuid: str) -> None:
        if self.db.get_client(client_uuid) is None:
            raise NotFoundError(not_found("Client", client_uuid))

    def _create(self, kind: LedgerKind, **fields) -> str:
        transaction_uuid = self.db.create_transaction(kind=kind, **fields)
        logger.info("Recorded %s %s", kind.value, transaction_uuid)
        return transaction_uuid

    def create_expense(
        self,
        capability: Capability,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        supplier_uuid: str,
        project_uuid: Optional[str] = None,
    ) -> str:
        """Record money paid to a supplier.

        Returns:
            Transaction UUID

        Raises:
            AuthorizationError: If the caller lacks the financial flag
            NotFoundError: If user, project or supplier do not exist
            ValidationError: If name is empty or amount negative
        """
        self._check_common(capability, name, amount, user_uuid, project_uuid)
        self._require_supplier(supplier_uuid)
        return self._create(
            LedgerKind.EXPENSE,
            name=name.strip(),
            description=description,
            date=date,
            amount=amount,
            user_uuid=user_uuid,
            project_uuid=project_uuid,
            supplier_uuid=supplier_uuid,
        )

    def create_income(
        self,
        capability: Capability,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        client_uuid: str,
        project_uuid: Optional[str] = None,
    ) -> str:
        """Record money received from a client.

        Returns:
            Transaction UUID

        Raises:
            AuthorizationError: If the caller lacks the financial flag
            NotFoundError: If user, project or client do not exist
            ValidationError: If name is empty or amount negative
        """
        self._check_common(capability, name, amount, user_uuid, project_uuid)
        self._require_client(client_uuid)
        return self._create(
            LedgerKind.INCOME,
            name=name.strip(),
            description=description,
            date=date,
            amount=amount,
            user_uuid=user_uuid,
            project_uuid=project_uuid,
            client_uuid=client_uuid,
        )

    def create_refund(
        self,
        capability: Capability,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        client_uuid: Optional[str] = None,
        supplier_uuid: Optional[str] = None,
        project_uuid: Optional[str] = None,
    ) -> str:
        """Record a refund involving a client and/or a supplier.

        Returns:
            Transaction UUID

        Raises:
            AuthorizationError: If the caller lacks the financial flag
            NotFoundError: If user, project, client or supplier do not exist
            ValidationError: If neither client nor supplier is given
        """
        self._check_common(capability, name, amount, user_uuid, project_uuid)
        if client_uuid is None and supplier_uuid is None:
            raise ValidationError("Refund needs a client or a supplier")
        if client_uuid is not None:
            self._require_client(client_uuid)
        if supplier_uuid is not None:
            self._require_supplier(supplier_uuid)
        return self._create(
            LedgerKind.REFUND,
            name=name.strip(),
            description=description,
            date=date,
            amount=amount,
            user_uuid=user_uuid,
            project_uuid=project_uuid,
            client_uuid=client_uuid,
            supplier_uuid=supplier_uuid,
        )

    def create_loan(
        self,
        capability: Capability,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        supplier_uuid: str,
        installment: Decimal,
        months: int,
        project_uuid: Optional[str] = None,
    ) -> str:
        """Record a loan taken from a supplier and repaid monthly.

        Returns:
            Transaction UUID

        Raises:
            AuthorizationError: If the caller lacks the financial flag
            NotFoundError: If user, project or supplier do not exist
            ValidationError: If installment or months are not positive
        """
        self._check_common(capability, name, amount, user_uuid, project_uuid)
        self._require_supplier(supplier_uuid)
        if installment <= 0:
            raise ValidationError("Loan installment must be positive")
        if months <= 0:
            raise ValidationError("Loan months must be positive")
        return self._create(
            LedgerKind.LOAN,
            name=name.strip(),
            description=description,
            date=date,
            amount=amount,
            user_uuid=user_uuid,
            project_uuid=project_uuid,
            supplier_uuid=supplier_uuid,
            installment=installment,
            months=months,
        )

    def create_bill(
        self,
        capability: Capability,
        name: str,
        description: str,
        date: datetime,
        amount: Decimal,
        user_uuid: str,
        supplier_uuid: str,
        project_uuid: Optional[str] = None,
    ) -> str:
        """Record a bill a supplier has issued against the project.

        Returns:
            Transaction UUID

        Raises:
            AuthorizationError: If the caller lacks the financial flag
            NotFoundError: If user, project or supplier do not exist
            ValidationError: If name is empty or amount negative
        """
        self._check_common(capability, name, amount, user_uuid, project_uuid)
        self._require_supplier(supplier_uuid)
        return self._create(
            LedgerKind.BILL,
            name=name.strip(),
            description=description,
            date=date,
            amount=amount,
            user_uuid=user_uuid,
            project_uuid=project_uuid,
            supplier_uuid=supplier_uuid,
        )

    def get_transaction(self, transaction_uuid: str) -> Optional[Transaction]:
        return self.db.get_transaction(transaction_uuid)

    def list_transactions(
        self,
        project_uuid: Optional[str] = None,
        kind: Optional[LedgerKind] = None,
    ) -> list[Transaction]:
        """List transactions by date, optionally of one project or kind."""
        return self.db.list_transactions(project_uuid=project_uuid, kind=kind)
