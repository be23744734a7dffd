"""Ledger transaction endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from budgetit.api.deps import get_caller_uuid, get_capability, get_ledger_service
from budgetit.api.schemas import TransactionCreate
from budgetit.api.serializers import transaction_to_dict
from budgetit.domain.auth import Capability
from budgetit.domain.entities import LedgerKind
from budgetit.domain.errors import ValidationError
from budgetit.domain.ledger import LedgerService

router = APIRouter(prefix="/transaction", tags=["transaction"])


def _required(value, field: str):
    if value is None:
        raise ValidationError(f"Field '{field}' is required")
    return value


@router.get("/select", dependencies=[Depends(get_capability)])
async def select_transactions(
    project_uuid: Optional[str] = Query(default=None, alias="projectUuid"),
    kind: Optional[LedgerKind] = Query(default=None),
    service: LedgerService = Depends(get_ledger_service),
):
    return [transaction_to_dict(tx) for tx in service.list_transactions(project_uuid, kind)]


@router.post("/{kind}/create", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    kind: LedgerKind,
    body: TransactionCreate,
    capability: Capability = Depends(get_capability),
    caller_uuid: Optional[str] = Depends(get_caller_uuid),
    service: LedgerService = Depends(get_ledger_service),
):
    """Record a ledger transaction of the given kind.

    The transaction is booked on the caller unless ``userUuid`` says otherwise.
    """
    common = dict(
        name=body.name,
        description=body.description,
        date=body.date,
        amount=body.amount,
        user_uuid=body.user_uuid or caller_uuid,
        project_uuid=body.project_uuid,
    )
    if kind is LedgerKind.EXPENSE:
        service.create_expense(
            capability, supplier_uuid=_required(body.supplier_uuid, "supplierUuid"), **common
        )
    elif kind is LedgerKind.INCOME:
        service.create_income(
            capability, client_uuid=_required(body.client_uuid, "clientUuid"), **common
        )
    elif kind is LedgerKind.REFUND:
        service.create_refund(
            capability, client_uuid=body.client_uuid, supplier_uuid=body.supplier_uuid, **common
        )
    elif kind is LedgerKind.BILL:
        service.create_bill(
            capability, supplier_uuid=_required(body.supplier_uuid, "supplierUuid"), **common
        )
    else:
        service.create_loan(
            capability,
            supplier_uuid=_required(body.supplier_uuid, "supplierUuid"),
            installment=_required(body.installment, "installment"),
            months=_required(body.months, "months"),
            **common,
        )
    return {"message": f"{kind.value.capitalize()} recorded."}
