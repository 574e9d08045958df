from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.engine import Row

from billquery.domain.models.bill import Bill, Installment


def _decimal(value: Any) -> Decimal | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def row_to_bill(row: Row[Any]) -> Bill:
    data = row._mapping
    return Bill(
        id=data["id"],
        name=data["name"],
        execution_date=data["execution_date"],
        total_amount=_decimal(data["total_amount"]) or Decimal("0"),
        number_of_installments=data["number_of_installments"],
        installment_amount=_decimal(data["installment_amount"]),
        description=data["description"],
        is_recurring=bool(data["is_recurring"]),
        category=data["category"],
        created_at=data["created_at"],
        updated_at=data["updated_at"],
    )


def row_to_installment(row: Row[Any]) -> Installment:
    data = row._mapping
    return Installment(
        id=data["id"],
        bill_id=data["bill_id"],
        credit_card_id=data["credit_card_id"],
        invoice_id=data["invoice_id"],
        installment_number=data["installment_number"],
        amount=_decimal(data["amount"]) or Decimal("0"),
        due_date=data["due_date"],
        created_at=data["created_at"],
    )


def bill_to_values(bill: Bill) -> dict[str, Any]:
    values: dict[str, Any] = {
        "name": bill.name,
        "execution_date": bill.execution_date,
        "total_amount": bill.total_amount,
        "number_of_installments": bill.number_of_installments,
        "installment_amount": bill.installment_amount,
        "description": bill.description,
        "is_recurring": bill.is_recurring,
        "category": bill.category,
        "created_at": bill.created_at,
        "updated_at": bill.updated_at,
    }
    if bill.id is not None:
        values["id"] = bill.id
    return values


def installment_to_values(installment: Installment) -> dict[str, Any]:
    values: dict[str, Any] = {
        "bill_id": installment.bill_id,
        "credit_card_id": installment.credit_card_id,
        "invoice_id": installment.invoice_id,
        "installment_number": installment.installment_number,
        "amount": installment.amount,
        "due_date": installment.due_date,
        "created_at": installment.created_at,
    }
    if installment.id is not None:
        values["id"] = installment.id
    return values
