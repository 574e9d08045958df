from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(slots=True)
class Bill:
    name: str
    execution_date: datetime
    total_amount: Decimal
    number_of_installments: int
    id: int | None = None
    installment_amount: Decimal | None = None
    description: str | None = None
    is_recurring: bool = False
    category: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True)
class Installment:
    bill_id: int
    installment_number: int
    amount: Decimal
    due_date: date
    id: int | None = None
    credit_card_id: int | None = None
    invoice_id: int | None = None
    created_at: datetime | None = None
