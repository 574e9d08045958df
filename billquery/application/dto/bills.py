from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from billquery.domain.models.bill import Bill, Installment
from billquery.domain.models.page import Page


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def bill_payload(bill: Bill) -> dict[str, Any]:
    return {key: _jsonable(value) for key, value in asdict(bill).items()}


def installment_payload(installment: Installment) -> dict[str, Any]:
    return {key: _jsonable(value) for key, value in asdict(installment).items()}


def page_payload(page: Page[Bill]) -> dict[str, Any]:
    return {
        "content": [bill_payload(bill) for bill in page.items],
        "page": page.page,
        "size": page.size,
        "total_elements": page.total_elements,
        "total_pages": page.total_pages,
    }
