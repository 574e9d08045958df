from __future__ import annotations

from typing import Any

from sqlalchemy.engine import Engine

from billquery.application.dto.bills import bill_payload, installment_payload, page_payload
from billquery.domain.errors import ValidationError
from billquery.domain.filters import BillSearch, build_bill_filter
from billquery.domain.sorting import Sort
from billquery.infrastructure.persistence.sqla import (
    connection_scope,
    find_bills,
    get_bill,
    list_installments,
)
from billquery.logger import get_logger


def search_bills_payload(
    engine: Engine,
    search: BillSearch,
    *,
    page: int,
    size: int,
    sort: Sort,
    max_page_size: int,
) -> dict[str, Any]:
    logger = get_logger()
    if size > max_page_size:
        raise ValidationError(
            f"size must be <= {max_page_size}",
            details={"size": size, "max_page_size": max_page_size},
        )

    filters = "none" if search.is_empty() else repr(search)
    logger.info(f"searching bills page={page} size={size} sort={sort.field},{sort.direction} filters={filters}")
    predicate = build_bill_filter(search)
    with connection_scope(engine) as conn:
        result = find_bills(conn, predicate, page=page, size=size, sort=sort)
    logger.info(f"bills found: {len(result.items)} of {result.total_elements} total")
    return page_payload(result)


def get_bill_payload(engine: Engine, bill_id: int) -> dict[str, Any]:
    with connection_scope(engine) as conn:
        bill = get_bill(conn, bill_id)
        items = list_installments(conn, bill_id)
    payload = bill_payload(bill)
    payload["installments"] = [installment_payload(item) for item in items]
    payload["credit_card_id"] = next(
        (item.credit_card_id for item in items if item.credit_card_id is not None),
        None,
    )
    return payload
