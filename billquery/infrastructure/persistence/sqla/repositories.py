from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection

from billquery.domain.enums import BillField, SortDirection
from billquery.domain.errors import BillNotFoundError, ValidationError
from billquery.domain.filters import (
    NoCategory,
    filter_by_category,
    filter_by_end_date,
    filter_by_start_date,
)
from billquery.domain.models.bill import Bill, Installment
from billquery.domain.models.page import Page
from billquery.domain.predicates import Predicate, combine
from billquery.domain.sorting import DEFAULT_SORT, Sort
from billquery.logger import get_logger

from .mappers import bill_to_values, installment_to_values, row_to_bill, row_to_installment
from .models import bills, installments
from .translate import to_clause


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _order_by(sort: Sort) -> list:
    col = bills.c[sort.field.value]
    primary = col.desc() if sort.direction == SortDirection.DESC else col.asc()
    if sort.field == BillField.ID:
        return [primary]
    return [primary, bills.c.id.asc()]


def find_bills(
    conn: Connection,
    predicate: Predicate,
    *,
    page: int = 0,
    size: int = 10,
    sort: Sort = DEFAULT_SORT,
) -> Page[Bill]:
    if page < 0:
        raise ValidationError("page must be >= 0", details={"page": page})
    if size < 1:
        raise ValidationError("size must be >= 1", details={"size": size})

    where = to_clause(predicate)
    total = conn.execute(select(func.count()).select_from(bills).where(where)).scalar_one()

    stmt = (
        select(bills)
        .where(where)
        .order_by(*_order_by(sort))
        .limit(size)
        .offset(page * size)
    )
    items = [row_to_bill(row) for row in conn.execute(stmt)]
    get_logger().debug(
        f"bills page={page} size={size} sort={sort.field}:{sort.direction} "
        f"returned={len(items)} total={total}"
    )
    return Page(page=page, size=size, total_elements=int(total), items=items)


def find_all_by_category_and_date_range(
    conn: Connection,
    category: str | NoCategory | None,
    start_date: datetime | None,
    end_date: datetime | None,
) -> list[Bill]:
    predicate = combine(
        filter_by_category(category),
        filter_by_start_date(start_date),
        filter_by_end_date(end_date),
    )
    stmt = select(bills).where(to_clause(predicate)).order_by(*_order_by(DEFAULT_SORT))
    return [row_to_bill(row) for row in conn.execute(stmt)]


def get_bill(conn: Connection, bill_id: int) -> Bill:
    row = conn.execute(select(bills).where(bills.c.id == bill_id)).first()
    if row is None:
        raise BillNotFoundError(bill_id)
    return row_to_bill(row)


def list_installments(conn: Connection, bill_id: int) -> list[Installment]:
    stmt = (
        select(installments)
        .where(installments.c.bill_id == bill_id)
        .order_by(installments.c.installment_number.asc(), installments.c.id.asc())
    )
    return [row_to_installment(row) for row in conn.execute(stmt)]


def insert_bill(conn: Connection, bill: Bill) -> Bill:
    now = _now()
    stored = replace(
        bill,
        created_at=bill.created_at or now,
        updated_at=bill.updated_at or now,
    )
    result = conn.execute(insert(bills).values(**bill_to_values(stored)))
    bill_id = result.inserted_primary_key[0]
    get_logger().debug(f"bill saved id={bill_id} name={bill.name!r}")
    return replace(stored, id=bill_id)


def insert_installment(conn: Connection, installment: Installment) -> Installment:
    stored = replace(installment, created_at=installment.created_at or _now())
    result = conn.execute(insert(installments).values(**installment_to_values(stored)))
    return replace(stored, id=result.inserted_primary_key[0])
