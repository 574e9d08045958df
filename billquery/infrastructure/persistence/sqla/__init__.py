from __future__ import annotations

from .engine import build_db_url, create_memory_engine, get_engine
from .repositories import (
    find_all_by_category_and_date_range,
    find_bills,
    get_bill,
    insert_bill,
    insert_installment,
    list_installments,
)
from .session import connection_scope, ensure_schema
from .translate import to_clause

__all__ = [
    "build_db_url",
    "connection_scope",
    "create_memory_engine",
    "ensure_schema",
    "find_all_by_category_and_date_range",
    "find_bills",
    "get_bill",
    "get_engine",
    "insert_bill",
    "insert_installment",
    "list_installments",
    "to_clause",
]
