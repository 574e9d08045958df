from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Final

from .enums import BillField, CompareOp
from .predicates import (
    ALWAYS,
    Compare,
    Contains,
    EqualsIgnoreCase,
    InstallmentExists,
    IsBlank,
    IsNotNull,
    Not,
    Predicate,
    combine,
)


class NoCategory:
    """Marker selecting bills without a category."""

    _instance: "NoCategory | None" = None

    def __new__(cls) -> "NoCategory":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CATEGORY"


NO_CATEGORY: Final = NoCategory()
LEGACY_NO_CATEGORY: Final = "__NO_CATEGORY__"


@dataclass(frozen=True, slots=True)
class BillSearch:
    name: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    number_of_installments: int | None = None
    category: str | NoCategory | None = None
    credit_card_id: int | None = None
    has_credit_card: bool | None = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.name,
                self.start_date,
                self.end_date,
                self.min_amount,
                self.max_amount,
                self.number_of_installments,
                self.category,
                self.credit_card_id,
                self.has_credit_card,
            )
        )


def filter_by_name(name: str | None) -> Predicate:
    if name is None or not name.strip():
        return ALWAYS
    return Contains(BillField.NAME, name)


def filter_by_start_date(start_date: datetime | None) -> Predicate:
    if start_date is None:
        return ALWAYS
    return Compare(BillField.EXECUTION_DATE, CompareOp.GE, start_date)


def filter_by_end_date(end_date: datetime | None) -> Predicate:
    if end_date is None:
        return ALWAYS
    return Compare(BillField.EXECUTION_DATE, CompareOp.LE, end_date)


def filter_by_min_amount(min_amount: Decimal | None) -> Predicate:
    if min_amount is None:
        return ALWAYS
    return Compare(BillField.TOTAL_AMOUNT, CompareOp.GE, min_amount)


def filter_by_max_amount(max_amount: Decimal | None) -> Predicate:
    if max_amount is None:
        return ALWAYS
    return Compare(BillField.TOTAL_AMOUNT, CompareOp.LE, max_amount)


def filter_by_installment_count(count: int | None) -> Predicate:
    if count is None:
        return ALWAYS
    return Compare(BillField.NUMBER_OF_INSTALLMENTS, CompareOp.EQ, count)


def filter_by_category(category: str | NoCategory | None) -> Predicate:
    """Exact, case-insensitive category match.

    ``NO_CATEGORY`` selects rows whose category is NULL or empty. A blank string
    is no constraint at all.
    """
    if category is None:
        return ALWAYS
    if isinstance(category, NoCategory):
        return IsBlank(BillField.CATEGORY)
    if not category.strip():
        return ALWAYS
    return combine(
        IsNotNull(BillField.CATEGORY),
        EqualsIgnoreCase(BillField.CATEGORY, category),
    )


def filter_by_credit_card(credit_card_id: int | None) -> Predicate:
    if credit_card_id is None:
        return ALWAYS
    return InstallmentExists(credit_card_id=credit_card_id)


def filter_by_has_credit_card(has_credit_card: bool | None) -> Predicate:
    if has_credit_card is None:
        return ALWAYS
    exists = InstallmentExists()
    return exists if has_credit_card else Not(exists)


def build_bill_filter(search: BillSearch) -> Predicate:
    return combine(
        filter_by_name(search.name),
        filter_by_start_date(search.start_date),
        filter_by_end_date(search.end_date),
        filter_by_min_amount(search.min_amount),
        filter_by_max_amount(search.max_amount),
        filter_by_installment_count(search.number_of_installments),
        filter_by_category(search.category),
        filter_by_credit_card(search.credit_card_id),
        filter_by_has_credit_card(search.has_credit_card),
    )


def category_or_uncategorized(
    category: str | None, *, uncategorized: bool = False
) -> str | NoCategory | None:
    """Resolve the category inputs accepted at the HTTP boundary.

    ``uncategorized`` wins over ``category``. The legacy reserved string
    ``__NO_CATEGORY__`` still maps to ``NO_CATEGORY``.
    """
    if uncategorized or category == LEGACY_NO_CATEGORY:
        return NO_CATEGORY
    return category
