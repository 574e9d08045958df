from __future__ import annotations

from sqlalchemy import ColumnElement, and_, false, func, not_, or_, select, true

from billquery.domain.enums import BillField, CompareOp
from billquery.domain.predicates import (
    Always,
    And,
    Compare,
    Contains,
    EqualsIgnoreCase,
    InstallmentExists,
    IsBlank,
    IsNotNull,
    Not,
    Or,
    Predicate,
)

from .models import bills, installments

LIKE_ESCAPE = "\\"


def _column(field: BillField) -> ColumnElement:
    return bills.c[field.value]


def _escape_like(text: str) -> str:
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _installment_exists(predicate: InstallmentExists) -> ColumnElement[bool]:
    card = installments.c.credit_card_id
    card_clause = card.is_not(None) if predicate.credit_card_id is None else card == predicate.credit_card_id
    # Correlated on bills.id; EXISTS keeps one row per bill whatever the installment count.
    return (
        select(installments.c.id)
        .where(installments.c.bill_id == bills.c.id, card_clause)
        .exists()
    )


def to_clause(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate fragment into a WHERE clause over ``bills``."""
    if isinstance(predicate, Always):
        return true()

    if isinstance(predicate, Compare):
        col = _column(predicate.field)
        if predicate.op == CompareOp.EQ:
            return col == predicate.value
        if predicate.op == CompareOp.GE:
            return col >= predicate.value
        if predicate.op == CompareOp.LE:
            return col <= predicate.value
        raise ValueError(f"Unsupported compare operator: {predicate.op}")

    if isinstance(predicate, Contains):
        pattern = f"%{_escape_like(predicate.text.lower())}%"
        return func.lower(_column(predicate.field)).like(pattern, escape=LIKE_ESCAPE)

    if isinstance(predicate, EqualsIgnoreCase):
        return func.lower(_column(predicate.field)) == predicate.value.lower()

    if isinstance(predicate, IsBlank):
        col = _column(predicate.field)
        return or_(col.is_(None), col == "")

    if isinstance(predicate, IsNotNull):
        return _column(predicate.field).is_not(None)

    if isinstance(predicate, InstallmentExists):
        return _installment_exists(predicate)

    if isinstance(predicate, Not):
        return not_(to_clause(predicate.operand))

    if isinstance(predicate, And):
        if not predicate.operands:
            return true()
        return and_(*(to_clause(op) for op in predicate.operands))

    if isinstance(predicate, Or):
        if not predicate.operands:
            return false()
        return or_(*(to_clause(op) for op in predicate.operands))

    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")
