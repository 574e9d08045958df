"""Predicate fragments over the bill table.

Fragments are plain immutable values. They carry no SQL; the persistence layer
interprets them (see ``infrastructure.persistence.sqla.translate``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .enums import BillField, CompareOp


@dataclass(frozen=True, slots=True)
class Always:
    """Neutral fragment: matches every row."""


ALWAYS = Always()


@dataclass(frozen=True, slots=True)
class Compare:
    field: BillField
    op: CompareOp
    value: Any


@dataclass(frozen=True, slots=True)
class Contains:
    """Case-insensitive substring match."""

    field: BillField
    text: str


@dataclass(frozen=True, slots=True)
class EqualsIgnoreCase:
    field: BillField
    value: str


@dataclass(frozen=True, slots=True)
class IsBlank:
    """Field is NULL or the empty string."""

    field: BillField


@dataclass(frozen=True, slots=True)
class IsNotNull:
    field: BillField


@dataclass(frozen=True, slots=True)
class InstallmentExists:
    """At least one installment of the bill is charged to a card.

    ``credit_card_id=None`` means any card at all (non-null ``credit_card_id``).
    """

    credit_card_id: int | None = None


@dataclass(frozen=True, slots=True)
class Not:
    operand: "Predicate"


@dataclass(frozen=True, slots=True)
class And:
    operands: tuple["Predicate", ...]


@dataclass(frozen=True, slots=True)
class Or:
    operands: tuple["Predicate", ...]


Predicate = Union[
    Always,
    Compare,
    Contains,
    EqualsIgnoreCase,
    IsBlank,
    IsNotNull,
    InstallmentExists,
    Not,
    And,
    Or,
]


def combine(*predicates: Predicate) -> Predicate:
    """AND fragments together, flattening nested conjunctions.

    Neutral fragments are dropped; an empty conjunction is ``ALWAYS``.
    """
    flat: list[Predicate] = []
    for item in predicates:
        if isinstance(item, Always):
            continue
        if isinstance(item, And):
            flat.extend(op for op in item.operands if not isinstance(op, Always))
        else:
            flat.append(item)
    if not flat:
        return ALWAYS
    if len(flat) == 1:
        return flat[0]
    return And(tuple(flat))
