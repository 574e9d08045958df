from __future__ import annotations

import re
from dataclasses import dataclass

from .enums import BillField, SortDirection
from .errors import ValidationError


@dataclass(frozen=True, slots=True)
class Sort:
    field: BillField = BillField.EXECUTION_DATE
    direction: SortDirection = SortDirection.DESC


DEFAULT_SORT = Sort()

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _normalize_field(raw: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", raw.strip()).lower()


def parse_sort(raw: str | None) -> Sort:
    """Parse ``"field,direction"`` (``executionDate,desc`` or ``total_amount,asc``).

    A missing or empty value yields the default ordering, newest first.
    """
    if raw is None or not raw.strip():
        return DEFAULT_SORT

    parts = [part.strip() for part in raw.split(",")]
    if len(parts) == 1:
        parts.append(SortDirection.ASC.value)
    if len(parts) != 2 or not parts[0]:
        raise ValidationError("Sort must be 'field,direction'", details={"sort": raw})

    field_name = _normalize_field(parts[0])
    try:
        field = BillField(field_name)
    except ValueError as exc:
        raise ValidationError(
            f"Sort field '{parts[0]}' is not allowed",
            details={"allowed": sorted(f.value for f in BillField)},
        ) from exc

    try:
        direction = SortDirection(parts[1].lower() or SortDirection.ASC.value)
    except ValueError as exc:
        raise ValidationError("Sort direction must be 'asc' or 'desc'") from exc

    return Sort(field=field, direction=direction)
