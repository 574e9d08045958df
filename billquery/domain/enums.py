from __future__ import annotations

from enum import StrEnum


class BillField(StrEnum):
    ID = "id"
    NAME = "name"
    EXECUTION_DATE = "execution_date"
    TOTAL_AMOUNT = "total_amount"
    NUMBER_OF_INSTALLMENTS = "number_of_installments"
    CATEGORY = "category"
    CREATED_AT = "created_at"


class CompareOp(StrEnum):
    EQ = "eq"
    GE = "ge"
    LE = "le"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"
