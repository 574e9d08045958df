from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from billquery.api.schemas.common import RequestModel
from billquery.domain.filters import BillSearch, category_or_uncategorized
from billquery.logger import get_logger


def _lenient_datetime(raw: str | None, *, param: str) -> datetime | None:
    """Malformed values are dropped with a warning instead of failing the request."""
    if raw is None or not raw.strip():
        return None
    try:
        return datetime.fromisoformat(raw.strip().replace("Z", "+00:00")).replace(tzinfo=None)
    except ValueError:
        get_logger().warning(f"ignoring malformed {param}={raw!r}")
        return None


class BillListQuery(RequestModel):
    page: int = Field(default=0, ge=0)
    size: int | None = Field(default=None, ge=1)
    sort: str | None = None
    name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    number_of_installments: int | None = None
    category: str | None = None
    uncategorized: bool = False
    credit_card_id: int | None = None
    has_credit_card: bool | None = None

    def to_search(self) -> BillSearch:
        return BillSearch(
            name=self.name,
            start_date=_lenient_datetime(self.start_date, param="start_date"),
            end_date=_lenient_datetime(self.end_date, param="end_date"),
            min_amount=self.min_amount,
            max_amount=self.max_amount,
            number_of_installments=self.number_of_installments,
            category=category_or_uncategorized(self.category, uncategorized=self.uncategorized),
            credit_card_id=self.credit_card_id,
            has_credit_card=self.has_credit_card,
        )
