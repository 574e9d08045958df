from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from billquery.api.dependencies import ApiContext, get_ctx
from billquery.api.schemas.bills import BillListQuery
from billquery.api.schemas.common import ok
from billquery.application.services.bill_service import get_bill_payload, search_bills_payload
from billquery.domain.sorting import parse_sort
from billquery.logger import current_request_id

router = APIRouter(tags=["bills"])


@router.get("/bills")
async def list_bills(
    query: Annotated[BillListQuery, Query()],
    ctx: Annotated[ApiContext, Depends(get_ctx)],
) -> dict:
    payload = search_bills_payload(
        ctx.engine,
        query.to_search(),
        page=query.page,
        size=query.size or ctx.settings.default_page_size,
        sort=parse_sort(query.sort),
        max_page_size=ctx.settings.max_page_size,
    )
    return ok(payload, request_id=current_request_id())


@router.get("/bills/{bill_id}")
async def get_bill(bill_id: int, ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    return ok(get_bill_payload(ctx.engine, bill_id), request_id=current_request_id())
