from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text

from billquery.api.dependencies import ApiContext, get_ctx
from billquery.api.schemas.common import ok
from billquery.infrastructure.persistence.sqla import connection_scope
from billquery.logger import current_request_id

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(ctx: Annotated[ApiContext, Depends(get_ctx)]) -> dict:
    with connection_scope(ctx.engine) as conn:
        conn.execute(text("SELECT 1"))
    return ok({"ok": True}, request_id=current_request_id())
