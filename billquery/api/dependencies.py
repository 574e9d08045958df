from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy.engine import Engine

from billquery.infrastructure.persistence.sqla import ensure_schema, get_engine
from billquery.logger import get_logger
from billquery.settings import Settings, load_settings


@dataclass(slots=True)
class ApiContext:
    root: Path
    settings: Settings
    logger: Any
    engine: Engine


def build_context(root: Path, settings: Settings | None = None, *, engine: Engine | None = None) -> ApiContext:
    settings = settings or load_settings()
    logger = get_logger()
    if engine is None:
        engine = get_engine(settings.resolve_db_path(root))
    ensure_schema(engine)
    return ApiContext(root=root, settings=settings, logger=logger, engine=engine)


def get_ctx(request: Request) -> ApiContext:
    return request.app.state.ctx
