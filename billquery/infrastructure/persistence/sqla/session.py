from __future__ import annotations

from contextlib import contextmanager
from collections.abc import Iterator

from sqlalchemy.engine import Connection, Engine

from .models import metadata


@contextmanager
def connection_scope(engine: Engine) -> Iterator[Connection]:
    with engine.begin() as conn:
        yield conn


def ensure_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        metadata.create_all(bind=conn, checkfirst=True)
