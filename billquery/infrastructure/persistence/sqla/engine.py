from __future__ import annotations

import atexit
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

_ENGINE_CACHE: dict[str, Engine] = {}


def build_db_url(db_path: Path | None) -> str:
    if db_path is None:
        return "sqlite+pysqlite://"
    return f"sqlite+pysqlite:///{db_path}"


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn: Any, _record: Any) -> None:
        # lower() folds like str.lower(); the SQLite built-in is ASCII-only.
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def get_engine(db_path: Path, *, echo: bool = False) -> Engine:
    key = str(db_path.resolve())
    engine = _ENGINE_CACHE.get(key)
    if engine is not None:
        return engine

    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        build_db_url(db_path),
        echo=echo,
        connect_args={"check_same_thread": False},
    )
    _configure_sqlite(engine)
    _ENGINE_CACHE[key] = engine
    return engine


def create_memory_engine() -> Engine:
    """Single-connection in-memory database, shared across threads."""
    engine = create_engine(
        build_db_url(None),
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _configure_sqlite(engine)
    return engine


def dispose_all_engines() -> None:
    for key, engine in list(_ENGINE_CACHE.items()):
        engine.dispose()
        _ENGINE_CACHE.pop(key, None)


atexit.register(dispose_all_engines)
