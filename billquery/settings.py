from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env(key: str, default: str | None = None) -> str | None:
    """
    Read an env var, treating empty strings as "unset".

    Users sometimes export a variable but forget to assign a value.
    """
    v = os.environ.get(key)
    if v is not None and str(v).strip() != "":
        return v
    return default


def _parse_bool(v: str | None, default: bool) -> bool:
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_int(v: str | None, default: int) -> int:
    if v is None:
        return default
    try:
        return int(str(v).strip())
    except ValueError:
        return default


def _positive(value: int, default: int) -> int:
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    log_json: bool
    log_path: str | None
    log_rotation_mb: int
    log_retention_days: int
    db_path: str
    default_page_size: int
    max_page_size: int

    def resolve_db_path(self, root: Path) -> Path:
        path = Path(self.db_path)
        if not path.is_absolute():
            path = root / path
        return path


def load_settings() -> Settings:
    host = _env("BILLQUERY_HOST", "127.0.0.1") or "127.0.0.1"
    port = _parse_int(_env("BILLQUERY_PORT"), 8000)

    log_level = (_env("BILLQUERY_LOG_LEVEL", "INFO") or "INFO").upper()
    log_json = _parse_bool(_env("BILLQUERY_LOG_JSON"), False)
    log_path = _env("BILLQUERY_LOG_PATH")
    log_rotation_mb = _positive(_parse_int(_env("BILLQUERY_LOG_ROTATION_MB"), 10), 10)
    log_retention_days = _positive(_parse_int(_env("BILLQUERY_LOG_RETENTION_DAYS"), 14), 14)

    db_path = _env("BILLQUERY_DB_PATH", "bills.db") or "bills.db"

    max_page_size = _positive(_parse_int(_env("BILLQUERY_MAX_PAGE_SIZE"), 100), 100)
    default_page_size = _positive(_parse_int(_env("BILLQUERY_DEFAULT_PAGE_SIZE"), 10), 10)
    default_page_size = min(default_page_size, max_page_size)

    return Settings(
        host=host,
        port=port,
        log_level=log_level,
        log_json=log_json,
        log_path=log_path,
        log_rotation_mb=log_rotation_mb,
        log_retention_days=log_retention_days,
        db_path=db_path,
        default_page_size=default_page_size,
        max_page_size=max_page_size,
    )
