from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from functools import lru_cache
from pathlib import Path
from typing import Any

from loguru import logger as loguru_logger

from .settings import Settings, load_settings

_REQUEST_ID: ContextVar[str] = ContextVar("billquery_request_id", default="-")
_CONFIGURED = False

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "rid=<yellow>{extra[request_id]}</yellow> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "{message}"
)


def current_request_id() -> str:
    return _REQUEST_ID.get().strip() or "-"


def set_request_id(request_id: str) -> Token[str]:
    return _REQUEST_ID.set(str(request_id or "").strip() or "-")


def reset_request_id(token: Token[str]) -> None:
    _REQUEST_ID.reset(token)


class _ToLoguru(logging.Handler):
    """Forwards stdlib records (uvicorn, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _with_request_id(record: Any) -> None:
    extra = record["extra"]
    if extra.get("request_id", "-") in ("", "-"):
        extra["request_id"] = current_request_id()


def setup_logging(settings: Settings | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    config = settings or load_settings()

    loguru_logger.remove()
    loguru_logger.configure(patcher=_with_request_id)
    loguru_logger.add(
        sys.stdout,
        level=config.log_level,
        format=_FORMAT,
        colorize=not config.log_json,
        serialize=config.log_json,
        diagnose=False,
    )
    if config.log_path:
        path = Path(config.log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(
            str(path),
            level=config.log_level,
            serialize=True,
            enqueue=True,
            diagnose=False,
            rotation=f"{config.log_rotation_mb} MB",
            retention=f"{config.log_retention_days} days",
            compression="gz",
        )

    logging.basicConfig(handlers=[_ToLoguru()], level=config.log_level, force=True)
    # uvicorn installs its own handlers unless told otherwise.
    for name in ("uvicorn", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    _CONFIGURED = True


@lru_cache(maxsize=1)
def get_logger():
    setup_logging(load_settings())
    return loguru_logger.bind(request_id="-")
