from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from billquery.api.schemas.common import err
from billquery.domain.errors import DomainError
from billquery.logger import current_request_id, get_logger

_HTTP_CODES = {
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error_handler(_: Request, exc: DomainError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=err(
                request_id=current_request_id(),
                code=exc.code,
                message=exc.message,
                details=jsonable_encoder(exc.details),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=err(
                request_id=current_request_id(),
                code=_HTTP_CODES.get(exc.status_code, "http_error"),
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=err(
                request_id=current_request_id(),
                code="validation_error",
                message="request validation failed",
                details=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(Exception)
    async def _generic_error_handler(_: Request, exc: Exception) -> JSONResponse:
        get_logger().opt(exception=exc).error("unhandled error")
        return JSONResponse(
            status_code=500,
            content=err(
                request_id=current_request_id(),
                code="internal_error",
                message="internal server error",
            ),
        )
