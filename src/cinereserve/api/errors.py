"""Render domain exceptions as JSON error responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cinereserve.config import settings
from cinereserve.exceptions import CinemaError, StoreError

logger = logging.getLogger(__name__)


def error_body(exc: CinemaError) -> dict:
    body = {"error": exc.message, **exc.extra}
    if isinstance(exc, StoreError):
        body["success"] = False
        # Diagnostics only outside production
        if settings.is_development and exc.__cause__ is not None:
            body["details"] = str(exc.__cause__)
    return body


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CinemaError)
    async def cinema_error_handler(request: Request, exc: CinemaError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))
