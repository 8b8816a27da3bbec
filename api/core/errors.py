"""
Error taxonomy and the JSON shapes clients see for each category.

- validation (400): `{"errors": [...]}`, one entry per failing field
- not found (404) and other HTTP errors: `{"error": "<detail>"}`
- internal (500): `{"error": "Internal server error"}`, details logged only
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Client-facing message per request field; pydantic's own text is the fallback.
FIELD_MESSAGES: dict[str, str] = {
    "companyId": "Company ID must be between 1 and 6 characters long",
    "companyName": "Company Name must be between 1 and 25 characters",
    "companyCity": "Company City must be between 1 and 25 characters",
}

_MISSING = object()


class InternalError(RuntimeError):
    """
    A failure the client only learns the category of.

    `action` names the unit of work that failed and goes to the log, never
    to the response.
    """

    def __init__(self, action: str) -> None:
        super().__init__(f"{action} failed")
        self.action = action


def _field_error(error: dict[str, Any]) -> dict[str, Any]:
    loc = tuple(error.get("loc") or ())
    location = str(loc[0]) if loc else "body"
    path = ".".join(str(part) for part in loc[1:]) or location

    value = error.get("input", _MISSING)
    if error.get("type") == "missing" or value is _MISSING:
        value = None

    return {
        "type": "field",
        "location": location,
        "path": path,
        "value": value,
        "msg": FIELD_MESSAGES.get(path, str(error.get("msg") or "Invalid value")),
    }


def validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [_field_error(error) for error in exc.errors()]


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = validation_errors(exc)
        logger.info(
            "validation_failed path=%s fields=%s",
            request.url.path,
            ",".join(e["path"] for e in errors),
        )
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(InternalError)
    async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
        # The cause was already logged with its traceback where it happened.
        logger.error("request_failed path=%s action=%s", request.url.path, exc.action)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception path=%s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
