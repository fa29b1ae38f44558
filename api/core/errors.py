"""
Typed API errors and the handlers that render them.

Every failure leaves the API as `{"error": {"message": ..., "status": ...}}`.
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class NotFoundError(HTTPException):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=message)


class InvalidRequestError(HTTPException):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


class ConflictError(HTTPException):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=message)


def forbid_body_fields(*fields: str):
    """
    Route dependency rejecting a JSON body that carries any of `fields`.

    Dependencies resolve before the body model is validated, so the rejection
    wins over missing or ill-typed fields.
    """

    async def _reject(request: Request) -> None:
        try:
            body = await request.json()
        except ValueError:
            # Empty or malformed bodies are reported by body validation.
            return None
        if isinstance(body, dict) and any(field in body for field in fields):
            raise InvalidRequestError("Not allowed")

    return _reject


def error_body(message: str, status_code: int) -> dict[str, Any]:
    return {"error": {"message": message, "status": status_code}}


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message, status_code))


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        # Drop the "body"/"path" prefix; clients only care about the field.
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        field = ".".join(loc) or "request"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request."


async def handle_http_exception(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(_validation_message(exc), status.HTTP_400_BAD_REQUEST)


async def handle_unique_violation(request: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    logger.warning("unique_violation path=%s detail=%s", request.url.path, getattr(exc, "detail", None))
    return error_response("Resource already exists.", status.HTTP_409_CONFLICT)


async def handle_foreign_key_violation(
    request: Request,
    exc: asyncpg.ForeignKeyViolationError,
) -> JSONResponse:
    logger.warning("foreign_key_violation path=%s detail=%s", request.url.path, getattr(exc, "detail", None))
    return error_response("Referenced resource does not exist.", status.HTTP_409_CONFLICT)


async def handle_unexpected_error(request: Request, _: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return error_response("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(asyncpg.UniqueViolationError, handle_unique_violation)
    app.add_exception_handler(asyncpg.ForeignKeyViolationError, handle_foreign_key_violation)
    app.add_exception_handler(Exception, handle_unexpected_error)
