"""
Problem bodies and exception handlers

Every error response has the same shape:
    {"title": str, "status": int, "errors": {field: [messages]}}
"errors" is only present for field-level failures.
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

VALIDATION_TITLE = "One or more validation errors occurred."


def problem(status_code: int, title: str, errors: Optional[Dict[str, List[str]]] = None) -> dict:
    body = {"title": title, "status": status_code}
    if errors:
        body["errors"] = errors
    return body


def field_error(status_code: int, field: str, message: str) -> HTTPException:
    """
    Build an HTTPException carrying a single field-level error.

    Usage:
        raise field_error(409, "code", "Customer code 'C001' already exists.")
    """
    return HTTPException(
        status_code=status_code,
        detail=problem(status_code, message, {field: [message]})
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body = exc.detail
    else:
        body = problem(exc.status_code, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        errors.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content=problem(400, VALIDATION_TITLE, errors))


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(
        status_code=500,
        content=problem(500, f"An error occurred while accessing the database: {message}")
    )


async def io_exception_handler(request: Request, exc: OSError) -> JSONResponse:
    logger.error("I/O error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=problem(500, f"An error occurred while accessing stored files: {exc}")
    )
