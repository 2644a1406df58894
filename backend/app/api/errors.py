"""
Exception handlers rendering every failure as {"error": ..., "details": ...}.

- HTTPException raised by services keeps its status; `detail` becomes `error`
- Request validation failures are client errors (400), not FastAPI's 422
- Anything else is a 500 carrying the exception message in `details`
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.common import ErrorResponse
from app.core.logging import get_logger

logger = get_logger(__name__)

# Request sections that add nothing to a field path ("body.tripId" -> "tripId")
_LOCATION_ROOTS = {"body", "query", "path"}


def _error_json(status_code: int, error: str, details: str | None = None, headers=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def describe_validation_error(error: dict) -> str:
    """Turn one pydantic error into a readable sentence."""
    ctx = error.get("ctx") or {}
    # Messages raised by our own validators are already complete sentences
    if isinstance(ctx.get("error"), ValueError):
        return str(ctx["error"])

    path = ".".join(
        str(part) for part in error.get("loc", ()) if part not in _LOCATION_ROOTS
    )
    message = error.get("msg", "Invalid value")
    return f"{path}: {message}" if path else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_json(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [describe_validation_error(e) for e in exc.errors()]
    logger.info("request_validation_failed", errors=messages)
    details = "; ".join(messages[1:]) or None
    return _error_json(status.HTTP_400_BAD_REQUEST, messages[0] if messages else "Invalid request", details)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", error=str(exc), exc_type=type(exc).__name__)
    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        str(exc) or type(exc).__name__,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
