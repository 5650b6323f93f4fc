import logging
import re
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.response import error_response

logger = logging.getLogger(__name__)

_SECRET_PATTERN = re.compile(r"sk-[A-Za-z0-9_-]+")


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class InvalidRequest(AppException):
    """The analysis request cannot be processed as submitted."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=400, details=details)


class UpstreamError(AppException):
    """The model provider failed: transport error, timeout or non-2xx reply."""

    def __init__(self, message: str = "Analysis failed", details: Any = None):
        super().__init__(message, status_code=500, details=details)


class FallbackSubstitution(AppException):
    """The model reply could not be turned into a report.

    Raised by the parser and absorbed by the gateway, which substitutes the
    canned report. It never reaches an HTTP response.
    """

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message, status_code=200)
        self.raw_text = raw_text


def mask_secrets(value: Any) -> Any:
    """Mask provider keys (sk-...) anywhere inside a str/dict/list payload."""
    if isinstance(value, str):
        return _SECRET_PATTERN.sub("sk-***", value)
    if isinstance(value, dict):
        return {k: mask_secrets(v) for k, v in value.items()}
    if isinstance(value, list):
        return [mask_secrets(v) for v in value]
    return value


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, details=mask_secrets(exc.details)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed body on %s %s", request.method, request.url.path)
        details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]
        return JSONResponse(
            status_code=400,
            content=error_response("Invalid request body", details=details),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )
