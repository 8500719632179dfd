"""Map domain exceptions to JSON error responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ethical_scan.domain.shared.errors import (
    ConfigurationError,
    DomainError,
    ExternalServiceError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _validation_error(_: Request, exc: Exception) -> JSONResponse:
    return error_response(400, str(exc))


async def _request_validation_error(_: Request, exc: Exception) -> JSONResponse:
    # Malformed JSON, wrong field types, unknown pipeline
    logger.info("Rejected request", errors=getattr(exc, "errors", lambda: [])())
    return error_response(400, "Invalid request body")


async def _configuration_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Configuration error", path=request.url.path, error=str(exc))
    return error_response(500, str(exc))


async def _external_service_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Upstream failure", path=request.url.path, error=str(exc))
    return error_response(500, str(exc))


async def _domain_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled domain error", path=request.url.path, error=str(exc))
    return error_response(500, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers; most specific classes resolve first."""
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ConfigurationError, _configuration_error)
    app.add_exception_handler(ExternalServiceError, _external_service_error)
    app.add_exception_handler(DomainError, _domain_error)
