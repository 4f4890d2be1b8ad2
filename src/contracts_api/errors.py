"""Error types and FastAPI exception handlers for the Contracts API."""

import logging

import pydantic
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, max-age=0, must-revalidate",
}


class ContractsError(Exception):
    """Base class for errors raised by the gateway and its stores."""


class MissingFieldError(ContractsError):
    """A required request field was absent or empty."""


class UpstreamStorageError(ContractsError):
    """The blob store rejected or failed an operation."""


class OrphanedBlobError(UpstreamStorageError):
    """A write failed after the blob was stored, and removing the blob failed too."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class UpstreamDatabaseError(ContractsError):
    """The metadata database rejected or failed an operation."""


class ContractNotFoundError(ContractsError):
    """No contract record exists for the given id."""

    def __init__(self, contract_id: str):
        super().__init__(f"Contract {contract_id} not found")
        self.contract_id = contract_id


def error_response(error: str, details: str, status_code: int) -> JSONResponse:
    """JSON error body in the `{error, details}` shape used by every route."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": details},
        headers=NO_CACHE_HEADERS,
    )


def _describe_validation_errors(errors) -> str:
    parts = []
    for err in errors:
        location = ".".join(str(loc) for loc in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


async def handle_request_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields become a 400 with details."""
    details = _describe_validation_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {details}")
    return error_response(
        error="Invalid request",
        details=details,
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_missing_field_errors(request: Request, exc: MissingFieldError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return error_response(
        error="Invalid request",
        details=str(exc),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_pydantic_validation_errors(request: Request, exc: pydantic.ValidationError) -> JSONResponse:
    """Models failing validation server-side (e.g. a corrupt row) are a server error."""
    logger.error(f"Validation error on {request.method} {request.url.path}: {exc}")
    return error_response(
        error="Internal server error",
        details=_describe_validation_errors(exc.errors()),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates out of a route."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(
            error="Internal server error",
            details=str(err) or err.__class__.__name__,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
