"""
FastAPI exception handlers that map store errors to HTTP responses.

The mapping itself lives on the exception classes (`to_payload()`, `http_status()`);
these handlers only log and serialize:

| exception                   | status | code                   |
| --------------------------- | ------ | ---------------------- |
| InvalidEntityError          | 400    | invalid_entity         |
| MissingRequiredFieldError   | 400    | missing_required_field |
| NotFoundError               | 404    | not_found              |
| AlreadyExistsError          | 409    | already_exists         |
| ReferenceNotFoundError      | 422    | reference_not_found    |
| UnknownStoreError           | 500    | unknown                |
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging
from typing import Iterable

from membership_api.exceptions.base import (
    AlreadyExistsError,
    MissingRequiredFieldError,
    NotFoundError,
    RepositoryError,
    UnknownStoreError,
)

logger = logging.getLogger(__name__)


class InvalidEntityError(Exception):
    """An entity failed `is_valid()` before reaching the store."""

    status_code = 400
    error_code = "invalid_entity"

    def __init__(self, entity_name: str, fields: Iterable[str]):
        self.message = f"Invalid {entity_name} details"
        self.fields = list(fields)
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"detail": self.message, "code": self.error_code, "fields": self.fields}


async def invalid_entity_handler(request: Request, exc: InvalidEntityError) -> JSONResponse:
    logger.info("InvalidEntityError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def already_exists_handler(request: Request, exc: AlreadyExistsError) -> JSONResponse:
    logger.info("AlreadyExistsError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def missing_required_field_handler(request: Request, exc: MissingRequiredFieldError) -> JSONResponse:
    """400 for NOT NULL violations, 422 for references to missing members/sports."""
    logger.info(
        "%s for %s %s: fields=%s", type(exc).__name__, request.method, request.url.path, exc.fields
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def unknown_store_error_handler(request: Request, exc: UnknownStoreError) -> JSONResponse:
    """
    500 with a generic body: the cause (driver message, SQL) is only in the logs.
    """
    logger.error("UnknownStoreError for %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal storage error", "code": exc.error_code},
    )


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    # Fallback for RepositoryError subclasses without a dedicated handler
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidEntityError, invalid_entity_handler)
    app.add_exception_handler(AlreadyExistsError, already_exists_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(MissingRequiredFieldError, missing_required_field_handler)
    app.add_exception_handler(UnknownStoreError, unknown_store_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
