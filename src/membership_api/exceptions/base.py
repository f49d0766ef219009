"""
Domain errors raised by the store adapters.

These are independent of the storage engine: callers above the repositories
dispatch on the exception class (or its `kind`), never on SQLSTATE codes or
driver messages.
"""

from enum import Enum
from typing import Iterable


class ErrorKind(str, Enum):
    """The fixed set of reasons a store operation can fail."""
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    UNKNOWN = "unknown"


class RepositoryError(Exception):
    """
    Base exception for store failures.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical short code used by clients; defaults to the kind's value
    - kind: the ErrorKind this error belongs to (class attribute)
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "not_found": 404,
        "already_exists": 409,
        "missing_required_field": 400,
        "reference_not_found": 422,
        "unknown": 500,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code or self.kind.value

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses:
            {"detail": "...", "code": "already_exists", "fields": ["email"]}
        The constraint name and the underlying DB error are never included.
        """
        payload = {"detail": self.message, "code": self.error_code}
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)


class NotFoundError(RepositoryError):
    """The requested identifier or key has no matching record."""
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class AlreadyExistsError(RepositoryError):
    """A uniqueness constraint rejected the write (duplicate email, duplicate sport name)."""
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint)


class MissingRequiredFieldError(RepositoryError):
    """A NOT NULL or foreign-key constraint rejected the write."""
    kind = ErrorKind.MISSING_REQUIRED_FIELD

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code=error_code)


class ReferenceNotFoundError(MissingRequiredFieldError):
    """
    A foreign key points at a member or sport that does not exist.

    Still of kind MISSING_REQUIRED_FIELD, so callers handling the four kinds keep working;
    callers that want to tell the two apart can catch this subclass.
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="reference_not_found")


class UnknownStoreError(RepositoryError):
    """Any other storage failure (connectivity, syntax, timeout). Always chained to its cause."""
    kind = ErrorKind.UNKNOWN


__all__ = [
    "ErrorKind",
    "RepositoryError",
    "NotFoundError",
    "AlreadyExistsError",
    "MissingRequiredFieldError",
    "ReferenceNotFoundError",
    "UnknownStoreError",
]
