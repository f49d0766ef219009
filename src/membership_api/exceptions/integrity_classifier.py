"""
Classify a SQLAlchemy IntegrityError by the constraint that was violated.

This is the only module that looks at engine-specific details (Postgres SQLSTATE
codes, SQLite/other driver messages). The classes below are internal labels for
"what exactly failed in the database"; they are never raised. `mapper.py` turns
them into the public domain errors from `exceptions.base`:

| Constraint-level (internal) | -> | Domain-level (raised)         |
| --------------------------- | -- | ----------------------------- |
| `UniqueConstraintError`     | -> | `AlreadyExistsError`          |
| `NotNullConstraintError`    | -> | `MissingRequiredFieldError`   |
| `ForeignKeyConstraintError` | -> | `ReferenceNotFoundError`      |
| `CheckConstraintError`      | -> | `UnknownStoreError`           |
| `UnknownIntegrityError`     | -> | `UnknownStoreError`           |

Swapping the storage engine should only ever require touching this file.
"""
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific labels
# =================================================================================================================


class ConstraintViolationError(Exception):
    """Base for integrity/constraint violation labels."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""
    pass


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated."""
    pass


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""
    pass


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""
    pass


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


PGCODE_EXCEPTION_MAP = {
    PostgresErrorCodes.UNIQUE_VIOLATION: UniqueConstraintError,
    PostgresErrorCodes.NOT_NULL_VIOLATION: NotNullConstraintError,
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION: ForeignKeyConstraintError,
    PostgresErrorCodes.CHECK_VIOLATION: CheckConstraintError,
}


# =================================================================================================================
# Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _postgres_code(orig) -> str | None:
    # psycopg2 exposes `pgcode`, psycopg 3 and SQLAlchemy's asyncpg adapter expose `sqlstate`
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _postgres_constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    # asyncpg keeps the details on the driver exception wrapped by SQLAlchemy's adapter
    cause = getattr(orig, "__cause__", None)
    return getattr(cause, "constraint_name", None)


def _classify_from_postgres_diag(orig) -> tuple[Type[ConstraintViolationError] | None, str | None]:
    """
    Classify a Postgres integrity error from its SQLSTATE and diagnostics.
    Returns (None, None) when the driver error carries no SQLSTATE.
    """
    pgcode = _postgres_code(orig)
    if not pgcode:
        return None, None

    constraint_name = _postgres_constraint_name(orig)
    exception_class = PGCODE_EXCEPTION_MAP.get(pgcode)

    if exception_class:
        logger.debug(
            "Postgres integrity diagnostic",
            extra={"pgcode": pgcode, "constraint_name": constraint_name},
        )
        return exception_class, constraint_name

    logger.warning(
        "Unknown Postgres integrity error code encountered",
        extra={"pgcode": pgcode, "constraint_name": constraint_name},
    )
    return UnknownIntegrityError, constraint_name


def _classify_from_generic_message(msg: str) -> tuple[Type[ConstraintViolationError], None]:
    """
    Classify an integrity error from its message text (SQLite and other engines).
    """
    normalized = (msg or "").lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "unique violation", "duplicate"]):
        return UniqueConstraintError, None

    if _match_any(normalized, ["not null constraint", "not null", "null value in column"]):
        return NotNullConstraintError, None

    if _match_any(normalized, ["foreign key constraint", "foreign key", "is not present in table"]):
        return ForeignKeyConstraintError, None

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError, None

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": normalized[:200]})
    return UnknownIntegrityError, None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError into a ConstraintViolationError label.

    The same violation always yields the same label, whichever statement raised it.

    Returns:
        A tuple of (label class, constraint name if the driver reports one)
    """
    orig = exc.orig

    exception_class, constraint_name = _classify_from_postgres_diag(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_generic_message(str(orig) if orig is not None else str(exc))
