import re
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, NoReturn

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
)
from .base import (
    AlreadyExistsError,
    MissingRequiredFieldError,
    ReferenceNotFoundError,
    RepositoryError,
    UnknownStoreError,
)

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Extract column names from Postgres messages:
      - 'null value in column "email" of relation "members" violates not-null constraint'
      - 'DETAIL:  Key (email)=(john@example.com) already exists.'
      - 'DETAIL:  Key (member_id)=(...) is not present in table "members".'
    """
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: members.email' / 'NOT NULL constraint failed: sports.name'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>[^\n]+)', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols").strip())]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of the offending column names from the driver message.
    """
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    if not msg:
        return None
    return _extract_columns_postgres(msg) or _extract_columns_sqlite(msg)


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> NoReturn:
    """
    Translate a SQLAlchemy IntegrityError into a domain error and raise it, chained to `exc`.
    Populates `.fields` and `.constraint` where the driver exposes them.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"
    context = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if exc_cls is UniqueConstraintError:
        # Expected client-level scenario (409), INFO is enough
        logger.info("mapper.duplicate_detected", extra=context)
        if columns:
            raise AlreadyExistsError(
                f"{model_part} already exists for field(s): {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise AlreadyExistsError(f"{model_part} already exists", constraint=constraint_name) from exc

    if exc_cls is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra=context)
        if columns:
            raise MissingRequiredFieldError(
                f"Missing required field(s): {', '.join(columns)} for {model_part}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise MissingRequiredFieldError(
            f"Missing required field for {model_part}", constraint=constraint_name
        ) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info("mapper.foreign_key_violation", extra=context)
        if columns:
            raise ReferenceNotFoundError(
                f"{model_part} references a record that does not exist: {', '.join(columns)}",
                fields=columns, constraint=constraint_name,
            ) from exc
        raise ReferenceNotFoundError(
            f"{model_part} references a record that does not exist", constraint=constraint_name
        ) from exc

    # CHECK and unrecognised violations: no domain meaning, keep the raw text at DEBUG only
    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": str(exc.orig)})
    raise UnknownStoreError(f"{model_part} database integrity error.", constraint=constraint_name) from exc


# -----------------------
# Async context manager used by every repository operation
# -----------------------

async def _rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None) -> AsyncIterator[None]:
    """
    Usage:
        async with db_error_handler(session, "Member"):
            ... statements that may fail ...

    On failure the session is rolled back and:
      - domain errors raised inside the block (e.g. NotFoundError) propagate unchanged;
      - IntegrityError is classified and re-raised as a domain error;
      - anything else becomes UnknownStoreError, chained to the original exception.
    """
    try:
        yield
    except RepositoryError:
        await _rollback(db, model_name)
        raise
    except IntegrityError as exc:
        await _rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except Exception as exc:
        await _rollback(db, model_name)
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise UnknownStoreError(f"Failed to operate on {model_name or 'database'}") from exc
