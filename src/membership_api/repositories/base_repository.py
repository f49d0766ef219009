"""
Base repository class providing common database operations.

This class is the reusable foundation of the store adapters (members, sports,
memberships). It owns the transaction boundary and the error boundary:

- every public operation opens its own `AsyncSession` from the shared
  `async_sessionmaker`, runs inside one transaction, commits on success;
- every statement runs inside `db_error_handler`, so callers only ever see the
  domain errors from `membership_api.exceptions` (never driver exceptions).

Model-specific repositories inherit from `BaseRepository` and expose the
entity-named operations (`add_member`, `get_sport_by_id`, ...) on top of the
protected helpers below.
"""
import time
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select, update, delete, inspect
from sqlalchemy.orm import make_transient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership_api.database.base import Base
from membership_api.exceptions.base import NotFoundError
from membership_api.exceptions.mapper import db_error_handler

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing the CRUD building blocks.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], session_factory: async_sessionmaker[AsyncSession]):
        """
        Args:
            model: The SQLAlchemy model class (e.g. `Member`, not `Member()`), used to build
                `select(self.model)`, `update(self.model)`, ... dynamically.
            session_factory: The shared `async_sessionmaker`. The repository keeps no session
                of its own; no state is retained between calls.
        """
        self.model = model
        self.session_factory = session_factory

    @property
    def model_name(self) -> str:
        return self.model.__name__

    # =================================================================================================================
    # Transaction + error boundary
    # =================================================================================================================

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        """
        One session, one transaction.

        The commit sits inside `db_error_handler` too: with most engines constraint
        violations can surface at flush or commit time, and both must be classified.
        """
        async with self.session_factory() as session:
            async with db_error_handler(session, self.model_name):
                yield session
                await session.commit()

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def _add(self, entity: ModelType) -> ModelType:
        """
        Insert `entity` and return it materialized (generated id and defaults loaded).

        Raises:
            AlreadyExistsError: unique constraint violated
            MissingRequiredFieldError: NOT NULL violated
            ReferenceNotFoundError: foreign key violated
            UnknownStoreError: anything else
        """
        logger.debug("repo.add.start", extra={"model": self.model_name, "operation": "add"})
        start = time.perf_counter()

        if not inspect(entity).transient:
            # An instance loaded or added earlier would be re-attached without an INSERT.
            # Make it transient again so the engine sees (and rejects) the duplicate row.
            make_transient(entity)

        async with self._session() as session:
            session.add(entity)
            # flush() sends the INSERT so the DB raises now, refresh() reloads DB-side values
            await session.flush()
            await session.refresh(entity)

        logger.info(
            "repo.add.success",
            extra={
                "model": self.model_name,
                "operation": "add",
                "id": str(entity.id),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def _get_by_id(self, entity_id: UUID) -> ModelType:
        """
        Get an entity by its ID.

        Raises:
            NotFoundError: no row with this id
            UnknownStoreError: the query failed
        """
        return await self._get_one_by("id", entity_id)

    async def _get_one_by(self, field: str, value: Any) -> ModelType:
        """
        Get the single entity whose `field` equals `value`.

        Only used with unique keys (id, email), so `scalar_one_or_none()` never sees two rows.
        """
        async with self._session() as session:
            result = await session.execute(
                select(self.model).where(getattr(self.model, field) == value)
            )
            entity = result.scalar_one_or_none()

            if entity is None:
                logger.info(
                    "repo.get.not_found",
                    extra={"model": self.model_name, "operation": "get", "lookup_field": field},
                )
                raise NotFoundError(f"{self.model_name} not found", fields=[field])

        logger.debug("repo.get.success", extra={"model": self.model_name, "operation": "get", "lookup_field": field})
        return entity

    async def _get_all(self) -> list[ModelType]:
        """Return every row of the table; an empty list when there are none. Ordering is unspecified."""
        async with self._session() as session:
            result = await session.execute(select(self.model))
            entities = list(result.scalars().all())

        logger.debug(
            "repo.get_all.success",
            extra={"model": self.model_name, "operation": "get_all", "count": len(entities)},
        )
        return entities

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def _update(self, entity_id: UUID, changes: dict[str, Any]) -> ModelType:
        """
        Partial update keyed by id, executed as a single `UPDATE ... RETURNING` statement.

        Keys whose value is None were not supplied and leave their column untouched.
        Falsy values such as `0` (an IntEnum status) or `""` are real changes.

        Raises:
            NotFoundError: the statement returned no row
            AlreadyExistsError / MissingRequiredFieldError / UnknownStoreError: as for `_add`
        """
        values = {key: value for key, value in changes.items() if value is not None}

        if not values:
            logger.debug("repo.update.no_changes", extra={"model": self.model_name, "operation": "update"})
            return await self._get_by_id(entity_id)

        logger.debug(
            "repo.update.start",
            extra={"model": self.model_name, "operation": "update", "provided_keys": sorted(values)},
        )

        async with self._session() as session:
            stmt = (
                update(self.model)
                .where(self.model.id == entity_id)
                .values(**values)
                .returning(self.model)
                .execution_options(synchronize_session="fetch")
            )
            result = await session.execute(stmt)
            entity = result.scalar_one_or_none()

            if entity is None:
                logger.info(
                    "repo.update.not_found",
                    extra={"model": self.model_name, "operation": "update", "id": str(entity_id)},
                )
                raise NotFoundError(f"{self.model_name} not found", fields=["id"])

        logger.info("repo.update.success", extra={"model": self.model_name, "operation": "update", "id": str(entity_id)})
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def _delete(self, entity_id: UUID) -> None:
        """
        Hard delete by id.

        Existence is decided by the affected-row count, not by the absence of an error.

        Raises:
            NotFoundError: no row was deleted
        """
        async with self._session() as session:
            stmt = (
                delete(self.model)
                .where(self.model.id == entity_id)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(stmt)

            if result.rowcount == 0:
                logger.info(
                    "repo.delete.not_found",
                    extra={"model": self.model_name, "operation": "delete", "id": str(entity_id)},
                )
                raise NotFoundError(f"{self.model_name} not found", fields=["id"])

        logger.info("repo.delete.success", extra={"model": self.model_name, "operation": "delete", "id": str(entity_id)})
