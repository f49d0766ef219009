"""
Create the members/sports/memberships schema on the configured database.

Usage:
    python -m membership_api.database.create_tables
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from membership_api.config import get_settings
from membership_api.core.logging import setup_logging
from membership_api.database.base import Base
from membership_api.database.session import create_engine_from_settings
from membership_api import models  # noqa: F401 - registers the tables on Base.metadata

logger = logging.getLogger(__name__)


async def create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("schema.created", extra={"tables": sorted(Base.metadata.tables)})


async def _main() -> None:
    engine = create_engine_from_settings(get_settings())
    try:
        await create_all(engine)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    setup_logging(get_settings())
    asyncio.run(_main())
