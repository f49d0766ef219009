from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from membership_api.config.settings import Settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, *, echo: bool = False, pool_pre_ping: bool = True) -> AsyncEngine:
    """
    Create the AsyncEngine (and its connection pool) shared by every repository.

    For SQLite URLs foreign-key enforcement is switched on for each new connection,
    so referential integrity behaves the same as on Postgres.
    """
    engine = create_async_engine(
        database_url,
        echo=echo,                       # Set to False in production
        pool_pre_ping=pool_pre_ping,     # Enables connection health checks
    )

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Return the session factory handed to the repositories.

    `expire_on_commit=False` keeps returned entities readable after the session that
    loaded them has committed and closed.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
