"""
=============================================================================
DATABASE ACCESS
=============================================================================

Engine construction, schema initialization and per-request sessions.

=============================================================================
ONE CONNECTION PER REQUEST
=============================================================================

The engine is built with NullPool, so nothing is pooled:

    ┌─────────────────────────────────────────────────────────────────┐
    │                    Handler invocation                            │
    ├─────────────────────────────────────────────────────────────────┤
    │                                                                  │
    │   session_scope(engine)                                          │
    │       │                                                          │
    │       ├──► connect()        New DBAPI connection                 │
    │       ├──► BEGIN                                                 │
    │       ├──► one statement    INSERT / SELECT / UPDATE / DELETE    │
    │       ├──► COMMIT           (ROLLBACK on error)                  │
    │       └──► close()          Connection really closed             │
    │                                                                  │
    └─────────────────────────────────────────────────────────────────┘

The engine object itself is shared, but it only holds the URL and
dialect. No connection outlives the request that opened it.

=============================================================================
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, exc
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from .models import Base


logger = logging.getLogger(__name__)


class SchemaInitError(Exception):
    """Raised when the users table cannot be created or verified at startup."""


def make_engine(database_url: str) -> Engine:
    """
    Create an engine that opens a fresh connection on every checkout.

    Args:
        database_url: SQLAlchemy URL (postgresql://..., sqlite:///...)

    Returns:
        Engine bound to NullPool.
    """
    return create_engine(database_url, poolclass=NullPool)


def init_schema(engine: Engine) -> None:
    """
    Ensure the users table exists.

    CREATE TABLE IF NOT EXISTS semantics, so it is safe on every startup.

    Raises:
        SchemaInitError: If the database is unreachable or the DDL fails.
    """
    try:
        Base.metadata.create_all(bind=engine)
    except exc.SQLAlchemyError as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise SchemaInitError(str(e)) from e

    logger.info("Database table 'users' verified/created")


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """
    Provide a transactional session around a single handler invocation.

    Commits when the block exits normally, rolls back and re-raises on
    any exception, and always closes the underlying connection.

        with session_scope(engine) as session:
            session.add(user)
    """
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
