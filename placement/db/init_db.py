"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from placement.core.logging import get_logger
from placement.db.base import Base, import_models
from placement.db import session as db_session

logger = get_logger(__name__)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create every table that does not exist yet.

    Note: suitable for development and tests; production schemas are
    managed by migrations.
    """
    bind = bind or db_session.engine
    import_models()

    existing_tables = inspect(bind).get_table_names()
    Base.metadata.create_all(bind=bind)
    created = sorted(set(Base.metadata.tables) - set(existing_tables))
    if created:
        logger.info(f"Database tables created: {', '.join(created)}")
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    bind = bind or db_session.engine
    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")


def reset_db(bind: Optional[Engine] = None) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db(bind)
    init_db(bind)
    logger.info("Database reset complete")
