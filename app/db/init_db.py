# app/db/init_db.py
"""Database initialization utilities."""
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(engine: Engine = default_engine) -> None:
    """
    Create any missing tables.

    Note: This is suitable for development/testing only.
    Production schemas are expected to be managed by migrations.
    """
    try:
        existing_tables = set(inspect(engine).get_table_names())
        missing = [name for name in Base.metadata.tables if name not in existing_tables]

        if missing:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created: %s", ", ".join(sorted(missing)))
        else:
            logger.info("Database already initialized with %d tables", len(existing_tables))

    except SQLAlchemyError as e:
        logger.error("Error initializing database: %s", e)
        raise


def drop_db(engine: Engine = default_engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Use with caution.
    Only for development/testing purposes.
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")
