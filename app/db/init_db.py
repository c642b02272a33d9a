# app/db/init_db.py
"""Database initialization utilities."""
from sqlalchemy import inspect

from app.core.logging import get_logger
from app.db.base import Base, import_models
from app.db.session import get_engine

logger = get_logger(__name__)


def init_db() -> None:
    """
    Create any missing tables and indexes.

    Note: This is suitable for development and small deployments.
    Schema changes on an existing database need a migration tool.
    """
    import_models()
    engine = get_engine()

    existing_tables = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = sorted(set(Base.metadata.tables) - existing_tables)

    if created:
        logger.info(f"Database tables created: {', '.join(created)}")
    else:
        logger.info(f"Database already initialized with {len(existing_tables)} tables")

