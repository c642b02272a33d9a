"""
Database session management.

The engine is process-wide state created lazily on first use. Creation is
guarded by a lock so concurrent first callers share one engine (and one
connection pool) instead of each building their own.
"""
import threading
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_engine_lock = threading.Lock()


def _build_engine(url: str) -> Engine:
    options = {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
        "connect_args": dict(settings.DB_CONNECT_ARGS),
    }
    if not make_url(url).get_backend_name().startswith("sqlite"):
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_POOL_OVERFLOW
    return create_engine(url, **options)


def get_engine() -> Engine:
    """Return the shared engine, creating it exactly once."""
    global _engine, _session_factory
    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            url = settings.get_database_url()
            engine = _build_engine(url)
            _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            _engine = engine
            logger.info(f"Database engine initialized for {make_url(url).render_as_string(hide_password=True)}")
    return _engine


def configure_engine(engine: Engine) -> None:
    """
    Replace the shared engine.

    Used by tests and scripts that need a specific engine (for example an
    in-memory SQLite database) instead of the configured DATABASE_URL.
    """
    global _engine, _session_factory
    with _engine_lock:
        _engine = engine
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session_factory() -> sessionmaker:
    get_engine()
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
