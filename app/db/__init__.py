from app.db.session import configure_engine, get_db, get_engine, get_session_factory

__all__ = ["configure_engine", "get_db", "get_engine", "get_session_factory"]
