"""SQLAlchemy Base class for all models."""
from app.models.base import Base


def import_models() -> None:
    """Import all models so they are registered on Base.metadata."""
    import app.models  # noqa: F401


__all__ = ["Base", "import_models"]
