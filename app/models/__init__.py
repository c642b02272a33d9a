"""
Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from app.models.base import Base
from app.models.complaint import Complaint

__all__ = ["Base", "Complaint"]
