from app.schemas.common.base import BaseSchema, CamelSchema
from app.schemas.common.pagination import PaginationMeta, PaginationParams

__all__ = [
    "BaseSchema",
    "CamelSchema",
    "PaginationMeta",
    "PaginationParams",
]
