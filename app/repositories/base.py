# app/repositories/base.py
from __future__ import annotations

from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)

Criteria = Mapping[str, Any]


class BaseRepository(Generic[ModelType]):
    """
    Record store over a single mapped table.

    Writes are flushed so generated ids and defaults are visible to the
    caller, but never committed; the service layer owns the transaction.
    Criteria are plain ``{column: value}`` equality constraints combined
    with AND.
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model

    # ------------------------------------------------------------------ #
    # Query building
    # ------------------------------------------------------------------ #
    def _column(self, name: str):
        column = getattr(self.model, name, None)
        if column is None:
            raise AttributeError(f"{self.model.__name__} has no column '{name}'")
        return column

    def _where(self, stmt: Select, criteria: Optional[Criteria]) -> Select:
        for name, value in (criteria or {}).items():
            stmt = stmt.where(self._column(name) == value)
        return stmt

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def find_by_id(self, id_: str) -> Optional[ModelType]:
        return self.session.get(self.model, id_)

    def count_matching(self, criteria: Optional[Criteria] = None) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), criteria)
        return self.session.execute(stmt).scalar_one()

    def find_page(
        self,
        criteria: Optional[Criteria],
        *,
        order_by: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[ModelType], int]:
        """
        One page of matching rows plus the total number of matches.

        Both queries use the same criteria, so ``total`` counts every match
        regardless of the window.
        """
        total = self.count_matching(criteria)
        stmt = (
            self._where(select(self.model), criteria)
            .order_by(*order_by)
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars()), total

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def insert(self, values: Dict[str, Any]) -> ModelType:
        record = self.model(**values)  # type: ignore[arg-type]
        self.session.add(record)
        self.session.flush()
        return record

    def assign(self, record: ModelType, values: Dict[str, Any]) -> ModelType:
        for name, value in values.items():
            self._column(name)
            setattr(record, name, value)
        self.session.flush()
        return record

    def remove(self, record: ModelType) -> None:
        self.session.delete(record)
        self.session.flush()
