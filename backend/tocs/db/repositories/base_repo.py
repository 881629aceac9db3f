"""Shared session plumbing for the repositories."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from tocs.db.base import Base

RowT = TypeVar("RowT", bound=Base)


class BaseRepository:
    """Repositories stage changes; services decide when to commit."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _add(self, row: RowT) -> RowT:
        """Add and flush ``row`` so generated columns are populated."""
        self.db.add(row)
        self.db.flush()
        return row

    def commit(self) -> None:
        self.db.commit()
