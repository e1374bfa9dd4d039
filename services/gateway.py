"""
Table gateway: the only place routes talk to the database.

Every call returns a FetchResult instead of raising, so a page can tell
"the table is empty" apart from "the query failed" and render each state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    ok: bool
    data: List[Any] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def success(cls, data=None):
        if data is None:
            data = []
        elif not isinstance(data, list):
            data = [data]
        return cls(ok=True, data=data)

    @classmethod
    def failed(cls, message: str):
        return cls(ok=False, data=[], error=message)

    @property
    def is_empty(self) -> bool:
        return self.ok and not self.data

    @property
    def first(self):
        return self.data[0] if self.data else None


def _fail(db: Session, action: str, table: str, exc: Exception) -> FetchResult:
    db.rollback()
    logger.error("Error %s %s: %s", action, table, exc)
    return FetchResult.failed(str(exc))


def select_all(db: Session, model, order_by=None) -> FetchResult:
    try:
        query = db.query(model)
        if order_by is not None:
            query = query.order_by(order_by)
        return FetchResult.success(query.all())
    except SQLAlchemyError as e:
        return _fail(db, "fetching", model.__tablename__, e)


def select_by_id(db: Session, model, id: int) -> FetchResult:
    try:
        return FetchResult.success(db.get(model, id))
    except SQLAlchemyError as e:
        return _fail(db, "fetching", model.__tablename__, e)


def filter_eq(db: Session, model, column: str, value, single: bool = False) -> FetchResult:
    """Rows where `column == value`. With single=True at most one row is returned."""
    try:
        query = db.query(model).filter(getattr(model, column) == value)
        if single:
            return FetchResult.success(query.first())
        return FetchResult.success(query.all())
    except SQLAlchemyError as e:
        return _fail(db, "filtering", model.__tablename__, e)


def insert(db: Session, model, rows: Iterable[Dict[str, Any]]) -> FetchResult:
    """Insert all rows in one transaction; nothing is written if any row fails."""
    try:
        objects = [model(**row) for row in rows]
        db.add_all(objects)
        db.commit()
        for obj in objects:
            db.refresh(obj)
        return FetchResult.success(objects)
    except SQLAlchemyError as e:
        return _fail(db, "inserting into", model.__tablename__, e)


def update(db: Session, model, id: int, values: Dict[str, Any]) -> FetchResult:
    try:
        obj = db.get(model, id)
        if obj is None:
            return FetchResult.success()
        for key, value in values.items():
            setattr(obj, key, value)
        db.commit()
        db.refresh(obj)
        return FetchResult.success(obj)
    except SQLAlchemyError as e:
        return _fail(db, "updating", model.__tablename__, e)


def delete(db: Session, model, id: int) -> FetchResult:
    try:
        obj = db.get(model, id)
        if obj is None:
            return FetchResult.success()
        db.delete(obj)
        db.commit()
        return FetchResult.success(obj)
    except SQLAlchemyError as e:
        return _fail(db, "deleting from", model.__tablename__, e)
