"""
Thin persistence contract used by the services.

    get(db, Model, id)            -> record | None
    find(db, Model, *criteria)    -> list of records
    save(db, record)              -> record   (insert or update, committed)
    delete(db, Model, id)         -> True if a row was removed

Every write commits immediately. On failure the session is rolled back and a
PersistenceError (IntegrityViolation for constraint hits) is raised.
"""
import logging
from typing import Any, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import IntegrityViolation, PersistenceError
from .base_class import Base

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Base)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity violation on commit: {e.orig}")
        raise IntegrityViolation(str(e.orig)) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Commit failed: {e}", exc_info=True)
        raise PersistenceError(str(e)) from e


def get(db: Session, model: type[M], id: str) -> M | None:
    return db.get(model, id)


def find(db: Session, model: type[M], *criteria: Any, order_by: Any = None) -> list[M]:
    stmt = select(model).where(*criteria)
    if order_by is not None:
        stmt = stmt.order_by(order_by)
    return list(db.execute(stmt).scalars().all())


def find_one(db: Session, model: type[M], *criteria: Any) -> M | None:
    return db.execute(select(model).where(*criteria)).scalars().first()


def page(db: Session, model: type[M], *, page: int = 1, size: int = 20, order_by: Any = None) -> tuple[list[M], int]:
    """Return one page of rows plus the total row count."""
    count = db.execute(select(func.count()).select_from(model)).scalar_one()
    stmt = select(model)
    if order_by is not None:
        stmt = stmt.order_by(order_by)
    stmt = stmt.offset((page - 1) * size).limit(size)
    return list(db.execute(stmt).scalars().all()), count


def save(db: Session, record: M) -> M:
    db.add(record)
    _commit(db)
    db.refresh(record)
    return record


def delete(db: Session, model: type[M], id: str) -> bool:
    record = db.get(model, id)
    if record is None:
        return False
    db.delete(record)
    _commit(db)
    return True
