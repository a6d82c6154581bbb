# backend/services/entity_store.py
import functools
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import Base
from services.errors import DependencyFailure, InventoryError, NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Base)


def _persistence_guard(func):
    """Surface backing-store failures as DependencyFailure."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception("Persistence error in %s", func.__qualname__)
            raise DependencyFailure(str(e)) from e

    return wrapper


@contextmanager
def transaction(db: Session):
    """Unit of work: commit on success, roll back on any error.

    Entity stores never commit on their own, so everything done inside the
    block lands in one database transaction.
    """
    try:
        yield db
        db.commit()
    except InventoryError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Transaction rolled back")
        raise DependencyFailure(str(e)) from e
    except Exception:
        db.rollback()
        raise


class EntityStore(Generic[T]):
    """CRUD and predicate queries for a single mapped model."""

    def __init__(self, db: Session, model: Type[T], label: Optional[str] = None):
        self.db = db
        self.model = model
        self.label = label or model.__name__

    @_persistence_guard
    def create(self, entity: T) -> int:
        self.db.add(entity)
        self.db.flush()
        return entity.id

    @_persistence_guard
    def get(self, entity_id: int) -> T:
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            raise NotFound(f"{self.label} not found", details={"id": entity_id})
        return entity

    @_persistence_guard
    def snapshot(self, entity: T) -> T:
        """Reload the entity and its direct relationships, then detach them.

        Call inside a unit of work: the returned objects keep the values read
        in that transaction after the commit expires the session.
        """
        self.db.refresh(entity)
        related = [getattr(entity, rel.key) for rel in sa_inspect(self.model).relationships]
        for obj in related:
            if obj is not None and obj in self.db:
                self.db.refresh(obj)
        for obj in (entity, *related):
            if obj is not None and obj in self.db:
                self.db.expunge(obj)
        return entity

    @_persistence_guard
    def exists(self, entity_id: int) -> bool:
        return self.db.get(self.model, entity_id) is not None

    @_persistence_guard
    def update(self, entity_id: int, patch: Dict[str, Any]) -> T:
        entity = self.get(entity_id)
        for key, value in patch.items():
            setattr(entity, key, value)
        self.db.flush()
        return entity

    @_persistence_guard
    def delete(self, entity_id: int) -> bool:
        entity = self.db.get(self.model, entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.flush()
        return True

    @_persistence_guard
    def find(self, *criteria) -> List[T]:
        return self.db.query(self.model).filter(*criteria).order_by(self.model.id).all()

    @_persistence_guard
    def delete_where(self, *criteria) -> int:
        # Batch delete; stale instances are expired when the unit of work commits
        stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        return self.db.execute(stmt).rowcount
