"""Repository helpers for user-owned records.

Every table in this service is keyed by ``user_id``, so the repository
always filters on the owner; a record belonging to someone else looks
exactly like a missing one.
"""

from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional, List, Any, Dict
from database.models import Base

T = TypeVar('T', bound=Base)


class UserScopedRepository(Generic[T]):
    """CRUD operations restricted to the records of a single user.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
        user_id: Owner every query is filtered by.
    """

    def __init__(self, model: Type[T], session: Session, user_id: str):
        self.model = model
        self.session = session
        self.user_id = user_id

    def query(self):
        """Return a query over this user's rows only."""
        return self.session.query(self.model).filter(self.model.user_id == self.user_id)

    def create(self, **fields: Any) -> T:
        """Insert a new row owned by the user and return it refreshed."""
        obj = self.model(user_id=self.user_id, **fields)
        return save(self.session, obj)

    def get(self, id: Any) -> Optional[T]:
        """Return the user's row with this primary key, or None."""
        return self.query().filter(self.model.id == id).first()

    def latest(self, order_column, *criteria) -> Optional[T]:
        """Return the newest row by `order_column`, optionally filtered."""
        return self.query().filter(*criteria).order_by(order_column.desc(), self.model.id.desc()).first()

    def list(self, order_column, *criteria, limit: Optional[int] = None) -> List[T]:
        """Return rows newest first, optionally filtered and capped."""
        q = self.query().filter(*criteria).order_by(order_column.desc(), self.model.id.desc())
        if limit is not None:
            q = q.limit(limit)
        return q.all()

    def update(self, obj: T, changes: Dict[str, Any]) -> T:
        """Apply `changes` to `obj`, commit and refresh."""
        for key, value in changes.items():
            setattr(obj, key, value)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        """Delete an object and commit."""
        self.session.delete(obj)
        self.session.commit()


def save(session: Session, obj: Base) -> Base:
    """Convenience function to add, commit and refresh an object."""
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj
