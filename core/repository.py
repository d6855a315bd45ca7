"""Repository pattern base class for database operations.

Provides the small set of create/read helpers shared by the plan, saved
recipe and user-profile tables.
"""

from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional, List, Any
from database.models import Base

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository bound to one ORM model and one session.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class.
            session: Database session.
        """
        self.model = model
        self.session = session

    def create(self, obj: T) -> T:
        """Add, commit and refresh a new object.

        Args:
            obj: Model instance to persist.

        Returns:
            The persisted object with refreshed attributes.
        """
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key.

        Args:
            id: Primary key value.

        Returns:
            Model instance or None if not found.
        """
        return self.session.get(self.model, id)

    def list_for_user(self, user_id: str, order_by: Any, skip: int = 0, limit: int = 100) -> List[T]:
        """Return one user's rows, ordered and paginated.

        Args:
            user_id: Owning user id.
            order_by: Column expression to order by (e.g. `Model.created_at.desc()`).
            skip: Number of records to skip.
            limit: Maximum number of records to return.

        Returns:
            List of model instances.
        """
        return (
            self.session.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(order_by)
            .offset(skip)
            .limit(limit)
            .all()
        )
