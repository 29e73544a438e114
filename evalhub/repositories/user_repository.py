"""User repository."""
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session

from evalhub.models.user import User


class UserRepository:
    """User data access layer."""

    def __init__(self, db: Session):
        self.db = db

    def bulk_create(self, users: List[User]) -> int:
        """Insert many users in one commit. Returns number inserted."""
        self.db.add_all(users)
        self.db.commit()
        return len(users)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        return self.db.query(User).filter(User.email == email).first()

    def get_all(self) -> List[User]:
        """Get all users ordered by department then name."""
        return self.db.query(User).order_by(User.department, User.name).all()

    def get_map(self, user_ids: Iterable[int]) -> Dict[int, User]:
        """Fetch users by id in one query, keyed by id."""
        ids = list({uid for uid in user_ids if uid is not None})
        if not ids:
            return {}
        return {u.id: u for u in self.db.query(User).filter(User.id.in_(ids)).all()}

    def count(self) -> int:
        return self.db.query(User).count()

