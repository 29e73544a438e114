"""Form repository."""
from typing import Optional, List
from sqlalchemy.orm import Session, joinedload

from evalhub.models.form import Form


class FormRepository:
    """Form data access layer.

    `add` and `delete` only flush; the calling service commits so that the
    form and its assignments land in one transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def add(self, form: Form) -> Form:
        """Stage a new form and assign its id."""
        self.db.add(form)
        self.db.flush()
        return form

    def get_by_id(self, form_id: int) -> Optional[Form]:
        """Get form by ID with its creator."""
        return (
            self.db.query(Form)
            .options(joinedload(Form.creator))
            .filter(Form.id == form_id)
            .first()
        )

    def get_all(self) -> List[Form]:
        """Get all forms, newest first."""
        return (
            self.db.query(Form)
            .options(joinedload(Form.creator))
            .order_by(Form.created_at.desc(), Form.id.desc())
            .all()
        )

    def get_by_creator(self, user_id: int) -> List[Form]:
        """Get forms created by a user, newest first."""
        return (
            self.db.query(Form)
            .filter(Form.created_by == user_id)
            .order_by(Form.created_at.desc(), Form.id.desc())
            .all()
        )

    def get_many(self, form_ids: List[int]) -> List[Form]:
        if not form_ids:
            return []
        return self.db.query(Form).filter(Form.id.in_(form_ids)).all()

    def delete(self, form: Form) -> None:
        """Stage form deletion."""
        self.db.delete(form)
        self.db.flush()

    def delete_all(self) -> int:
        """Delete every form. Returns rows deleted (not committed)."""
        return self.db.query(Form).delete(synchronize_session=False)

    def count(self) -> int:
        return self.db.query(Form).count()
