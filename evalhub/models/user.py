"""User model."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from evalhub.core.database import Base


class User(Base):
    """Directory entry for a person who can create forms or be evaluated."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=False, default="")
    job_title = Column(String, nullable=False, default="")
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    created_forms = relationship("Form", back_populates="creator")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, department={self.department})>"
