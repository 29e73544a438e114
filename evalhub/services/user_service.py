"""User directory service."""
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from evalhub.core.config import settings
from evalhub.core.security import get_password_hash
from evalhub.repositories.user_repository import UserRepository
from evalhub.models.user import User

logger = logging.getLogger(__name__)

# (name, email, department, job title)
DEFAULT_ROSTER = [
    ("Alex Johnson", "alex.johnson@company.com", "Product", "Product Manager"),
    ("Sarah Chen", "sarah.chen@company.com", "Product", "Senior Designer"),
    ("Mike Rodriguez", "mike.rodriguez@company.com", "Product", "Product Analyst"),
    ("Emily Davis", "emily.davis@company.com", "Engineering", "Tech Lead"),
    ("James Wilson", "james.wilson@company.com", "Engineering", "Senior Developer"),
    ("Lisa Thompson", "lisa.thompson@company.com", "Engineering", "Frontend Developer"),
    ("David Park", "david.park@company.com", "Marketing", "Marketing Director"),
    ("Maria Garcia", "maria.garcia@company.com", "Marketing", "Content Manager"),
    ("Kevin Zhang", "kevin.zhang@company.com", "Marketing", "Digital Marketer"),
    ("Rachel Green", "rachel.green@company.com", "Sales", "Sales Director"),
    ("Tom Anderson", "tom.anderson@company.com", "Sales", "Account Manager"),
    ("Sophie Taylor", "sophie.taylor@company.com", "Sales", "Sales Representative"),
    ("Jessica Brown", "jessica.brown@company.com", "HR", "HR Director"),
    ("Robert Kim", "robert.kim@company.com", "HR", "HR Business Partner"),
    ("Olivia Lee", "olivia.lee@company.com", "HR", "Recruiter"),
    ("Michael Brown", "michael.brown@company.com", "Finance", "Finance Manager"),
    ("Jennifer White", "jennifer.white@company.com", "Finance", "Financial Analyst"),
    ("Chris Miller", "chris.miller@company.com", "Finance", "Accountant"),
    ("Amanda Wilson", "amanda.wilson@company.com", "Operations", "Operations Manager"),
    ("Daniel Lee", "daniel.lee@company.com", "Operations", "Project Manager"),
    ("Maya Patel", "maya.patel@company.com", "Operations", "Operations Coordinator"),
]


class UserService:
    """User business logic."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def seed_directory(self, password: Optional[str] = None) -> int:
        """
        Insert the default roster when the directory is empty.

        Returns:
            Number of users created (0 if any user already exists)
        """
        existing = self.user_repo.count()
        if existing:
            logger.info("Found %d existing users, skipping seed", existing)
            return 0

        # Shared hash for the whole roster
        hashed_password = get_password_hash(password or settings.DEFAULT_USER_PASSWORD)
        users = [
            User(
                name=name,
                email=email,
                department=department,
                job_title=job_title,
                hashed_password=hashed_password,
            )
            for name, email, department, job_title in DEFAULT_ROSTER
        ]
        created = self.user_repo.bulk_create(users)
        logger.info("Created %d directory users", created)
        return created

    def get_users(self) -> List[User]:
        """Get every user in the directory."""
        return self.user_repo.get_all()

    def get_user(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises:
            HTTPException: If user not found
        """
        user = self.user_repo.get_by_id(user_id)

        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )

        return user
