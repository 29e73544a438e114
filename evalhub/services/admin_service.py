"""Administrative maintenance."""
import logging
from sqlalchemy.orm import Session

from evalhub.repositories.assignment_repository import AssignmentRepository
from evalhub.repositories.form_repository import FormRepository
from evalhub.repositories.notification_repository import NotificationRepository
from evalhub.repositories.response_repository import ResponseRepository
from evalhub.schemas.analytics import ClearDataResult

logger = logging.getLogger(__name__)

EVALUATION_TABLES = ["forms", "enhanced_assignments", "enhanced_responses", "notifications"]


class AdminService:
    def __init__(self, db: Session):
        self.db = db

    def clear_evaluation_data(self) -> ClearDataResult:
        """
        Delete every form, assignment, response and notification.

        Users are kept. Runs as a single transaction.
        """
        try:
            # Children first
            deleted = {
                "notifications": NotificationRepository(self.db).delete_all(),
                "enhanced_responses": ResponseRepository(self.db).delete_all(),
                "enhanced_assignments": AssignmentRepository(self.db).delete_all(),
                "forms": FormRepository(self.db).delete_all(),
            }
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for table, count in deleted.items():
            logger.info("Cleared %d rows from %s", count, table)
        total = sum(deleted.values())
        logger.warning("Cleared %d evaluation rows", total)

        return ClearDataResult(
            message=f"Cleared {total} documents from evaluation collections",
            collections=EVALUATION_TABLES,
            deleted={table: deleted[table] for table in EVALUATION_TABLES},
        )
