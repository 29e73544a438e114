"""Dashboard router."""
from typing import Annotated
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from evalhub.core.database import get_db
from evalhub.services.analytics_service import AnalyticsService
from evalhub.schemas.analytics import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(db: Annotated[Session, Depends(get_db)]):
    """Global form, user, response and assignment counters."""
    return AnalyticsService(db).dashboard_stats()
