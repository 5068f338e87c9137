from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.dashboard import DashboardStats
from feedlot.services import report_service

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
logger = get_logger(module="dashboard")


@router.get("/", response_model=DashboardStats)
def get_dashboard(
    operator_email: str,
    db: Session = Depends(get_db),
):
    totals = report_service.dashboard_stats(db=db, operator_email=operator_email)
    logger.info(
        "Resumen del dashboard",
        operator_email=operator_email,
        total_pens=totals.total_pens,
        total_cattle=totals.total_cattle,
    )
    return totals
