from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.feeding_plan import (
    FeedingPlanCreate,
    FeedingPlanRead,
    ScheduleChangeCreate,
    ScheduleChangeRead,
)
from feedlot.services import plan_catalog, report_service

router = APIRouter(tags=["feeding plans"])
logger = get_logger(module="feeding_plans")


@router.get("/feeding-plans/", response_model=List[FeedingPlanRead])
def list_feeding_plans(
    operator_email: str,
    pen_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    plans = report_service.plans_by_operator(db=db, operator_email=operator_email)
    if pen_id is not None:
        plans = [plan for plan in plans if plan.pen_id == pen_id]

    logger.info(
        "Listando planes de alimentación",
        operator_email=operator_email,
        plans_count=len(plans),
    )
    return plans


@router.post(
    "/feeding-plans/",
    response_model=FeedingPlanRead,
    status_code=status.HTTP_201_CREATED,
)
def publish_feeding_plan(
    plan_in: FeedingPlanCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        plan = plan_catalog.publish_plan(db=db, plan_in=plan_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Plan no publicado", pen_id=plan_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Plan de alimentación creado",
        plan_id=plan.plan_id,
        pen_id=plan.pen_id,
    )
    return plan


@router.get("/schedule-changes/upcoming", response_model=List[ScheduleChangeRead])
def list_upcoming_changes(
    operator_email: str,
    horizon_days: Optional[int] = None,
    db: Session = Depends(get_db),
):
    changes = report_service.upcoming_changes(
        db=db, operator_email=operator_email, horizon_days=horizon_days
    )
    logger.info(
        "Listando próximos cambios de plan",
        operator_email=operator_email,
        changes_count=len(changes),
    )
    return changes


@router.post(
    "/schedule-changes/",
    response_model=ScheduleChangeRead,
    status_code=status.HTTP_201_CREATED,
)
def publish_schedule_change(
    change_in: ScheduleChangeCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        change = plan_catalog.publish_schedule_change(db=db, change_in=change_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Cambio de plan no publicado", pen_id=change_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Cambio de plan creado",
        change_id=change.change_id,
        pen_id=change.pen_id,
    )
    return report_service.describe_change(change, date.today())
