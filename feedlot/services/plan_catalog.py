"""
Catálogo de planes de alimentación.

Los planes los publica un planificador externo; el ledger los lee para
validar las tomas de pienso y para calcular días de cebo y proyecciones.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from feedlot.core.errors import NotFoundError, ScheduleNotFound, ValidationError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.feeding_plan import (
    FeedingPlan,
    FeedingSchedule,
    PlanStatus,
    ScheduleChange,
)
from feedlot.models.pen import Pen
from feedlot.schemas.feeding_plan import FeedingPlanCreate, ScheduleChangeCreate

logger = get_logger(module="plan_catalog")


def publish_plan(
    db: Session,
    plan_in: FeedingPlanCreate,
    ids: Optional[IdGenerator] = None,
) -> FeedingPlan:
    ids = ids or default_id_generator

    with atomic(db):
        pen = db.get(Pen, plan_in.pen_id)
        if not pen or pen.operator_email != plan_in.operator_email:
            raise NotFoundError("Pen not found or access denied", pen_id=plan_in.pen_id)

        if plan_in.plan_id and db.get(FeedingPlan, plan_in.plan_id):
            raise ValidationError("Feeding plan already exists", plan_id=plan_in.plan_id)

        plan = FeedingPlan(
            plan_id=plan_in.plan_id or ids.new_id("plan"),
            pen_name=pen.name,
            **plan_in.model_dump(exclude={"plan_id", "schedules"}),
        )
        for position, schedule_in in enumerate(plan_in.schedules):
            data = schedule_in.model_dump(mode="json", exclude={"schedule_id"})
            plan.schedules.append(
                FeedingSchedule(
                    schedule_id=schedule_in.schedule_id or ids.new_id("schedule"),
                    position=position,
                    **data,
                )
            )
        db.add(plan)

    db.refresh(plan)

    logger.info(
        "Plan de alimentación publicado",
        plan_id=plan.plan_id,
        pen_id=plan.pen_id,
        schedules=len(plan.schedules),
    )

    return plan


def list_plans_by_operator(db: Session, operator_email: str) -> List[FeedingPlan]:
    return (
        db.query(FeedingPlan)
        .filter(FeedingPlan.operator_email == operator_email)
        .order_by(FeedingPlan.start_date, FeedingPlan.plan_id)
        .all()
    )


def list_plans_for_pen(db: Session, pen_id: str) -> List[FeedingPlan]:
    return (
        db.query(FeedingPlan)
        .filter(FeedingPlan.pen_id == pen_id)
        .order_by(FeedingPlan.start_date, FeedingPlan.plan_id)
        .all()
    )


def current_plan_for_pen(db: Session, pen_id: str) -> Optional[FeedingPlan]:
    """El plan activo del corral; si no hay, el más antiguo."""
    plans = list_plans_for_pen(db, pen_id)
    for plan in plans:
        if plan.status == PlanStatus.ACTIVE:
            return plan
    return plans[0] if plans else None


def plan_start_dates(db: Session, pen_id: str) -> List[date]:
    return [plan.start_date for plan in list_plans_for_pen(db, pen_id)]


def get_schedule(
    db: Session,
    pen_id: str,
    schedule_id: str,
    operator_email: str,
) -> FeedingSchedule:
    schedule = (
        db.query(FeedingSchedule)
        .join(FeedingPlan, FeedingSchedule.plan_id == FeedingPlan.plan_id)
        .filter(
            FeedingSchedule.schedule_id == schedule_id,
            FeedingPlan.pen_id == pen_id,
            FeedingPlan.operator_email == operator_email,
        )
        .first()
    )
    if not schedule:
        logger.warning(
            "Horario no encontrado para el corral",
            pen_id=pen_id,
            schedule_id=schedule_id,
        )
        raise ScheduleNotFound(
            "Feeding schedule not found for pen",
            pen_id=pen_id,
            schedule_id=schedule_id,
        )
    return schedule


def publish_schedule_change(
    db: Session,
    change_in: ScheduleChangeCreate,
    ids: Optional[IdGenerator] = None,
) -> ScheduleChange:
    with atomic(db):
        pen = db.get(Pen, change_in.pen_id)
        if not pen or pen.operator_email != change_in.operator_email:
            raise NotFoundError("Pen not found or access denied", pen_id=change_in.pen_id)

        change = ScheduleChange(
            change_id=(ids or default_id_generator).new_id("schedule_change"),
            pen_name=pen.name,
            **change_in.model_dump(),
        )
        db.add(change)

    logger.info(
        "Cambio de plan publicado",
        change_id=change.change_id,
        pen_id=change.pen_id,
        change_type=change.change_type.value,
    )

    return change


def list_schedule_changes(db: Session, operator_email: str) -> List[ScheduleChange]:
    return (
        db.query(ScheduleChange)
        .filter(ScheduleChange.operator_email == operator_email)
        .order_by(ScheduleChange.change_date, ScheduleChange.change_id)
        .all()
    )
