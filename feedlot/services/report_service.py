"""
Informes agregados: compone corrales, eventos del ledger y métricas en vistas
de solo lectura. La única escritura es aceptar la invitación de un nutricionista.
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from feedlot.core.config import settings
from feedlot.core.errors import NotFoundError
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.base import utcnow
from feedlot.models.cattle_sale import CattleSale
from feedlot.models.death_loss import DeathLoss
from feedlot.models.feeding_plan import ChangeType, FeedingPlan, ScheduleChange
from feedlot.models.feeding_record import FeedingRecord
from feedlot.models.nutritionist import Nutritionist, NutritionistStatus
from feedlot.models.partial_sale import PartialSale
from feedlot.models.pen import Pen
from feedlot.models.treatment import TreatmentRecord
from feedlot.services import (
    death_loss_service,
    feeding_service,
    metrics,
    nutritionist_service,
    pen_service,
    plan_catalog,
    sale_service,
    treatment_service,
)

logger = get_logger(module="report_service")

LedgerEvent = Union[FeedingRecord, DeathLoss, TreatmentRecord, PartialSale, CattleSale]


# ---------- Listados ----------

def pens_by_operator(db: Session, operator_email: str) -> List[Pen]:
    return pen_service.list_by_operator(db, operator_email)


def plans_by_operator(db: Session, operator_email: str) -> List[FeedingPlan]:
    return plan_catalog.list_plans_by_operator(db, operator_email)


def sales_by_operator(db: Session, operator_email: str) -> List[CattleSale]:
    return sale_service.list_cattle_sales_by_operator(db, operator_email)


def partial_sales_by_operator(db: Session, operator_email: str) -> List[PartialSale]:
    return sale_service.list_partial_sales_by_operator(db, operator_email)


def feeding_records_by_operator(db: Session, operator_email: str) -> List[FeedingRecord]:
    return feeding_service.list_by_operator(db, operator_email)


def death_losses_by_operator(db: Session, operator_email: str) -> List[DeathLoss]:
    return death_loss_service.list_by_operator(db, operator_email)


def treatments_by_operator(db: Session, operator_email: str) -> List[TreatmentRecord]:
    return treatment_service.list_by_operator(db, operator_email)


def nutritionists_by_operator(db: Session, operator_email: str) -> List[Nutritionist]:
    return nutritionist_service.list_by_operator(db, operator_email)


# ---------- Dashboard ----------

def dashboard_stats(db: Session, operator_email: str) -> metrics.DashboardTotals:
    return metrics.dashboard_stats(
        pens_by_operator(db, operator_email),
        plans_by_operator(db, operator_email),
    )


@dataclass(frozen=True)
class UpcomingChange:
    change_id: str
    pen_id: str
    pen_name: str
    change_type: ChangeType
    change_date: date
    days_from_now: int
    current_plan: Optional[str]
    new_plan: Optional[str]
    description: str
    operator_email: str


def describe_change(change: ScheduleChange, today: date) -> UpcomingChange:
    return UpcomingChange(
        change_id=change.change_id,
        pen_id=change.pen_id,
        pen_name=change.pen_name,
        change_type=change.change_type,
        change_date=change.change_date,
        days_from_now=metrics.days_from_now(change.change_date, today),
        current_plan=change.current_plan,
        new_plan=change.new_plan,
        description=change.description,
        operator_email=change.operator_email,
    )


def upcoming_changes(
    db: Session,
    operator_email: str,
    today: Optional[date] = None,
    horizon_days: Optional[int] = None,
) -> List[UpcomingChange]:
    today = today or date.today()
    horizon_days = settings.UPCOMING_CHANGES_HORIZON_DAYS if horizon_days is None else horizon_days

    feed = [
        describe_change(change, today)
        for change in plan_catalog.list_schedule_changes(db, operator_email)
    ]
    return metrics.upcoming_changes(feed, horizon_days)


# ---------- Corral ----------

def pen_performance(
    db: Session,
    pen_id: str,
    operator_email: str,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    pen = pen_service.require_pen(db, pen_id, operator_email)
    today = today or date.today()

    adg = metrics.history_average_daily_gain(pen.weight_history)
    starts = plan_catalog.plan_start_dates(db, pen_id)
    days_on_feed = metrics.days_on_feed(min(starts), today) if starts else None

    return {
        "pen_id": pen.pen_id,
        "current": pen.current,
        "current_weight": pen.current_weight,
        "market_weight": pen.market_weight,
        "weight_to_market": pen.weight_to_market,
        "average_daily_gain": adg,
        "days_on_feed": days_on_feed,
        "days_to_market": metrics.days_to_market(pen.current_weight, pen.market_weight, adg),
    }


def pen_projection(
    db: Session,
    pen_id: str,
    operator_email: str,
    avg_daily_gain: Optional[float] = None,
    start: Optional[date] = None,
) -> Dict[str, Any]:
    pen = pen_service.require_pen(db, pen_id, operator_email)
    plan = plan_catalog.current_plan_for_pen(db, pen_id)
    adg = settings.DEFAULT_AVG_DAILY_GAIN if avg_daily_gain is None else avg_daily_gain

    windows = metrics.weight_projection(
        pen,
        plan,
        adg,
        start=start,
        window_days=settings.PROJECTION_WINDOW_DAYS,
    )
    final_weight = windows[-1].projected_end_weight if windows else pen.current_weight

    return {
        "pen_id": pen.pen_id,
        "avg_daily_gain": adg,
        "market_weight": pen.market_weight,
        "final_projected_weight": final_weight,
        "windows": windows,
    }


def feeding_variance(db: Session, feeding_record_id: str, operator_email: str) -> Dict[str, Any]:
    record = feeding_service.get_feeding_record(db, feeding_record_id, operator_email)
    tolerance = settings.VARIANCE_TOLERANCE_PCT

    ingredients = []
    for item in record.actual_ingredients or []:
        indicator = metrics.variance_indicator(item["planned_amount"], item["actual_amount"], tolerance)
        ingredients.append(
            {
                "name": item["name"],
                "planned_amount": item["planned_amount"],
                "actual_amount": item["actual_amount"],
                "unit": item["unit"],
                "ratio": indicator.ratio,
                "percent": indicator.percent,
                "status": indicator.status,
                "label": indicator.label,
            }
        )

    total = metrics.variance_indicator(record.planned_amount, record.actual_amount, tolerance)

    return {
        "feeding_record_id": record.feeding_record_id,
        "planned_amount": record.planned_amount,
        "actual_amount": record.actual_amount,
        "total": {
            "name": "Total",
            "planned_amount": record.planned_amount,
            "actual_amount": record.actual_amount,
            "unit": record.unit,
            "ratio": total.ratio,
            "percent": total.percent,
            "status": total.status,
            "label": total.label,
        },
        "ingredients": ingredients,
    }


@dataclass(frozen=True)
class ActivityEntry:
    kind: str
    occurred_at: datetime
    event: LedgerEvent


def _to_activity(event: LedgerEvent) -> ActivityEntry:
    if isinstance(event, FeedingRecord):
        return ActivityEntry("feeding", event.feeding_time, event)
    if isinstance(event, DeathLoss):
        return ActivityEntry("death_loss", event.created_at, event)
    if isinstance(event, TreatmentRecord):
        return ActivityEntry("treatment", event.created_at, event)
    if isinstance(event, PartialSale):
        return ActivityEntry("partial_sale", event.created_at, event)
    if isinstance(event, CattleSale):
        return ActivityEntry("cattle_sale", event.created_at, event)
    raise TypeError(f"Unknown ledger event: {type(event).__name__}")


def pen_activity(db: Session, pen_id: str, operator_email: str) -> List[ActivityEntry]:
    """Todos los eventos del corral, el más reciente primero."""
    pen = pen_service.require_pen(db, pen_id, operator_email)

    events: List[LedgerEvent] = [
        *feeding_service.list_for_pen(db, pen.pen_id),
        *death_loss_service.list_for_pen(db, pen.pen_id),
        *treatment_service.list_for_pen(db, pen.pen_id),
        *sale_service.list_partial_sales_for_pen(db, pen.pen_id),
        *sale_service.list_cattle_sales_for_pen(db, pen.pen_id),
    ]
    activity = [_to_activity(event) for event in events]
    activity.sort(key=lambda entry: entry.occurred_at, reverse=True)
    return activity


# ---------- Nutricionistas ----------

def accept_nutritionist_invitation(
    db: Session,
    nutritionist_id: str,
    operator_email: str,
) -> Nutritionist:
    with atomic(db):
        nutritionist = nutritionist_service.get_nutritionist(db, nutritionist_id)
        if not nutritionist or nutritionist.operator_email != operator_email:
            logger.warning(
                "Invitación de nutricionista no encontrada o de otro operador",
                nutritionist_id=nutritionist_id,
                operator_email=operator_email,
            )
            raise NotFoundError(
                "Nutritionist invitation not found or access denied",
                nutritionist_id=nutritionist_id,
            )

        # Ya aceptada: devolvemos el estado actual sin tocar nada
        if nutritionist.status != NutritionistStatus.INVITED:
            return nutritionist

        nutritionist.status = NutritionistStatus.ACTIVE
        nutritionist.accepted_at = utcnow()

    logger.info(
        "Invitación de nutricionista aceptada",
        nutritionist_id=nutritionist_id,
        operator_email=operator_email,
    )

    return nutritionist
