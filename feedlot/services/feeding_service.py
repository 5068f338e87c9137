from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from feedlot.core.errors import NotFoundError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.base import utcnow
from feedlot.models.feeding_plan import FeedingSchedule
from feedlot.models.feeding_record import FeedingRecord
from feedlot.schemas.feeding_record import ActualIngredientIn, FeedingRecordCreate
from feedlot.services import operation_service, pen_service, plan_catalog

logger = get_logger(module="feeding_service")

UNPLANNED_CATEGORY = "Unplanned"


def _merge_ingredients(
    schedule: FeedingSchedule,
    actual_ingredients: List[ActualIngredientIn],
) -> List[Dict[str, Any]]:
    """
    Cruza las cantidades reales con las previstas del horario por nombre.
    Un ingrediente que el horario no lleva queda con previsto = 0.
    """
    merged = []
    for item in actual_ingredients:
        planned = schedule.planned_amount_for(item.name) or {}
        merged.append(
            {
                "name": item.name,
                "planned_amount": float(planned.get("amount", 0.0)),
                "actual_amount": item.actual_amount,
                "unit": item.unit or planned.get("unit") or schedule.unit,
                "category": item.category or planned.get("category") or UNPLANNED_CATEGORY,
            }
        )
    return merged


def record_feeding(
    db: Session,
    feeding_in: FeedingRecordCreate,
    ids: Optional[IdGenerator] = None,
) -> FeedingRecord:
    with atomic(db):
        pen = pen_service.require_pen(
            db, feeding_in.pen_id, feeding_in.operator_email, for_update=True
        )
        schedule = plan_catalog.get_schedule(
            db, feeding_in.pen_id, feeding_in.schedule_id, feeding_in.operator_email
        )
        operation_id = operation_service.resolve_operation_id(db, feeding_in.operator_email)

        now = utcnow()
        db_obj = FeedingRecord(
            feeding_record_id=(ids or default_id_generator).new_id("feeding_record"),
            operation_id=operation_id,
            pen_id=pen.pen_id,
            schedule_id=schedule.schedule_id,
            planned_amount=schedule.total_amount,
            unit=schedule.unit,
            actual_ingredients=_merge_ingredients(schedule, feeding_in.actual_ingredients),
            feeding_time=now,
            operator_email=feeding_in.operator_email,
            created_at=now,
        )
        db.add(db_obj)

        # La toma solo toca la marca de última comida, nunca el peso
        pen.last_fed = now

    logger.info(
        "Toma de pienso registrada en servicio",
        feeding_record_id=db_obj.feeding_record_id,
        pen_id=db_obj.pen_id,
        schedule_id=db_obj.schedule_id,
        planned_amount=db_obj.planned_amount,
        actual_amount=db_obj.actual_amount,
    )

    return db_obj


def get_feeding_record(db: Session, feeding_record_id: str, operator_email: str) -> FeedingRecord:
    record = db.get(FeedingRecord, feeding_record_id)
    if not record or record.operator_email != operator_email:
        raise NotFoundError("Feeding record not found", feeding_record_id=feeding_record_id)
    return record


def list_by_operator(db: Session, operator_email: str) -> List[FeedingRecord]:
    return (
        db.query(FeedingRecord)
        .filter(FeedingRecord.operator_email == operator_email)
        .order_by(FeedingRecord.feeding_time, FeedingRecord.feeding_record_id)
        .all()
    )


def list_for_pen(db: Session, pen_id: str) -> List[FeedingRecord]:
    return (
        db.query(FeedingRecord)
        .filter(FeedingRecord.pen_id == pen_id)
        .order_by(FeedingRecord.feeding_time, FeedingRecord.feeding_record_id)
        .all()
    )
