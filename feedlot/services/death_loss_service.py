from typing import List, Optional

from sqlalchemy.orm import Session

from feedlot.core.errors import ValidationError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.death_loss import DeathLoss
from feedlot.schemas.death_loss import DeathLossCreate
from feedlot.services import operation_service, pen_service
from feedlot.services.pen_service import HeadcountCause

logger = get_logger(module="death_loss_service")


def record_death_loss(
    db: Session,
    loss_in: DeathLossCreate,
    ids: Optional[IdGenerator] = None,
) -> DeathLoss:
    with atomic(db):
        pen = pen_service.require_pen(db, loss_in.pen_id, loss_in.operator_email, for_update=True)

        if loss_in.cattle_count < 1 or loss_in.cattle_count > pen.current:
            logger.warning(
                "Baja rechazada: cabezas fuera de rango",
                pen_id=pen.pen_id,
                cattle_count=loss_in.cattle_count,
                current=pen.current,
            )
            raise ValidationError(
                "Death loss count must be between 1 and the pen's current head count",
                cattle_count=loss_in.cattle_count,
                current=pen.current,
            )

        operation_id = operation_service.resolve_operation_id(db, loss_in.operator_email)

        db_obj = DeathLoss(
            death_loss_id=(ids or default_id_generator).new_id("death_loss"),
            operation_id=operation_id,
            **loss_in.model_dump(),
        )
        db.add(db_obj)
        pen_service.apply_headcount_delta(db, pen.pen_id, -loss_in.cattle_count, HeadcountCause.DEATH)

    logger.info(
        "Baja registrada en servicio",
        death_loss_id=db_obj.death_loss_id,
        pen_id=db_obj.pen_id,
        cattle_count=db_obj.cattle_count,
        reason=db_obj.reason.value,
        remaining=pen.current,
    )

    return db_obj


def list_by_operator(db: Session, operator_email: str) -> List[DeathLoss]:
    return (
        db.query(DeathLoss)
        .filter(DeathLoss.operator_email == operator_email)
        .order_by(DeathLoss.created_at, DeathLoss.death_loss_id)
        .all()
    )


def list_for_pen(db: Session, pen_id: str) -> List[DeathLoss]:
    return (
        db.query(DeathLoss)
        .filter(DeathLoss.pen_id == pen_id)
        .order_by(DeathLoss.created_at, DeathLoss.death_loss_id)
        .all()
    )
