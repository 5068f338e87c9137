from datetime import date
from enum import Enum
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from feedlot.core.errors import InvariantViolation, NotFoundError, ValidationError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.nutritionist import Nutritionist
from feedlot.models.pen import Pen, PenStatus, WeightRecord
from feedlot.schemas.pen import PenCreate

logger = get_logger(module="pen_service")


class HeadcountCause(str, Enum):
    DEATH = "death"
    PARTIAL_SALE = "partial sale"
    FULL_SALE = "full sale"


def create_pen(
    db: Session,
    pen_in: PenCreate,
    ids: Optional[IdGenerator] = None,
    today: Optional[date] = None,
) -> Pen:
    if pen_in.current > pen_in.capacity:
        logger.warning(
            "Corral rechazado: más cabezas que capacidad",
            current=pen_in.current,
            capacity=pen_in.capacity,
        )
        raise ValidationError(
            "Current cattle count cannot exceed pen capacity",
            current=pen_in.current,
            capacity=pen_in.capacity,
        )

    if pen_in.market_weight <= pen_in.starting_weight:
        logger.warning(
            "Corral rechazado: peso de mercado no supera el inicial",
            starting_weight=pen_in.starting_weight,
            market_weight=pen_in.market_weight,
        )
        raise ValidationError("Market weight must be greater than starting weight")

    with atomic(db):
        if pen_in.nutritionist_id:
            nutritionist = (
                db.query(Nutritionist)
                .filter(
                    Nutritionist.nutritionist_id == pen_in.nutritionist_id,
                    Nutritionist.operator_email == pen_in.operator_email,
                )
                .first()
            )
            if not nutritionist:
                raise NotFoundError("Nutritionist not found", nutritionist_id=pen_in.nutritionist_id)

        db_obj = Pen(
            pen_id=(ids or default_id_generator).new_id("pen"),
            status=PenStatus.ACTIVE,
            current_weight=pen_in.starting_weight,
            average_daily_gain=0.0,
            **pen_in.model_dump(),
        )
        # Pesaje semilla: el historial nunca está vacío
        db_obj.weight_history.append(
            WeightRecord(
                record_date=today or date.today(),
                weight=pen_in.starting_weight,
                recorded_by=pen_in.operator_email,
            )
        )
        db.add(db_obj)

    db.refresh(db_obj)

    logger.info(
        "Corral creado en servicio",
        pen_id=db_obj.pen_id,
        name=db_obj.name,
        current=db_obj.current,
        capacity=db_obj.capacity,
    )

    return db_obj


def get_pen(db: Session, pen_id: str) -> Optional[Pen]:
    return db.query(Pen).filter(Pen.pen_id == pen_id).first()


def require_pen(
    db: Session,
    pen_id: str,
    operator_email: str,
    *,
    for_update: bool = False,
) -> Pen:
    """
    Corral del operador o NotFoundError. Un corral de otro operador se trata
    como inexistente.

    Con for_update bloqueamos la fila hasta el commit donde el motor lo
    soporta; en SQLite la versión del corral (Pen.version_id) detecta al
    segundo escritor.
    """
    query = db.query(Pen).filter(Pen.pen_id == pen_id)
    if for_update:
        query = query.with_for_update()
    pen = query.first()

    if not pen or pen.operator_email != operator_email:
        logger.warning(
            "Corral no encontrado o de otro operador",
            pen_id=pen_id,
            operator_email=operator_email,
        )
        raise NotFoundError("Pen not found or access denied", pen_id=pen_id)

    return pen


def list_by_operator(db: Session, operator_email: str) -> List[Pen]:
    return (
        db.query(Pen)
        .filter(Pen.operator_email == operator_email)
        .order_by(Pen.created_at, Pen.pen_id)
        .all()
    )


def update_weight(
    db: Session,
    pen_id: str,
    new_weight: float,
    operator_email: str,
    record_date: Optional[date] = None,
) -> Pen:
    with atomic(db):
        pen = require_pen(db, pen_id, operator_email, for_update=True)

        if new_weight <= pen.starting_weight:
            logger.warning(
                "Pesaje rechazado: no supera el peso inicial",
                pen_id=pen_id,
                new_weight=new_weight,
                starting_weight=pen.starting_weight,
            )
            raise InvariantViolation(
                "Current weight must be greater than starting weight",
                pen_id=pen_id,
            )

        record_date = record_date or date.today()
        last = pen.last_weight_record
        if last is not None and record_date < last.record_date:
            raise ValidationError(
                "Weight record date cannot precede the last recorded date",
                pen_id=pen_id,
                last_record_date=last.record_date.isoformat(),
            )

        pen.weight_history.append(
            WeightRecord(
                record_date=record_date,
                weight=new_weight,
                recorded_by=operator_email,
            )
        )
        # La GMD cacheada no se recalcula aquí: ver metrics.
        # flag_modified fuerza el UPDATE versionado aunque el peso se repita
        pen.current_weight = new_weight
        flag_modified(pen, "current_weight")

    logger.info(
        "Peso de corral actualizado en servicio",
        pen_id=pen_id,
        new_weight=new_weight,
        records=len(pen.weight_history),
    )

    return pen


def apply_headcount_delta(
    db: Session,
    pen_id: str,
    delta: int,
    cause: HeadcountCause,
) -> Pen:
    """
    Aplica la variación de cabezas de un evento. No hace commit: la llama el
    servicio del evento dentro de su propia transacción.

    Una venta total deja el corral a 0 e Inactive sea cual sea delta.
    """
    pen = db.get(Pen, pen_id)
    if pen is None:
        raise NotFoundError("Pen not found", pen_id=pen_id)

    if cause == HeadcountCause.FULL_SALE:
        pen.current = 0
        pen.status = PenStatus.INACTIVE
        return pen

    new_current = pen.current + delta
    if new_current < 0:
        raise InvariantViolation(
            "Head count cannot go below zero",
            pen_id=pen_id,
            current=pen.current,
            delta=delta,
        )
    if new_current > pen.capacity:
        raise InvariantViolation(
            "Head count cannot exceed pen capacity",
            pen_id=pen_id,
            current=pen.current,
            delta=delta,
        )

    pen.current = new_current
    return pen


def set_status(
    db: Session,
    pen_id: str,
    status: PenStatus,
    operator_email: str,
) -> Pen:
    """Active <-> Maintenance. Inactive solo se alcanza con una venta total y no tiene vuelta."""
    with atomic(db):
        pen = require_pen(db, pen_id, operator_email, for_update=True)

        if pen.status == PenStatus.INACTIVE or status == PenStatus.INACTIVE:
            raise InvariantViolation(
                "Inactive status is only reached through a full sale and cannot be left",
                pen_id=pen_id,
                status=pen.status.value,
            )

        pen.status = status

    logger.info(
        "Estado de corral actualizado en servicio",
        pen_id=pen_id,
        status=status.value,
    )

    return pen
