from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.dashboard import (
    CattleSaleActivity,
    DeathLossActivity,
    FeedingActivity,
    PartialSaleActivity,
    PenActivity,
    PenProjectionRead,
    TreatmentActivity,
)
from feedlot.schemas.death_loss import DeathLossRead
from feedlot.schemas.feeding_record import FeedingRecordRead
from feedlot.schemas.pen import (
    PenCreate,
    PenPerformance,
    PenRead,
    PenStatusUpdate,
    WeightUpdate,
)
from feedlot.schemas.sale import CattleSaleRead, PartialSaleRead
from feedlot.schemas.treatment import TreatmentRead
from feedlot.services import pen_service, report_service

router = APIRouter(prefix="/pens", tags=["pens"])
logger = get_logger(module="pens")

# kind -> (esquema de actividad, esquema del evento)
_ACTIVITY_SCHEMAS = {
    "feeding": (FeedingActivity, FeedingRecordRead),
    "death_loss": (DeathLossActivity, DeathLossRead),
    "treatment": (TreatmentActivity, TreatmentRead),
    "partial_sale": (PartialSaleActivity, PartialSaleRead),
    "cattle_sale": (CattleSaleActivity, CattleSaleRead),
}


@router.get("/", response_model=List[PenRead])
def list_pens(
    operator_email: str,
    db: Session = Depends(get_db),
):
    pens = report_service.pens_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando corrales",
        operator_email=operator_email,
        pens_count=len(pens),
    )
    return pens


@router.post("/", response_model=PenRead, status_code=status.HTTP_201_CREATED)
def create_pen(
    pen_in: PenCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        pen = pen_service.create_pen(db=db, pen_in=pen_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Corral no creado", name=pen_in.name, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Corral creado",
        pen_id=pen.pen_id,
        name=pen.name,
    )
    return pen


@router.get("/{pen_id}", response_model=PenRead)
def get_pen(
    pen_id: str,
    operator_email: str,
    db: Session = Depends(get_db),
):
    try:
        pen = pen_service.require_pen(db, pen_id, operator_email)
    except LedgerError as exc:
        raise to_http_exception(exc) from exc

    logger.info("Corral recuperado", pen_id=pen_id)
    return pen


@router.patch("/{pen_id}/weight", response_model=PenRead)
def update_pen_weight(
    pen_id: str,
    weight_in: WeightUpdate,
    db: Session = Depends(get_db),
):
    try:
        pen = pen_service.update_weight(
            db=db,
            pen_id=pen_id,
            new_weight=weight_in.new_weight,
            operator_email=weight_in.operator_email,
            record_date=weight_in.record_date,
        )
    except LedgerError as exc:
        logger.warning("Pesaje rechazado", pen_id=pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Peso de corral actualizado",
        pen_id=pen_id,
        new_weight=weight_in.new_weight,
    )
    return pen


@router.patch("/{pen_id}/status", response_model=PenRead)
def update_pen_status(
    pen_id: str,
    status_in: PenStatusUpdate,
    db: Session = Depends(get_db),
):
    try:
        pen = pen_service.set_status(
            db=db,
            pen_id=pen_id,
            status=status_in.status,
            operator_email=status_in.operator_email,
        )
    except LedgerError as exc:
        logger.warning("Cambio de estado rechazado", pen_id=pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Estado de corral actualizado",
        pen_id=pen_id,
        status=status_in.status.value,
    )
    return pen


@router.get("/{pen_id}/performance", response_model=PenPerformance)
def get_pen_performance(
    pen_id: str,
    operator_email: str,
    db: Session = Depends(get_db),
):
    try:
        return report_service.pen_performance(db, pen_id, operator_email)
    except LedgerError as exc:
        raise to_http_exception(exc) from exc


@router.get("/{pen_id}/projection", response_model=PenProjectionRead)
def get_pen_projection(
    pen_id: str,
    operator_email: str,
    avg_daily_gain: Optional[float] = None,
    db: Session = Depends(get_db),
):
    if avg_daily_gain is not None and avg_daily_gain < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Average daily gain cannot be negative",
        )

    try:
        projection = report_service.pen_projection(
            db, pen_id, operator_email, avg_daily_gain=avg_daily_gain
        )
    except LedgerError as exc:
        raise to_http_exception(exc) from exc

    logger.info(
        "Proyección de peso calculada",
        pen_id=pen_id,
        windows=len(projection["windows"]),
    )
    return projection


@router.get("/{pen_id}/activity", response_model=List[PenActivity])
def get_pen_activity(
    pen_id: str,
    operator_email: str,
    db: Session = Depends(get_db),
):
    try:
        activity = report_service.pen_activity(db, pen_id, operator_email)
    except LedgerError as exc:
        raise to_http_exception(exc) from exc

    items = []
    for entry in activity:
        activity_schema, event_schema = _ACTIVITY_SCHEMAS[entry.kind]
        items.append(
            activity_schema(
                occurred_at=entry.occurred_at,
                event=event_schema.model_validate(entry.event),
            )
        )

    logger.info(
        "Actividad de corral",
        pen_id=pen_id,
        events=len(items),
    )
    return items
