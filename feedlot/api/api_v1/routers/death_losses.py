from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.death_loss import DeathLossCreate, DeathLossRead
from feedlot.services import death_loss_service, report_service

router = APIRouter(prefix="/death-losses", tags=["death losses"])
logger = get_logger(module="death_losses")


@router.get("/", response_model=List[DeathLossRead])
def list_death_losses(
    operator_email: str,
    db: Session = Depends(get_db),
):
    losses = report_service.death_losses_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando bajas",
        operator_email=operator_email,
        losses_count=len(losses),
    )
    return losses


@router.post("/", response_model=DeathLossRead, status_code=status.HTTP_201_CREATED)
def record_death_loss(
    loss_in: DeathLossCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        loss = death_loss_service.record_death_loss(db=db, loss_in=loss_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Baja rechazada", pen_id=loss_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Baja registrada",
        death_loss_id=loss.death_loss_id,
        pen_id=loss.pen_id,
        cattle_count=loss.cattle_count,
    )
    return loss
