from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.treatment import TreatmentCreate, TreatmentRead
from feedlot.services import report_service, treatment_service

router = APIRouter(prefix="/treatments", tags=["treatments"])
logger = get_logger(module="treatments")


@router.get("/", response_model=List[TreatmentRead])
def list_treatments(
    operator_email: str,
    db: Session = Depends(get_db),
):
    treatments = report_service.treatments_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando tratamientos",
        operator_email=operator_email,
        treatments_count=len(treatments),
    )
    return treatments


@router.post("/", response_model=TreatmentRead, status_code=status.HTTP_201_CREATED)
def record_treatment(
    treatment_in: TreatmentCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        treatment = treatment_service.record_treatment(db=db, treatment_in=treatment_in, ids=ids)
    except LedgerError as exc:
        logger.warning("Tratamiento rechazado", pen_id=treatment_in.pen_id, error=str(exc))
        raise to_http_exception(exc) from exc

    logger.info(
        "Tratamiento registrado",
        treatment_id=treatment.treatment_id,
        pen_id=treatment.pen_id,
    )
    return treatment
