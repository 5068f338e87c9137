from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.feeding_record import (
    FeedingRecordCreate,
    FeedingRecordRead,
    FeedingVarianceRead,
)
from feedlot.services import feeding_service, report_service

router = APIRouter(prefix="/feeding-records", tags=["feeding records"])
logger = get_logger(module="feeding_records")


@router.get("/", response_model=List[FeedingRecordRead])
def list_feeding_records(
    operator_email: str,
    db: Session = Depends(get_db),
):
    records = report_service.feeding_records_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando tomas de pienso",
        operator_email=operator_email,
        records_count=len(records),
    )
    return records


@router.post("/", response_model=FeedingRecordRead, status_code=status.HTTP_201_CREATED)
def record_feeding(
    feeding_in: FeedingRecordCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        record = feeding_service.record_feeding(db=db, feeding_in=feeding_in, ids=ids)
    except LedgerError as exc:
        logger.warning(
            "Toma de pienso rechazada",
            pen_id=feeding_in.pen_id,
            schedule_id=feeding_in.schedule_id,
            error=str(exc),
        )
        raise to_http_exception(exc) from exc

    logger.info(
        "Toma de pienso registrada",
        feeding_record_id=record.feeding_record_id,
        pen_id=record.pen_id,
    )
    return record


@router.get("/{feeding_record_id}/variance", response_model=FeedingVarianceRead)
def get_feeding_variance(
    feeding_record_id: str,
    operator_email: str,
    db: Session = Depends(get_db),
):
    try:
        return report_service.feeding_variance(db, feeding_record_id, operator_email)
    except LedgerError as exc:
        raise to_http_exception(exc) from exc
