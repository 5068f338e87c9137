from typing import List, Optional

from sqlalchemy.orm import Session

from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.treatment import TreatmentRecord
from feedlot.schemas.treatment import TreatmentCreate
from feedlot.services import operation_service, pen_service

logger = get_logger(module="treatment_service")


def record_treatment(
    db: Session,
    treatment_in: TreatmentCreate,
    ids: Optional[IdGenerator] = None,
) -> TreatmentRecord:
    # Solo se anota: un tratamiento no cambia las cabezas del corral
    with atomic(db):
        pen = pen_service.require_pen(db, treatment_in.pen_id, treatment_in.operator_email)
        operation_id = operation_service.resolve_operation_id(db, treatment_in.operator_email)

        db_obj = TreatmentRecord(
            treatment_id=(ids or default_id_generator).new_id("treatment"),
            operation_id=operation_id,
            **treatment_in.model_dump(),
        )
        db.add(db_obj)

    logger.info(
        "Tratamiento registrado en servicio",
        treatment_id=db_obj.treatment_id,
        pen_id=pen.pen_id,
        treatment_type=db_obj.treatment_type.value,
        cattle_count=db_obj.cattle_count,
    )

    return db_obj


def list_by_operator(db: Session, operator_email: str) -> List[TreatmentRecord]:
    return (
        db.query(TreatmentRecord)
        .filter(TreatmentRecord.operator_email == operator_email)
        .order_by(TreatmentRecord.created_at, TreatmentRecord.treatment_id)
        .all()
    )


def list_for_pen(db: Session, pen_id: str) -> List[TreatmentRecord]:
    return (
        db.query(TreatmentRecord)
        .filter(TreatmentRecord.pen_id == pen_id)
        .order_by(TreatmentRecord.created_at, TreatmentRecord.treatment_id)
        .all()
    )
