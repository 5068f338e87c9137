from typing import List, Optional

from sqlalchemy.orm import Session

from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.nutritionist import Nutritionist, NutritionistStatus
from feedlot.schemas.nutritionist import NutritionistInvite

logger = get_logger(module="nutritionist_service")


def invite_nutritionist(
    db: Session,
    invite_in: NutritionistInvite,
    ids: Optional[IdGenerator] = None,
) -> Nutritionist:
    # El email de invitación lo envía un colaborador externo
    with atomic(db):
        db_obj = Nutritionist(
            nutritionist_id=(ids or default_id_generator).new_id("nutritionist"),
            status=NutritionistStatus.INVITED,
            **invite_in.model_dump(),
        )
        db.add(db_obj)

    logger.info(
        "Nutricionista invitado en servicio",
        nutritionist_id=db_obj.nutritionist_id,
        operator_email=db_obj.operator_email,
    )

    return db_obj


def get_nutritionist(db: Session, nutritionist_id: str) -> Optional[Nutritionist]:
    return db.get(Nutritionist, nutritionist_id)


def list_by_operator(db: Session, operator_email: str) -> List[Nutritionist]:
    return (
        db.query(Nutritionist)
        .filter(Nutritionist.operator_email == operator_email)
        .order_by(Nutritionist.invited_at, Nutritionist.nutritionist_id)
        .all()
    )
