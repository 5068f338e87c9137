from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.nutritionist import (
    AcceptInvitationRequest,
    NutritionistInvite,
    NutritionistRead,
)
from feedlot.services import nutritionist_service, report_service

router = APIRouter(prefix="/nutritionists", tags=["nutritionists"])
logger = get_logger(module="nutritionists")


@router.get("/", response_model=List[NutritionistRead])
def list_nutritionists(
    operator_email: str,
    db: Session = Depends(get_db),
):
    nutritionists = report_service.nutritionists_by_operator(db=db, operator_email=operator_email)
    logger.info(
        "Listando nutricionistas",
        operator_email=operator_email,
        nutritionists_count=len(nutritionists),
    )
    return nutritionists


@router.post("/", response_model=NutritionistRead, status_code=status.HTTP_201_CREATED)
def invite_nutritionist(
    invite_in: NutritionistInvite,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    nutritionist = nutritionist_service.invite_nutritionist(db=db, invite_in=invite_in, ids=ids)
    logger.info(
        "Nutricionista invitado",
        nutritionist_id=nutritionist.nutritionist_id,
        operator_email=nutritionist.operator_email,
    )
    return nutritionist


@router.post("/accept", response_model=NutritionistRead)
def accept_invitation(
    accept_in: AcceptInvitationRequest,
    db: Session = Depends(get_db),
):
    try:
        nutritionist = report_service.accept_nutritionist_invitation(
            db=db,
            nutritionist_id=accept_in.nutritionist_id,
            operator_email=accept_in.operator_email,
        )
    except LedgerError as exc:
        raise to_http_exception(exc) from exc

    return nutritionist
