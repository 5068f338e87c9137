from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from feedlot.api.deps import get_id_generator, to_http_exception
from feedlot.core.errors import LedgerError
from feedlot.core.ids import IdGenerator
from feedlot.core.logging import get_logger
from feedlot.db import get_db
from feedlot.schemas.operation import OperationCreate, OperationRead, OperationUpdate
from feedlot.services import operation_service

router = APIRouter(prefix="/operations", tags=["operations"])
logger = get_logger(module="operations")


@router.get("/", response_model=OperationRead)
def get_operation(
    operator_email: str,
    db: Session = Depends(get_db),
):
    operation = operation_service.get_operation_by_email(db=db, operator_email=operator_email)
    if not operation:
        logger.warning("Explotación no encontrada", operator_email=operator_email)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Operation not found",
        )

    logger.info(
        "Explotación recuperada",
        operation_id=operation.operation_id,
    )
    return operation


@router.post("/", response_model=OperationRead, status_code=status.HTTP_201_CREATED)
def create_operation(
    operation_in: OperationCreate,
    db: Session = Depends(get_db),
    ids: IdGenerator = Depends(get_id_generator),
):
    try:
        operation = operation_service.create_operation(db=db, operation_in=operation_in, ids=ids)
    except LedgerError as exc:
        logger.warning(
            "Explotación no creada",
            operator_email=operation_in.operator_email,
            error=str(exc),
        )
        raise to_http_exception(exc) from exc

    logger.info(
        "Explotación creada",
        operation_id=operation.operation_id,
        name=operation.name,
    )
    return operation


@router.patch("/{operation_id}", response_model=OperationRead)
def update_operation(
    operation_id: str,
    operation_in: OperationUpdate,
    db: Session = Depends(get_db),
):
    try:
        operation = operation_service.update_operation(
            db=db, operation_id=operation_id, operation_in=operation_in
        )
    except LedgerError as exc:
        logger.warning(
            "Intento de actualización de explotación inexistente",
            operation_id=operation_id,
        )
        raise to_http_exception(exc) from exc

    logger.info(
        "Explotación actualizada",
        operation_id=operation_id,
    )
    return operation
