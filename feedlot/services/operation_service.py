from typing import Optional

from sqlalchemy.orm import Session

from feedlot.core.errors import NotFoundError, ValidationError
from feedlot.core.ids import IdGenerator, default_id_generator
from feedlot.core.logging import get_logger
from feedlot.db import atomic
from feedlot.models.operation import InviteCode, Operation
from feedlot.schemas.operation import OperationCreate, OperationUpdate

logger = get_logger(module="operation_service")


def validate_invite_code(db: Session, invite_code: str, operator_email: str) -> bool:
    code = db.get(InviteCode, invite_code)
    return code is not None and code.operator_email == operator_email


def get_operation_by_email(db: Session, operator_email: str) -> Optional[Operation]:
    return (
        db.query(Operation)
        .filter(Operation.operator_email == operator_email)
        .first()
    )


def resolve_operation_id(db: Session, operator_email: str) -> str:
    """
    Resuelve el operador (email) a su explotación. Sin explotación falla la
    escritura concreta, no el proceso.
    """
    operation = get_operation_by_email(db, operator_email)
    if not operation:
        logger.warning("Operador sin explotación", operator_email=operator_email)
        raise NotFoundError("Operation not found", operator_email=operator_email)
    return operation.operation_id


def create_operation(
    db: Session,
    operation_in: OperationCreate,
    ids: Optional[IdGenerator] = None,
) -> Operation:
    if get_operation_by_email(db, operation_in.operator_email):
        logger.warning(
            "Explotación duplicada",
            operator_email=operation_in.operator_email,
        )
        raise ValidationError("Operation with this email already exists")

    if not validate_invite_code(db, operation_in.invite_code, operation_in.operator_email):
        logger.warning(
            "Código de invitación no válido",
            operator_email=operation_in.operator_email,
        )
        raise ValidationError("Invalid invite code or email combination")

    with atomic(db):
        db_obj = Operation(
            operation_id=(ids or default_id_generator).new_id("operation"),
            **operation_in.model_dump(exclude={"invite_code"}),
        )
        db.add(db_obj)

    db.refresh(db_obj)

    logger.info(
        "Explotación creada en servicio",
        operation_id=db_obj.operation_id,
        name=db_obj.name,
    )

    return db_obj


def update_operation(
    db: Session,
    operation_id: str,
    operation_in: OperationUpdate,
) -> Operation:
    db_obj = db.get(Operation, operation_id)
    if not db_obj:
        logger.warning(
            "Intento de actualización de explotación inexistente en servicio",
            operation_id=operation_id,
        )
        raise NotFoundError("Operation not found", operation_id=operation_id)

    with atomic(db):
        update_data = operation_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)

    logger.info(
        "Explotación actualizada en servicio",
        operation_id=operation_id,
    )

    return db_obj
