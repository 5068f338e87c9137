from datetime import datetime, timezone
from enum import Enum
from typing import Type

from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # SQLite no guarda la zona horaria: trabajamos siempre en UTC naive
    return datetime.now(timezone.utc).replace(tzinfo=None)


def str_enum(enum_cls: Type[Enum]) -> SAEnum:
    """Columna VARCHAR que guarda el *valor* del enum ("Active"), no el nombre."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda cls: [member.value for member in cls],
    )
