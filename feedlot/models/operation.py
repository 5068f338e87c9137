from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class Operation(Base):
    """Explotación (cebadero) de un operador. El email identifica al operador."""

    __tablename__ = "Operations"

    operation_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    operator_email: Mapped[str] = mapped_column(String, unique=True, index=True)
    location: Mapped[str] = mapped_column(String)
    setup_date: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<Operation id={self.operation_id!r} name={self.name!r}>"


class InviteCode(Base):
    __tablename__ = "InviteCodes"

    code: Mapped[str] = mapped_column(String, primary_key=True)
    operator_email: Mapped[str] = mapped_column(String, index=True)

    def __repr__(self) -> str:
        return f"<InviteCode code={self.code!r}>"
