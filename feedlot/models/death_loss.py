from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, str_enum, utcnow


class LossReason(str, Enum):
    DISEASE = "Disease"
    INJURY = "Injury"
    WEATHER = "Weather"
    UNKNOWN = "Unknown"
    OTHER = "Other"


class DeathLoss(Base):
    __tablename__ = "DeathLosses"

    death_loss_id: Mapped[str] = mapped_column(String, primary_key=True)
    operation_id: Mapped[str] = mapped_column(String, index=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)

    loss_date: Mapped[date] = mapped_column(Date)
    reason: Mapped[LossReason] = mapped_column(str_enum(LossReason))
    cattle_count: Mapped[int] = mapped_column(Integer)
    estimated_weight: Mapped[float] = mapped_column(Float)
    tag_numbers: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    operator_email: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<DeathLoss id={self.death_loss_id!r} pen={self.pen_id!r} count={self.cattle_count!r}>"
