from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class FeedingRecord(Base):
    __tablename__ = "FeedingRecords"

    feeding_record_id: Mapped[str] = mapped_column(String, primary_key=True)
    operation_id: Mapped[str] = mapped_column(String, index=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)
    schedule_id: Mapped[str] = mapped_column(String)

    # Copiado del horario en el momento del registro
    planned_amount: Mapped[float] = mapped_column(Float)
    unit: Mapped[str] = mapped_column(String)

    # [{name, planned_amount, actual_amount, unit, category}, ...] en orden
    actual_ingredients: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)

    feeding_time: Mapped[datetime] = mapped_column(DateTime)
    operator_email: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<FeedingRecord id={self.feeding_record_id!r} pen={self.pen_id!r}>"

    @property
    def actual_amount(self) -> float:
        return sum(float(i.get("actual_amount") or 0) for i in self.actual_ingredients or [])
