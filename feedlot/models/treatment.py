from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, str_enum, utcnow


class TreatmentType(str, Enum):
    VACCINATION = "Vaccination"
    ANTIBIOTIC = "Antibiotic"
    DEWORMING = "Deworming"
    VITAMIN = "Vitamin"
    OTHER = "Other"


class TreatmentRecord(Base):
    __tablename__ = "Treatments"

    treatment_id: Mapped[str] = mapped_column(String, primary_key=True)
    operation_id: Mapped[str] = mapped_column(String, index=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)

    treatment_date: Mapped[date] = mapped_column(Date)
    treatment_type: Mapped[TreatmentType] = mapped_column(str_enum(TreatmentType))
    product: Mapped[str] = mapped_column(String)
    dosage: Mapped[str] = mapped_column(String)
    cattle_count: Mapped[int] = mapped_column(Integer)
    treated_by: Mapped[str] = mapped_column(String)
    tag_numbers: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    operator_email: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<TreatmentRecord id={self.treatment_id!r} type={self.treatment_type!r}>"
