from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, str_enum, utcnow


class PenStatus(str, Enum):
    ACTIVE = "Active"
    MAINTENANCE = "Maintenance"
    INACTIVE = "Inactive"


class CattleType(str, Enum):
    STEERS = "Steers"
    HEIFERS = "Heifers"
    MIXED = "Mixed"


class Pen(Base):
    __tablename__ = "Pens"

    pen_id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    operator_email: Mapped[str] = mapped_column(String, index=True)
    nutritionist_id: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # Cabezas
    capacity: Mapped[int] = mapped_column(Integer)
    current: Mapped[int] = mapped_column(Integer)
    status: Mapped[PenStatus] = mapped_column(str_enum(PenStatus), default=PenStatus.ACTIVE)

    cattle_type: Mapped[CattleType] = mapped_column(str_enum(CattleType))
    is_crossbred: Mapped[bool] = mapped_column(Boolean, default=False)
    feed_type: Mapped[str] = mapped_column(String)

    # Pesos (lbs por cabeza)
    starting_weight: Mapped[float] = mapped_column(Float)
    current_weight: Mapped[float] = mapped_column(Float)
    market_weight: Mapped[float] = mapped_column(Float)
    average_daily_gain: Mapped[float] = mapped_column(Float, default=0.0)  # caché, ver metrics

    last_fed: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    # Bloqueo optimista: todo UPDATE exige la versión leída (SQLite ignora FOR UPDATE)
    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    weight_history: Mapped[List["WeightRecord"]] = relationship(
        back_populates="pen",
        order_by="WeightRecord.weight_record_id",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Pen id={self.pen_id!r} name={self.name!r} current={self.current!r}>"

    @property
    def is_sold(self) -> bool:
        return self.status == PenStatus.INACTIVE

    @property
    def weight_to_market(self) -> float:
        return max(self.market_weight - self.current_weight, 0.0)

    @property
    def last_weight_record(self) -> Optional["WeightRecord"]:
        return self.weight_history[-1] if self.weight_history else None


class WeightRecord(Base):
    __tablename__ = "WeightRecords"

    # El orden de inserción es el orden del historial
    weight_record_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)
    record_date: Mapped[date] = mapped_column(Date)
    weight: Mapped[float] = mapped_column(Float)
    recorded_by: Mapped[str] = mapped_column(String)

    pen: Mapped[Pen] = relationship(back_populates="weight_history")

    def __repr__(self) -> str:
        return f"<WeightRecord pen={self.pen_id!r} date={self.record_date!r} weight={self.weight!r}>"
