from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, str_enum, utcnow
from .pen import CattleType


class CattleSale(Base):
    """Venta final de un corral. Guarda una foto del corral en el momento de la venta."""

    __tablename__ = "CattleSales"

    sale_id: Mapped[str] = mapped_column(String, primary_key=True)
    operation_id: Mapped[str] = mapped_column(String, index=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)

    sale_date: Mapped[date] = mapped_column(Date)
    final_weight: Mapped[float] = mapped_column(Float)
    price_per_cwt: Mapped[float] = mapped_column(Float)

    # Foto del corral
    pen_name: Mapped[str] = mapped_column(String)
    cattle_type: Mapped[CattleType] = mapped_column(str_enum(CattleType))
    starting_weight: Mapped[float] = mapped_column(Float)
    cattle_count: Mapped[int] = mapped_column(Integer)

    # Derivados al crear la venta
    total_revenue: Mapped[float] = mapped_column(Float)
    days_on_feed: Mapped[int] = mapped_column(Integer)
    average_daily_gain: Mapped[float] = mapped_column(Float)

    operator_email: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<CattleSale id={self.sale_id!r} pen={self.pen_id!r} revenue={self.total_revenue!r}>"
