from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class PartialSale(Base):
    __tablename__ = "PartialSales"

    partial_sale_id: Mapped[str] = mapped_column(String, primary_key=True)
    operation_id: Mapped[str] = mapped_column(String, index=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)

    sale_date: Mapped[date] = mapped_column(Date)
    cattle_count: Mapped[int] = mapped_column(Integer)
    final_weight: Mapped[float] = mapped_column(Float)
    price_per_cwt: Mapped[float] = mapped_column(Float)
    total_revenue: Mapped[float] = mapped_column(Float)
    buyer: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    tag_numbers: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    operator_email: Mapped[str] = mapped_column(String, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    def __repr__(self) -> str:
        return f"<PartialSale id={self.partial_sale_id!r} pen={self.pen_id!r} count={self.cattle_count!r}>"
