from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, str_enum, utcnow


class NutritionistStatus(str, Enum):
    INVITED = "Invited"
    ACTIVE = "Active"


class Nutritionist(Base):
    __tablename__ = "Nutritionists"

    nutritionist_id: Mapped[str] = mapped_column(String, primary_key=True)
    personal_name: Mapped[str] = mapped_column(String)
    business_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    operator_email: Mapped[str] = mapped_column(String, index=True)

    # Invited -> Active, nunca al revés
    status: Mapped[NutritionistStatus] = mapped_column(
        str_enum(NutritionistStatus), default=NutritionistStatus.INVITED
    )
    invited_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    accepted_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Nutritionist id={self.nutritionist_id!r} status={self.status!r}>"

    @property
    def display_name(self) -> str:
        return self.business_name or self.personal_name
