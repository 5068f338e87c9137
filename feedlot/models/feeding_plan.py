from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Date, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, str_enum


class PlanStatus(str, Enum):
    ACTIVE = "Active"
    UPCOMING = "Upcoming"
    COMPLETED = "Completed"


class IngredientCategory(str, Enum):
    FEEDSTUFF = "Feedstuff"
    MINERAL = "Mineral"
    PROTEIN = "Protein"
    GRAIN = "Grain"
    SUPPLEMENT = "Supplement"


class FeedUnit(str, Enum):
    LBS = "lbs"
    KG = "kg"
    OZ = "oz"
    G = "g"


class ChangeType(str, Enum):
    PLAN_START = "Plan Start"
    PLAN_END = "Plan End"
    FEED_CHANGE = "Feed Change"


class FeedingPlan(Base):
    """Datos de referencia: los publica el planificador externo, el ledger solo los consulta."""

    __tablename__ = "FeedingPlans"

    plan_id: Mapped[str] = mapped_column(String, primary_key=True)
    pen_id: Mapped[str] = mapped_column(ForeignKey("Pens.pen_id"), index=True)
    pen_name: Mapped[str] = mapped_column(String)
    plan_name: Mapped[str] = mapped_column(String)
    start_date: Mapped[date] = mapped_column(Date)
    days_to_feed: Mapped[int] = mapped_column(Integer)
    current_day: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[PlanStatus] = mapped_column(str_enum(PlanStatus))
    feed_type: Mapped[str] = mapped_column(String)
    operator_email: Mapped[str] = mapped_column(String, index=True)

    schedules: Mapped[List["FeedingSchedule"]] = relationship(
        back_populates="plan",
        order_by="FeedingSchedule.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<FeedingPlan id={self.plan_id!r} pen={self.pen_id!r} status={self.status!r}>"


class FeedingSchedule(Base):
    __tablename__ = "FeedingSchedules"

    schedule_id: Mapped[str] = mapped_column(String, primary_key=True)
    plan_id: Mapped[str] = mapped_column(ForeignKey("FeedingPlans.plan_id"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)

    time: Mapped[str] = mapped_column(String)  # "7:00 AM"
    total_amount: Mapped[float] = mapped_column(Float)
    unit: Mapped[str] = mapped_column(String, default=FeedUnit.LBS.value)

    # [{name, category, amount, unit, percentage, nutritional_value}, ...]
    ingredients: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    total_nutrition: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)

    plan: Mapped[FeedingPlan] = relationship(back_populates="schedules")

    def __repr__(self) -> str:
        return f"<FeedingSchedule id={self.schedule_id!r} time={self.time!r}>"

    def planned_amount_for(self, ingredient_name: str) -> Optional[Dict[str, Any]]:
        for ingredient in self.ingredients or []:
            if ingredient.get("name") == ingredient_name:
                return ingredient
        return None


class ScheduleChange(Base):
    """Feed de cambios próximos que publica el planificador externo."""

    __tablename__ = "ScheduleChanges"

    change_id: Mapped[str] = mapped_column(String, primary_key=True)
    pen_id: Mapped[str] = mapped_column(String, index=True)
    pen_name: Mapped[str] = mapped_column(String)
    change_type: Mapped[ChangeType] = mapped_column(str_enum(ChangeType))
    change_date: Mapped[date] = mapped_column(Date)
    current_plan: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    new_plan: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[str] = mapped_column(String)
    operator_email: Mapped[str] = mapped_column(String, index=True)

    def __repr__(self) -> str:
        return f"<ScheduleChange id={self.change_id!r} type={self.change_type!r}>"
