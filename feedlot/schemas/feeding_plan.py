from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedlot.models.feeding_plan import ChangeType, FeedUnit, IngredientCategory, PlanStatus


class NutritionProfile(BaseModel):
    # Porcentajes tal cual los publica el planificador ("18.2%")
    protein: Optional[str] = None
    fat: Optional[str] = None
    fiber: Optional[str] = None
    moisture: Optional[str] = None


class Ingredient(BaseModel):
    name: str
    category: IngredientCategory
    amount: float = Field(ge=0)
    unit: FeedUnit = FeedUnit.LBS
    percentage: float = Field(ge=0, le=100)
    nutritional_value: Optional[NutritionProfile] = None


class ScheduleBase(BaseModel):
    time: str
    total_amount: float = Field(ge=0)
    unit: FeedUnit = FeedUnit.LBS
    ingredients: List[Ingredient] = Field(min_length=1)
    total_nutrition: NutritionProfile = NutritionProfile()


class ScheduleCreate(ScheduleBase):
    schedule_id: Optional[str] = None  # si no viene, lo genera el ledger


class ScheduleRead(ScheduleBase):
    schedule_id: str
    plan_id: str

    model_config = ConfigDict(from_attributes=True)


class FeedingPlanBase(BaseModel):
    pen_id: str
    plan_name: str
    start_date: date
    days_to_feed: int = Field(gt=0)
    current_day: int = Field(default=0, ge=0)
    status: PlanStatus
    feed_type: str


class FeedingPlanCreate(FeedingPlanBase):
    plan_id: Optional[str] = None
    operator_email: str
    schedules: List[ScheduleCreate] = Field(min_length=1)


class FeedingPlanRead(FeedingPlanBase):
    plan_id: str
    pen_name: str
    operator_email: str
    schedules: List[ScheduleRead]

    model_config = ConfigDict(from_attributes=True)


class ScheduleChangeCreate(BaseModel):
    pen_id: str
    change_type: ChangeType
    change_date: date
    current_plan: Optional[str] = None
    new_plan: Optional[str] = None
    description: str
    operator_email: str


class ScheduleChangeRead(BaseModel):
    change_id: str
    pen_id: str
    pen_name: str
    change_type: ChangeType
    change_date: date
    days_from_now: int
    current_plan: Optional[str] = None
    new_plan: Optional[str] = None
    description: str
    operator_email: str

    model_config = ConfigDict(from_attributes=True)
