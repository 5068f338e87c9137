from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from feedlot.models.pen import CattleType, PenStatus


class WeightRecordRead(BaseModel):
    record_date: date
    weight: float
    recorded_by: str

    model_config = ConfigDict(from_attributes=True)


class PenBase(BaseModel):
    name: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    current: int = Field(ge=0)
    cattle_type: CattleType
    is_crossbred: bool = False
    feed_type: str = "Pending"
    starting_weight: float = Field(gt=0)
    market_weight: float = Field(gt=0)


class PenCreate(PenBase):
    operator_email: str
    nutritionist_id: Optional[str] = None


class PenRead(PenBase):
    pen_id: str
    status: PenStatus
    current_weight: float
    average_daily_gain: float
    last_fed: Optional[datetime] = None
    operator_email: str
    nutritionist_id: Optional[str] = None
    created_at: datetime
    weight_history: List[WeightRecordRead]

    model_config = ConfigDict(from_attributes=True)


class WeightUpdate(BaseModel):
    new_weight: float  # el servicio exige > peso inicial (409)
    operator_email: str
    record_date: Optional[date] = None  # por defecto, hoy

    model_config = ConfigDict(extra="forbid")


class PenStatusUpdate(BaseModel):
    status: PenStatus
    operator_email: str

    model_config = ConfigDict(extra="forbid")


class PenPerformance(BaseModel):
    pen_id: str
    current: int
    current_weight: float
    market_weight: float
    weight_to_market: float
    average_daily_gain: float       # según historial de pesos
    days_on_feed: Optional[int] = None  # None si el corral no tiene plan
    days_to_market: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
