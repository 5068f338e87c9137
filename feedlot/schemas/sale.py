from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from feedlot.models.pen import CattleType


# ---------- Venta parcial ----------

class PartialSaleBase(BaseModel):
    pen_id: str
    sale_date: date
    cattle_count: int
    final_weight: float = Field(gt=0)
    price_per_cwt: float = Field(gt=0)
    buyer: Optional[str] = None
    tag_numbers: Optional[str] = None
    notes: Optional[str] = None


class PartialSaleCreate(PartialSaleBase):
    operator_email: str


class PartialSaleRead(PartialSaleBase):
    partial_sale_id: str
    operation_id: str
    total_revenue: float
    operator_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------- Venta total ----------

class CattleSaleCreate(BaseModel):
    pen_id: str
    final_weight: float = Field(gt=0)
    price_per_cwt: float = Field(gt=0)
    sale_date: date
    operator_email: str


class CattleSaleRead(BaseModel):
    sale_id: str
    operation_id: str
    pen_id: str
    pen_name: str
    cattle_type: CattleType
    starting_weight: float
    cattle_count: int
    final_weight: float
    price_per_cwt: float
    sale_date: date
    total_revenue: float
    days_on_feed: int
    average_daily_gain: float
    operator_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
