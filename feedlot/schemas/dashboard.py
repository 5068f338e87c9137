from datetime import date, datetime
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .death_loss import DeathLossRead
from .feeding_record import FeedingRecordRead
from .sale import CattleSaleRead, PartialSaleRead
from .treatment import TreatmentRead


class DashboardStats(BaseModel):
    total_pens: int
    total_cattle: int
    active_schedules: int

    model_config = ConfigDict(from_attributes=True)


class WeightProjectionRead(BaseModel):
    schedule_id: str
    schedule_name: str
    feed_type: str
    start_date: date
    end_date: date
    start_weight: float
    projected_end_weight: float

    model_config = ConfigDict(from_attributes=True)


class PenProjectionRead(BaseModel):
    pen_id: str
    avg_daily_gain: float
    market_weight: float
    final_projected_weight: float
    windows: List[WeightProjectionRead]


# ---------- Actividad de un corral (unión etiquetada por `kind`) ----------

class FeedingActivity(BaseModel):
    kind: Literal["feeding"] = "feeding"
    occurred_at: datetime
    event: FeedingRecordRead


class DeathLossActivity(BaseModel):
    kind: Literal["death_loss"] = "death_loss"
    occurred_at: datetime
    event: DeathLossRead


class TreatmentActivity(BaseModel):
    kind: Literal["treatment"] = "treatment"
    occurred_at: datetime
    event: TreatmentRead


class PartialSaleActivity(BaseModel):
    kind: Literal["partial_sale"] = "partial_sale"
    occurred_at: datetime
    event: PartialSaleRead


class CattleSaleActivity(BaseModel):
    kind: Literal["cattle_sale"] = "cattle_sale"
    occurred_at: datetime
    event: CattleSaleRead


PenActivity = Annotated[
    Union[
        FeedingActivity,
        DeathLossActivity,
        TreatmentActivity,
        PartialSaleActivity,
        CattleSaleActivity,
    ],
    Field(discriminator="kind"),
]
