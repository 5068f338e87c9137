from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from feedlot.models.death_loss import LossReason


class DeathLossBase(BaseModel):
    pen_id: str
    loss_date: date
    reason: LossReason
    # El mínimo (>= 1) lo valida el servicio: ValidationError, no 422
    cattle_count: int
    estimated_weight: float = Field(ge=0)
    tag_numbers: Optional[str] = None
    notes: Optional[str] = None


class DeathLossCreate(DeathLossBase):
    operator_email: str


class DeathLossRead(DeathLossBase):
    death_loss_id: str
    operation_id: str
    operator_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
