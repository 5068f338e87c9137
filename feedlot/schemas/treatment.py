from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from feedlot.models.treatment import TreatmentType


class TreatmentBase(BaseModel):
    pen_id: str
    treatment_date: date
    treatment_type: TreatmentType
    product: str
    dosage: str
    cattle_count: int = Field(ge=1)
    treated_by: str
    tag_numbers: Optional[str] = None
    notes: Optional[str] = None


class TreatmentCreate(TreatmentBase):
    operator_email: str


class TreatmentRead(TreatmentBase):
    treatment_id: str
    operation_id: str
    operator_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
