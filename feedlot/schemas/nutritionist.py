from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from feedlot.models.nutritionist import NutritionistStatus


class NutritionistInvite(BaseModel):
    personal_name: str
    business_name: Optional[str] = None
    email: Optional[str] = None
    operator_email: str


class NutritionistRead(BaseModel):
    nutritionist_id: str
    personal_name: str
    business_name: Optional[str] = None
    email: Optional[str] = None
    operator_email: str
    status: NutritionistStatus
    invited_at: datetime
    accepted_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AcceptInvitationRequest(BaseModel):
    nutritionist_id: str
    operator_email: str
