from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class OperationBase(BaseModel):
    name: str
    operator_email: str
    location: str


class OperationCreate(OperationBase):
    invite_code: str


class OperationUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class OperationRead(OperationBase):
    operation_id: str
    setup_date: datetime

    model_config = ConfigDict(from_attributes=True)
