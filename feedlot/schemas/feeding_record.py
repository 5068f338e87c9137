from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ActualIngredientIn(BaseModel):
    name: str
    # Sin validar >= 0: lo valida el formulario del cliente
    actual_amount: float
    unit: Optional[str] = None
    category: Optional[str] = None


class FeedingRecordCreate(BaseModel):
    pen_id: str
    schedule_id: str
    actual_ingredients: List[ActualIngredientIn]
    operator_email: str


class ActualIngredientRead(BaseModel):
    name: str
    planned_amount: float
    actual_amount: float
    unit: str
    category: str


class FeedingRecordRead(BaseModel):
    feeding_record_id: str
    operation_id: str
    pen_id: str
    schedule_id: str
    planned_amount: float
    unit: str
    actual_ingredients: List[ActualIngredientRead]
    feeding_time: datetime
    operator_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IngredientVarianceRead(BaseModel):
    name: str
    planned_amount: float
    actual_amount: float
    unit: str
    ratio: float
    percent: float
    status: str
    label: str

    model_config = ConfigDict(from_attributes=True)


class FeedingVarianceRead(BaseModel):
    feeding_record_id: str
    planned_amount: float
    actual_amount: float
    total: IngredientVarianceRead
    ingredients: List[IngredientVarianceRead]
