from .base import Base
from .cattle_sale import CattleSale
from .death_loss import DeathLoss, LossReason
from .feeding_plan import (
    ChangeType,
    FeedingPlan,
    FeedingSchedule,
    FeedUnit,
    IngredientCategory,
    PlanStatus,
    ScheduleChange,
)
from .feeding_record import FeedingRecord
from .nutritionist import Nutritionist, NutritionistStatus
from .operation import InviteCode, Operation
from .partial_sale import PartialSale
from .pen import CattleType, Pen, PenStatus, WeightRecord
from .treatment import TreatmentRecord, TreatmentType

__all__ = [
    "Base",
    "CattleSale",
    "CattleType",
    "ChangeType",
    "DeathLoss",
    "FeedingPlan",
    "FeedingRecord",
    "FeedingSchedule",
    "FeedUnit",
    "IngredientCategory",
    "InviteCode",
    "LossReason",
    "Nutritionist",
    "NutritionistStatus",
    "Operation",
    "PartialSale",
    "Pen",
    "PenStatus",
    "PlanStatus",
    "ScheduleChange",
    "TreatmentRecord",
    "TreatmentType",
    "WeightRecord",
]
