"""Re-export individual schema modules for easy imports."""

from .common import Envelope
from .user import Credentials, UserOut
from .calorie import CalorieInputIn, CalorieResultOut, CalorieRecordIn, CalorieRecordOut
from .weight import WeightIn, WeightOut
from .meal import MealRecordIn, MealRecordOut, MealRecordSummary
from .chat import ChatIn, ChatOut

__all__ = [
    "Envelope",
    "Credentials",
    "UserOut",
    "CalorieInputIn",
    "CalorieResultOut",
    "CalorieRecordIn",
    "CalorieRecordOut",
    "WeightIn",
    "WeightOut",
    "MealRecordIn",
    "MealRecordOut",
    "MealRecordSummary",
    "ChatIn",
    "ChatOut",
]
