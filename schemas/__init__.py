"""Pydantic schema package for request and response models."""

from .diet_schema import DietPlanRequest, DietPlanResponse, DietPlanCreatedResponse
from .health_schema import HealthMetricsCreate, HealthMetricsResponse, UserProfileResponse
from .tracking_schema import FoodEntryCreate, FoodEntryResponse, ExerciseCreate, SleepRecordCreate
from .goal_schema import HealthGoalCreate, HealthGoalUpdate, HealthGoalResponse
from .report_schema import HealthReportResponse, HealthCard

__all__ = [
    "DietPlanRequest",
    "DietPlanResponse",
    "DietPlanCreatedResponse",
    "HealthMetricsCreate",
    "HealthMetricsResponse",
    "UserProfileResponse",
    "FoodEntryCreate",
    "FoodEntryResponse",
    "ExerciseCreate",
    "SleepRecordCreate",
    "HealthGoalCreate",
    "HealthGoalUpdate",
    "HealthGoalResponse",
    "HealthReportResponse",
    "HealthCard",
]
