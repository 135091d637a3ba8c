"""Schemas for food, exercise and sleep logging."""

from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class FoodEntryCreate(BaseModel):
    """Payload for logging a meal."""

    food_name: str = Field(..., min_length=1, examples=["Chicken salad"])
    calories: float = Field(..., ge=0, examples=[420])
    protein_g: float = Field(..., ge=0, examples=[35])
    carbs_g: float = Field(..., ge=0, examples=[20])
    fats_g: float = Field(..., ge=0, examples=[18])
    protein_percent: Optional[float] = Field(None, ge=0)
    carbs_percent: Optional[float] = Field(None, ge=0)
    fats_percent: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    ai_analysis_result: Optional[str] = None


class FoodEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    food_name: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    protein_percent: Optional[float] = None
    carbs_percent: Optional[float] = None
    fats_percent: Optional[float] = None
    image_url: Optional[str] = None
    ai_analysis_result: Optional[str] = None
    recorded_at: datetime


class FoodSummaryResponse(BaseModel):
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float
    entry_count: int
    period: str
    start_date: datetime
    end_date: datetime
    daily_avg_calories: float
    daily_avg_protein: float
    daily_avg_carbs: float
    daily_avg_fats: float


class FoodTrackingResponse(BaseModel):
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    entry_count: int
    period: str


class ExerciseCreate(BaseModel):
    """Payload for logging a workout; zero sets/reps/calories are rejected."""

    name: str = Field(..., min_length=1, examples=["Push-ups"])
    category: Optional[str] = Field(None, examples=["strength"])
    sets: int = Field(..., gt=0, examples=[3])
    reps: int = Field(..., gt=0, examples=[12])
    calories_burned: float = Field(..., gt=0, examples=[45])
    image_url: Optional[str] = None


class ExerciseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    sets: int
    reps: int
    calories_burned: float
    date: datetime
    image_url: Optional[str] = None


class ExerciseCreatedResponse(BaseModel):
    success: bool
    exercise: ExerciseResponse


class ExerciseLogResponse(BaseModel):
    success: bool
    logs: List[ExerciseResponse]


class SleepRecordCreate(BaseModel):
    """Payload for logging a night of sleep.

    `duration` may be omitted when both start and end times are given.
    """

    date: Optional[datetime] = None
    duration: Optional[float] = Field(None, gt=0, le=24, description="Hours slept")
    quality: int = Field(..., ge=1, le=5, examples=[4], description="Subjective quality, 1 (poor) to 5 (excellent)")
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("date", "start_time", "end_time")
    @classmethod
    def to_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Store every timestamp as naive UTC so start and end can be subtracted."""
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class SleepRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime
    duration: float
    quality: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
