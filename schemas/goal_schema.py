"""Schemas for health goal CRUD."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class GoalCategory(str, Enum):
    weight = "weight"
    exercise = "exercise"
    nutrition = "nutrition"
    sleep = "sleep"
    hydration = "hydration"
    other = "other"


class HealthGoalCreate(BaseModel):
    title: str = Field(..., min_length=1, examples=["Lose 5 kg"])
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    category: GoalCategory = Field(..., examples=["weight"])
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = Field(None, examples=["kg"])
    completed: bool = False
    progress: float = Field(0, ge=0, le=100)


class HealthGoalUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    category: Optional[GoalCategory] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    completed: Optional[bool] = None
    progress: Optional[float] = Field(None, ge=0, le=100)


class HealthGoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    target_date: Optional[datetime] = None
    category: str
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    unit: Optional[str] = None
    completed: bool
    progress: float
    created_at: datetime


class HealthGoalEnvelope(BaseModel):
    success: bool
    data: Optional[HealthGoalResponse] = None


class HealthGoalListEnvelope(BaseModel):
    success: bool
    data: List[HealthGoalResponse]
