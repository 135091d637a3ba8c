"""Schemas for health metric snapshots and the user profile."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class HealthMetricsCreate(BaseModel):
    """Payload for recording a vitals snapshot."""

    height: float = Field(..., gt=0, le=300, examples=[175.0], description="Height in centimeters")
    weight: float = Field(..., gt=0, le=500, examples=[70.0], description="Weight in kilograms")
    age: int = Field(..., ge=1, le=130, examples=[30], description="Age in years")
    gender: str = Field(..., min_length=1, examples=["male"])
    activity_level: str = Field(..., min_length=1, examples=["moderate"], description="sedentary, light, moderate, active or very active")
    date_of_birth: Optional[datetime] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    smoking_status: Optional[str] = None
    diet_type: Optional[str] = None
    blood_type: Optional[str] = None
    blood_pressure: Optional[str] = Field(None, pattern=r"^\d{2,3}/\d{2,3}$", examples=["120/80"])
    heart_rate: Optional[float] = Field(None, gt=0, examples=[72])
    respiratory_rate: Optional[float] = Field(None, gt=0)
    temperature: Optional[float] = Field(None, gt=0)
    sleep_duration: Optional[float] = Field(None, ge=0, le=24)
    stress_level: Optional[float] = Field(None, ge=0, le=10)
    chronic_conditions: Optional[str] = None
    allergies: Optional[str] = None
    medications: Optional[str] = None
    family_history: Optional[str] = None
    surgeries: Optional[str] = None
    fitness_goals: Optional[str] = None


class HealthMetricsResponse(HealthMetricsCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    # Stored snapshots are returned as-is, even if they predate a stricter rule.
    blood_pressure: Optional[str] = None
    recorded_at: datetime


class InitialHealthResponse(BaseModel):
    success: bool
    health_metrics: HealthMetricsResponse
    initial_health_data_submitted: bool


class UserProfileCreate(BaseModel):
    display_name: str = Field(..., min_length=1, examples=["Jane"])
    email: str = Field(..., min_length=3, examples=["jane@example.com"])


class UserProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    display_name: str
    email: str
    initial_health_data_submitted: bool
