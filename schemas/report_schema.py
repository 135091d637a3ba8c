"""Schemas for health reports, the AI vital-signs payload and the health card."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union


class VitalTrend(BaseModel):
    current: Union[str, float]
    trend: str = "stable"
    last_measured: str = Field("today", alias="lastMeasured")
    chart_data: Optional[List[Union[str, float]]] = Field(None, alias="chartData")

    model_config = ConfigDict(populate_by_name=True)


class GeneratedVitalSigns(BaseModel):
    """Vital-signs JSON the model is asked to return."""

    model_config = ConfigDict(populate_by_name=True)

    blood_pressure: VitalTrend = Field(..., alias="bloodPressure")
    heart_rate: VitalTrend = Field(..., alias="heartRate")
    temperature: VitalTrend
    respiratory_rate: VitalTrend = Field(..., alias="respiratoryRate")


class HealthReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: str
    health_score: int
    bmi: Optional[float] = None
    activity_level: Optional[str] = None
    risk_level: Optional[str] = None
    health_metrics: Optional[Dict[str, Any]] = None
    vital_signs: Optional[List[Dict[str, Any]]] = None
    activity_data: Optional[Dict[str, Any]] = None
    nutrition_data: Optional[Dict[str, Any]] = None
    nutrition_trends: Optional[List[Dict[str, Any]]] = None
    nutrition_advice: Optional[List[str]] = None
    predictions: Optional[List[str]] = None
    ai_generated: Optional[Dict[str, bool]] = None
    generated_at: datetime


class PersonalInfo(BaseModel):
    full_name: str
    date_of_birth: Optional[datetime] = None
    blood_type: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None


class MedicalConditions(BaseModel):
    allergies: List[str] = []
    chronic_conditions: List[str] = []
    medications: List[str] = []
    surgeries: List[str] = []


class CardVitalSigns(BaseModel):
    blood_pressure: Optional[str] = None
    heart_rate: Optional[float] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    temperature: Optional[float] = None
    respiratory_rate: Optional[float] = None


class HealthCard(BaseModel):
    personal_info: PersonalInfo
    medical_conditions: MedicalConditions
    vital_signs: CardVitalSigns
    updated_at: datetime


class InsightResponse(BaseModel):
    kind: str
    content: Union[str, List[str]]
