"""Schemas for diet plan requests, responses and the AI plan payloads."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class DietPlanRequest(BaseModel):
    """Payload for generating a single-day diet plan."""

    goal_weight: Optional[float] = Field(None, gt=0, examples=[68.0], description="Target weight in kg; drives the calorie deficit/surplus")
    timeframe: Optional[str] = Field(None, examples=["3 months"], description="Free-text horizon for the goal")
    diet_type: str = Field("balanced", min_length=1, examples=["vegetarian"], description="Diet style passed to the planner")
    meal_count: int = Field(3, ge=1, le=8, examples=[3], description="Number of main meals per day")
    include_snacks: bool = Field(False, examples=[True], description="Whether snacks should be planned")


# AI output shapes. Only the fields the app relies on are required.

class PlanFood(BaseModel):
    name: str
    portion: str = ""
    image_url: Optional[str] = None


class PlanMeal(BaseModel):
    name: str
    calories: float
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    foods: List[PlanFood] = []


class GeneratedDietPlan(BaseModel):
    meals: List[PlanMeal] = Field(..., min_length=1)


class GeneratedWeekDay(BaseModel):
    day: str
    meals: Dict[str, PlanMeal]


class GeneratedWeeklyPlan(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weekly_plan: List[GeneratedWeekDay] = Field(..., alias="weeklyPlan", min_length=7)


class DietPlanResponse(BaseModel):
    """A stored diet plan, single-day or weekly."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    daily_calories: float
    goal_weight: Optional[float] = None
    timeframe: Optional[str] = None
    diet_type: Optional[str] = None
    meal_count: Optional[int] = None
    include_snacks: Optional[bool] = None
    meals: Optional[List[dict]] = None
    is_weekly_plan: bool = False
    base_on_plan_id: Optional[int] = None
    weekly_plan_data: Optional[List[dict]] = None
    week_start_date: Optional[datetime] = None
    created_at: datetime


class CreatedDietPlan(BaseModel):
    id: int
    daily_calories: float
    meals: List[dict]


class DietPlanCreatedResponse(BaseModel):
    """Response returned after a plan is generated and saved."""

    message: str
    diet_plan: CreatedDietPlan
