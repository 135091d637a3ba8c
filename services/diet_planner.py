"""AI-backed diet plan generation.

Single-day plans are sized from the user's latest metrics; weekly plans
are derived from the newest single-day plan and cached until the caller
asks for regeneration.
"""

from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from core.exceptions import AIServiceError, GenerationError, NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database import models
from schemas.diet_schema import DietPlanRequest, GeneratedDietPlan, GeneratedWeeklyPlan
from services.ai_client import GenerativeAIClient
from services.ai_parsing import extract_json_object, validate
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.diet_planner")

WEEKLY_MEAL_TYPES = ("breakfast", "lunch", "dinner")


def build_diet_plan_prompt(daily_calories: int, request: DietPlanRequest, metrics) -> str:
    return f"""
Create a detailed diet plan with the following specifications:
- Total daily calories: {daily_calories} calories
- Diet type: {request.diet_type}
- Number of meals: {request.meal_count}
- Include snacks: {'Yes' if request.include_snacks else 'No'}
- Health conditions: {metrics.chronic_conditions or 'None'}
- Allergies: {metrics.allergies or 'None'}

For each meal, provide:
1. Meal name
2. Total calories
3. Macronutrients (protein, carbs, fat in grams)
4. 2-3 specific food items with portion sizes

Format the response as a JSON object with the structure:
{{
  "meals": [
    {{
      "name": "Meal name",
      "calories": number,
      "protein": number,
      "carbs": number,
      "fat": number,
      "foods": [
        {{"name": "Food item name", "portion": "Portion description"}}
      ]
    }}
  ]
}}
"""


def build_weekly_plan_prompt(base_plan) -> str:
    return f"""
Create a 7-day meal plan based on the following diet requirements:
- Diet type: {base_plan.diet_type or 'balanced'}
- Daily calories: {round(base_plan.daily_calories)} calories
- Number of meals per day: 3 (breakfast, lunch, dinner)

For each day (Monday through Sunday), provide specific meal suggestions with:
1. Food items with portion sizes
2. Calories per meal

Ensure variety throughout the week and maintain the daily calorie target.

Format the response as a structured JSON with this format:
{{
  "weeklyPlan": [
    {{
      "day": "Monday",
      "meals": {{
        "breakfast": {{"name": "Breakfast", "calories": 400, "foods": [{{"name": "Food item", "portion": "Portion size"}}]}},
        "lunch": {{"name": "Lunch", "calories": 600, "foods": [{{"name": "Food item", "portion": "Portion size"}}]}},
        "dinner": {{"name": "Dinner", "calories": 500, "foods": [{{"name": "Food item", "portion": "Portion size"}}]}}
      }}
    }}
  ]
}}
Return all 7 days.
"""


def food_image_prompt(food: Dict) -> str:
    return (
        f"High-quality professional food photography of {food['name']}, {food.get('portion', '')}, "
        "on a clean plate with soft lighting, top-down view, healthy food, appetizing"
    )


def attach_first_food_image(meal: Dict, ai: GenerativeAIClient) -> None:
    """Give the meal's first food an image URL; failures leave it without one."""
    foods = meal.get("foods") or []
    if not foods:
        return
    first = foods[0]
    try:
        first["image_url"] = ai.generate_image(food_image_prompt(first), first["name"])
    except AIServiceError as exc:
        logger.error("Error generating image for %s: %s", first["name"], exc.message)


def week_start(today: datetime) -> datetime:
    """Midnight of the Monday of `today`'s week."""
    monday = today - timedelta(days=today.weekday())
    return monday.replace(hour=0, minute=0, second=0, microsecond=0)


def create_diet_plan(db: Session, user_id: str, request: DietPlanRequest, ai: GenerativeAIClient) -> models.DietPlan:
    """Generate and persist a single-day plan.

    Raises:
        NotFoundError: If the user has no health metrics yet.
        GenerationError: If the AI reply holds no usable plan.
    """
    metrics = UserScopedRepository(models.HealthMetrics, db, user_id).latest(models.HealthMetrics.recorded_at)
    if metrics is None:
        raise NotFoundError("Health metrics", message="Health metrics not found")

    daily_calories = nutrition_calculator.calculate_daily_calories(
        metrics.weight, metrics.height, metrics.age, metrics.gender,
        metrics.activity_level, request.goal_weight,
    )
    logger.info("Generating diet plan for user %s at %s kcal", user_id, daily_calories)

    try:
        raw = ai.generate_text(build_diet_plan_prompt(daily_calories, request, metrics))
    except AIServiceError as exc:
        logger.error("Diet plan generation failed: %s", exc.message)
        raise GenerationError("Failed to generate diet plan") from exc

    generated = validate(extract_json_object(raw), GeneratedDietPlan)
    if generated is None:
        logger.error("Error parsing AI response for diet plan")
        raise GenerationError("Failed to generate diet plan")

    meals = [meal.model_dump() for meal in generated.meals]
    for meal in meals:
        attach_first_food_image(meal, ai)

    repo = UserScopedRepository(models.DietPlan, db, user_id)
    plan = repo.create(
        daily_calories=daily_calories,
        goal_weight=request.goal_weight,
        timeframe=request.timeframe,
        diet_type=request.diet_type,
        meal_count=request.meal_count,
        include_snacks=request.include_snacks,
        meals=meals,
        is_weekly_plan=False,
    )
    logger.info("Diet plan %s saved for user %s", plan.id, user_id)
    return plan


def generate_weekly_plan(db: Session, user_id: str, base_plan, ai: GenerativeAIClient,
                         today: Optional[datetime] = None) -> models.DietPlan:
    """Ask the AI for a 7-day plan derived from `base_plan` and persist it.

    Raises:
        GenerationError: If the AI reply holds no usable weekly plan.
    """
    start = week_start(today or datetime.utcnow())

    try:
        raw = ai.generate_text(build_weekly_plan_prompt(base_plan))
    except AIServiceError as exc:
        logger.error("Weekly plan generation failed: %s", exc.message)
        raise GenerationError("Failed to generate weekly meal plan. Please try again.") from exc

    generated = validate(extract_json_object(raw), GeneratedWeeklyPlan)
    if generated is None:
        logger.error("Error parsing AI response for weekly plan")
        raise GenerationError("Failed to generate weekly meal plan. Please try again.")

    days = []
    for index, day in enumerate(generated.weekly_plan[:7]):
        day_data = day.model_dump()
        day_data["date"] = (start + timedelta(days=index)).strftime("%Y-%m-%d")
        for meal_type in WEEKLY_MEAL_TYPES:
            meal = day_data["meals"].get(meal_type)
            if meal is None:
                continue
            attach_first_food_image(meal, ai)
            meal.update(nutrition_calculator.split_meal_macros(meal_type, meal["calories"]))
        days.append(day_data)

    repo = UserScopedRepository(models.DietPlan, db, user_id)
    plan = repo.create(
        daily_calories=base_plan.daily_calories,
        goal_weight=base_plan.goal_weight,
        timeframe=base_plan.timeframe,
        diet_type=base_plan.diet_type,
        meal_count=3,
        include_snacks=False,
        is_weekly_plan=True,
        base_on_plan_id=base_plan.id,
        weekly_plan_data=days,
        week_start_date=start,
    )
    logger.info("Weekly plan %s saved from base plan %s", plan.id, base_plan.id)
    return plan


def get_or_generate_weekly_plan(db: Session, user_id: str, ai: GenerativeAIClient,
                                regenerate: bool = False, today: Optional[datetime] = None) -> models.DietPlan:
    """Return the cached weekly plan for the newest base plan, generating it if needed.

    Raises:
        NotFoundError: If the user has no single-day plan to base it on.
    """
    repo = UserScopedRepository(models.DietPlan, db, user_id)
    base_plan = repo.latest(models.DietPlan.created_at, models.DietPlan.is_weekly_plan.is_(False))
    if base_plan is None:
        raise NotFoundError("Diet plan", message="No base diet plan found")

    if not regenerate:
        existing = repo.latest(
            models.DietPlan.created_at,
            models.DietPlan.is_weekly_plan.is_(True),
            models.DietPlan.base_on_plan_id == base_plan.id,
        )
        if existing is not None:
            return existing

    return generate_weekly_plan(db, user_id, base_plan, ai, today=today)
