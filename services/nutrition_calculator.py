"""Nutrition calculation helpers.

BMI, BMR (Mifflin-St Jeor), activity multipliers, goal-adjusted daily
calories and the fixed macro splits used when filling in weekly plans.
"""

import math
from typing import Dict, Optional
from core.logger import get_logger

logger = get_logger("services.nutrition_calculator")

ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,
    'light': 1.375,
    'moderate': 1.55,
    'active': 1.725,
    'very active': 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.55

WEIGHT_LOSS_ADJUSTMENT = -500
WEIGHT_GAIN_ADJUSTMENT = 300

# (protein, carbs, fat) share of calories per meal
MEAL_MACRO_SPLITS = {
    'breakfast': (0.2, 0.6, 0.2),
    'lunch': (0.3, 0.4, 0.3),
    'dinner': (0.4, 0.3, 0.3),
}

KCAL_PER_GRAM = {'protein': 4, 'carbs': 4, 'fat': 9}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def calculate_bmi(self, height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
        """BMI rounded to one decimal, or None if height/weight are unusable."""
        if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
            return None
        h_m = height_cm / 100.0
        return round(weight_kg / (h_m * h_m), 1)

    def bmi_category(self, bmi: float) -> str:
        """Classify a BMI value; each boundary belongs to the higher band."""
        if bmi < 18.5:
            return "Underweight"
        if bmi < 25:
            return "Normal weight"
        if bmi < 30:
            return "Overweight"
        return "Obese"

    def calculate_bmr(self, weight_kg: float, height_cm: float, age: int, gender: str) -> float:
        """Calculate BMR using the Mifflin-St Jeor equation.

        Only an explicit 'female' gets the female constant; every other
        value is treated as male.
        """
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        if (gender or '').strip().lower() == 'female':
            return base - 161
        return base + 5

    def get_activity_multiplier(self, activity_level: Optional[str]) -> float:
        """Look up the TDEE multiplier for an activity level (case-insensitive)."""
        key = (activity_level or '').strip().lower()
        return ACTIVITY_MULTIPLIERS.get(key, DEFAULT_ACTIVITY_MULTIPLIER)

    def goal_adjustment(self, current_weight: float, goal_weight: Optional[float]) -> int:
        """Calorie offset for a weight goal: deficit to lose, surplus to gain."""
        if goal_weight is None:
            return 0
        if goal_weight < current_weight:
            return WEIGHT_LOSS_ADJUSTMENT
        if goal_weight > current_weight:
            return WEIGHT_GAIN_ADJUSTMENT
        return 0

    def calculate_daily_calories(self, weight_kg: float, height_cm: float, age: int, gender: str,
                                 activity_level: Optional[str], goal_weight: Optional[float]) -> int:
        """Maintenance calories (rounded) plus the goal adjustment."""
        bmr = self.calculate_bmr(weight_kg, height_cm, age, gender)
        maintenance = round_half_up(bmr * self.get_activity_multiplier(activity_level))
        val = maintenance + self.goal_adjustment(weight_kg, goal_weight)
        logger.debug("Daily calories: bmr=%s maintenance=%s target=%s", bmr, maintenance, val)
        return val

    def split_meal_macros(self, meal_type: str, calories: float) -> Optional[Dict[str, int]]:
        """Approximate macro grams for a weekly-plan meal from its calories.

        Returns None for meal types without a fixed split.
        """
        ratios = MEAL_MACRO_SPLITS.get(meal_type)
        if ratios is None:
            return None
        protein, carbs, fat = ratios
        return {
            'protein': round_half_up(calories * protein / KCAL_PER_GRAM['protein']),
            'carbs': round_half_up(calories * carbs / KCAL_PER_GRAM['carbs']),
            'fat': round_half_up(calories * fat / KCAL_PER_GRAM['fat']),
        }

    def macro_percentages(self, protein_g: float, carbs_g: float, fats_g: float) -> Dict[str, float]:
        """Share of calories coming from each macro, in percent (1 decimal)."""
        kcal = {
            'protein': protein_g * KCAL_PER_GRAM['protein'],
            'carbs': carbs_g * KCAL_PER_GRAM['carbs'],
            'fats': fats_g * KCAL_PER_GRAM['fat'],
        }
        total = sum(kcal.values())
        if total <= 0:
            return {'protein': 0.0, 'carbs': 0.0, 'fats': 0.0}
        return {k: round(v * 100 / total, 1) for k, v in kcal.items()}


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator", "round_half_up"]
