"""Free-text health insights written by the generative model.

Each insight builds a prompt from the user's own records and returns the
model's reply, or a fixed message when the model is unavailable.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from core.exceptions import AIServiceError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database import models
from services.ai_client import GenerativeAIClient
from services import nutrition_summary, report_generator

logger = get_logger("services.insights")

MIN_SLEEP_RECORDS = 7
WORKOUT_LOG_LIMIT = 10

NOT_ENOUGH_SLEEP = "Not enough sleep data for trend analysis. Please track at least 7 days of sleep."
SLEEP_FALLBACK = "Unable to analyze sleep trends at this time. Please try again later."
ACTIVITY_FALLBACK = "Unable to generate an activity plan at this time. Please try again later."
DIET_FALLBACK = "Unable to generate diet suggestions at this time. Please try again later."
NO_WORKOUTS = "No workout logs found. Log a few workouts to get a personalized program."
WORKOUT_FALLBACK = "Unable to generate a workout program at this time. Please try again later."


def _ask(ai: GenerativeAIClient, prompt: str, fallback: str, what: str) -> str:
    try:
        text = ai.generate_text(prompt).strip()
    except AIServiceError as exc:
        logger.error("Error generating %s: %s", what, exc.message)
        return fallback
    return text or fallback


def sleep_trend_analysis(sleep_records: Sequence, ai: GenerativeAIClient) -> str:
    """Pattern analysis over at least a week of sleep records."""
    if len(sleep_records) < MIN_SLEEP_RECORDS:
        return NOT_ENOUGH_SLEEP
    lines = "\n".join(
        f"- {r.date.strftime('%Y-%m-%d')}: {r.duration} hours, quality {r.quality}/5"
        for r in sleep_records
    )
    prompt = f"""
Analyze these sleep records and describe patterns, consistency and one or two
concrete suggestions for better sleep. Keep it under 150 words.
{lines}
"""
    return _ask(ai, prompt, SLEEP_FALLBACK, "sleep trend analysis")


def personal_activity_plan(metrics, ai: GenerativeAIClient) -> str:
    snapshot = report_generator.metrics_snapshot(metrics) or {}
    prompt = f"""
Create a one-week personal activity plan for a person with:
- Age: {snapshot.get('age', 'unknown')}
- Gender: {snapshot.get('gender', 'unknown')}
- Weight: {snapshot.get('weight', 'unknown')} kg
- Height: {snapshot.get('height', 'unknown')} cm
- Activity level: {getattr(metrics, 'activity_level', None) or 'unknown'}
- Fitness goals: {getattr(metrics, 'fitness_goals', None) or 'general fitness'}

List each day with the activity and its duration.
"""
    return _ask(ai, prompt, ACTIVITY_FALLBACK, "activity plan")


def diet_suggestions(entries: Sequence, ai: GenerativeAIClient, period: str = "week") -> str:
    """Suggestions based on what the user actually ate over `period`."""
    totals = nutrition_summary.tracking_totals(entries)
    prompt = f"""
Based on this {period}'s food log, give 3-5 short diet suggestions:
- Entries logged: {totals['entry_count']}
- Calories: {round(totals['calories'])} kcal
- Protein: {round(totals['protein_g'])} g
- Carbs: {round(totals['carbs_g'])} g
- Fats: {round(totals['fats_g'])} g
"""
    return _ask(ai, prompt, DIET_FALLBACK, "diet suggestions")


def workout_program(exercises: Sequence, ai: GenerativeAIClient) -> str:
    if not exercises:
        return NO_WORKOUTS
    lines = "\n".join(
        f"- {ex.name} ({ex.category}): {ex.sets}x{ex.reps}, {ex.calories_burned} kcal"
        for ex in exercises
    )
    prompt = f"""
Given these recent workouts, design a progressive 4-week workout program that
builds on them. Keep each week to a few lines.
{lines}
"""
    return _ask(ai, prompt, WORKOUT_FALLBACK, "workout program")


def health_recommendations(metrics, ai: GenerativeAIClient) -> List[str]:
    return report_generator.generate_recommendations(
        {"metrics": report_generator.metrics_snapshot(metrics)}, ai)


def generate_insight(kind: str, db: Session, user_id: str, ai: GenerativeAIClient,
                     now: Optional[datetime] = None):
    """Load the records an insight needs and produce it."""
    now = now or datetime.utcnow()
    latest_metrics = UserScopedRepository(models.HealthMetrics, db, user_id).latest(
        models.HealthMetrics.recorded_at)

    if kind == "sleep":
        records = UserScopedRepository(models.SleepRecord, db, user_id).list(
            models.SleepRecord.date, limit=report_generator.SLEEP_LIMIT)
        return sleep_trend_analysis(list(reversed(records)), ai)
    if kind == "activity":
        return personal_activity_plan(latest_metrics, ai)
    if kind == "diet":
        start = nutrition_summary.period_start("week", now)
        entries = UserScopedRepository(models.FoodEntry, db, user_id).list(
            models.FoodEntry.recorded_at, models.FoodEntry.recorded_at >= start)
        return diet_suggestions(entries, ai)
    if kind == "workout":
        logs = UserScopedRepository(models.Exercise, db, user_id).list(
            models.Exercise.date, limit=WORKOUT_LOG_LIMIT)
        return workout_program(logs, ai)
    if kind == "recommendations":
        return health_recommendations(latest_metrics, ai)
    raise ValueError(f"Unknown insight kind: {kind}")
