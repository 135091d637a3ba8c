"""Tests for the AI insight helpers."""
from datetime import datetime, timedelta
from types import SimpleNamespace

from api.insights import InsightKind, get_insight
from conftest import USER_ID, FakeAIClient, add_metrics, unavailable
from core.repository import UserScopedRepository
from database import models
from services import insights, report_generator


def sleep_records(count):
    start = datetime(2024, 5, 1)
    return [SimpleNamespace(date=start + timedelta(days=i), duration=7, quality=4) for i in range(count)]


def test_sleep_analysis_needs_a_week_of_data():
    """Test that sleep analysis needs at least seven records."""
    ai = FakeAIClient("You sleep well.")
    assert insights.sleep_trend_analysis(sleep_records(6), ai) == insights.NOT_ENOUGH_SLEEP
    assert ai.prompts == []
    assert insights.sleep_trend_analysis(sleep_records(7), ai) == "You sleep well."
    assert "2024-05-07: 7 hours, quality 4/5" in ai.prompts[0]


def test_insights_fall_back_when_ai_is_down():
    """Test the fixed messages used when the AI is unavailable."""
    ai = FakeAIClient(unavailable())
    assert insights.sleep_trend_analysis(sleep_records(7), ai) == insights.SLEEP_FALLBACK
    assert insights.personal_activity_plan(None, ai) == insights.ACTIVITY_FALLBACK
    assert insights.diet_suggestions([], ai) == insights.DIET_FALLBACK
    assert insights.health_recommendations(None, ai) == report_generator.FALLBACK_RECOMMENDATIONS


def test_workout_program_requires_logs():
    """Test that a workout program needs logged workouts."""
    ai = FakeAIClient("Week 1: ...")
    assert insights.workout_program([], ai) == insights.NO_WORKOUTS
    logs = [SimpleNamespace(name="Squats", category="strength", sets=3, reps=10, calories_burned=80)]
    assert insights.workout_program(logs, ai) == "Week 1: ..."


def test_recommendations_endpoint_returns_list(db):
    """Test that recommendations come back as a list of strings."""
    add_metrics(db)
    ai = FakeAIClient('["Walk daily", "Hydrate"]')
    result = get_insight(kind=InsightKind.recommendations, user_id=USER_ID, db=db, ai=ai)
    assert result.kind == "recommendations"
    assert result.content == ["Walk daily", "Hydrate"]
    assert "Blood Pressure: 118/76" in ai.prompts[0]


def test_diet_insight_uses_this_weeks_entries(db):
    """Test that diet suggestions only use this week's entries."""
    repo = UserScopedRepository(models.FoodEntry, db, USER_ID)
    now = datetime.utcnow()
    repo.create(food_name="Toast", calories=250, protein_g=8, carbs_g=40, fats_g=6, recorded_at=now - timedelta(days=1))
    repo.create(food_name="Ancient", calories=9999, protein_g=0, carbs_g=0, fats_g=0, recorded_at=now - timedelta(days=40))
    ai = FakeAIClient("Eat more protein.")
    assert insights.generate_insight("diet", db, USER_ID, ai) == "Eat more protein."
    assert "Calories: 250 kcal" in ai.prompts[0]
    assert "Entries logged: 1" in ai.prompts[0]
