"""Tests for health report generation and its AI fallbacks."""
import json
from datetime import datetime, timedelta

import numpy as np
import pytest

from api.reports import download_report_pdf, get_report, get_report_by_id, get_report_history
from conftest import OTHER_USER_ID, USER_ID, FakeAIClient, add_metrics, unavailable
from core.exceptions import NotFoundError
from core.repository import UserScopedRepository
from database import models
from services import report_generator

NOW = datetime(2024, 6, 1, 12)

VITALS_REPLY = json.dumps({
    "bloodPressure": {"current": "118/76", "trend": "improving", "lastMeasured": "today", "chartData": ["118/76"] * 7},
    "heartRate": {"current": 72, "trend": "stable", "lastMeasured": "today", "chartData": [72] * 7},
    "temperature": {"current": "98.4°F", "trend": "stable", "lastMeasured": "today"},
    "respiratoryRate": {"current": "15 bpm", "trend": "stable", "lastMeasured": "today"},
})


def add_sleep(db, count, quality=4, duration=8):
    repo = UserScopedRepository(models.SleepRecord, db, USER_ID)
    for i in range(count):
        repo.create(date=NOW - timedelta(days=i), duration=duration, quality=quality)


def test_report_from_ai_sections(db):
    """Test a report built from computed scores and parsed AI sections."""
    add_metrics(db, recorded_at=NOW)
    add_sleep(db, 3)
    ai = FakeAIClient([VITALS_REPLY, '["Eat more fiber"]', "- Stay active\n- Keep sleeping well"])

    report = report_generator.generate_health_report(db, USER_ID, ai, now=NOW, rng=np.random.default_rng(1))

    assert report.health_score == 80
    assert report.bmi == 22.9
    assert report.activity_level == "High"
    assert report.risk_level == "Low"
    assert report.title == "Health Report - June 01, 2024"
    assert report.summary.startswith("Health Score: 80/100")
    assert report.vital_signs[0]["title"] == "Blood Pressure"
    assert report.vital_signs[0]["trend"] == "improving"
    assert report.vital_signs[2]["current"] == "98.4°F"
    assert report.nutrition_advice == ["Eat more fiber"]
    assert report.predictions == ["Stay active", "Keep sleeping well"]
    assert report.ai_generated["vital_signs"] is True
    assert report.ai_generated["nutrition_trends"] is True


def test_report_uses_fallbacks_when_ai_is_down(db):
    """Test that every AI section falls back to static content."""
    add_metrics(db, recorded_at=NOW)
    report = report_generator.generate_health_report(db, USER_ID, FakeAIClient(unavailable()), now=NOW)

    assert report.nutrition_advice == report_generator.FALLBACK_NUTRITION_ADVICE
    assert report.predictions == report_generator.FALLBACK_PREDICTIONS
    bp = report.vital_signs[0]
    assert bp["current"] == "118/76"
    assert bp["chart_data"] == report_generator.FALLBACK_BP_CHART
    assert report.vital_signs[3]["current"] == "16 bpm"
    # No sleep data: sleep floor only adds 5 points.
    assert report.health_score == 65


def test_report_without_metrics(db):
    """Test a report for a user with no metrics."""
    report = report_generator.generate_health_report(db, USER_ID, FakeAIClient("garbage"), now=NOW)
    assert report.health_score == 5
    assert report.bmi is None
    assert report.activity_level == "Low"
    assert report.health_metrics is None
    assert "BMI data is not available." in report.summary


def test_chart_variations_stay_near_recorded_vitals():
    """Test that chart readings stay within the variation range."""
    bp, hr = report_generator.chart_variations("120/80", 70, np.random.default_rng(7))
    assert len(bp) == 7 and len(hr) == 7
    for reading in bp:
        systolic, diastolic = (int(v) for v in reading.split("/"))
        assert 115 <= systolic <= 124
        assert 76 <= diastolic <= 83
    assert all(66 <= h <= 73 for h in hr)


def test_classify_trend():
    """Test trend labels from the least-squares slope."""
    assert report_generator.classify_trend([120, 124, 128, 132, 136]) == "worsening"
    assert report_generator.classify_trend([90, 85, 80, 75, 70]) == "improving"
    assert report_generator.classify_trend([72, 72, 73, 72, 72]) == "stable"
    assert report_generator.classify_trend([60, 90, 60, 90, 60]) == "fluctuating"
    assert report_generator.classify_trend([72]) == "stable"


def test_real_trends_override_ai_with_enough_history(db):
    """Test that five snapshots replace the AI trend labels."""
    for i, systolic in enumerate([140, 135, 130, 125, 120]):
        add_metrics(db, blood_pressure=f"{systolic}/80", heart_rate=70, recorded_at=NOW - timedelta(days=i))
    report = report_generator.generate_health_report(
        db, USER_ID, FakeAIClient([VITALS_REPLY, "[]", "[]"]), now=NOW)
    # Newest reading is 140 after a steady climb from 120.
    assert report.vital_signs[0]["trend"] == "worsening"
    assert report.vital_signs[1]["trend"] == "stable"
    assert report.ai_generated["vital_signs"] is False


def test_activity_and_nutrition_sections(db):
    """Test exercise and nutrition aggregates over the last 30 days."""
    add_metrics(db, recorded_at=NOW)
    exercises = UserScopedRepository(models.Exercise, db, USER_ID)
    exercises.create(name="Run", sets=1, reps=1, calories_burned=300, date=NOW - timedelta(days=1))
    exercises.create(name="Squats", sets=3, reps=10, calories_burned=100, date=NOW - timedelta(days=1))
    exercises.create(name="Old", sets=1, reps=1, calories_burned=999, date=NOW - timedelta(days=60))
    food = UserScopedRepository(models.FoodEntry, db, USER_ID)
    food.create(food_name="Eggs", calories=300, protein_g=20, carbs_g=2, fats_g=20, recorded_at=NOW - timedelta(days=2))
    food.create(food_name="Rice", calories=500, protein_g=10, carbs_g=100, fats_g=2, recorded_at=NOW - timedelta(days=1))

    report = report_generator.generate_health_report(db, USER_ID, FakeAIClient(unavailable()), now=NOW)

    assert report.activity_data["sessions"] == 2
    assert report.activity_data["calories_burned"] == 400
    assert report.activity_data["total_reps"] == 31
    assert report.nutrition_data["average_calories"] == 400
    assert [d["date"] for d in report.nutrition_trends] == ["2024-05-30", "2024-05-31"]


def test_report_endpoints_cache_and_isolate(db):
    """Test report caching, regeneration, history and ownership."""
    add_metrics(db)
    ai = FakeAIClient(unavailable())
    first = get_report(regenerate=False, user_id=USER_ID, db=db, ai=ai)
    again = get_report(regenerate=False, user_id=USER_ID, db=db, ai=ai)
    assert again.id == first.id
    fresh = get_report(regenerate=True, user_id=USER_ID, db=db, ai=ai)
    assert fresh.id != first.id

    history = get_report_history(user_id=USER_ID, db=db)
    assert [r.id for r in history] == [fresh.id, first.id]

    with pytest.raises(NotFoundError):
        get_report_by_id(report_id=first.id, user_id=OTHER_USER_ID, db=db)
    with pytest.raises(NotFoundError):
        download_report_pdf(report_id=first.id, user_id=OTHER_USER_ID, db=db)


def test_report_pdf_download(db):
    """Test the report PDF attachment and filename."""
    add_metrics(db, recorded_at=NOW)
    report = report_generator.generate_health_report(db, USER_ID, FakeAIClient(unavailable()), now=NOW)
    response = download_report_pdf(report_id=report.id, user_id=USER_ID, db=db)
    assert response.media_type == "application/pdf"
    assert response.body.startswith(b"%PDF")
    assert "WellTrack-Health-Report-2024-06-01.pdf" in response.headers["content-disposition"]
