"""Health report assembly.

A report combines values computed here (BMI, health score, activity and
risk level, nutrition and exercise aggregates) with sections written by
the generative model (vital-sign trends, nutrition advice, predictions).
Every AI section has a static fallback, so a report is always produced.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

import numpy as np
from sqlalchemy.orm import Session

from core.exceptions import AIServiceError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database import models
from schemas.report_schema import GeneratedVitalSigns
from services.ai_client import GenerativeAIClient
from services.ai_parsing import parse_object, parse_string_list
from services import health_scoring, nutrition_summary
from services.nutrition_calculator import nutrition_calculator, round_half_up

logger = get_logger("services.report_generator")

HISTORY_LIMIT = 6
SLEEP_LIMIT = 30
LOOKBACK_DAYS = 30
MIN_HISTORY_FOR_REAL_TRENDS = 5

DEFAULT_BLOOD_PRESSURE = "120/80"
DEFAULT_HEART_RATE = 72

FALLBACK_BP_CHART = ["118/78", "121/79", "120/80", "122/81", "119/78", "120/82", "121/80"]
FALLBACK_HR_CHART = [70, 72, 74, 71, 73, 72, 70]

FALLBACK_NUTRITION_ADVICE = [
    "Consider increasing your protein intake to support muscle maintenance.",
    "Try to include more fruits and vegetables in your diet for essential vitamins.",
    "Stay hydrated by drinking at least 2 liters of water daily.",
    "Monitor your portion sizes to maintain a healthy calorie balance.",
    "Include sources of healthy fats like avocados, nuts and olive oil.",
]

FALLBACK_PREDICTIONS = [
    "If current trends continue, your cardiovascular fitness will likely improve over the next 3 months.",
    "Maintaining your current activity level could help prevent age-related muscle loss.",
    "Your current health indicators suggest a lower risk for metabolic disorders.",
    "Consider scheduling a regular check-up to monitor your blood pressure trends.",
]

FALLBACK_RECOMMENDATIONS = [
    "Incorporate 30 minutes of moderate exercise most days of the week.",
    "Practice stress reduction techniques like meditation or deep breathing for 10 minutes daily.",
    "Ensure you get 7-8 hours of quality sleep each night.",
    "Stay hydrated by drinking water throughout the day.",
    "Schedule regular health check-ups to monitor your progress.",
]


def _value(metrics: Optional[Dict], key: str, unit: str = "") -> str:
    value = (metrics or {}).get(key)
    return "unknown" if value is None else f"{value}{unit}"


def metrics_snapshot(metrics) -> Optional[Dict]:
    """The subset of a metrics row that is sent to the model and stored on reports."""
    if metrics is None:
        return None
    return {
        "height": metrics.height,
        "weight": metrics.weight,
        "age": metrics.age,
        "gender": metrics.gender,
        "blood_pressure": metrics.blood_pressure,
        "heart_rate": metrics.heart_rate,
    }


def chart_variations(blood_pressure: str, heart_rate: float, rng: np.random.Generator,
                     days: int = 7):
    """Seven plausible daily readings scattered around the recorded vitals."""
    parsed = health_scoring.parse_blood_pressure(blood_pressure) or (120, 80)
    systolic = parsed[0] + rng.integers(-5, 5, size=days)
    diastolic = parsed[1] + rng.integers(-4, 4, size=days)
    heart = round_half_up(heart_rate) + rng.integers(-4, 4, size=days)
    bp_chart = [f"{int(s)}/{int(d)}" for s, d in zip(systolic, diastolic)]
    return bp_chart, [int(h) for h in heart]


def classify_trend(values: Sequence[float], tolerance: float = 0.5) -> str:
    """Label a series (oldest first) by the sign of its least-squares slope.

    Rising vitals read as "worsening", falling ones as "improving"; a flat
    line with a wide spread is "fluctuating".
    """
    series = np.asarray([v for v in values if v is not None], dtype=float)
    if series.size < 2:
        return "stable"
    slope = np.polyfit(np.arange(series.size), series, 1)[0]
    if abs(slope) < tolerance:
        return "fluctuating" if np.ptp(series) > 10 * tolerance else "stable"
    return "worsening" if slope > 0 else "improving"


def history_trends(history: Sequence) -> Dict[str, str]:
    """BP/HR trends from real snapshots (newest first in `history`)."""
    ordered = list(reversed(history))
    systolic = [
        parsed[0] for parsed in (health_scoring.parse_blood_pressure(h.blood_pressure) for h in ordered) if parsed
    ]
    heart_rates = [h.heart_rate for h in ordered if h.heart_rate]
    return {
        "blood_pressure": classify_trend(systolic),
        "heart_rate": classify_trend(heart_rates),
    }


def _fallback_vital_signs(blood_pressure: str, heart_rate: float) -> GeneratedVitalSigns:
    return GeneratedVitalSigns.model_validate({
        "bloodPressure": {"current": blood_pressure, "trend": "stable", "lastMeasured": "today",
                          "chartData": FALLBACK_BP_CHART},
        "heartRate": {"current": heart_rate, "trend": "stable", "lastMeasured": "today",
                      "chartData": FALLBACK_HR_CHART},
        "temperature": {"current": "98.6°F", "trend": "stable", "lastMeasured": "today"},
        "respiratoryRate": {"current": "16 bpm", "trend": "stable", "lastMeasured": "today"},
    })


def generate_vital_signs(health_data: Dict, ai: GenerativeAIClient,
                         rng: Optional[np.random.Generator] = None) -> GeneratedVitalSigns:
    """Ask the model for a vital-signs trend report, falling back to static values."""
    metrics = health_data.get("metrics") or {}
    blood_pressure = metrics.get("blood_pressure") or DEFAULT_BLOOD_PRESSURE
    heart_rate = metrics.get("heart_rate") or DEFAULT_HEART_RATE
    bp_chart, hr_chart = chart_variations(blood_pressure, heart_rate, rng or np.random.default_rng())

    prompt = f"""
As a medical AI, generate a realistic vital signs report based on these health metrics:
- Blood Pressure: {blood_pressure}
- Heart Rate: {heart_rate} bpm
- Age: {_value(metrics, 'age')}
- Gender: {_value(metrics, 'gender')}

Return the data in this JSON format only, no explanations. Each "trend" is one of
"improving", "worsening", "stable", "fluctuating":
{{
  "bloodPressure": {{"current": "{blood_pressure}", "trend": "stable", "lastMeasured": "today", "chartData": {bp_chart}}},
  "heartRate": {{"current": {heart_rate}, "trend": "stable", "lastMeasured": "today", "chartData": {hr_chart}}},
  "temperature": {{"current": "98.6°F", "trend": "stable", "lastMeasured": "today"}},
  "respiratoryRate": {{"current": "16 bpm", "trend": "stable", "lastMeasured": "today"}}
}}
""".replace("'", '"')

    fallback = _fallback_vital_signs(blood_pressure, heart_rate)
    try:
        raw = ai.generate_text(prompt)
    except AIServiceError as exc:
        logger.error("Error generating vital signs with AI: %s", exc.message)
        return fallback
    return parse_object(raw, GeneratedVitalSigns, fallback)


def vital_signs_section(vitals: GeneratedVitalSigns, trends: Optional[Dict[str, str]] = None) -> List[Dict]:
    """Flatten the vital-signs payload into titled report cards."""
    trends = trends or {}
    cards = [
        ("Blood Pressure", vitals.blood_pressure, trends.get("blood_pressure")),
        ("Heart Rate", vitals.heart_rate, trends.get("heart_rate")),
        ("Body Temperature", vitals.temperature, None),
        ("Respiratory Rate", vitals.respiratory_rate, None),
    ]
    section = []
    for title, vital, real_trend in cards:
        card = {
            "title": title,
            "current": vital.current,
            "trend": real_trend or vital.trend,
            "last_measured": vital.last_measured,
        }
        if vital.chart_data is not None:
            card["chart_data"] = vital.chart_data
        section.append(card)
    return section


def _ask_for_list(ai: GenerativeAIClient, prompt: str, fallback: List[str], what: str) -> List[str]:
    try:
        raw = ai.generate_text(prompt)
    except AIServiceError as exc:
        logger.error("Error generating %s with AI: %s", what, exc.message)
        return list(fallback)
    return parse_string_list(raw, fallback)


def _nutrition_lines(nutrition: Optional[Dict]) -> str:
    if not nutrition:
        return ""
    return (
        f"- Average Calorie Intake: {nutrition['calories']} kcal\n"
        f"- Average Protein: {nutrition['protein_g']}g\n"
        f"- Average Carbs: {nutrition['carbs_g']}g\n"
        f"- Average Fats: {nutrition['fats_g']}g\n"
    )


def generate_nutrition_advice(health_data: Dict, health_score: int, ai: GenerativeAIClient) -> List[str]:
    metrics = health_data.get("metrics")
    prompt = f"""
As a nutrition expert AI, provide 3-5 personalized nutrition advice points based on these health metrics:
- Weight: {_value(metrics, 'weight', ' kg')}
- Height: {_value(metrics, 'height', ' cm')}
- Age: {_value(metrics, 'age')}
- Gender: {_value(metrics, 'gender')}
- Health Score: {health_score}/100
{_nutrition_lines(health_data.get('nutrition'))}
Return ONLY a JSON array of advice strings, no explanations or other text.
"""
    return _ask_for_list(ai, prompt, FALLBACK_NUTRITION_ADVICE, "nutrition advice")


def generate_predictions(health_data: Dict, health_score: int, ai: GenerativeAIClient) -> List[str]:
    metrics = health_data.get("metrics")
    prompt = f"""
As a predictive health AI, provide 3-4 potential health predictions or insights based on these metrics:
- Blood Pressure: {_value(metrics, 'blood_pressure')}
- Heart Rate: {_value(metrics, 'heart_rate', ' bpm')}
- Weight: {_value(metrics, 'weight', ' kg')}
- Height: {_value(metrics, 'height', ' cm')}
- Age: {_value(metrics, 'age')}
- Gender: {_value(metrics, 'gender')}
- Health Score: {health_score}/100

Be realistic and helpful, but not alarmist. Focus on preventive care and maintenance.
Return ONLY a JSON array of prediction strings, no explanations or other text.
"""
    return _ask_for_list(ai, prompt, FALLBACK_PREDICTIONS, "health predictions")


def generate_recommendations(health_data: Dict, ai: GenerativeAIClient) -> List[str]:
    metrics = health_data.get("metrics")
    prompt = f"""
As a health recommendations AI, provide 3-5 personalized health recommendations based on these metrics:
- Blood Pressure: {_value(metrics, 'blood_pressure')}
- Heart Rate: {_value(metrics, 'heart_rate', ' bpm')}
- Weight: {_value(metrics, 'weight', ' kg')}
- Height: {_value(metrics, 'height', ' cm')}
- Age: {_value(metrics, 'age')}
- Gender: {_value(metrics, 'gender')}

Be specific, actionable, and practical. Focus on sustainable health improvements.
Return ONLY a JSON array of recommendation strings, no explanations or other text.
"""
    return _ask_for_list(ai, prompt, FALLBACK_RECOMMENDATIONS, "health recommendations")


def activity_summary(exercises: Sequence) -> Dict:
    """Totals and a per-day timeline from logged exercises."""
    timeline: Dict[str, Dict] = {}
    for ex in exercises:
        day = ex.date.strftime("%Y-%m-%d")
        bucket = timeline.setdefault(day, {"date": day, "sessions": 0, "calories_burned": 0.0})
        bucket["sessions"] += 1
        bucket["calories_burned"] += ex.calories_burned or 0
    days = sorted(timeline.values(), key=lambda d: d["date"])
    total_calories = sum(d["calories_burned"] for d in days)
    return {
        "sessions": len(exercises),
        "total_sets": sum(ex.sets or 0 for ex in exercises),
        "total_reps": sum((ex.sets or 0) * (ex.reps or 0) for ex in exercises),
        "calories_burned": round(total_calories, 1),
        "average_daily_calories_burned": round(total_calories / len(days), 1) if days else 0,
        "timeline": days,
    }


def collect_health_data(db: Session, user_id: str, now: datetime) -> Dict:
    """Load everything a report is computed from."""
    metrics_repo = UserScopedRepository(models.HealthMetrics, db, user_id)
    since = now - timedelta(days=LOOKBACK_DAYS)
    food_entries = UserScopedRepository(models.FoodEntry, db, user_id).list(
        models.FoodEntry.recorded_at, models.FoodEntry.recorded_at >= since)
    history = metrics_repo.list(models.HealthMetrics.recorded_at, limit=HISTORY_LIMIT)
    return {
        "latest": history[0] if history else None,
        "history": history,
        "sleep": UserScopedRepository(models.SleepRecord, db, user_id).list(
            models.SleepRecord.date, limit=SLEEP_LIMIT),
        "food_entries": food_entries,
        "exercises": UserScopedRepository(models.Exercise, db, user_id).list(
            models.Exercise.date, models.Exercise.date >= since),
    }


def prompt_data(collected: Dict) -> Dict:
    """The slice of collected data that is embedded in AI prompts."""
    return {
        "metrics": metrics_snapshot(collected["latest"]),
        "nutrition": nutrition_summary.average_per_entry(collected["food_entries"]) or None,
    }


def generate_health_report(db: Session, user_id: str, ai: GenerativeAIClient,
                           now: Optional[datetime] = None,
                           rng: Optional[np.random.Generator] = None) -> models.HealthReport:
    """Compute, generate and persist a new report for the user."""
    now = now or datetime.utcnow()
    collected = collect_health_data(db, user_id, now)
    metrics = collected["latest"]
    sleep = collected["sleep"]

    bmi = nutrition_calculator.calculate_bmi(metrics.height, metrics.weight) if metrics else None
    health_score = health_scoring.calculate_health_score(metrics, sleep, bmi)
    activity_level = health_scoring.determine_activity_level(metrics, sleep)
    risk_level = health_scoring.determine_risk_level(metrics, bmi, sleep)
    data = prompt_data(collected)

    real_trends = None
    if len(collected["history"]) >= MIN_HISTORY_FOR_REAL_TRENDS:
        real_trends = history_trends(collected["history"])
    vitals = generate_vital_signs(data, ai, rng)

    food_entries = collected["food_entries"]
    nutrition_data = {}
    if food_entries:
        averages = nutrition_summary.average_per_entry(food_entries)
        nutrition_data = {
            "average_calories": averages["calories"],
            "average_protein_g": averages["protein_g"],
            "average_carbs_g": averages["carbs_g"],
            "average_fats_g": averages["fats_g"],
            "entry_count": len(food_entries),
        }

    report = UserScopedRepository(models.HealthReport, db, user_id).create(
        title=f"Health Report - {now.strftime('%B %d, %Y')}",
        summary=health_scoring.build_summary(health_score, activity_level, bmi, risk_level),
        health_score=health_score,
        bmi=bmi,
        activity_level=activity_level,
        risk_level=risk_level,
        health_metrics=data["metrics"],
        vital_signs=vital_signs_section(vitals, real_trends),
        activity_data=activity_summary(collected["exercises"]),
        nutrition_data=nutrition_data,
        nutrition_trends=nutrition_summary.daily_nutrition_trend(food_entries),
        nutrition_advice=generate_nutrition_advice(data, health_score, ai),
        predictions=generate_predictions(data, health_score, ai),
        ai_generated={
            "vital_signs": real_trends is None,
            "nutrition_advice": True,
            "predictions": True,
            "activity_data": False,
            "nutrition_trends": len(food_entries) < 10,
        },
        generated_at=now,
    )
    logger.info("Health report %s generated for user %s (score=%s)", report.id, user_id, health_score)
    return report


def get_or_generate_report(db: Session, user_id: str, ai: GenerativeAIClient,
                           regenerate: bool = False) -> models.HealthReport:
    """Latest stored report unless `regenerate` is set or none exists."""
    if not regenerate:
        latest = UserScopedRepository(models.HealthReport, db, user_id).latest(models.HealthReport.generated_at)
        if latest is not None:
            return latest
    return generate_health_report(db, user_id, ai)
