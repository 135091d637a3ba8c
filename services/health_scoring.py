"""Health score and risk heuristics used by generated reports.

All functions are pure: they take the latest metrics snapshot (or None),
the recent sleep records and a precomputed BMI.
"""

from typing import Optional, Sequence, Tuple
from core.logger import get_logger
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.health_scoring")


def parse_blood_pressure(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Split '120/80' into (systolic, diastolic); None if it does not parse."""
    if not value or '/' not in value:
        return None
    systolic, _, diastolic = value.partition('/')
    try:
        return int(float(systolic.strip())), int(float(diastolic.strip()))
    except ValueError:
        return None


def _average(records: Sequence, attr: str) -> Optional[float]:
    values = [getattr(r, attr) for r in records if getattr(r, attr, None) is not None]
    if not values:
        return None
    return sum(values) / len(values)


def blood_pressure_points(blood_pressure: Optional[str]) -> int:
    parsed = parse_blood_pressure(blood_pressure)
    if parsed is None:
        return 0
    systolic, diastolic = parsed
    if systolic < 120 and diastolic < 80:
        return 20
    if systolic < 130 and diastolic < 85:
        return 15
    return 10


def heart_rate_points(heart_rate: Optional[float]) -> int:
    if not heart_rate:
        return 0
    return 20 if 60 <= heart_rate <= 100 else 10


def bmi_points(bmi: Optional[float]) -> int:
    if bmi is None:
        return 0
    if 18.5 <= bmi < 25:
        return 20
    if 25 <= bmi < 30:
        return 10
    return 5


def sleep_quality_points(sleep_records: Sequence) -> int:
    # No sleep data still earns the lowest bucket.
    avg_quality = _average(sleep_records, 'quality')
    if avg_quality is not None and avg_quality >= 4:
        return 20
    if avg_quality is not None and avg_quality >= 2:
        return 10
    return 5


def calculate_health_score(metrics, sleep_records: Sequence, bmi: Optional[float]) -> int:
    """Sum the blood pressure, heart rate, BMI and sleep quality buckets."""
    score = 0
    if metrics is not None:
        score += blood_pressure_points(metrics.blood_pressure)
        score += heart_rate_points(metrics.heart_rate)
    score += bmi_points(bmi)
    score += sleep_quality_points(sleep_records)
    logger.debug("Health score computed: %s", score)
    return score


def determine_activity_level(metrics, sleep_records: Sequence) -> str:
    """Classify activity as Low/Moderate/High from sleep duration and heart rate."""
    if metrics is None or not sleep_records:
        return "Low"
    avg_duration = _average(sleep_records, 'duration') or 0
    heart_rate = metrics.heart_rate
    if avg_duration >= 7 and heart_rate is not None and 60 <= heart_rate <= 100:
        return "High"
    if avg_duration >= 5:
        return "Moderate"
    return "Low"


def determine_risk_level(metrics, bmi: Optional[float], sleep_records: Sequence) -> str:
    """Risk level from blood pressure, heart rate, BMI and sleep quality.

    Checks run in that order and each one that fires replaces the level set
    by the earlier ones, so a poor sleep average can lower a High from
    blood pressure to Moderate. A sleep average of 4 or more, or no sleep
    data, leaves the level unchanged.
    """
    risk = "Low"

    if metrics is not None:
        parsed = parse_blood_pressure(metrics.blood_pressure)
        if parsed is not None:
            systolic, diastolic = parsed
            if systolic >= 140 or diastolic >= 90:
                risk = "High"
            elif systolic >= 130 or diastolic >= 85:
                risk = "Moderate"

        heart_rate = metrics.heart_rate
        if heart_rate and (heart_rate < 60 or heart_rate > 100):
            risk = "Moderate"

    if bmi is not None:
        if bmi < 18.5 or bmi >= 30:
            risk = "High"
        elif bmi >= 25:
            risk = "Moderate"

    avg_quality = _average(sleep_records, 'quality')
    if avg_quality is not None:
        if avg_quality < 2:
            risk = "High"
        elif avg_quality < 4:
            risk = "Moderate"

    return risk


def score_category(score: float) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Needs Improvement"


def build_summary(health_score: int, activity_level: str, bmi: Optional[float], risk_level: str) -> str:
    """Plain-text report summary."""
    if bmi is not None:
        category = nutrition_calculator.bmi_category(bmi).lower()
        bmi_text = f"Your BMI is {bmi}, which is considered {category}."
    else:
        bmi_text = "BMI data is not available."
    return "\n".join([
        f"Health Score: {health_score}/100",
        f"Activity Level: {activity_level}",
        f"Risk Level: {risk_level}",
        bmi_text,
    ])
