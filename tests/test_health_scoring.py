"""Tests for the health score, activity level and risk heuristics."""
from types import SimpleNamespace

import pytest
from services import health_scoring


def metrics(blood_pressure="115/75", heart_rate=70):
    return SimpleNamespace(blood_pressure=blood_pressure, heart_rate=heart_rate)


def sleep(*qualities, duration=8):
    return [SimpleNamespace(quality=q, duration=duration) for q in qualities]


def test_perfect_inputs_score_eighty():
    """Test that the best bucket of every indicator adds up to 80."""
    assert health_scoring.calculate_health_score(metrics(), sleep(5, 4), 22.0) == 80


def test_missing_everything_scores_only_sleep_floor():
    """Test that with no data only the 5-point sleep floor is scored."""
    assert health_scoring.calculate_health_score(None, [], None) == 5


@pytest.mark.parametrize("bp,points", [
    ("119/79", 20),
    ("125/82", 15),
    ("120/80", 15),
    ("135/88", 10),
    ("garbage", 0),
    (None, 0),
])
def test_blood_pressure_points(bp, points):
    """Test blood pressure buckets, including unparseable readings."""
    assert health_scoring.blood_pressure_points(bp) == points


def test_heart_rate_and_bmi_points():
    """Test heart rate and BMI buckets at their boundaries."""
    assert health_scoring.heart_rate_points(60) == 20
    assert health_scoring.heart_rate_points(101) == 10
    assert health_scoring.heart_rate_points(None) == 0
    assert health_scoring.bmi_points(24.9) == 20
    assert health_scoring.bmi_points(25) == 10
    assert health_scoring.bmi_points(30) == 5
    assert health_scoring.bmi_points(17) == 5


def test_sleep_quality_points():
    """Test sleep quality buckets, with no records earning the floor."""
    assert health_scoring.sleep_quality_points(sleep(4, 4)) == 20
    assert health_scoring.sleep_quality_points(sleep(2, 3)) == 10
    assert health_scoring.sleep_quality_points(sleep(1, 1)) == 5
    assert health_scoring.sleep_quality_points([]) == 5


def test_activity_level():
    """Test High/Moderate/Low activity from sleep duration and heart rate."""
    assert health_scoring.determine_activity_level(metrics(), sleep(4, duration=7.5)) == "High"
    assert health_scoring.determine_activity_level(metrics(heart_rate=110), sleep(4, duration=7.5)) == "Moderate"
    assert health_scoring.determine_activity_level(metrics(), sleep(4, duration=4)) == "Low"
    assert health_scoring.determine_activity_level(metrics(), []) == "Low"
    assert health_scoring.determine_activity_level(None, sleep(4)) == "Low"


def test_risk_level_single_indicators():
    """Test the level each indicator sets on its own."""
    assert health_scoring.determine_risk_level(metrics("150/95"), 22, sleep(5)) == "High"
    assert health_scoring.determine_risk_level(metrics("132/80"), 22, sleep(5)) == "Moderate"
    assert health_scoring.determine_risk_level(metrics(heart_rate=50), 22, sleep(5)) == "Moderate"
    assert health_scoring.determine_risk_level(metrics(), 22, sleep(3)) == "Moderate"
    assert health_scoring.determine_risk_level(metrics(), 22, sleep(1)) == "High"
    assert health_scoring.determine_risk_level(metrics(), 22, []) == "Low"
    assert health_scoring.determine_risk_level(None, 31, []) == "High"


def test_risk_level_later_checks_replace_earlier_ones():
    """Test that BMI and sleep quality override the blood pressure level."""
    assert health_scoring.determine_risk_level(metrics("150/95"), 22, sleep(3)) == "Moderate"
    assert health_scoring.determine_risk_level(metrics("150/95"), 27, sleep(5)) == "Moderate"
    assert health_scoring.determine_risk_level(metrics(heart_rate=50), 31, sleep(5)) == "High"
    assert health_scoring.determine_risk_level(metrics("150/95"), 22, sleep(4, 5)) == "High"
    assert health_scoring.determine_risk_level(metrics("150/95"), 22, []) == "High"


def test_score_category_and_summary():
    """Test score categories and the plain-text summary lines."""
    assert health_scoring.score_category(85) == "Excellent"
    assert health_scoring.score_category(70) == "Good"
    assert health_scoring.score_category(50) == "Fair"
    assert health_scoring.score_category(49) == "Needs Improvement"

    summary = health_scoring.build_summary(65, "Moderate", 22.9, "Low")
    assert summary.splitlines()[0] == "Health Score: 65/100"
    assert "normal weight" in summary
    assert "BMI data is not available." in health_scoring.build_summary(5, "Low", None, "Low")
