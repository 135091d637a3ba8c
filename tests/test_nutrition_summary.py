"""Tests for period windows and food entry aggregation."""
from datetime import datetime, timedelta
from types import SimpleNamespace

from services import nutrition_summary


NOW = datetime(2024, 3, 31, 15, 30)


def entry(calories, protein=10, carbs=20, fats=5, recorded_at=NOW):
    return SimpleNamespace(calories=calories, protein_g=protein, carbs_g=carbs, fats_g=fats, recorded_at=recorded_at)


def test_period_windows():
    """Test the start and end of each named period."""
    period, start, end = nutrition_summary.period_range("today", NOW)
    assert period == "today"
    assert start == datetime(2024, 3, 31)
    assert end.hour == 23 and end.minute == 59

    assert nutrition_summary.period_range("week", NOW)[1] == NOW - timedelta(days=7)
    # March 31 clamps to the last day of February in a leap year.
    assert nutrition_summary.period_range("month", NOW)[1] == datetime(2024, 2, 29, 15, 30)
    assert nutrition_summary.period_range("year", NOW)[1] == datetime(2023, 3, 31, 15, 30)


def test_unknown_period_is_today():
    """Test that an unknown period falls back to today."""
    assert nutrition_summary.period_range("fortnight", NOW)[0] == "today"
    assert nutrition_summary.period_start("fortnight", NOW) == datetime(2024, 3, 31)


def test_summary_totals_and_daily_averages():
    """Test totals and daily averages over a week."""
    entries = [entry(700), entry(700)]
    period, start, end = nutrition_summary.period_range("week", NOW)
    summary = nutrition_summary.summarize_entries(entries, period, start, end)
    assert summary["total_calories"] == 1400
    assert summary["total_protein"] == 20
    assert summary["entry_count"] == 2
    assert summary["daily_avg_calories"] == 200


def test_today_has_no_daily_averages():
    """Test that daily averages stay at 0 for today."""
    period, start, end = nutrition_summary.period_range("today", NOW)
    summary = nutrition_summary.summarize_entries([entry(500)], period, start, end)
    assert summary["total_calories"] == 500
    assert summary["daily_avg_calories"] == 0


def test_empty_entries():
    """Test aggregation over no entries."""
    assert nutrition_summary.tracking_totals([]) == {
        "calories": 0.0, "protein_g": 0.0, "carbs_g": 0.0, "fats_g": 0.0, "entry_count": 0,
    }
    assert nutrition_summary.average_per_entry([]) == {}
    assert nutrition_summary.daily_nutrition_trend([]) == []


def test_average_and_daily_trend():
    """Test per-entry averages and per-day trend buckets."""
    entries = [
        entry(300, recorded_at=datetime(2024, 3, 30, 8)),
        entry(500, recorded_at=datetime(2024, 3, 30, 19)),
        entry(400, recorded_at=datetime(2024, 3, 31, 12)),
    ]
    assert nutrition_summary.average_per_entry(entries)["calories"] == 400
    trend = nutrition_summary.daily_nutrition_trend(entries)
    assert [d["date"] for d in trend] == ["2024-03-30", "2024-03-31"]
    assert trend[0]["calories"] == 800


def test_average_per_entry_rounds_halves_up():
    """Test that a per-entry mean ending in .5 rounds up."""
    entries = [entry(2, protein=1), entry(3, protein=2)]
    averages = nutrition_summary.average_per_entry(entries)
    assert averages["calories"] == 3
    assert averages["protein_g"] == 2
