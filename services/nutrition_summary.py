"""Period bucketing and aggregation of logged food entries.

Entries are loaded into a pandas DataFrame so totals, per-entry averages
and per-day trends all come from the same frame.
"""

import math
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from core.logger import get_logger
from services.nutrition_calculator import round_half_up

logger = get_logger("services.nutrition_summary")

PERIODS = ("today", "week", "month", "year")
NUTRIENT_COLUMNS = ["calories", "protein_g", "carbs_g", "fats_g"]


def _months_back(moment: datetime, months: int) -> datetime:
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    # Clamp the day, e.g. March 31 -> February 28/29.
    next_month = datetime(year + (month // 12), month % 12 + 1, 1)
    last_day = (next_month - timedelta(days=1)).day
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def period_range(period: str, now: datetime) -> Tuple[str, datetime, datetime]:
    """Resolve a period name to (normalized period, start, end).

    Unknown periods fall back to "today", which spans midnight to the end
    of the current day.
    """
    if period == "week":
        return period, now - timedelta(days=7), now
    if period == "month":
        return period, _months_back(now, 1), now
    if period == "year":
        return period, _months_back(now, 12), now
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999999)
    return "today", start, end


def entries_frame(entries: Iterable) -> pd.DataFrame:
    """Build a DataFrame of the nutrient columns plus ``recorded_at``."""
    rows = [
        {
            "recorded_at": e.recorded_at,
            **{col: (getattr(e, col, None) or 0) for col in NUTRIENT_COLUMNS},
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["recorded_at"] + NUTRIENT_COLUMNS)


def tracking_totals(entries: Iterable) -> Dict[str, float]:
    """Plain sums of calories and macros."""
    df = entries_frame(entries)
    totals = df[NUTRIENT_COLUMNS].sum()
    result = {col: float(totals[col]) for col in NUTRIENT_COLUMNS}
    result["entry_count"] = int(len(df))
    return result


def summarize_entries(entries: Iterable, period: str, start: datetime, end: datetime) -> Dict:
    """Totals plus daily averages over the span [start, end].

    Daily averages are left at 0 for "today".
    """
    totals = tracking_totals(entries)
    summary = {
        "total_calories": totals["calories"],
        "total_protein": totals["protein_g"],
        "total_carbs": totals["carbs_g"],
        "total_fats": totals["fats_g"],
        "entry_count": totals["entry_count"],
        "period": period,
        "start_date": start,
        "end_date": end,
        "daily_avg_calories": 0.0,
        "daily_avg_protein": 0.0,
        "daily_avg_carbs": 0.0,
        "daily_avg_fats": 0.0,
    }
    if period != "today":
        days = max(1, math.ceil((end - start).total_seconds() / 86400))
        summary["daily_avg_calories"] = summary["total_calories"] / days
        summary["daily_avg_protein"] = summary["total_protein"] / days
        summary["daily_avg_carbs"] = summary["total_carbs"] / days
        summary["daily_avg_fats"] = summary["total_fats"] / days
    return summary


def average_per_entry(entries: Iterable) -> Dict[str, int]:
    """Rounded per-entry means; empty dict when there are no entries."""
    df = entries_frame(entries)
    if df.empty:
        return {}
    means = df[NUTRIENT_COLUMNS].mean()
    return {col: round_half_up(float(means[col])) for col in NUTRIENT_COLUMNS}


def daily_nutrition_trend(entries: Iterable) -> List[Dict]:
    """Per-day totals, oldest day first, for report charts."""
    df = entries_frame(entries)
    if df.empty:
        return []
    df["day"] = pd.to_datetime(df["recorded_at"]).dt.strftime("%Y-%m-%d")
    daily = df.groupby("day", sort=True)[NUTRIENT_COLUMNS].sum().reset_index()
    return [
        {"date": row["day"], **{col: round(float(row[col]), 1) for col in NUTRIENT_COLUMNS}}
        for _, row in daily.iterrows()
    ]


def period_start(period: str, now: datetime) -> datetime:
    """Start of the window a period name covers."""
    return period_range(period, now)[1]
