"""Food logging router: entries, period summaries and tracking totals."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.tracking_schema import FoodEntryCreate, FoodEntryResponse, FoodSummaryResponse, FoodTrackingResponse
from services import nutrition_summary
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.food")
router = APIRouter(prefix="/api/food", tags=["food"])

FOOD_LIST_LIMIT = 100


def _entries_between(db: Session, user_id: str, start: datetime, end: datetime):
    return UserScopedRepository(models.FoodEntry, db, user_id).list(
        models.FoodEntry.recorded_at,
        models.FoodEntry.recorded_at >= start,
        models.FoodEntry.recorded_at <= end,
    )


@router.get("", response_model=List[FoodEntryResponse])
def list_food_entries(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_read),
):
    """Newest entries first, optionally bounded by date."""
    criteria = []
    if start_date is not None:
        criteria.append(models.FoodEntry.recorded_at >= start_date)
    if end_date is not None:
        criteria.append(models.FoodEntry.recorded_at <= end_date)
    return UserScopedRepository(models.FoodEntry, db, user_id).list(
        models.FoodEntry.recorded_at, *criteria, limit=FOOD_LIST_LIMIT)


@router.post("", response_model=FoodEntryResponse, status_code=201)
def create_food_entry(payload: FoodEntryCreate, user_id: str = Depends(get_current_user_id),
                      db: Session = Depends(get_db_write)):
    """Log a meal.

    Macro percentages left out of the payload are computed from the
    gram values.

    Args:
        payload: `FoodEntryCreate` with calories and macro grams.
        user_id: Authenticated user id.
        db: SQLAlchemy session (write) injected by dependency.

    Returns:
        The stored entry as `FoodEntryResponse`.
    """
    fields = payload.model_dump()
    computed = nutrition_calculator.macro_percentages(payload.protein_g, payload.carbs_g, payload.fats_g)
    for macro in ("protein", "carbs", "fats"):
        if fields[f"{macro}_percent"] is None:
            fields[f"{macro}_percent"] = computed[macro]
    entry = UserScopedRepository(models.FoodEntry, db, user_id).create(**fields)
    logger.info("Food entry %s logged for user %s (%s kcal)", entry.id, user_id, entry.calories)
    return entry


@router.get("/summary", response_model=FoodSummaryResponse)
def get_food_summary(period: str = "today", user_id: str = Depends(get_current_user_id),
                     db: Session = Depends(get_db_read)):
    """Totals and daily averages for today, week, month or year."""
    period, start, end = nutrition_summary.period_range(period, datetime.utcnow())
    entries = _entries_between(db, user_id, start, end)
    return nutrition_summary.summarize_entries(entries, period, start, end)


@router.get("/tracking", response_model=FoodTrackingResponse)
def get_food_tracking(period: str = Query("today"), user_id: str = Depends(get_current_user_id),
                      db: Session = Depends(get_db_read)):
    """Plain calorie and macro totals for a period."""
    period, start, end = nutrition_summary.period_range(period, datetime.utcnow())
    totals = nutrition_summary.tracking_totals(_entries_between(db, user_id, start, end))
    return FoodTrackingResponse(period=period, **totals)
