"""Sleep tracking router."""

from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import ValidationError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.tracking_schema import SleepRecordCreate, SleepRecordResponse

logger = get_logger("api.sleep")
router = APIRouter(prefix="/api/sleep", tags=["sleep"])


def resolve_duration(payload: SleepRecordCreate) -> float:
    """Hours slept, taken from the payload or derived from start/end.

    Raises:
        ValidationError: If neither a duration nor a valid start/end pair is given.
    """
    if payload.duration is not None:
        return payload.duration
    if payload.start_time and payload.end_time:
        hours = (payload.end_time - payload.start_time).total_seconds() / 3600
        if 0 < hours <= 24:
            return round(hours, 2)
        raise ValidationError("end_time must be after start_time and within 24 hours", field="end_time")
    raise ValidationError("duration or start_time and end_time are required", field="duration")


@router.post("", response_model=SleepRecordResponse, status_code=201)
def create_sleep_record(payload: SleepRecordCreate, user_id: str = Depends(get_current_user_id),
                        db: Session = Depends(get_db_write)):
    """Store a night of sleep.

    Args:
        payload: `SleepRecordCreate`; the date defaults to now.
        user_id: Authenticated user id.
        db: SQLAlchemy session (write) injected by dependency.

    Returns:
        The stored record as `SleepRecordResponse`.

    Raises:
        ValidationError: If no duration can be determined.
    """
    record = UserScopedRepository(models.SleepRecord, db, user_id).create(
        date=payload.date or datetime.utcnow(),
        duration=resolve_duration(payload),
        quality=payload.quality,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    logger.info("Sleep record %s stored for user %s", record.id, user_id)
    return record


@router.get("", response_model=List[SleepRecordResponse])
def list_sleep_records(limit: int = Query(30, ge=1, le=365), user_id: str = Depends(get_current_user_id),
                       db: Session = Depends(get_db_read)):
    """Newest-first sleep records, at most `limit`."""
    return UserScopedRepository(models.SleepRecord, db, user_id).list(models.SleepRecord.date, limit=limit)
