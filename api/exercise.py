"""Exercise logging router."""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.tracking_schema import ExerciseCreate, ExerciseCreatedResponse, ExerciseLogResponse, ExerciseResponse

logger = get_logger("api.exercise")
router = APIRouter(prefix="/api/exercise", tags=["exercise"])

RECENT_LOG_LIMIT = 10


@router.post("/log", response_model=ExerciseCreatedResponse, status_code=201)
def log_exercise(payload: ExerciseCreate, user_id: str = Depends(get_current_user_id),
                 db: Session = Depends(get_db_write)):
    """Log a workout dated now.

    Args:
        payload: `ExerciseCreate`; a missing category is stored as "other".
        user_id: Authenticated user id.
        db: SQLAlchemy session (write) injected by dependency.

    Returns:
        `ExerciseCreatedResponse` wrapping the stored exercise.
    """
    fields = payload.model_dump()
    fields["category"] = fields.get("category") or "other"
    exercise = UserScopedRepository(models.Exercise, db, user_id).create(date=datetime.utcnow(), **fields)
    logger.info("Exercise %s logged for user %s", exercise.id, user_id)
    return ExerciseCreatedResponse(success=True, exercise=ExerciseResponse.model_validate(exercise))


@router.get("/log", response_model=ExerciseLogResponse)
def get_exercise_logs(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """The ten most recent workouts."""
    logs = UserScopedRepository(models.Exercise, db, user_id).list(models.Exercise.date, limit=RECENT_LOG_LIMIT)
    return ExerciseLogResponse(success=True, logs=[ExerciseResponse.model_validate(ex) for ex in logs])
