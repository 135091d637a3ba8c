"""Health metrics router: snapshots of vitals and their history."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.health_schema import HealthMetricsCreate, HealthMetricsResponse, InitialHealthResponse

logger = get_logger("api.health")
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/latest", response_model=Optional[HealthMetricsResponse])
def get_latest_metrics(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Newest snapshot, or null when the user has none."""
    return UserScopedRepository(models.HealthMetrics, db, user_id).latest(models.HealthMetrics.recorded_at)


@router.post("/initial", response_model=InitialHealthResponse, status_code=201)
def submit_initial_metrics(payload: HealthMetricsCreate, user_id: str = Depends(get_current_user_id),
                           db: Session = Depends(get_db_write)):
    """Store the onboarding snapshot and mark the profile as submitted.

    Raises:
        NotFoundError: If the user has no profile yet.
    """
    profiles = UserScopedRepository(models.UserProfile, db, user_id)
    profile = profiles.query().first()
    if profile is None:
        raise NotFoundError("User profile", message="User profile not found")

    metrics = UserScopedRepository(models.HealthMetrics, db, user_id).create(**payload.model_dump())
    profiles.update(profile, {"initial_health_data_submitted": True})
    logger.info("Initial health data stored for user %s", user_id)
    return InitialHealthResponse(
        success=True,
        health_metrics=HealthMetricsResponse.model_validate(metrics),
        initial_health_data_submitted=True,
    )


@router.post("/metrics", response_model=HealthMetricsResponse, status_code=201)
def record_metrics(payload: HealthMetricsCreate, user_id: str = Depends(get_current_user_id),
                   db: Session = Depends(get_db_write)):
    """Store a new vitals snapshot; earlier snapshots are kept."""
    metrics = UserScopedRepository(models.HealthMetrics, db, user_id).create(**payload.model_dump())
    logger.info("Health metrics %s recorded for user %s", metrics.id, user_id)
    return metrics


@router.get("/history", response_model=List[HealthMetricsResponse])
def get_metrics_history(limit: int = Query(10, ge=1, le=100), user_id: str = Depends(get_current_user_id),
                        db: Session = Depends(get_db_read)):
    """Newest-first snapshots, at most `limit`."""
    return UserScopedRepository(models.HealthMetrics, db, user_id).list(
        models.HealthMetrics.recorded_at, limit=limit)
