"""Health goals router. Responses are wrapped as ``{success, data}``."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.goal_schema import (
    HealthGoalCreate,
    HealthGoalEnvelope,
    HealthGoalListEnvelope,
    HealthGoalResponse,
    HealthGoalUpdate,
)

logger = get_logger("api.goals")
router = APIRouter(prefix="/api/health-goals", tags=["health-goals"])


def _goal_or_404(repo: UserScopedRepository, goal_id: int) -> models.HealthGoal:
    goal = repo.get(goal_id)
    if goal is None:
        raise NotFoundError("Health goal", goal_id)
    return goal


@router.get("", response_model=HealthGoalListEnvelope)
def list_goals(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """The caller's goals, newest first."""
    goals = UserScopedRepository(models.HealthGoal, db, user_id).list(models.HealthGoal.created_at)
    return HealthGoalListEnvelope(success=True, data=[HealthGoalResponse.model_validate(g) for g in goals])


@router.post("", response_model=HealthGoalEnvelope, status_code=201)
def create_goal(payload: HealthGoalCreate, user_id: str = Depends(get_current_user_id),
                db: Session = Depends(get_db_write)):
    """Create a goal.

    Args:
        payload: `HealthGoalCreate` with title, category and targets.
        user_id: Authenticated user id.
        db: SQLAlchemy session (write) injected by dependency.

    Returns:
        `HealthGoalEnvelope` with the stored goal.
    """
    fields = payload.model_dump()
    fields["category"] = payload.category.value
    goal = UserScopedRepository(models.HealthGoal, db, user_id).create(**fields)
    logger.info("Health goal %s created for user %s", goal.id, user_id)
    return HealthGoalEnvelope(success=True, data=HealthGoalResponse.model_validate(goal))


@router.get("/{goal_id}", response_model=HealthGoalEnvelope)
def get_goal(goal_id: int, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return one goal.

    Raises:
        NotFoundError: If the goal does not exist or belongs to another user.
    """
    goal = _goal_or_404(UserScopedRepository(models.HealthGoal, db, user_id), goal_id)
    return HealthGoalEnvelope(success=True, data=HealthGoalResponse.model_validate(goal))


@router.put("/{goal_id}", response_model=HealthGoalEnvelope)
def update_goal(goal_id: int, payload: HealthGoalUpdate, user_id: str = Depends(get_current_user_id),
                db: Session = Depends(get_db_write)):
    """Apply a partial update; setting progress to 100 marks the goal completed."""
    repo = UserScopedRepository(models.HealthGoal, db, user_id)
    goal = _goal_or_404(repo, goal_id)
    changes = payload.model_dump(exclude_unset=True)
    # Required columns cannot be cleared.
    for key in ("title", "category", "completed", "progress"):
        if key in changes and changes[key] is None:
            del changes[key]
    if "category" in changes:
        changes["category"] = payload.category.value
    if changes.get("progress") is not None and changes["progress"] >= 100 and "completed" not in changes:
        changes["completed"] = True
    goal = repo.update(goal, changes)
    return HealthGoalEnvelope(success=True, data=HealthGoalResponse.model_validate(goal))


@router.delete("/{goal_id}", response_model=HealthGoalEnvelope)
def delete_goal(goal_id: int, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Delete one goal.

    Raises:
        NotFoundError: If the goal does not exist or belongs to another user.
    """
    repo = UserScopedRepository(models.HealthGoal, db, user_id)
    repo.delete(_goal_or_404(repo, goal_id))
    logger.info("Health goal %s deleted by user %s", goal_id, user_id)
    return HealthGoalEnvelope(success=True)
