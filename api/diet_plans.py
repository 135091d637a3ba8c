"""Diet plan router.

Single-day plans are generated from the latest health metrics; the weekly
plan is derived from the newest single-day plan and cached per base plan.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.diet_schema import CreatedDietPlan, DietPlanCreatedResponse, DietPlanRequest, DietPlanResponse
from services.ai_client import GenerativeAIClient, get_ai_client
from services import diet_planner

logger = get_logger("api.diet_plans")
router = APIRouter(prefix="/api/diet-plan", tags=["diet-plans"])


@router.post("", response_model=DietPlanCreatedResponse, status_code=201)
def create_diet_plan(
    payload: DietPlanRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_write),
    ai: GenerativeAIClient = Depends(get_ai_client),
):
    """Generate and save a single-day diet plan.

    Raises:
        NotFoundError: If the user has not recorded health metrics.
        GenerationError: If the AI reply could not be turned into a plan.
    """
    plan = diet_planner.create_diet_plan(db, user_id, payload, ai)
    return DietPlanCreatedResponse(
        message="Diet plan created successfully",
        diet_plan=CreatedDietPlan(id=plan.id, daily_calories=plan.daily_calories, meals=plan.meals or []),
    )


@router.get("", response_model=Optional[DietPlanResponse])
def get_latest_diet_plan(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Newest single-day plan, or null."""
    return UserScopedRepository(models.DietPlan, db, user_id).latest(
        models.DietPlan.created_at, models.DietPlan.is_weekly_plan.is_(False))


@router.get("/weekly", response_model=DietPlanResponse)
def get_weekly_plan(
    regenerate: bool = False,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_write),
    ai: GenerativeAIClient = Depends(get_ai_client),
):
    """Return the weekly plan derived from the newest single-day plan.

    The stored weekly plan is reused unless `regenerate` is set.

    Args:
        regenerate: Force a new weekly plan even if one is cached.
        user_id: Authenticated user id.
        db: SQLAlchemy session (write) injected by dependency.
        ai: Generative AI client injected by dependency.

    Returns:
        `DietPlanResponse` with `weekly_plan_data` holding seven days.

    Raises:
        NotFoundError: If the user has no single-day plan.
        GenerationError: If the AI reply is not a usable weekly plan.
    """
    return diet_planner.get_or_generate_weekly_plan(db, user_id, ai, regenerate=regenerate)


@router.get("/history", response_model=List[DietPlanResponse])
def get_diet_plan_history(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """All of the caller's plans, newest first."""
    return UserScopedRepository(models.DietPlan, db, user_id).list(models.DietPlan.created_at)


def _plan_or_404(db: Session, user_id: str, plan_id: int) -> models.DietPlan:
    plan = UserScopedRepository(models.DietPlan, db, user_id).get(plan_id)
    if plan is None:
        raise NotFoundError("Diet plan", plan_id)
    return plan


@router.get("/{plan_id}", response_model=DietPlanResponse)
def get_diet_plan(plan_id: int, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return one of the caller's plans.

    Raises:
        NotFoundError: If the plan does not exist or belongs to another user.
    """
    return _plan_or_404(db, user_id, plan_id)


@router.delete("/{plan_id}")
def delete_diet_plan(plan_id: int, user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_write)):
    """Delete one of the caller's plans.

    Raises:
        NotFoundError: If the plan does not exist or belongs to another user.
    """
    plan = _plan_or_404(db, user_id, plan_id)
    UserScopedRepository(models.DietPlan, db, user_id).delete(plan)
    logger.info("Diet plan %s deleted by user %s", plan_id, user_id)
    return {"message": "Diet plan deleted successfully"}
