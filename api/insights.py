"""AI insight router."""

from enum import Enum

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.logger import get_logger
from database.deps import get_db_read
from schemas.report_schema import InsightResponse
from services.ai_client import GenerativeAIClient, get_ai_client
from services.insights import generate_insight

logger = get_logger("api.insights")
router = APIRouter(prefix="/api/insights", tags=["insights"])


class InsightKind(str, Enum):
    sleep = "sleep"
    activity = "activity"
    diet = "diet"
    workout = "workout"
    recommendations = "recommendations"


@router.get("/{kind}", response_model=InsightResponse)
def get_insight(
    kind: InsightKind,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_read),
    ai: GenerativeAIClient = Depends(get_ai_client),
):
    """Return one AI-written insight.

    Args:
        kind: Which insight to produce.
        user_id: Authenticated user id.
        db: SQLAlchemy session (read) injected by dependency.
        ai: Generative AI client injected by dependency.

    Returns:
        `InsightResponse`; `content` is a list for recommendations and text
        otherwise. A fixed message is returned when the AI is unavailable.
    """
    logger.info("Generating %s insight for user %s", kind.value, user_id)
    return InsightResponse(kind=kind.value, content=generate_insight(kind.value, db, user_id, ai))
