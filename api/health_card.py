"""Digital health card router."""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read
from database import models
from schemas.report_schema import HealthCard
from services.health_card import build_health_card
from services import pdf_export

logger = get_logger("api.health_card")
router = APIRouter(prefix="/api/health-card", tags=["health-card"])


def load_health_card(db: Session, user_id: str) -> HealthCard:
    """Card built from the latest metrics.

    Raises:
        NotFoundError: If the user has no health metrics.
    """
    metrics = UserScopedRepository(models.HealthMetrics, db, user_id).latest(models.HealthMetrics.recorded_at)
    if metrics is None:
        raise NotFoundError("Health metrics", message="Health metrics not found")
    profile = UserScopedRepository(models.UserProfile, db, user_id).query().first()
    return build_health_card(profile, metrics)


@router.get("", response_model=HealthCard)
def get_health_card(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the digital health card.

    Raises:
        NotFoundError: If the user has no health metrics.
    """
    return load_health_card(db, user_id)


@router.get("/pdf")
def download_health_card_pdf(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """Return the health card as a PDF attachment.

    Raises:
        NotFoundError: If the user has no health metrics.
    """
    card = load_health_card(db, user_id)
    filename = pdf_export.health_card_filename(card)
    return Response(
        content=pdf_export.render_health_card_pdf(card),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
