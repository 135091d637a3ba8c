"""Health report router: generation, history and PDF export."""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from core.auth import get_current_user_id
from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import UserScopedRepository
from database.deps import get_db_read, get_db_write
from database import models
from schemas.report_schema import HealthReportResponse
from services.ai_client import GenerativeAIClient, get_ai_client
from services import pdf_export, report_generator

logger = get_logger("api.reports")
router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("", response_model=HealthReportResponse)
def get_report(
    regenerate: bool = False,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db_write),
    ai: GenerativeAIClient = Depends(get_ai_client),
):
    """Latest report, generating one when none exists or `regenerate` is set."""
    return report_generator.get_or_generate_report(db, user_id, ai, regenerate=regenerate)


@router.get("/history", response_model=List[HealthReportResponse])
def get_report_history(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db_read)):
    """The caller's reports, newest first."""
    return UserScopedRepository(models.HealthReport, db, user_id).list(models.HealthReport.generated_at)


def _report_or_404(db: Session, user_id: str, report_id: int) -> models.HealthReport:
    report = UserScopedRepository(models.HealthReport, db, user_id).get(report_id)
    if report is None:
        raise NotFoundError("Health report", report_id)
    return report


@router.get("/{report_id}", response_model=HealthReportResponse)
def get_report_by_id(report_id: int, user_id: str = Depends(get_current_user_id),
                     db: Session = Depends(get_db_read)):
    """Return one report.

    Raises:
        NotFoundError: If the report does not exist or belongs to another user.
    """
    return _report_or_404(db, user_id, report_id)


@router.get("/{report_id}/pdf")
def download_report_pdf(report_id: int, user_id: str = Depends(get_current_user_id),
                        db: Session = Depends(get_db_read)):
    """Return a report as a PDF attachment.

    Args:
        report_id: Id of the report to export.
        user_id: Authenticated user id.
        db: SQLAlchemy session (read) injected by dependency.

    Returns:
        `application/pdf` response named after the report date.

    Raises:
        NotFoundError: If the report does not exist or belongs to another user.
    """
    report = _report_or_404(db, user_id, report_id)
    content = pdf_export.render_report_pdf(report)
    filename = pdf_export.report_filename(report)
    logger.info("Report %s exported as PDF (%s bytes)", report_id, len(content))
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
