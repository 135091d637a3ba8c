"""Plain single-page PDF rendering with reportlab."""

import io
import re
from typing import Iterable, List

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from core.logger import get_logger
from schemas.report_schema import HealthCard
from services.health_scoring import score_category
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.pdf_export")

MARGIN = 50
LINE_HEIGHT = 16
MAX_CHARS = 95

DISCLAIMER = [
    "This report is generated from the data you provided and AI analysis.",
    "It is not a medical diagnosis. Consult a healthcare professional for medical advice.",
]


def _wrap(text: str) -> List[str]:
    words, lines, line = str(text).split(), [], ""
    for word in words:
        candidate = f"{line} {word}".strip()
        if len(candidate) > MAX_CHARS and line:
            lines.append(line)
            line = word
        else:
            line = candidate
    if line:
        lines.append(line)
    return lines or [""]


def _render(title: str, lines: Iterable[str]) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    pdf.setTitle(title)
    pdf.setFont("Helvetica-Bold", 18)
    pdf.drawString(MARGIN, height - MARGIN, title)
    pdf.setFont("Helvetica", 11)
    y = height - MARGIN - 2 * LINE_HEIGHT
    for raw in lines:
        for line in _wrap(raw):
            # Single page: text past the bottom margin is dropped.
            if y < MARGIN:
                break
            pdf.drawString(MARGIN, y, line)
            y -= LINE_HEIGHT
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def report_filename(report) -> str:
    return f"WellTrack-Health-Report-{report.generated_at.strftime('%Y-%m-%d')}.pdf"


def health_card_filename(card: HealthCard) -> str:
    name = re.sub(r"[^A-Za-z0-9]+", "_", card.personal_info.full_name).strip("_") or "user"
    return f"health_card_{name}.pdf"


def render_report_pdf(report) -> bytes:
    lines = [f"Generated: {report.generated_at.strftime('%B %d, %Y')}", ""]
    lines.extend((report.summary or "").splitlines())
    lines.append("")
    lines.append(f"Health Score: {report.health_score}/100 ({score_category(report.health_score)})")
    if report.bmi is not None:
        lines.append(f"BMI: {report.bmi} ({nutrition_calculator.bmi_category(report.bmi)})")
    lines.append(f"Activity Level: {report.activity_level or 'Unknown'}")
    lines.append(f"Risk Level: {report.risk_level or 'Unknown'}")
    if report.predictions:
        lines.extend(["", "Key prediction:", report.predictions[0]])
    lines.append("")
    lines.extend(DISCLAIMER)
    logger.debug("Rendering report %s as PDF", report.id)
    return _render("WellTrack Health Report", lines)


def render_health_card_pdf(card: HealthCard) -> bytes:
    info, conditions, vitals = card.personal_info, card.medical_conditions, card.vital_signs

    def _join(items):
        return ", ".join(items) if items else "None"

    lines = [
        "Personal Information",
        f"Name: {info.full_name}",
        f"Date of Birth: {info.date_of_birth.strftime('%Y-%m-%d') if info.date_of_birth else 'Not provided'}",
        f"Gender: {info.gender or 'Not provided'}",
        f"Age: {info.age if info.age is not None else 'Not provided'}",
        f"Blood Type: {info.blood_type or 'Not provided'}",
        f"Email: {info.email or 'Not provided'}",
        f"Phone: {info.phone or 'Not provided'}",
        f"Emergency Contact: {info.emergency_contact or 'Not provided'} {info.emergency_phone or ''}".rstrip(),
        "",
        "Medical Conditions",
        f"Allergies: {_join(conditions.allergies)}",
        f"Chronic Conditions: {_join(conditions.chronic_conditions)}",
        f"Medications: {_join(conditions.medications)}",
        f"Surgeries: {_join(conditions.surgeries)}",
        "",
        "Vital Signs",
        f"Blood Pressure: {vitals.blood_pressure or 'N/A'}",
        f"Heart Rate: {vitals.heart_rate if vitals.heart_rate is not None else 'N/A'} bpm",
        f"Height: {vitals.height} cm",
        f"Weight: {vitals.weight} kg",
        "",
        f"Last updated: {card.updated_at.strftime('%Y-%m-%d')}",
    ]
    return _render("Digital Health Card", lines)
