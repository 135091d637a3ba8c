"""Digital health card assembled from the profile and latest metrics."""

from typing import List, Optional

from schemas.report_schema import CardVitalSigns, HealthCard, MedicalConditions, PersonalInfo


def split_list(value: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def build_health_card(profile, metrics) -> HealthCard:
    """Combine a (possibly missing) profile with a metrics snapshot."""
    full_name = getattr(profile, "display_name", None) or "Not provided"
    email = metrics.email or getattr(profile, "email", None)
    return HealthCard(
        personal_info=PersonalInfo(
            full_name=full_name,
            date_of_birth=metrics.date_of_birth,
            blood_type=metrics.blood_type,
            email=email,
            phone=metrics.phone,
            emergency_contact=metrics.emergency_contact,
            emergency_phone=metrics.emergency_phone,
            gender=metrics.gender,
            age=metrics.age,
        ),
        medical_conditions=MedicalConditions(
            allergies=split_list(metrics.allergies),
            chronic_conditions=split_list(metrics.chronic_conditions),
            medications=split_list(metrics.medications),
            surgeries=split_list(metrics.surgeries),
        ),
        vital_signs=CardVitalSigns(
            blood_pressure=metrics.blood_pressure,
            heart_rate=metrics.heart_rate,
            height=metrics.height,
            weight=metrics.weight,
            temperature=metrics.temperature,
            respiratory_rate=metrics.respiratory_rate,
        ),
        updated_at=metrics.recorded_at,
    )
