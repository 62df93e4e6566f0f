"""Clinic domain layer - payload models and pure rules."""

from .models import (
    Appointment,
    DashboardMetrics,
    Doctor,
    DoctorDraft,
    PersonRef,
    SeriesPoint,
)
from .policies import DOCTOR_REQUIRED_FIELDS, DoctorDraftValidator

__all__ = [
    "Appointment",
    "DashboardMetrics",
    "Doctor",
    "DoctorDraft",
    "PersonRef",
    "SeriesPoint",
    "DOCTOR_REQUIRED_FIELDS",
    "DoctorDraftValidator",
]
