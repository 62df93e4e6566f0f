"""
Clinic Domain Models.

Typed representations of the payloads exchanged with the clinic backend.
Entities are immutable: the client never edits them in place, it replaces
them with whatever the server returns.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Doctor(BaseModel):
    """A doctor on the clinic roster. `id` is assigned by the server."""
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    speciality: str


class DoctorDraft(BaseModel):
    """Field values sent when creating or updating a doctor."""
    name: str
    speciality: str

    def to_payload(self) -> Dict[str, str]:
        return {"name": self.name, "speciality": self.speciality}


class PersonRef(BaseModel):
    """A person embedded in another payload (only the name is sent)."""
    model_config = ConfigDict(frozen=True)

    name: str


class Appointment(BaseModel):
    """
    An appointment as listed on the dashboard.

    `date` is kept exactly as delivered (an ISO timestamp string); it is only
    parsed when formatted for display.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    date: str
    patient: PersonRef
    doctor: PersonRef


class SeriesPoint(BaseModel):
    """One point of the appointments-over-time series."""
    model_config = ConfigDict(frozen=True)

    date: str
    count: int


class DashboardMetrics(BaseModel):
    """Aggregate figures for the dashboard, replaced wholesale on each fetch."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_appointment: int = Field(alias="totalAppointment")
    total_patient: int = Field(alias="totalPatient")
    revenue_data: float = Field(alias="revenueData")
    series: List[SeriesPoint] = Field(alias="chartData")
