"""
Remote Entity Gateway for the clinic backend.

Typed repositories over ClinicApiClient, one per entity type, plus the
ClinicGateway facade that bundles them.
"""

from typing import List

from pydantic import TypeAdapter

from core.data import ReadOnlyRepository, Repository

from .api_client import ClinicApiClient
from .domain.models import Appointment, DashboardMetrics, Doctor, DoctorDraft

_doctor = TypeAdapter(Doctor)
_doctor_list = TypeAdapter(List[Doctor])
_appointment_list = TypeAdapter(List[Appointment])
_metrics = TypeAdapter(DashboardMetrics)


class DoctorRepository(Repository[Doctor, DoctorDraft]):
    """CRUD access to /doctors."""

    PATH = "/doctors"

    def __init__(self, client: ClinicApiClient):
        self._client = client

    async def list(self) -> List[Doctor]:
        return await self._client.get(self.PATH, _doctor_list)

    async def create(self, draft: DoctorDraft) -> Doctor:
        return await self._client.post(self.PATH, draft.to_payload(), _doctor)

    async def update(self, id: int, draft: DoctorDraft) -> Doctor:
        return await self._client.put(f"{self.PATH}/{id}", draft.to_payload(), _doctor)

    async def delete(self, id: int) -> None:
        await self._client.delete(f"{self.PATH}/{id}")


class AppointmentRepository(ReadOnlyRepository[Appointment]):
    """Read access to /appointments."""

    PATH = "/appointments"

    def __init__(self, client: ClinicApiClient):
        self._client = client

    async def list(self) -> List[Appointment]:
        return await self._client.get(self.PATH, _appointment_list)


class DashboardRepository:
    """Read access to the aggregate /dashboard/ resource."""

    # The backend serves this one with a trailing slash
    PATH = "/dashboard/"

    def __init__(self, client: ClinicApiClient):
        self._client = client

    async def fetch(self) -> DashboardMetrics:
        return await self._client.get(self.PATH, _metrics)


class ClinicGateway:
    """Every remote operation the console needs, grouped by entity type."""

    def __init__(self, client: ClinicApiClient):
        self.client = client
        self.doctors = DoctorRepository(client)
        self.appointments = AppointmentRepository(client)
        self.dashboard = DashboardRepository(client)

    async def fetch_metrics(self) -> DashboardMetrics:
        return await self.dashboard.fetch()

    async def fetch_appointments(self) -> List[Appointment]:
        return await self.appointments.list()

    async def close(self):
        await self.client.close()
