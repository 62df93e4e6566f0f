"""
Clinic Console Use Case.

Keeps a local copy of the clinic backend's doctors, appointments and
dashboard metrics, and projects them into view models.

Structure:
- domain/: Payload models and pure rules
  - models.py: Doctor, Appointment, DashboardMetrics
  - policies.py: DoctorDraftValidator
- api_client.py: ClinicApiClient (HTTP, auth header, error mapping)
- gateway.py: Typed repositories and the ClinicGateway facade
- session.py: DoctorEditSession
- presentation/: View composition
  - composer.py: DashboardProjector
- services.py: DoctorRoster, DashboardService
"""

from .api_client import ClinicApiClient
from .gateway import ClinicGateway
from .presentation import DashboardProjector
from .services import DashboardService, DoctorRoster
from .session import DoctorEditSession

__all__ = [
    "ClinicApiClient",
    "ClinicGateway",
    "DashboardProjector",
    "DashboardService",
    "DoctorRoster",
    "DoctorEditSession",
]
