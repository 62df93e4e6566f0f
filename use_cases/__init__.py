"""
Use Cases Package.

Each use case is a self-contained module with its own:
- Domain models and rules
- Data access (repositories over a remote store)
- Presentation (view-model composers)
- Session state for forms

Available use cases:
- clinic: Doctor roster management and the clinic dashboard

Architecture:
Each use case follows the layered architecture pattern defined in core/.
"""

from use_cases.clinic import (
    ClinicApiClient,
    ClinicGateway,
    DashboardService,
    DoctorRoster,
)

__all__ = [
    "ClinicApiClient",
    "ClinicGateway",
    "DashboardService",
    "DoctorRoster",
]
