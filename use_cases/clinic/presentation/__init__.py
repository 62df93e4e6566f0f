"""
Clinic Presentation Layer.

Contains the composer that builds dashboard view models.
"""

from .composer import DashboardProjector, DashboardView, RecentAppointmentRow

__all__ = ["DashboardProjector", "DashboardView", "RecentAppointmentRow"]
