"""
Dashboard View Composer.

Transforms dashboard payloads into view models: the metric cards, the
appointments-over-time chart and the recent appointments list.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from core.presentation import ChartSeries, MetricCard, ViewComposer, ViewTheme

from ..domain import Appointment, DashboardMetrics

DEFAULT_RECENT_LIMIT = 5


@dataclass
class RecentAppointmentRow:
    """One line of the recent appointments list."""
    appointment: Appointment
    display_time: str
    status: str = "Confirmed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.appointment.id,
            "patient_name": self.appointment.patient.name,
            "doctor_name": self.appointment.doctor.name,
            "date": self.appointment.date,
            "display_time": self.display_time,
            "status": self.status,
        }


@dataclass
class DashboardView:
    """Everything the dashboard screen shows."""
    cards: List[MetricCard] = field(default_factory=list)
    chart: ChartSeries = field(default_factory=ChartSeries)
    recent: List[RecentAppointmentRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "chart": self.chart.to_dict(),
            "recent_appointments": [row.to_dict() for row in self.recent],
        }


class DashboardProjector(ViewComposer):
    """
    View composer for the clinic dashboard.

    Every method is a pure function of its input; nothing is cached.
    """

    def __init__(self, theme: Optional[ViewTheme] = None, recent_limit: int = DEFAULT_RECENT_LIMIT):
        super().__init__(theme=theme)
        self.recent_limit = recent_limit

    # =========================================================================
    # CHART
    # =========================================================================

    def project(self, metrics: DashboardMetrics) -> ChartSeries:
        """
        Map the metrics series onto parallel label/value lists.

        Order is kept exactly as delivered; dates are passed through untouched.
        """
        return ChartSeries(
            labels=[point.date for point in metrics.series],
            values=[point.count for point in metrics.series],
            style=self.theme.series_style,
        )

    # =========================================================================
    # METRIC CARDS
    # =========================================================================

    def summarize(self, metrics: DashboardMetrics) -> List[MetricCard]:
        return [
            self._create_card("total_patients", str(metrics.total_patient)),
            self._create_card("appointments", str(metrics.total_appointment)),
            self._create_card(
                "revenue",
                self.formatter.currency(metrics.revenue_data, self.theme.currency_symbol),
            ),
        ]

    # =========================================================================
    # RECENT APPOINTMENTS
    # =========================================================================

    def top_recent(self, appointments: Sequence[Appointment], n: Optional[int] = None) -> List[Appointment]:
        """
        The first `n` appointments in delivered order (no re-sorting).

        Args:
            appointments: Appointments as returned by the backend
            n: How many to keep (defaults to the composer's recent_limit)
        """
        limit = self.recent_limit if n is None else n
        if limit < 0:
            raise ValueError(f"n must not be negative, got {limit}")
        return list(appointments[:limit])

    def compose_recent(
        self,
        appointments: Sequence[Appointment],
        n: Optional[int] = None,
    ) -> List[RecentAppointmentRow]:
        return [
            RecentAppointmentRow(
                appointment=appointment,
                display_time=self.formatter.timestamp(appointment.date),
            )
            for appointment in self.top_recent(appointments, n)
        ]

    # =========================================================================
    # FULL VIEW
    # =========================================================================

    def empty_view(self) -> DashboardView:
        """The view shown before any data has arrived: zeros and no points."""
        return DashboardView(
            cards=self.summarize(DashboardMetrics(
                total_appointment=0,
                total_patient=0,
                revenue_data=0,
                series=[],
            )),
            chart=ChartSeries(style=self.theme.series_style),
        )
