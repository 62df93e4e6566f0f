"""
Presentation Layer Base Classes.

The presentation layer turns domain objects into view models: display-ready
structures that a renderer consumes as-is (chart series, metric cards,
formatted list rows).

Key principles:
- View models are plain data with no independent persistence
- No business logic in composers
- Static styling lives in a theme, never in the derived data
- Formatting is deterministic and independent of the process locale
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from .domain import parse_date, to_timezone


def resolve_timezone(name: str) -> tzinfo:
    """Look up a display zone by IANA name. UTC needs no tz database."""
    if name.upper() in ("UTC", "Z"):
        return timezone.utc
    return ZoneInfo(name)


@dataclass(frozen=True)
class SeriesStyle:
    """Static presentation constants for one chart dataset."""
    label: str = "Appointments"
    border_color: str = "rgba(75, 192, 192, 1)"
    background_color: str = "rgba(75, 192, 192, 0.2)"
    fill: bool = True


@dataclass
class ViewTheme:
    """
    Theme configuration for view models.

    Provides consistent styling and formatting across composers.
    """
    series_style: SeriesStyle = field(default_factory=SeriesStyle)
    currency_symbol: str = "$"
    display_timezone: tzinfo = timezone.utc

    # Card titles, in display order
    card_titles: Dict[str, str] = field(default_factory=lambda: {
        "total_patients": "Total Patients",
        "appointments": "Appointments",
        "revenue": "Revenue This Month",
    })

    def card_title(self, name: str) -> str:
        return self.card_titles.get(name, name)


# Default theme instance
DEFAULT_THEME = ViewTheme()


@dataclass
class ChartSeries:
    """
    A single-dataset line chart: parallel labels and values plus styling.

    `labels[i]` and `values[i]` always describe the same point.
    """
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    style: SeriesStyle = field(default_factory=SeriesStyle)

    def to_dict(self) -> Dict[str, Any]:
        """Chart.js-compatible data object."""
        return {
            "labels": list(self.labels),
            "datasets": [
                {
                    "label": self.style.label,
                    "data": list(self.values),
                    "borderColor": self.style.border_color,
                    "backgroundColor": self.style.background_color,
                    "fill": self.style.fill,
                },
            ],
        }


@dataclass
class MetricCard:
    """One headline number on a dashboard."""
    key: str
    title: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "title": self.title, "value": self.value}


class ViewComposer(ABC):
    """
    Base class for view-model composers.

    A composer transforms domain data into view models. Each use case has its
    own composer that knows how to present its data types.
    """

    def __init__(self, theme: Optional[ViewTheme] = None):
        """
        Initialize the composer with a theme.

        Args:
            theme: Optional custom theme (uses DEFAULT_THEME if not provided)
        """
        self.theme = theme or DEFAULT_THEME
        self.formatter = TextFormatter(self.theme.display_timezone)

    def _create_card(self, key: str, value: str) -> MetricCard:
        return MetricCard(key=key, title=self.theme.card_title(key), value=value)


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class TextFormatter:
    """
    Utility class for formatting text in view models.

    Month names and AM/PM markers are fixed English strings, so output does
    not depend on the process locale.
    """

    def __init__(self, display_timezone: Optional[tzinfo] = None):
        self.display_timezone = display_timezone or timezone.utc

    @staticmethod
    def currency(amount: float, currency: str = "$") -> str:
        """Format a currency amount, dropping cents on whole numbers."""
        if float(amount).is_integer():
            return f"{currency}{int(amount):,}"
        return f"{currency}{amount:,.2f}"

    @staticmethod
    def clock_date(dt: datetime) -> str:
        """Format as "h:mm a, MMMM dd", e.g. "3:05 PM, January 07"."""
        hour = dt.hour % 12 or 12
        meridiem = "AM" if dt.hour < 12 else "PM"
        return f"{hour}:{dt.minute:02d} {meridiem}, {MONTH_NAMES[dt.month - 1]} {dt.day:02d}"

    def timestamp(self, value: Any) -> str:
        """
        Format a timestamp (datetime or ISO string) for display.

        Aware values are shown in the display time zone; naive values as given.
        Returns an empty string for values that cannot be parsed.
        """
        dt = value if isinstance(value, datetime) else parse_date(value)
        if dt is None:
            return ""
        return self.clock_date(to_timezone(dt, self.display_timezone))
