"""
Core Framework for Clinic Console Use Cases.

This module provides the extensible base classes and interfaces
that all use cases should implement. The layered architecture ensures:

1. Domain Layer - Pure business rules, no I/O
2. Data Layer - Repository pattern for remote access, in-memory entity store
3. Presentation Layer - View-model composition
4. Session Layer - Create/edit state machine for forms

Each use case follows this pattern for consistency and reusability.
"""

from .domain import FieldError, RequiredFieldsValidator, ValidationError, Validator
from .data import (
    EntityStore,
    GatewayError,
    PayloadError,
    ReadOnlyRepository,
    RemoteError,
    Repository,
    TransportError,
)
from .presentation import ChartSeries, MetricCard, TextFormatter, ViewComposer, ViewTheme, resolve_timezone
from .session import EditMode, EditSession, SubmitResult

__all__ = [
    # Domain
    "FieldError",
    "RequiredFieldsValidator",
    "ValidationError",
    "Validator",
    # Data
    "EntityStore",
    "GatewayError",
    "PayloadError",
    "ReadOnlyRepository",
    "RemoteError",
    "Repository",
    "TransportError",
    # Presentation
    "ChartSeries",
    "MetricCard",
    "TextFormatter",
    "ViewComposer",
    "ViewTheme",
    "resolve_timezone",
    # Session
    "EditMode",
    "EditSession",
    "SubmitResult",
]
