"""
Clinic Services.

Wire the gateway, the entity store, the edit session and the projector
together. These are the call sites where gateway failures are caught: a
failure is logged once, reported to the caller, and leaves the last good
state in place.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from core.data import EntityStore, GatewayError

from .domain import Appointment, DashboardMetrics, Doctor
from .gateway import ClinicGateway, DoctorRepository
from .presentation import DashboardProjector, DashboardView
from .session import DoctorEditSession

logger = logging.getLogger(__name__)

# Called with the name of the slice that changed and the new view
DashboardListener = Callable[[str, DashboardView], None]


class DoctorRoster:
    """
    The doctor list screen: a store of doctors plus the form's edit session.
    """

    def __init__(self, repository: DoctorRepository, store: Optional[EntityStore[Doctor]] = None):
        self._repository = repository
        self.store: EntityStore[Doctor] = store if store is not None else EntityStore()
        self.session = DoctorEditSession(repository, self.store)
        self.last_error: Optional[GatewayError] = None

    @property
    def doctors(self) -> List[Doctor]:
        return self.store.get_all()

    async def load(self) -> bool:
        """Replace the store with a fresh list from the backend."""
        try:
            doctors = await self._repository.list()
        except GatewayError as e:
            logger.warning(f"Error fetching doctors: {e}")
            self.last_error = e
            return False
        self.store.replace_all(doctors)
        self.last_error = None
        logger.debug(f"Loaded {len(self.store)} doctors")
        return True

    async def delete(self, id: int) -> bool:
        """Delete a doctor remotely, then drop it from the store."""
        try:
            await self._repository.delete(id)
        except GatewayError as e:
            logger.warning(f"Error deleting doctor {id}: {e}")
            self.last_error = e
            return False
        self.store.apply_delete(id)
        self.last_error = None
        logger.info(f"Deleted doctor {id}")
        return True


class DashboardService:
    """
    Keeps the dashboard view model in step with the backend.

    Metrics (cards + chart) and recent appointments are fetched
    independently. Each slice is swapped in whole when its fetch resolves;
    a failed fetch keeps the previous slice. In-flight fetches are never
    cancelled, so the response that resolves last is the one shown.
    """

    def __init__(self, gateway: ClinicGateway, projector: Optional[DashboardProjector] = None):
        self._gateway = gateway
        self.projector = projector or DashboardProjector()
        self.view: DashboardView = self.projector.empty_view()
        self.metrics: Optional[DashboardMetrics] = None
        self.appointments: List[Appointment] = []
        self._listeners: List[DashboardListener] = []

    def add_listener(self, listener: DashboardListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: DashboardListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, slice_name: str):
        for listener in list(self._listeners):
            listener(slice_name, self.view)

    async def refresh_metrics(self) -> bool:
        try:
            metrics = await self._gateway.fetch_metrics()
        except GatewayError as e:
            logger.warning(f"Error fetching dashboard metrics: {e}")
            return False
        self.metrics = metrics
        self.view = replace(
            self.view,
            cards=self.projector.summarize(metrics),
            chart=self.projector.project(metrics),
        )
        self._publish("metrics")
        return True

    async def refresh_appointments(self) -> bool:
        try:
            appointments = await self._gateway.fetch_appointments()
        except GatewayError as e:
            logger.warning(f"Error fetching appointments: {e}")
            return False
        self.appointments = appointments
        self.view = replace(self.view, recent=self.projector.compose_recent(appointments))
        self._publish("appointments")
        return True

    async def refresh(self) -> Dict[str, bool]:
        """Fetch metrics and appointments concurrently."""
        metrics_ok, appointments_ok = await asyncio.gather(
            self.refresh_metrics(),
            self.refresh_appointments(),
        )
        return {"metrics": metrics_ok, "appointments": appointments_ok}
