"""Shared fixtures: an in-memory fake of the clinic backend behind httpx.MockTransport."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from auth import CredentialAccessor, CredentialStore
from use_cases.clinic import ClinicApiClient, ClinicGateway

BASE_URL = "https://clinic.test"
TOKEN = "secret-token"


class FakeClinicBackend:
    """
    Minimal stand-in for the clinic REST API.

    Records every request. `fail` maps "METHOD /path" to a status code that
    the next matching request answers with.
    """

    def __init__(self):
        self.doctors: List[Dict[str, Any]] = [
            {"id": 1, "name": "Dr. Grey", "speciality": "Cardiology"},
            {"id": 2, "name": "Dr. Shepherd", "speciality": "Neurology"},
            {"id": 3, "name": "Dr. Bailey", "speciality": "Surgery"},
        ]
        self.appointments: List[Dict[str, Any]] = [
            {
                "id": i,
                "date": f"2024-01-{i:02d}T{8 + i:02d}:05:00Z",
                "patient": {"name": f"Patient {i}"},
                "doctor": {"name": "Dr. Grey"},
            }
            for i in range(1, 8)
        ]
        self.metrics: Dict[str, Any] = {
            "totalAppointment": 42,
            "totalPatient": 17,
            "revenueData": 1250,
            "chartData": [
                {"date": "2024-01-03", "count": 4},
                {"date": "2024-01-01", "count": 2},
                {"date": "2024-01-02", "count": 7},
            ],
        }
        self.next_id = 7
        self.requests: List[httpx.Request] = []
        self.fail: Dict[str, int] = {}

    def _find(self, doctor_id: int) -> Optional[int]:
        for index, doctor in enumerate(self.doctors):
            if doctor["id"] == doctor_id:
                return index
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path
        status = self.fail.pop(f"{method} {path}", None)
        if status is not None:
            return httpx.Response(status, text="backend exploded")

        if method == "GET" and path == "/dashboard/":
            return httpx.Response(200, json=self.metrics)
        if method == "GET" and path == "/appointments":
            return httpx.Response(200, json=self.appointments)
        if method == "GET" and path == "/doctors":
            return httpx.Response(200, json=self.doctors)
        if method == "POST" and path == "/doctors":
            doctor = {"id": self.next_id, **json.loads(request.content)}
            self.next_id += 1
            self.doctors.append(doctor)
            return httpx.Response(201, json=doctor)
        if path.startswith("/doctors/"):
            doctor_id = int(path.rsplit("/", 1)[1])
            index = self._find(doctor_id)
            if index is None:
                return httpx.Response(404, json={"detail": "Not found"})
            if method == "PUT":
                self.doctors[index] = {"id": doctor_id, **json.loads(request.content)}
                return httpx.Response(200, json=self.doctors[index])
            if method == "DELETE":
                del self.doctors[index]
                return httpx.Response(204)
        return httpx.Response(404)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def backend() -> FakeClinicBackend:
    return FakeClinicBackend()


@pytest.fixture
def credentials() -> CredentialStore:
    store = CredentialStore()
    store.set("accessToken", TOKEN)
    return store


@pytest.fixture
def accessor(credentials) -> CredentialAccessor:
    return CredentialAccessor(credentials, "accessToken")


@pytest.fixture
async def client(accessor, backend):
    api = ClinicApiClient(accessor, BASE_URL, transport=httpx.MockTransport(backend.handler))
    yield api
    await api.close()


@pytest.fixture
def gateway(client) -> ClinicGateway:
    return ClinicGateway(client)
