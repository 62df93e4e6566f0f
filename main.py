"""
FastAPI Application for the Clinic Console.

Owns one instance of every component (credential store, gateway, doctor
roster, dashboard service) and serves their view models as JSON for the
frontend to render.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import settings

from auth import CredentialAccessor, CredentialStore, TokenRequest
from core.data import RemoteError
from core.domain import ValidationError
from core.presentation import ViewTheme, resolve_timezone
from use_cases.clinic import (
    ClinicApiClient,
    ClinicGateway,
    DashboardProjector,
    DashboardService,
    DoctorRoster,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)


# =============================================================================
# REQUEST MODELS
# =============================================================================

class DraftFieldsRequest(BaseModel):
    """Partial update of the doctor form; omitted fields are left alone."""
    name: Optional[str] = None
    speciality: Optional[str] = None


@dataclass
class ClinicConsole:
    """Everything the endpoints work with, created once per application."""
    credentials: CredentialStore
    accessor: CredentialAccessor
    gateway: ClinicGateway
    roster: DoctorRoster
    dashboard: DashboardService


def build_console(
    credentials: Optional[CredentialStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClinicConsole:
    """Construct the components, seeding the token from settings if configured."""
    store = credentials or CredentialStore()
    if settings.access_token and store.get(settings.credential_key) is None:
        store.set(settings.credential_key, settings.access_token)
    accessor = CredentialAccessor(store, settings.credential_key)

    client = ClinicApiClient(accessor, settings.api_base_url, transport=transport)
    gateway = ClinicGateway(client)
    projector = DashboardProjector(
        theme=ViewTheme(display_timezone=resolve_timezone(settings.display_timezone)),
        recent_limit=settings.recent_appointments_limit,
    )
    return ClinicConsole(
        credentials=store,
        accessor=accessor,
        gateway=gateway,
        roster=DoctorRoster(gateway.doctors),
        dashboard=DashboardService(gateway, projector),
    )


def _gateway_error_response(error) -> JSONResponse:
    content = {"error": str(error)}
    if isinstance(error, RemoteError):
        content["status"] = error.status
    return JSONResponse(content=content, status_code=502)


def create_app(
    credentials: Optional[CredentialStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        credentials: Optional pre-populated credential store
        transport: Optional httpx transport for the backend client
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager - handles startup and shutdown."""
        logger.info("Starting Clinic Console...")
        app.state.console = build_console(credentials, transport)
        logger.info(f"Backend: {settings.api_base_url}")

        yield

        logger.info("Shutting down...")
        await app.state.console.gateway.close()

    app = FastAPI(
        title="Clinic Console",
        description="Doctor roster management and clinic dashboard",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc"
    )

    # CORS middleware for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def console(request: Request) -> ClinicConsole:
        return request.app.state.console

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": "1.0.0",
            "backend": settings.api_base_url,
            "authenticated": console(request).accessor.get_token() is not None,
        }

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    @app.get("/api/credentials")
    async def get_credentials(request: Request):
        return console(request).accessor.status()

    @app.put("/api/credentials")
    async def put_credentials(body: TokenRequest, request: Request):
        """Store the bearer token used for backend calls."""
        c = console(request)
        c.credentials.set(c.accessor.key, body.token)
        return c.accessor.status()

    @app.delete("/api/credentials")
    async def delete_credentials(request: Request):
        c = console(request)
        c.credentials.delete(c.accessor.key)
        return c.accessor.status()

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    @app.get("/api/dashboard")
    async def get_dashboard(request: Request):
        """Refresh metrics and appointments, then return the view model."""
        dashboard = console(request).dashboard
        refreshed = await dashboard.refresh()
        return {**dashboard.view.to_dict(), "refreshed": refreshed}

    # =========================================================================
    # DOCTORS
    # =========================================================================

    def roster_payload(roster: DoctorRoster) -> dict:
        return {
            "doctors": [doctor.model_dump() for doctor in roster.doctors],
            "session": roster.session.to_dict(),
        }

    @app.get("/api/doctors")
    async def list_doctors(request: Request):
        roster = console(request).roster
        loaded = await roster.load()
        return {**roster_payload(roster), "loaded": loaded}

    @app.get("/api/doctors/session")
    async def get_session(request: Request):
        return console(request).roster.session.to_dict()

    @app.patch("/api/doctors/session")
    async def update_session(body: DraftFieldsRequest, request: Request):
        """Stage form values."""
        session = console(request).roster.session
        for name, value in body.model_dump(exclude_none=True).items():
            session.update_field(name, value)
        return session.to_dict()

    @app.post("/api/doctors/session/cancel")
    async def cancel_session(request: Request):
        session = console(request).roster.session
        session.cancel()
        return session.to_dict()

    @app.post("/api/doctors/session/submit")
    async def submit_session(request: Request):
        """Create or update a doctor from the staged form."""
        roster = console(request).roster
        try:
            result = await roster.session.submit()
        except ValidationError as e:
            return JSONResponse(
                content={
                    "error": str(e),
                    "fields": [error.to_dict() for error in e.errors],
                    "session": roster.session.to_dict(),
                },
                status_code=422,
            )
        if not result.success:
            return _gateway_error_response(result.error)
        return {"doctor": result.entity.model_dump(), **roster_payload(roster)}

    @app.post("/api/doctors/{doctor_id}/edit")
    async def begin_edit(doctor_id: int, request: Request):
        roster = console(request).roster
        doctor = roster.store.get(doctor_id)
        if doctor is None:
            return JSONResponse(content={"error": f"Doctor {doctor_id} not found"}, status_code=404)
        roster.session.begin_edit(doctor)
        return roster.session.to_dict()

    @app.delete("/api/doctors/{doctor_id}")
    async def delete_doctor(doctor_id: int, request: Request):
        roster = console(request).roster
        if not await roster.delete(doctor_id):
            return _gateway_error_response(roster.last_error)
        return roster_payload(roster)

    return app


# Create FastAPI app
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
        log_level=settings.log_level.lower()
    )
