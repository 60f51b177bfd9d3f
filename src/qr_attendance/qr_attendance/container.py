from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Callable, Optional

import httpx

from .attendance.factory import SubmissionStrategyFactory
from .gateway.http_gateway import HttpAttendanceGateway
from .location.acquirer import LocationAcquirer
from .location.fixed_acquirer import FixedLocationAcquirer
from .location.ip_acquirer import IpGeolocationAcquirer
from .scanning.acquirer import ScanAcquirer
from .session.json_session_repository import JsonFileSessionRepository
from .session.service import SessionStore
from .workflow.service import AttendanceWorkflow
from .workflow.settings import WorkflowSettings
from .workflow.surface import ScreenSurface


@dataclass(frozen=True)
class Container:
    http_client: httpx.AsyncClient

    session_repo: JsonFileSessionRepository
    sessions: SessionStore
    gateway: HttpAttendanceGateway
    locator: LocationAcquirer

    workflow: AttendanceWorkflow

    async def aclose(self) -> None:
        await self.http_client.aclose()


def _optional_float(value) -> Optional[float]:
    if value in (None, ""):
        return None
    return float(value)


def build_locator(settings: ModuleType, client: httpx.AsyncClient) -> LocationAcquirer:
    latitude = _optional_float(getattr(settings, "DEVICE_LATITUDE", None))
    longitude = _optional_float(getattr(settings, "DEVICE_LONGITUDE", None))
    if latitude is not None and longitude is not None:
        return FixedLocationAcquirer(latitude, longitude)

    geolocation_url = getattr(settings, "GEOLOCATION_URL", "")
    if geolocation_url:
        return IpGeolocationAcquirer(client, geolocation_url)
    return FixedLocationAcquirer(None, None)


def build_workflow_settings(settings: ModuleType) -> WorkflowSettings:
    return WorkflowSettings(
        operator_id=str(getattr(settings, "OPERATOR_ID", "")),
        location_timeout_ms=int(getattr(settings, "LOCATION_TIMEOUT_MS")),
        location_max_age_ms=int(getattr(settings, "LOCATION_MAX_AGE_MS")),
        scan_success_delay=float(getattr(settings, "SCAN_SUCCESS_DELAY")),
        scan_error_delay=float(getattr(settings, "SCAN_ERROR_DELAY")),
        camera_error_delay=float(getattr(settings, "CAMERA_ERROR_DELAY")),
        auto_request_location=bool(getattr(settings, "AUTO_REQUEST_LOCATION", False)),
    )


def build_container(
    *,
    settings: ModuleType,
    scanner_factory: Callable[[], ScanAcquirer],
    surface: Optional[ScreenSurface] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Container:
    http_client = httpx.AsyncClient(
        timeout=float(getattr(settings, "REQUEST_TIMEOUT_SECONDS", 15.0)),
        transport=transport,
    )

    session_repo = JsonFileSessionRepository(getattr(settings, "SESSION_FILE"))
    sessions = SessionStore(session_repo)
    gateway = HttpAttendanceGateway(
        http_client,
        base_url=str(getattr(settings, "API_BASE_URL")),
        ip_lookup_url=str(getattr(settings, "IP_LOOKUP_URL")),
    )
    locator = build_locator(settings, http_client)

    workflow = AttendanceWorkflow(
        sessions=sessions,
        gateway=gateway,
        scanner_factory=scanner_factory,
        locator=locator,
        surface=surface,
        settings=build_workflow_settings(settings),
        strategy_factory=SubmissionStrategyFactory(),
    )

    return Container(
        http_client=http_client,
        session_repo=session_repo,
        sessions=sessions,
        gateway=gateway,
        locator=locator,
        workflow=workflow,
    )
