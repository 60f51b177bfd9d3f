from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from ..attendance.factory import SubmissionStrategyFactory
from ..attendance.model import ActionAvailability, AttendanceStatus
from ..common.datetime_utils import now_local
from ..common.validators import is_usable_token, require_non_empty
from ..core.enums import Direction, NoticeLevel, ScanFailureKind, Screen
from ..core.exceptions import (
    AuthenticationError,
    CapabilityError,
    InvalidTransitionError,
    MissingTokenError,
    NetworkError,
    RemoteRejectedError,
    SessionInvalidError,
    ValidationError,
)
from ..gateway.model import SubmissionRecord
from ..gateway.repository import AttendanceGateway
from ..location.acquirer import LocationAcquirer
from ..scanning.acquirer import ScanAcquirer
from ..scanning.model import ScanOutcomeKind
from ..scanning.parser import parse_scan_payload
from ..scanning.session import ScanSession
from ..session.model import Identity
from ..session.service import SessionStore, mask_token
from .context import Attempt, SessionContext
from .renderers import render
from .settings import WorkflowSettings
from .surface import Notice, NullSurface, ScreenSurface, ScreenView

logger = logging.getLogger(__name__)

CAMERA_ERROR_MESSAGE = "Camera access denied or not available"
MISSING_FIELDS_MESSAGE = "Please fill in all fields"
MISSING_DATA_MESSAGE = "Missing QR code or location data"
TOKEN_MISSING_MESSAGE = "Authentication token missing. Please login again."
NO_CODE_MESSAGE = "No QR code found. Please try again."


class AttendanceWorkflow:
    """The attendance session state machine.

    Flow: UNAUTHENTICATED -> AUTHENTICATING -> DASHBOARD -> SCANNING ->
    AWAITING_LOCATION -> SUBMITTING -> DASHBOARD. Every failure lands on a
    stable screen (UNAUTHENTICATED or DASHBOARD) and is reported on the
    surface as a notice; domain errors never escape the public methods.
    Calling an operation from a screen that does not offer it raises
    InvalidTransitionError.

    All methods run on one event loop. Awaiting operations re-check that the
    attempt they started is still current before touching state, so a
    cancellation or logout that happened meanwhile always wins.
    """

    def __init__(
        self,
        *,
        sessions: SessionStore,
        gateway: AttendanceGateway,
        scanner_factory: Callable[[], ScanAcquirer],
        locator: LocationAcquirer,
        surface: Optional[ScreenSurface] = None,
        settings: Optional[WorkflowSettings] = None,
        strategy_factory: Optional[SubmissionStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._sessions = sessions
        self._gateway = gateway
        self._scanner_factory = scanner_factory
        self._locator = locator
        self._surface = surface or NullSurface()
        self._settings = settings or WorkflowSettings()
        self._factory = strategy_factory or SubmissionStrategyFactory()
        self._clock = clock
        self._sleep = sleep

        self._ctx = SessionContext()
        self._screen = Screen.UNAUTHENTICATED
        self._scan_session: Optional[ScanSession] = None

    # ----- read side -------------------------------------------------------

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def context(self) -> SessionContext:
        return self._ctx

    @property
    def status(self) -> AttendanceStatus:
        return self._ctx.status

    @property
    def identity(self) -> Optional[Identity]:
        return self._ctx.identity

    @property
    def availability(self) -> ActionAvailability:
        return ActionAvailability.from_status(self._ctx.status)

    def render(self) -> ScreenView:
        return render(self._screen, self._ctx, self._clock())

    # ----- helpers ---------------------------------------------------------

    def _require(self, *screens: Screen) -> None:
        if self._screen not in screens:
            allowed = ", ".join(s.value for s in screens)
            raise InvalidTransitionError(f"not allowed in {self._screen.value} (expected {allowed})")

    def _enter(self, screen: Screen) -> Screen:
        if screen != self._screen:
            logger.debug("Screen %s -> %s", self._screen.value, screen.value)
        self._screen = screen
        self._surface.show(self.render())
        return screen

    def _refresh(self) -> None:
        self._surface.show(self.render())

    def _notify(self, message: str, level: NoticeLevel = NoticeLevel.INFO) -> None:
        self._surface.notify(Notice(message=message, level=level))

    def _is_current(self, attempt: Attempt, generation: int) -> bool:
        return self._ctx.generation == generation and self._ctx.attempt is attempt

    def _back_to_dashboard(self) -> Screen:
        self._ctx.discard_attempt()
        return self._enter(Screen.DASHBOARD)

    def _release_scanner(self) -> None:
        session, self._scan_session = self._scan_session, None
        if session is not None:
            session.cancel()
            session.release()

    # ----- session ---------------------------------------------------------

    def restore(self) -> Screen:
        """Pick the first screen from whatever session survived the last run."""
        self._require(Screen.UNAUTHENTICATED)
        stored = self._sessions.load()
        if stored is None:
            return self._enter(Screen.UNAUTHENTICATED)

        logger.info("Restored session for %s", stored.identity.display_name or stored.identity.employee_id)
        self._ctx.start(stored.identity, stored.token)
        return self._enter(Screen.DASHBOARD)

    async def login(self, code: Optional[str], phone: Optional[str]) -> Screen:
        self._require(Screen.UNAUTHENTICATED)
        try:
            code = require_non_empty(code, "Employee code")
            phone = require_non_empty(phone, "Phone")
        except ValidationError:
            self._notify(MISSING_FIELDS_MESSAGE, NoticeLevel.ERROR)
            return self._screen

        self._ctx.busy_message = "Logging in..."
        generation = self._ctx.generation
        self._enter(Screen.AUTHENTICATING)
        try:
            result = await self._gateway.authenticate(code, phone)
            if self._ctx.generation != generation:
                logger.info("Logged out while authenticating; login result dropped")
                return self._screen
            if not is_usable_token(result.token):
                raise MissingTokenError("Login failed: No token received")
            if not result.employee:
                raise AuthenticationError("Login failed: No employee profile received")
        except (AuthenticationError, NetworkError) as e:
            logger.warning("Login failed: %s", e)
            if self._ctx.generation != generation:
                return self._screen
            self._ctx.reset()
            self._notify(str(e), NoticeLevel.ERROR)
            return self._enter(Screen.UNAUTHENTICATED)

        identity = Identity.from_payload(result.employee)
        token = result.token.strip()
        self._sessions.save(identity, token)
        self._ctx.start(identity, token)
        logger.info("Login success, token: %s", mask_token(token))

        self._enter(Screen.DASHBOARD)
        self._notify("Login successful!", NoticeLevel.SUCCESS)
        return self._screen

    def logout(self, *, message: Optional[str] = "Logged out successfully") -> Screen:
        """Always ends logged out with a fresh AttendanceStatus and an empty store."""
        self._release_scanner()
        self._ctx.reset()
        self._sessions.clear()
        self._enter(Screen.UNAUTHENTICATED)
        if message:
            self._notify(message, NoticeLevel.INFO)
        return self._screen

    # ----- scanning --------------------------------------------------------

    async def check_in(self) -> Screen:
        return await self.scan(Direction.CHECK_IN)

    async def check_out(self) -> Screen:
        return await self.scan(Direction.CHECK_OUT)

    async def scan(self, direction: Direction) -> Screen:
        """Run the scanning step for `direction` until it settles.

        Ends on AWAITING_LOCATION with the payload retained, or on DASHBOARD
        after a cancellation, camera failure or malformed code. With
        auto_request_location the location step follows immediately.
        """
        self._require(Screen.DASHBOARD)
        strategy = self._factory.for_direction(direction)
        if not strategy.is_enabled(self._ctx.status):
            self._notify(strategy.disabled_message, NoticeLevel.ERROR)
            return self._screen

        try:
            acquirer = self._scanner_factory()
        except Exception as e:
            logger.warning("Scanner unavailable: %s", e)
            self._notify(CAMERA_ERROR_MESSAGE, NoticeLevel.ERROR)
            return self._screen

        attempt = Attempt(direction=direction)
        generation = self._ctx.generation
        self._ctx.discard_attempt()
        self._ctx.attempt = attempt
        self._enter(Screen.SCANNING)

        session = ScanSession(acquirer)
        self._scan_session = session
        session.begin()
        outcome = await session.wait()
        if self._scan_session is session:
            self._scan_session = None

        if not self._is_current(attempt, generation) or self._screen != Screen.SCANNING:
            return self._screen

        if outcome.kind == ScanOutcomeKind.CANCELLED:
            return self._back_to_dashboard()

        if outcome.kind == ScanOutcomeKind.FAILED:
            if outcome.failure_kind == ScanFailureKind.SOURCE_CLOSED:
                message = NO_CODE_MESSAGE
            else:
                message = CAMERA_ERROR_MESSAGE
            self._ctx.scan_note = message
            self._refresh()
            self._notify(message, NoticeLevel.ERROR)
            await self._sleep(self._settings.camera_error_delay)
            if self._is_current(attempt, generation) and self._screen == Screen.SCANNING:
                return self._back_to_dashboard()
            return self._screen

        try:
            payload = parse_scan_payload(outcome.text or "")
        except ValidationError as e:
            logger.warning("QR parse error, raw data: %r", outcome.text)
            self._ctx.scan_note = "Invalid QR Code"
            self._refresh()
            self._notify(str(e), NoticeLevel.ERROR)
            await self._sleep(self._settings.scan_error_delay)
            if self._is_current(attempt, generation) and self._screen == Screen.SCANNING:
                return self._back_to_dashboard()
            return self._screen

        attempt.payload = payload
        self._ctx.scan_note = f"QR Code Scanned Successfully! Branch Location: {payload.site_coordinate}"
        self._refresh()
        await self._sleep(self._settings.scan_success_delay)
        if not self._is_current(attempt, generation) or self._screen != Screen.SCANNING:
            return self._screen

        self._ctx.scan_note = None
        self._enter(Screen.AWAITING_LOCATION)
        if self._settings.auto_request_location:
            return await self.confirm_location()
        return self._screen

    def cancel_scan(self) -> Screen:
        """Stop the scanner first, then go back to the dashboard."""
        self._require(Screen.SCANNING)
        self._release_scanner()
        return self._back_to_dashboard()

    # ----- location & submission ------------------------------------------

    async def confirm_location(self) -> Screen:
        """The user allowed location: acquire it once, then submit."""
        self._require(Screen.AWAITING_LOCATION)
        attempt = self._ctx.attempt
        generation = self._ctx.generation
        if attempt is None or attempt.payload is None:
            self._notify(MISSING_DATA_MESSAGE, NoticeLevel.ERROR)
            return self._back_to_dashboard()
        if self._ctx.busy_message:
            # a request is already in flight
            return self._screen

        self._ctx.busy_message = "Getting your location..."
        self._refresh()
        try:
            coordinate = await self._locator.acquire(
                timeout_ms=self._settings.location_timeout_ms,
                max_cache_age_ms=self._settings.location_max_age_ms,
            )
        except CapabilityError as e:
            logger.warning("Location error: %s", e)
            if not self._is_current(attempt, generation):
                return self._screen
            self._notify(str(e), NoticeLevel.ERROR)
            return self._back_to_dashboard()

        if not self._is_current(attempt, generation) or self._screen != Screen.AWAITING_LOCATION:
            return self._screen

        attempt.coordinate = coordinate
        self._ctx.busy_message = None
        return await self._submit(attempt, generation)

    def cancel_location(self) -> Screen:
        """Declining location drops the scanned code; a new scan is needed."""
        self._require(Screen.AWAITING_LOCATION)
        return self._back_to_dashboard()

    def _require_token(self) -> str:
        token = self._ctx.token
        if not is_usable_token(token):
            raise SessionInvalidError(TOKEN_MISSING_MESSAGE)
        return token.strip()

    async def _submit(self, attempt: Attempt, generation: int) -> Screen:
        if attempt.payload is None or attempt.coordinate is None:
            self._notify(MISSING_DATA_MESSAGE, NoticeLevel.ERROR)
            return self._back_to_dashboard()

        try:
            token = self._require_token()
        except SessionInvalidError as e:
            self._notify(str(e), NoticeLevel.ERROR)
            return self.logout(message=None)

        strategy = self._factory.for_direction(attempt.direction)
        self._ctx.busy_message = strategy.busy_message
        self._enter(Screen.SUBMITTING)

        scan_time = self._clock()
        client_ip = await self._gateway.resolve_client_address()
        record = SubmissionRecord(
            scan_time=scan_time,
            operator_id=self._settings.operator_id,
            integrity_hash=attempt.payload.integrity_hash,
            site_coordinate=attempt.payload.site_coordinate,
            client_ip=client_ip,
            current_coordinate=attempt.coordinate,
            direction=attempt.direction,
        )
        logger.info("Submitting %s for %s", attempt.direction.value, record.site_coordinate)

        try:
            await strategy.submit(self._gateway, record, token=token)
        except (RemoteRejectedError, NetworkError) as e:
            logger.warning("Attendance error: %s", e)
            if self._ctx.generation == generation:
                self._notify(str(e), NoticeLevel.ERROR)
                return self._back_to_dashboard()
            return self._screen

        if self._ctx.generation != generation:
            logger.info("Session ended while submitting; result not applied")
            return self._screen

        try:
            self._ctx.status = strategy.apply(self._ctx.status, at=scan_time)
        except ValidationError as e:
            logger.error("Attendance status not updated: %s", e)
            self._notify(str(e), NoticeLevel.ERROR)
            return self._back_to_dashboard()

        self._back_to_dashboard()
        self._notify(strategy.success_message, NoticeLevel.SUCCESS)
        return self._screen

    # ----- navigation ------------------------------------------------------

    def go_back(self) -> bool:
        """Hardware/host back button. Returns False when the host may close."""
        if self._screen == Screen.SCANNING:
            self.cancel_scan()
            return True
        if self._screen == Screen.AWAITING_LOCATION:
            self.cancel_location()
            return True
        if self._screen == Screen.DASHBOARD:
            self.logout()
            return True
        return False
