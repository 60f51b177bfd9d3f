from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import AttendanceStatus
from ..core.enums import Direction
from ..location.model import DeviceCoordinate
from ..scanning.model import ScanPayload
from ..session.model import Identity


@dataclass
class Attempt:
    """One check-in/check-out try, from scan start until it lands on the dashboard."""

    direction: Direction
    payload: Optional[ScanPayload] = None
    coordinate: Optional[DeviceCoordinate] = None


@dataclass
class SessionContext:
    """Everything the workflow knows about the current user session.

    `generation` changes on every login/logout so that work finishing after
    the session ended can tell it no longer applies.
    """

    identity: Optional[Identity] = None
    token: Optional[str] = None
    status: AttendanceStatus = field(default_factory=AttendanceStatus)
    attempt: Optional[Attempt] = None
    generation: int = 0
    busy_message: Optional[str] = None
    scan_note: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def start(self, identity: Identity, token: str) -> None:
        self.identity = identity
        self.token = token
        self._fresh()

    def reset(self) -> None:
        self.identity = None
        self.token = None
        self._fresh()

    def discard_attempt(self) -> None:
        self.attempt = None
        self.scan_note = None
        self.busy_message = None

    def _fresh(self) -> None:
        self.status = AttendanceStatus()
        self.discard_attempt()
        self.generation += 1
