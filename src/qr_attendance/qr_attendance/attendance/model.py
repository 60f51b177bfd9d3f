from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceStatus:
    """Per-session record of check-in/check-out completion.

    check_out_time is only ever set on top of a recorded check-in; the only
    way back to "not checked in" is a fresh AttendanceStatus (logout/login).
    """

    checked_in: bool = False
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    def with_check_in(self, at: datetime) -> "AttendanceStatus":
        if self.checked_in:
            raise ValidationError("Already checked in")
        return AttendanceStatus(checked_in=True, check_in_time=at, check_out_time=None)

    def with_check_out(self, at: datetime) -> "AttendanceStatus":
        if not self.checked_in or self.check_in_time is None:
            raise ValidationError("You have not checked in yet")
        if self.check_out_time is not None:
            raise ValidationError("Already checked out")
        return replace(self, check_out_time=at)


@dataclass(frozen=True)
class ActionAvailability:
    """Which dashboard actions are enabled; a pure projection of AttendanceStatus."""

    check_in: bool
    check_out: bool

    @classmethod
    def from_status(cls, status: AttendanceStatus) -> "ActionAvailability":
        return cls(
            check_in=not status.checked_in,
            check_out=status.checked_in and status.check_out_time is None,
        )
