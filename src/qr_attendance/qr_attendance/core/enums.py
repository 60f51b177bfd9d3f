from __future__ import annotations

from enum import Enum


class Screen(str, Enum):
    """Workflow states; each one has exactly one renderer."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATING = "AUTHENTICATING"
    DASHBOARD = "DASHBOARD"
    SCANNING = "SCANNING"
    AWAITING_LOCATION = "AWAITING_LOCATION"
    SUBMITTING = "SUBMITTING"


class Direction(str, Enum):
    """Whether an attempt records a check-in or a check-out."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class NoticeLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ScanFailureKind(str, Enum):
    """NOT_FOUND fires on every frame without a code; the others end the scan."""

    NOT_FOUND = "NOT_FOUND"
    INITIALIZATION = "INITIALIZATION"
    SOURCE_CLOSED = "SOURCE_CLOSED"
