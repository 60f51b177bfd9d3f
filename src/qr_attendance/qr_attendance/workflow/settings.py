from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import (
    DEFAULT_CAMERA_ERROR_DELAY,
    DEFAULT_LOCATION_MAX_AGE_MS,
    DEFAULT_LOCATION_TIMEOUT_MS,
    DEFAULT_SCAN_ERROR_DELAY,
    DEFAULT_SCAN_SUCCESS_DELAY,
)


@dataclass(frozen=True)
class WorkflowSettings:
    operator_id: str = ""
    location_timeout_ms: int = DEFAULT_LOCATION_TIMEOUT_MS
    location_max_age_ms: int = DEFAULT_LOCATION_MAX_AGE_MS
    scan_success_delay: float = DEFAULT_SCAN_SUCCESS_DELAY
    scan_error_delay: float = DEFAULT_SCAN_ERROR_DELAY
    camera_error_delay: float = DEFAULT_CAMERA_ERROR_DELAY
    # Skip the "allow location" prompt and ask the device right after a scan.
    auto_request_location: bool = False
