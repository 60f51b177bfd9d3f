from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_clock
from ..core.enums import Direction
from ..location.model import DeviceCoordinate


@dataclass(frozen=True)
class LoginResult:
    """Successful authentication response; `token` may still be missing."""

    token: Optional[str]
    employee: Mapping[str, Any] = field(default_factory=dict)
    message: Optional[str] = None


@dataclass(frozen=True)
class SubmissionRecord:
    """One check-in/check-out request, built fresh for every submission."""

    scan_time: datetime
    operator_id: str
    integrity_hash: str
    site_coordinate: str
    client_ip: str
    current_coordinate: DeviceCoordinate
    direction: Direction

    def to_payload(self) -> dict[str, str]:
        return {
            "scan_time": format_clock(self.scan_time),
            "tg_id": self.operator_id,
            "hash": self.integrity_hash,
            "lat_lon": self.site_coordinate,
            "ipv4": self.client_ip,
            "current_lat_lon": self.current_coordinate.as_text(),
        }


@dataclass(frozen=True)
class SubmissionReceipt:
    message: Optional[str] = None
    data: Mapping[str, Any] = field(default_factory=dict)
