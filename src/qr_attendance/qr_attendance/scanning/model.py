from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from ..core.enums import ScanFailureKind


@dataclass(frozen=True)
class ScanPayload:
    """Structured content of a site QR code."""

    integrity_hash: str
    site_coordinate: str
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ScanFailure:
    kind: ScanFailureKind
    reason: str

    @property
    def is_benign(self) -> bool:
        return self.kind == ScanFailureKind.NOT_FOUND


class ScanOutcomeKind(str, Enum):
    DECODED = "DECODED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class ScanOutcome:
    """How one scanning session ended."""

    kind: ScanOutcomeKind
    text: Optional[str] = None
    reason: Optional[str] = None
    failure_kind: Optional[ScanFailureKind] = None

    @classmethod
    def decoded(cls, text: str) -> "ScanOutcome":
        return cls(kind=ScanOutcomeKind.DECODED, text=text)

    @classmethod
    def failed(cls, reason: str, failure_kind: ScanFailureKind = ScanFailureKind.INITIALIZATION) -> "ScanOutcome":
        return cls(kind=ScanOutcomeKind.FAILED, reason=reason, failure_kind=failure_kind)

    @classmethod
    def cancelled(cls) -> "ScanOutcome":
        return cls(kind=ScanOutcomeKind.CANCELLED)
