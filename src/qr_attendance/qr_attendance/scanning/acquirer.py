from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from .model import ScanFailure

DecodedCallback = Callable[[str], None]
FailureCallback = Callable[[ScanFailure], None]


class ScanAcquirer(ABC):
    """Adapter around a QR-decoding capability (camera, image source, ...).

    `on_decoded` may fire more than once and `on_failure` fires on every frame
    without a code (NOT_FOUND); callers decide which signal counts.
    """

    @abstractmethod
    def start(self, on_decoded: DecodedCallback, on_failure: FailureCallback) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        """Release the capability. Idempotent, safe when never started."""

        raise NotImplementedError
