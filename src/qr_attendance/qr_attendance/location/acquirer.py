from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..core.exceptions import CapabilityError
from .model import DeviceCoordinate

logger = logging.getLogger(__name__)


class LocationAcquirer(ABC):
    """One-shot geolocation request with a timeout and a cached-fix window.

    A fix younger than `max_cache_age_ms` is returned without asking the
    device again. Failures raise CapabilityError; there is no retry here.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._last_fix: Optional[tuple[float, DeviceCoordinate]] = None

    async def acquire(self, *, timeout_ms: int, max_cache_age_ms: int) -> DeviceCoordinate:
        cached = self._cached(max_cache_age_ms)
        if cached is not None:
            logger.debug("Using cached location fix")
            return cached

        try:
            coordinate = await asyncio.wait_for(self._locate(), timeout=timeout_ms / 1000.0)
        except asyncio.TimeoutError as e:
            raise CapabilityError("Location request timed out") from e

        self._last_fix = (self._clock(), coordinate)
        return coordinate

    def _cached(self, max_cache_age_ms: int) -> Optional[DeviceCoordinate]:
        if self._last_fix is None or max_cache_age_ms <= 0:
            return None
        taken_at, coordinate = self._last_fix
        if (self._clock() - taken_at) * 1000.0 <= max_cache_age_ms:
            return coordinate
        return None

    @abstractmethod
    async def _locate(self) -> DeviceCoordinate:
        raise NotImplementedError
