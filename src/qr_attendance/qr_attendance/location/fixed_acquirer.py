from __future__ import annotations

from typing import Optional

from ..core.exceptions import CapabilityError
from .acquirer import LocationAcquirer
from .model import DeviceCoordinate


class FixedLocationAcquirer(LocationAcquirer):
    """Reports a configured coordinate (kiosks mounted at a known spot)."""

    def __init__(self, latitude: Optional[float], longitude: Optional[float], **kwargs):
        super().__init__(**kwargs)
        self._latitude = latitude
        self._longitude = longitude

    async def _locate(self) -> DeviceCoordinate:
        if self._latitude is None or self._longitude is None:
            raise CapabilityError("Geolocation is not supported on this device")
        return DeviceCoordinate(latitude=float(self._latitude), longitude=float(self._longitude))
