from __future__ import annotations

import logging

import httpx

from ..core.exceptions import CapabilityError
from .acquirer import LocationAcquirer
from .model import DeviceCoordinate

logger = logging.getLogger(__name__)


class IpGeolocationAcquirer(LocationAcquirer):
    """Approximate device position from an IP geolocation service.

    Accepts both `{"lat": .., "lon": ..}` and `{"latitude": .., "longitude": ..}`
    response shapes.
    """

    def __init__(self, client: httpx.AsyncClient, url: str, **kwargs):
        super().__init__(**kwargs)
        self._client = client
        self._url = url

    async def _locate(self) -> DeviceCoordinate:
        try:
            response = await self._client.get(self._url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Location error: %s", e)
            raise CapabilityError("Unable to get your location. Please try again.") from e

        if not isinstance(data, dict) or data.get("status") == "fail":
            raise CapabilityError("Unable to get your location. Please try again.")

        lat = data.get("lat", data.get("latitude"))
        lon = data.get("lon", data.get("longitude"))
        try:
            return DeviceCoordinate(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError) as e:
            raise CapabilityError("Unable to get your location. Please try again.") from e
