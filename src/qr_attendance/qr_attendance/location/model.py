from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import ValidationError


def _number_text(value: float) -> str:
    # shortest round-trip form, whole numbers without ".0" (10.0 -> "10")
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class DeviceCoordinate:
    latitude: float
    longitude: float

    def as_text(self) -> str:
        """'lat,lon', the encoding used on the wire and inside site QR codes."""
        return f"{_number_text(self.latitude)},{_number_text(self.longitude)}"


def parse_coordinate(text: str) -> DeviceCoordinate:
    parts = [p.strip() for p in (text or "").split(",")]
    if len(parts) != 2:
        raise ValidationError(f"Coordinate must look like 'lat,lon': {text!r}")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise ValidationError(f"Coordinate must look like 'lat,lon': {text!r}") from e
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        raise ValidationError(f"Coordinate out of range: {text!r}")
    return DeviceCoordinate(latitude=latitude, longitude=longitude)
