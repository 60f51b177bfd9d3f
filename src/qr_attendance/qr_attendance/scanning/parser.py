from __future__ import annotations

import json

from ..core.exceptions import ValidationError
from .model import ScanPayload

# Older site codes were printed with the short field names.
_HASH_KEYS = ("integrityHash", "hash")
_COORDINATE_KEYS = ("siteCoordinate", "lat_lon")

INVALID_QR_MESSAGE = "Invalid QR code format. Please scan a valid attendance QR code."


def _pick(data: dict, keys: tuple[str, ...]) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def parse_scan_payload(text: str) -> ScanPayload:
    """Parse decoded QR text into a ScanPayload.

    Raises ValidationError when the text is not a JSON object or when the
    integrity hash or site coordinate is missing or empty.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ValidationError(INVALID_QR_MESSAGE) from e

    if not isinstance(data, dict):
        raise ValidationError(INVALID_QR_MESSAGE)

    integrity_hash = _pick(data, _HASH_KEYS)
    site_coordinate = _pick(data, _COORDINATE_KEYS)
    if not integrity_hash or not site_coordinate:
        raise ValidationError(INVALID_QR_MESSAGE)

    used = set(_HASH_KEYS) | set(_COORDINATE_KEYS)
    return ScanPayload(
        integrity_hash=integrity_hash,
        site_coordinate=site_coordinate,
        extra={k: v for k, v in data.items() if k not in used},
    )
