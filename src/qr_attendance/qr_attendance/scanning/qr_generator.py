from __future__ import annotations

import json
from pathlib import Path

import qrcode

from ..common.validators import require_non_empty
from ..location.model import parse_coordinate


def site_payload_text(integrity_hash: str, site_coordinate: str) -> str:
    integrity_hash = require_non_empty(integrity_hash, "Integrity hash")
    site_coordinate = require_non_empty(site_coordinate, "Site coordinate")
    parse_coordinate(site_coordinate)
    return json.dumps({"integrityHash": integrity_hash, "siteCoordinate": site_coordinate})


def build_site_qr(integrity_hash: str, site_coordinate: str):
    """QR image encoding a site payload, ready to be printed at the branch."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(site_payload_text(integrity_hash, site_coordinate))
    qr.make(fit=True)
    return qr.make_image(fill_color="black", back_color="white")


def save_site_qr(path: str | Path, integrity_hash: str, site_coordinate: str) -> Path:
    target = Path(path)
    img = build_site_qr(integrity_hash, site_coordinate)
    with target.open("wb") as fh:
        img.save(fh, format="PNG")
    return target
