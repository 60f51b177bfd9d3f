from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode

from ..core.constants import DEFAULT_SCAN_FPS
from ..core.enums import ScanFailureKind
from .acquirer import DecodedCallback, FailureCallback, ScanAcquirer
from .model import ScanFailure

logger = logging.getLogger(__name__)

Frame = Union[str, Path, Image.Image]


def decode_qr_texts(img: Image.Image) -> list[str]:
    """All QR code texts found in one image."""
    decoded = pyzbar_decode(img.convert("RGB"))
    return [d.data.decode("utf-8", errors="replace").strip() for d in decoded if d.type == "QRCODE"]


class ImageScanAcquirer(ScanAcquirer):
    """Decode QR codes from a sequence of frames (image paths or PIL images).

    Frames are processed at `fps` on the running event loop. A frame that
    cannot be opened is an initialization failure, the same way a camera that
    cannot be opened is; running out of frames ends the scan as well.
    """

    def __init__(self, frames: Iterable[Frame], *, fps: int = DEFAULT_SCAN_FPS):
        self._frames = list(frames)
        self._interval = 1.0 / max(1, int(fps))
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self, on_decoded: DecodedCallback, on_failure: FailureCallback) -> None:
        if self._running:
            raise RuntimeError("scanner already started")
        self._running = True
        self._task = asyncio.get_running_loop().create_task(self._run(on_decoded, on_failure))

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
        logger.debug("Image scanner stopped")

    def _load(self, frame: Frame) -> Image.Image:
        if isinstance(frame, Image.Image):
            return frame
        with Image.open(frame) as img:
            return img.convert("RGB")

    async def _run(self, on_decoded: DecodedCallback, on_failure: FailureCallback) -> None:
        if not self._frames:
            on_failure(ScanFailure(kind=ScanFailureKind.INITIALIZATION, reason="No image source available"))
            return

        for frame in self._frames:
            if not self._running:
                return
            try:
                texts = decode_qr_texts(self._load(frame))
            except OSError as e:
                on_failure(ScanFailure(kind=ScanFailureKind.INITIALIZATION, reason=f"Cannot open image: {e}"))
                return
            except Exception as e:
                # e.g. Pillow's DecompressionBombError, which is not an OSError
                logger.exception("Cannot read frame %r", frame)
                on_failure(ScanFailure(kind=ScanFailureKind.INITIALIZATION, reason=f"Cannot read image: {e}"))
                return

            if not texts:
                on_failure(ScanFailure(kind=ScanFailureKind.NOT_FOUND, reason="NotFoundException: No QR code found"))
            for text in texts:
                on_decoded(text)
                if not self._running:
                    return

            await asyncio.sleep(self._interval)

        if self._running:
            on_failure(ScanFailure(kind=ScanFailureKind.SOURCE_CLOSED, reason="No QR code found in the provided images"))
