from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..core.enums import ScanFailureKind
from .acquirer import ScanAcquirer
from .model import ScanFailure, ScanOutcome

logger = logging.getLogger(__name__)


class ScanSession:
    """One scanning attempt turned into a single awaitable outcome.

    The first decode, fatal failure or cancellation settles the session and
    stops the acquirer before anything else runs; every later callback is
    dropped. The acquirer is stopped at most once per session.
    """

    def __init__(self, acquirer: ScanAcquirer):
        self._acquirer = acquirer
        self._future: Optional[asyncio.Future[ScanOutcome]] = None
        self._released = False

    @property
    def settled(self) -> bool:
        return self._future is not None and self._future.done()

    def begin(self) -> None:
        self._future = asyncio.get_running_loop().create_future()
        try:
            self._acquirer.start(self._on_decoded, self._on_failure)
        except Exception as e:
            # Adapters that fail synchronously are treated like an init callback.
            logger.warning("Scanner failed to start: %s", e)
            self._on_failure(ScanFailure(kind=ScanFailureKind.INITIALIZATION, reason=str(e)))

    async def wait(self) -> ScanOutcome:
        if self._future is None:
            raise RuntimeError("ScanSession.begin() was not called")
        return await self._future

    def cancel(self) -> None:
        self._settle(ScanOutcome.cancelled())

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        try:
            self._acquirer.stop()
        except Exception as e:
            logger.error("Error stopping scanner: %s", e)

    def _on_decoded(self, text: str) -> None:
        if self.settled:
            logger.debug("Ignoring extra decode after the session settled")
            return
        logger.info("QR code detected")
        self._settle(ScanOutcome.decoded(text))

    def _on_failure(self, failure: ScanFailure) -> None:
        if failure.is_benign:
            return
        if self.settled:
            return
        logger.warning("QR scanner error: %s", failure.reason)
        self._settle(ScanOutcome.failed(failure.reason, failure.kind))

    def _settle(self, outcome: ScanOutcome) -> None:
        if self._future is None or self._future.done():
            return
        self.release()
        self._future.set_result(outcome)
