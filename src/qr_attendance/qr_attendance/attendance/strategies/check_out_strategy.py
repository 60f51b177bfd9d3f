from __future__ import annotations

from datetime import datetime

from ...core.enums import Direction
from ...gateway.model import SubmissionReceipt, SubmissionRecord
from ...gateway.repository import AttendanceGateway
from ..model import AttendanceStatus
from .base import SubmissionStrategy


class CheckOutStrategy(SubmissionStrategy):
    """Closing scan; only after a check-in and only once."""

    direction = Direction.CHECK_OUT
    busy_message = "Checking out..."
    success_message = "Check-out successful!"
    disabled_message = "Check-out is only available after checking in, once"

    def is_enabled(self, status: AttendanceStatus) -> bool:
        return status.checked_in and status.check_out_time is None

    async def submit(self, gateway: AttendanceGateway, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        return await gateway.check_out(record, token=token)

    def apply(self, status: AttendanceStatus, *, at: datetime) -> AttendanceStatus:
        return status.with_check_out(at)
