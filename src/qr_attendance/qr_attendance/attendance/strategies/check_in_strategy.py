from __future__ import annotations

from datetime import datetime

from ...core.enums import Direction
from ...gateway.model import SubmissionReceipt, SubmissionRecord
from ...gateway.repository import AttendanceGateway
from ..model import AttendanceStatus
from .base import SubmissionStrategy


class CheckInStrategy(SubmissionStrategy):
    """First scan of the day."""

    direction = Direction.CHECK_IN
    busy_message = "Checking in..."
    success_message = "Check-in successful!"
    disabled_message = "You have already checked in"

    def is_enabled(self, status: AttendanceStatus) -> bool:
        return not status.checked_in

    async def submit(self, gateway: AttendanceGateway, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        return await gateway.check_in(record, token=token)

    def apply(self, status: AttendanceStatus, *, at: datetime) -> AttendanceStatus:
        return status.with_check_in(at)
