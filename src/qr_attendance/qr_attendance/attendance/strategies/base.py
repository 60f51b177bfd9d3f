from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...core.enums import Direction
from ...gateway.model import SubmissionReceipt, SubmissionRecord
from ...gateway.repository import AttendanceGateway
from ..model import AttendanceStatus


class SubmissionStrategy(ABC):
    """Strategy Pattern: everything that differs between check-in and check-out."""

    direction: Direction
    busy_message: str
    success_message: str
    disabled_message: str

    @abstractmethod
    def is_enabled(self, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def submit(self, gateway: AttendanceGateway, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        raise NotImplementedError

    @abstractmethod
    def apply(self, status: AttendanceStatus, *, at: datetime) -> AttendanceStatus:
        raise NotImplementedError
