from __future__ import annotations

from typing import Protocol

from .model import LoginResult, SubmissionReceipt, SubmissionRecord


class AttendanceGateway(Protocol):
    """Remote authentication and attendance-recording contract.

    Rejections raise AuthenticationError / RemoteRejectedError carrying the
    server message; transport problems raise NetworkError.
    """

    async def authenticate(self, code: str, phone: str) -> LoginResult:
        raise NotImplementedError

    async def check_in(self, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        raise NotImplementedError

    async def check_out(self, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        raise NotImplementedError

    async def resolve_client_address(self) -> str:
        """Public IPv4 of this device, or the loopback placeholder on failure."""

        raise NotImplementedError
