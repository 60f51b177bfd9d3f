from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.constants import FALLBACK_CLIENT_IP, GENERIC_NETWORK_ERROR
from ..core.exceptions import AuthenticationError, NetworkError, RemoteRejectedError
from ..session.service import mask_token
from .model import LoginResult, SubmissionReceipt, SubmissionRecord
from .repository import AttendanceGateway

logger = logging.getLogger(__name__)


def _read_json(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        logger.warning("Non-JSON response from %s (status %s)", response.request.url, response.status_code)
        return {}
    return data if isinstance(data, dict) else {}


class HttpAttendanceGateway(AttendanceGateway):
    """AttendanceGateway over the JSON HTTP API."""

    def __init__(self, client: httpx.AsyncClient, *, base_url: str, ip_lookup_url: str):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._ip_lookup_url = ip_lookup_url

    async def _post(self, path: str, payload: dict, *, token: str | None = None) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        try:
            return await self._client.post(f"{self._base_url}{path}", json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", path, e)
            raise NetworkError(GENERIC_NETWORK_ERROR) from e

    async def authenticate(self, code: str, phone: str) -> LoginResult:
        response = await self._post("/auth/employee-login", {"code": code, "phone": phone})
        data = _read_json(response)

        if not response.is_success:
            raise AuthenticationError(data.get("message") or "Login failed")

        employee = data.get("employee")
        token = data.get("token")
        logger.info("Login response received, token: %s", mask_token(token if isinstance(token, str) else None))
        return LoginResult(
            token=token if isinstance(token, str) else None,
            employee=employee if isinstance(employee, dict) else {},
            message=data.get("message"),
        )

    async def _submit(self, endpoint: str, record: SubmissionRecord, token: str, action: str) -> SubmissionReceipt:
        logger.debug("Submitting %s with token %s", endpoint, mask_token(token))
        response = await self._post(f"/attendance/{endpoint}", record.to_payload(), token=token)
        data = _read_json(response)

        if not response.is_success:
            raise RemoteRejectedError(data.get("message") or f"{action} failed")
        return SubmissionReceipt(message=data.get("message"), data=data)

    async def check_in(self, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        return await self._submit("check-in", record, token, "Checking in")

    async def check_out(self, record: SubmissionRecord, *, token: str) -> SubmissionReceipt:
        return await self._submit("check-out", record, token, "Checking out")

    async def resolve_client_address(self) -> str:
        try:
            response = await self._client.get(self._ip_lookup_url)
            response.raise_for_status()
            ip = response.json().get("ip")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.error("IP fetch error: %s", e)
            return FALLBACK_CLIENT_IP
        if not isinstance(ip, str) or not ip.strip():
            return FALLBACK_CLIENT_IP
        return ip.strip()
