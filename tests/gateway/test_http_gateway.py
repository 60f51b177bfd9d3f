from __future__ import annotations

import asyncio
import json
from datetime import datetime

import httpx
import pytest

from qr_attendance.core.enums import Direction
from qr_attendance.core.exceptions import AuthenticationError, NetworkError, RemoteRejectedError
from qr_attendance.gateway.http_gateway import HttpAttendanceGateway
from qr_attendance.gateway.model import SubmissionRecord
from qr_attendance.location.model import DeviceCoordinate

BASE_URL = "http://attendance.test/api"
IP_URL = "http://ip.test/?format=json"


class Recorder:
    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


def _gateway(responder) -> tuple[HttpAttendanceGateway, Recorder]:
    recorder = Recorder(responder)
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return HttpAttendanceGateway(client, base_url=BASE_URL + "/", ip_lookup_url=IP_URL), recorder


def _record(direction=Direction.CHECK_IN) -> SubmissionRecord:
    return SubmissionRecord(
        scan_time=datetime(2026, 2, 2, 8, 25, 7),
        operator_id="test_tg_id",
        integrity_hash="h1",
        site_coordinate="1.0,2.0",
        client_ip="203.0.113.9",
        current_coordinate=DeviceCoordinate(1.00001, 2.00002),
        direction=direction,
    )


def test_authenticate_posts_code_and_phone():
    gateway, recorder = _gateway(
        lambda request: httpx.Response(200, json={"token": "t1", "employee": {"employeeId": 1, "displayName": "A"}})
    )

    result = asyncio.run(gateway.authenticate("E1", "555"))

    assert result.token == "t1"
    assert result.employee == {"employeeId": 1, "displayName": "A"}
    request = recorder.requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/auth/employee-login"
    assert json.loads(request.content) == {"code": "E1", "phone": "555"}


def test_authenticate_success_without_token_is_reported_as_missing():
    gateway, _ = _gateway(lambda request: httpx.Response(200, json={"employee": {"id": 1}}))
    result = asyncio.run(gateway.authenticate("E1", "555"))
    assert result.token is None


def test_authenticate_rejection_uses_server_message():
    gateway, _ = _gateway(lambda request: httpx.Response(401, json={"message": "Invalid employee code"}))
    with pytest.raises(AuthenticationError, match="Invalid employee code"):
        asyncio.run(gateway.authenticate("E1", "555"))


def test_authenticate_rejection_without_body_uses_generic_message():
    gateway, _ = _gateway(lambda request: httpx.Response(500, text="<html>oops</html>"))
    with pytest.raises(AuthenticationError, match="Login failed"):
        asyncio.run(gateway.authenticate("E1", "555"))


def test_transport_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    gateway, _ = _gateway(handler)
    with pytest.raises(NetworkError, match="Network error"):
        asyncio.run(gateway.authenticate("E1", "555"))


@pytest.mark.parametrize(
    ("direction", "endpoint"),
    [(Direction.CHECK_IN, "check-in"), (Direction.CHECK_OUT, "check-out")],
)
def test_submission_sends_bearer_token_and_wire_payload(direction, endpoint):
    gateway, recorder = _gateway(lambda request: httpx.Response(200, json={"message": "ok"}))
    submit = gateway.check_in if direction == Direction.CHECK_IN else gateway.check_out

    receipt = asyncio.run(submit(_record(direction), token="t1"))

    assert receipt.message == "ok"
    request = recorder.requests[0]
    assert str(request.url) == f"{BASE_URL}/attendance/{endpoint}"
    assert request.headers["Authorization"] == "Bearer t1"
    assert json.loads(request.content) == {
        "scan_time": "08:25:07",
        "tg_id": "test_tg_id",
        "hash": "h1",
        "lat_lon": "1.0,2.0",
        "ipv4": "203.0.113.9",
        "current_lat_lon": "1.00001,2.00002",
    }


def test_submission_rejection_carries_message():
    gateway, _ = _gateway(lambda request: httpx.Response(400, json={"message": "QR code expired"}))
    with pytest.raises(RemoteRejectedError, match="QR code expired"):
        asyncio.run(gateway.check_in(_record(), token="t1"))


def test_check_out_rejection_without_message():
    gateway, _ = _gateway(lambda request: httpx.Response(403, json={}))
    with pytest.raises(RemoteRejectedError, match="Checking out failed"):
        asyncio.run(gateway.check_out(_record(Direction.CHECK_OUT), token="t1"))


def test_resolve_client_address():
    gateway, recorder = _gateway(lambda request: httpx.Response(200, json={"ip": "198.51.100.4"}))
    assert asyncio.run(gateway.resolve_client_address()) == "198.51.100.4"
    assert str(recorder.requests[0].url) == IP_URL


@pytest.mark.parametrize(
    "responder",
    [
        lambda request: httpx.Response(503),
        lambda request: httpx.Response(200, text="nope"),
        lambda request: httpx.Response(200, json=["1.2.3.4"]),
        lambda request: httpx.Response(200, json={"ip": ""}),
    ],
)
def test_resolve_client_address_falls_back_to_loopback(responder):
    gateway, _ = _gateway(responder)
    assert asyncio.run(gateway.resolve_client_address()) == "127.0.0.1"
