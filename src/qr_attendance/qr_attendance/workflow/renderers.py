from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..attendance.model import ActionAvailability
from ..common.datetime_utils import format_banner, format_clock
from ..core.enums import Direction, Screen
from .context import SessionContext
from .surface import ScreenView

Renderer = Callable[[SessionContext, datetime], ScreenView]

ACTION_LOGIN = "login"
ACTION_CHECK_IN = "check_in"
ACTION_CHECK_OUT = "check_out"
ACTION_LOGOUT = "logout"
ACTION_CANCEL = "cancel"
ACTION_ALLOW_LOCATION = "allow_location"

_DIRECTION_LABELS = {
    Direction.CHECK_IN: "Check In",
    Direction.CHECK_OUT: "Check Out",
}


def render_login(ctx: SessionContext, now: datetime) -> ScreenView:
    return ScreenView(
        screen=Screen.UNAUTHENTICATED,
        title="Employee Login",
        lines=("Enter your employee code and phone number",),
        actions=(ACTION_LOGIN,),
    )


def render_authenticating(ctx: SessionContext, now: datetime) -> ScreenView:
    return ScreenView(
        screen=Screen.AUTHENTICATING,
        title="Please wait",
        lines=(ctx.busy_message or "Logging in...",),
        busy=True,
    )


def render_dashboard(ctx: SessionContext, now: datetime) -> ScreenView:
    status = ctx.status
    name = ctx.identity.display_name if ctx.identity else ""

    if status.checked_in and status.check_in_time:
        check_in_line = f"Checked in at {format_clock(status.check_in_time)}"
    else:
        check_in_line = "Not checked in"
    if status.check_out_time:
        check_out_line = f"Checked out at {format_clock(status.check_out_time)}"
    else:
        check_out_line = "Not checked out"

    availability = ActionAvailability.from_status(status)
    actions = []
    if availability.check_in:
        actions.append(ACTION_CHECK_IN)
    if availability.check_out:
        actions.append(ACTION_CHECK_OUT)
    actions.append(ACTION_LOGOUT)

    return ScreenView(
        screen=Screen.DASHBOARD,
        title=f"Welcome, {name}" if name else "Welcome",
        lines=(format_banner(now), check_in_line, check_out_line),
        actions=tuple(actions),
    )


def render_scanning(ctx: SessionContext, now: datetime) -> ScreenView:
    label = _DIRECTION_LABELS.get(ctx.attempt.direction, "") if ctx.attempt else ""
    return ScreenView(
        screen=Screen.SCANNING,
        title=f"Scan QR Code - {label}" if label else "Scan QR Code",
        lines=(ctx.scan_note or "Initializing camera...",),
        actions=(ACTION_CANCEL,),
    )


def render_awaiting_location(ctx: SessionContext, now: datetime) -> ScreenView:
    lines = ["We need your location to verify you are at the branch"]
    if ctx.attempt and ctx.attempt.payload:
        lines.append(f"Branch Location: {ctx.attempt.payload.site_coordinate}")
    if ctx.busy_message:
        lines.append(ctx.busy_message)
    return ScreenView(
        screen=Screen.AWAITING_LOCATION,
        title="Location Access",
        lines=tuple(lines),
        actions=() if ctx.busy_message else (ACTION_ALLOW_LOCATION, ACTION_CANCEL),
        busy=bool(ctx.busy_message),
    )


def render_submitting(ctx: SessionContext, now: datetime) -> ScreenView:
    return ScreenView(
        screen=Screen.SUBMITTING,
        title="Please wait",
        lines=(ctx.busy_message or "Processing...",),
        busy=True,
    )


RENDERERS: dict[Screen, Renderer] = {
    Screen.UNAUTHENTICATED: render_login,
    Screen.AUTHENTICATING: render_authenticating,
    Screen.DASHBOARD: render_dashboard,
    Screen.SCANNING: render_scanning,
    Screen.AWAITING_LOCATION: render_awaiting_location,
    Screen.SUBMITTING: render_submitting,
}


def render(screen: Screen, ctx: SessionContext, now: datetime) -> ScreenView:
    return RENDERERS[screen](ctx, now)
