from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.enums import NoticeLevel, Screen


@dataclass(frozen=True)
class ScreenView:
    """What a display surface should show for the current state."""

    screen: Screen
    title: str
    lines: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()
    busy: bool = False


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel = NoticeLevel.INFO


class ScreenSurface(Protocol):
    """Passive presentation layer driven by the workflow."""

    def show(self, view: ScreenView) -> None:
        raise NotImplementedError

    def notify(self, notice: Notice) -> None:
        raise NotImplementedError


class NullSurface:
    """Surface that shows nothing; for headless use."""

    def show(self, view: ScreenView) -> None:
        return None

    def notify(self, notice: Notice) -> None:
        return None
