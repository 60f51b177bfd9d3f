from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Direction
from .strategies.base import SubmissionStrategy
from .strategies.check_in_strategy import CheckInStrategy
from .strategies.check_out_strategy import CheckOutStrategy


@dataclass
class SubmissionStrategyFactory:
    """Factory Pattern: pick the strategy for the direction fixed at scan start."""

    def for_direction(self, direction: Direction) -> SubmissionStrategy:
        if direction == Direction.CHECK_IN:
            return CheckInStrategy()
        if direction == Direction.CHECK_OUT:
            return CheckOutStrategy()
        raise ValueError(f"unknown direction: {direction!r}")
