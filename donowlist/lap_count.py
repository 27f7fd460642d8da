"""Whether a lap count comparison came out greater or less."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum


class LapCountGreaterOrLess(Enum):
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"

    @classmethod
    def from_number(cls, value: float | timedelta) -> LapCountGreaterOrLess:
        """GREATER_THAN for a positive number or time span, LESS_THAN otherwise."""
        zero = timedelta(0) if isinstance(value, timedelta) else 0
        return cls.GREATER_THAN if value > zero else cls.LESS_THAN