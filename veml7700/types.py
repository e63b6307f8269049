"""Configuration values and status types for the VEML7700 sensor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IntegrationTime(Enum):
    """ALS integration time; the value is the duration in milliseconds."""

    MS_25 = 25
    MS_50 = 50
    MS_100 = 100
    MS_200 = 200
    MS_400 = 400
    MS_800 = 800

    def as_ms(self) -> int:
        """Return the integration time in milliseconds."""
        return self.value

    def as_us(self) -> int:
        """Return the integration time in microseconds."""
        return self.value * 1000


class Gain(Enum):
    """ALS gain; the value is the gain factor."""

    ONE_EIGHTH = 0.125
    ONE_QUARTER = 0.25
    ONE = 1.0
    TWO = 2.0


class FaultCount(Enum):
    """Consecutive threshold crossings needed to raise an interrupt (persistence)."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8


class PowerSavingMode(Enum):
    """Power-saving mode; with the integration time it sets the refresh rate."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4


@dataclass(frozen=True)
class InterruptStatus:
    """Which thresholds were crossed as many times as the fault count requires."""

    was_too_low: bool
    was_too_high: bool