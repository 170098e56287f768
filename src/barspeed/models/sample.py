"""Bar rate results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union

from barspeed.errors import BarSpeedErrorCode


@dataclass(frozen=True)
class BarRateSample:
    """Bar rate measured over one trailing window.

    Attributes:
        reference_time: Time of the latest closed bar the window ends at.
        window_minutes: Window length in minutes.
        bar_count: Bars found inside the window.
        bars_per_minute: ``bar_count / window_minutes`` rounded to 0.1.
        avg_bar_duration_seconds: Window seconds per bar rounded to 0.1,
            or 0 when the window is empty.
    """

    reference_time: datetime
    window_minutes: int
    bar_count: int
    bars_per_minute: float
    avg_bar_duration_seconds: float

    @property
    def has_data(self) -> bool:
        return self.bar_count > 0


@dataclass(frozen=True)
class Advisory:
    """Produced in place of a sample when no rate can be measured."""

    code: BarSpeedErrorCode
    message: str
    reference_time: datetime | None = None


BarRateResult = Union[BarRateSample, Advisory]
