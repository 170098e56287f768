"""Tick bar data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TickBar:
    """Single history bar built from a fixed number of trades.

    Attributes:
        timestamp: Bar open time (left edge).
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Traded volume.
        tick_count: Number of trades aggregated into this bar.
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    tick_count: int | None = None

    @property
    def range(self) -> float:
        """High minus low, in price units."""
        return self.high - self.low
