"""Mock provider for testing and CI — in-memory tick history."""

from __future__ import annotations

from datetime import datetime, timedelta

from barspeed.config import AggregationKind
from barspeed.models.bar import TickBar
from barspeed.providers.base import BaseHistoryProvider


class MockHistoryProvider(BaseHistoryProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_bars`` or ``add_evenly_spaced`` to pre-load history and
    ``set_aggregation`` to simulate a non-tick chart.
    """

    def __init__(self, aggregation: AggregationKind = AggregationKind.TICK) -> None:
        self._aggregation = aggregation
        self._bars: dict[str, list[TickBar]] = {}

    # --- Pre-load helpers ---

    def set_aggregation(self, aggregation: AggregationKind) -> None:
        self._aggregation = aggregation

    def set_bars(self, symbol: str, bars: list[TickBar]) -> None:
        self._bars[symbol.upper()] = sorted(bars, key=lambda b: b.timestamp)

    def add_evenly_spaced(
        self,
        symbol: str,
        end: datetime,
        count: int,
        spacing: timedelta,
        price: float = 100.0,
    ) -> list[TickBar]:
        """Append ``count`` flat bars ending at ``end``, ``spacing`` apart."""
        bars = [
            TickBar(
                timestamp=end - spacing * (count - 1 - i),
                open=price,
                high=price,
                low=price,
                close=price,
                volume=1.0,
                tick_count=1,
            )
            for i in range(count)
        ]
        key = symbol.upper()
        self.set_bars(key, self._bars.get(key, []) + bars)
        return bars

    # --- Provider implementation ---

    def current_aggregation(self) -> AggregationKind:
        return self._aggregation

    def get_bars(
        self,
        symbol: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TickBar]:
        return [
            b for b in self._bars.get(symbol.upper(), [])
            if (start is None or b.timestamp >= start)
            and (end is None or b.timestamp <= end)
        ]
