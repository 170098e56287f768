"""Abstract base class for bar history providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from barspeed.config import AggregationKind
from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.models.bar import TickBar


class BaseHistoryProvider(ABC):
    """Abstract base for all history providers.

    Subclasses must implement ``current_aggregation`` and ``get_bars``.
    ``count_bars_in_range`` and ``latest_closed_bar_time`` are derived from
    ``get_bars`` and may be overridden with cheaper lookups.
    """

    # --- Aggregation (required) ---

    @abstractmethod
    def current_aggregation(self) -> AggregationKind:
        """Aggregation of the active chart."""
        ...

    # --- Historical bars (required) ---

    @abstractmethod
    def get_bars(
        self,
        symbol: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TickBar]:
        """Fetch history bars whose timestamp lies in [start, end].

        Args:
            symbol: Instrument symbol.
            start: Earliest bar timestamp (inclusive), or None for unbounded.
            end: Latest bar timestamp (inclusive), or None for unbounded.

        Returns:
            List of TickBar objects ordered by timestamp ascending.
        """
        ...

    def count_bars_in_range(
        self,
        symbol: str,
        aggregation: AggregationKind,
        start: datetime,
        end: datetime,
    ) -> int:
        """Count bars of ``aggregation`` whose timestamp lies in [start, end]."""
        if aggregation is not self.current_aggregation():
            raise BarSpeedError(
                f"History for {symbol} is {self.current_aggregation().value}-based, "
                f"not {aggregation.value}-based",
                code=BarSpeedErrorCode.UNSUPPORTED_AGGREGATION,
            )
        return len(self.get_bars(symbol, start, end))

    def latest_closed_bar_time(self, symbol: str) -> datetime:
        """Timestamp of the last fully closed bar.

        The newest bar is assumed to still be forming and is skipped.
        """
        bars = self.get_bars(symbol)
        if len(bars) < 2:
            raise BarSpeedError(
                f"No closed bars available for {symbol}",
                code=BarSpeedErrorCode.NO_DATA,
                retryable=True,
            )
        return bars[-2].timestamp

    # --- Capabilities ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features.

        Possible values: ``bars``, ``count``, ``persistent``.
        """
        return {"bars", "count"}
