"""BarRateEstimator — bars-per-minute and average bar duration.

Each closed bar triggers a fresh computation over a trailing window whose
length depends on whether the session is open. The average duration is the
configured window length divided by the bar count, not the elapsed time
between the first and last bar in the window.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from barspeed.calendar import SessionState, classify_session
from barspeed.config import AggregationKind, SessionCalendar, WindowConfig
from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.models.sample import Advisory, BarRateResult, BarRateSample
from barspeed.providers.base import BaseHistoryProvider

logger = logging.getLogger(__name__)

# Provider errors shown to the user instead of aborting the update
ADVISORY_CODES: dict[BarSpeedErrorCode, BarSpeedErrorCode] = {
    BarSpeedErrorCode.UNSUPPORTED_AGGREGATION: BarSpeedErrorCode.UNSUPPORTED_AGGREGATION,
    BarSpeedErrorCode.NO_DATA: BarSpeedErrorCode.INSUFFICIENT_DATA,
}

__all__ = [
    "BarRateEstimator",
    "classify_session",
    "compute_rate",
    "require_tick_aggregation",
    "select_window_minutes",
]


def select_window_minutes(state: SessionState, config: WindowConfig) -> int:
    """Lookback length for the given session state."""
    if state is SessionState.OPEN:
        return config.minutes_when_open
    return config.minutes_when_closed


def require_tick_aggregation(provider: BaseHistoryProvider) -> None:
    aggregation = provider.current_aggregation()
    if aggregation is not AggregationKind.TICK:
        raise BarSpeedError(
            f"Bar speed needs tick aggregation, chart uses {aggregation.value}",
            code=BarSpeedErrorCode.UNSUPPORTED_AGGREGATION,
        )


def compute_rate(
    reference_time: datetime,
    window_minutes: int,
    provider: BaseHistoryProvider,
    symbol: str = "",
) -> BarRateSample:
    """Measure the bar rate over ``[reference_time - window, reference_time]``.

    Raises:
        BarSpeedError: ``UNSUPPORTED_AGGREGATION`` when the provider's
            history is not tick-based.
    """
    require_tick_aggregation(provider)

    window_start = reference_time - timedelta(minutes=window_minutes)
    bar_count = provider.count_bars_in_range(
        symbol, AggregationKind.TICK, window_start, reference_time,
    )
    window_seconds = window_minutes * 60

    bars_per_minute = round(bar_count / window_minutes, 1)
    avg_duration = round(window_seconds / bar_count, 1) if bar_count > 0 else 0.0

    return BarRateSample(
        reference_time=reference_time,
        window_minutes=window_minutes,
        bar_count=bar_count,
        bars_per_minute=bars_per_minute,
        avg_bar_duration_seconds=avg_duration,
    )


class BarRateEstimator:
    """Owns the current bar rate result for one symbol.

    ``on_bar_close`` recomputes and replaces ``current`` as a whole value;
    readers only ever see a complete result.

    Usage::

        estimator = BarRateEstimator(provider, symbol="ES")
        result = estimator.on_bar_close()
        text = render_bar_speed(result)
    """

    def __init__(
        self,
        provider: BaseHistoryProvider,
        symbol: str = "",
        calendar: SessionCalendar | None = None,
        window: WindowConfig | None = None,
    ) -> None:
        self.provider = provider
        self.symbol = symbol
        self.calendar = calendar or SessionCalendar()
        self.window = window or WindowConfig()
        self._current: BarRateResult | None = None

    @property
    def current(self) -> BarRateResult | None:
        """Latest result, or None before the first update."""
        return self._current

    def window_for(self, reference_time: datetime) -> int:
        state = classify_session(reference_time, self.calendar)
        return select_window_minutes(state, self.window)

    def on_bar_close(self, reference_time: datetime | None = None) -> BarRateResult:
        """Recompute for the latest closed bar.

        Args:
            reference_time: Time of the latest closed bar. Defaults to the
                provider's latest closed bar time.

        Returns:
            A BarRateSample, or an Advisory when the chart aggregation is
            not tick-based or there is no history to measure.

        Raises:
            BarSpeedError: ``PROVIDER_ERROR`` or ``INVALID_CONFIG`` from the
                provider.
        """
        result: BarRateResult
        try:
            # Aggregation is checked before touching history so a non-tick
            # chart yields the advisory even when it has no bars.
            require_tick_aggregation(self.provider)
            if reference_time is None:
                reference_time = self.provider.latest_closed_bar_time(self.symbol)
            window_minutes = self.window_for(reference_time)
            result = compute_rate(reference_time, window_minutes, self.provider, self.symbol)
        except BarSpeedError as e:
            if e.code not in ADVISORY_CODES:
                raise
            logger.info(
                "Bar speed unavailable for %s: %s", self.symbol or "<default>", e,
                extra={
                    "symbol": self.symbol,
                    "reference_time": reference_time,
                    "code": ADVISORY_CODES[e.code].value,
                },
            )
            result = Advisory(
                code=ADVISORY_CODES[e.code], message=e.message, reference_time=reference_time,
            )
        else:
            logger.debug(
                "Bar rate %s at %s: %d bars in %dm, %.1f bpm, %.1fs/bar",
                self.symbol or "<default>", reference_time, result.bar_count,
                window_minutes, result.bars_per_minute, result.avg_bar_duration_seconds,
                extra={
                    "symbol": self.symbol,
                    "reference_time": reference_time,
                    "window_minutes": window_minutes,
                    "bar_count": result.bar_count,
                },
            )

        self._current = result
        return result
