"""Chart indicators: the entry points an external driver loop calls.

The driver invokes ``on_bar_close`` (or ``on_update``) when data changes and
``render`` from its paint callback. Both run on the host's single event
thread; ``render`` only reads the last computed value.
"""

from __future__ import annotations

from datetime import datetime

from barspeed.bar_size import render_bar_size, snapshot_from_bars
from barspeed.config import BarSizeConfig, BarSpeedConfig, DisplayConfig
from barspeed.errors import BarSpeedErrorCode
from barspeed.estimator import BarRateEstimator
from barspeed.formatting import render_bar_speed
from barspeed.models.bar import TickBar
from barspeed.models.bar_size import BarSizeSnapshot
from barspeed.models.instrument import InstrumentSpec
from barspeed.models.overlay import Font, Overlay
from barspeed.models.sample import Advisory, BarRateResult
from barspeed.providers.base import BaseHistoryProvider

ADVISORY_COLOR = "Red"


def _overlay(text: str, display: DisplayConfig, color: str | None = None) -> Overlay:
    return Overlay(
        text=text,
        anchor=display.anchor,
        x_offset=display.x_offset,
        y_offset=display.y_offset,
        font=Font(family=display.font_family, size=display.font_size),
        color=color or display.color,
    )


class BarSpeedIndicator:
    """Bar speed overlay for tick charts."""

    name = "BarSpeed"
    description = "Bar Speed for Tick Charts"

    def __init__(self, config: BarSpeedConfig, provider: BaseHistoryProvider) -> None:
        self.config = config
        self.estimator = BarRateEstimator(
            provider,
            symbol=config.symbol,
            calendar=config.calendar,
            window=config.window,
        )

    @property
    def current(self) -> BarRateResult | None:
        return self.estimator.current

    def on_bar_close(self, reference_time: datetime | None = None) -> BarRateResult:
        return self.estimator.on_bar_close(reference_time)

    def render(self, result: BarRateResult | None = None) -> Overlay | None:
        """Overlay for ``result`` (defaults to the current result)."""
        if result is None:
            result = self.current
        if result is None:
            return None
        unsupported = (
            isinstance(result, Advisory)
            and result.code is BarSpeedErrorCode.UNSUPPORTED_AGGREGATION
        )
        color = ADVISORY_COLOR if unsupported else None
        return _overlay(render_bar_speed(result), self.config.display, color)


class BarSizeIndicator:
    """ATR / bar range panel with optional risk sizing."""

    name = "ATR_TR"
    description = "Customized ATR and True Range Indicator"

    def __init__(self, config: BarSizeConfig, instrument: InstrumentSpec) -> None:
        self.config = config
        self.instrument = instrument
        self._current: BarSizeSnapshot | None = None

    @property
    def current(self) -> BarSizeSnapshot | None:
        return self._current

    def on_update(self, atr: float, previous: TickBar, current: TickBar) -> BarSizeSnapshot:
        """Record the host ATR and the last two bars; runs on every tick."""
        self._current = snapshot_from_bars(atr, previous, current)
        return self._current

    def render(self, snapshot: BarSizeSnapshot | None = None) -> Overlay | None:
        if snapshot is None:
            snapshot = self._current
        if snapshot is None:
            return None
        text = render_bar_size(snapshot, self.config, self.instrument)
        if text is None:
            return None
        return _overlay(text, self.config.display)
