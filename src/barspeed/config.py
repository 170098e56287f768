"""Indicator configuration.

Every config dataclass validates its invariants on construction so the
estimator and formatters can assume well-formed input.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import time
from enum import Enum

from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.models.overlay import AnchorCorner

MIN_WINDOW_MINUTES = 1
MAX_WINDOW_MINUTES = 500
MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 36
MAX_RISK_LIMIT = 1_000_000.0


class AggregationKind(Enum):
    """How the chart groups trades into bars."""

    TICK = "tick"
    TIME = "time"
    VOLUME = "volume"
    RANGE = "range"
    RENKO = "renko"


class HistoryProviderType(Enum):
    """Supported history provider backends."""

    MOCK = "mock"
    FRAME = "frame"


def _invalid(message: str) -> BarSpeedError:
    return BarSpeedError(message, code=BarSpeedErrorCode.INVALID_CONFIG)


def _require_int(name: str, value: object, low: int, high: int | None = None) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(f"{name} must be an integer, got {value!r}")
    if value < low or (high is not None and value > high):
        bounds = f"[{low}, {high}]" if high is not None else f">= {low}"
        raise _invalid(f"{name} must be {bounds}, got {value}")


@dataclass(frozen=True)
class SessionCalendar:
    """Daily market session boundaries (time of day only).

    Attributes:
        open_time: Session open. Only hour and minute are used.
        close_time: Session close. Only hour and minute are used.

    Both bounds fall on the reference day, so a calendar whose open is
    after its close never contains an instant and classifies as closed.
    """

    open_time: time = time(9, 30)
    close_time: time = time(17, 0)

    def __post_init__(self) -> None:
        if not isinstance(self.open_time, time) or not isinstance(self.close_time, time):
            raise _invalid("open_time and close_time must be datetime.time values")


@dataclass(frozen=True)
class WindowConfig:
    """Lookback lengths in minutes for open and closed sessions."""

    minutes_when_open: int = 10
    minutes_when_closed: int = 60

    def __post_init__(self) -> None:
        _require_int("minutes_when_open", self.minutes_when_open,
                     MIN_WINDOW_MINUTES, MAX_WINDOW_MINUTES)
        _require_int("minutes_when_closed", self.minutes_when_closed,
                     MIN_WINDOW_MINUTES, MAX_WINDOW_MINUTES)


@dataclass(frozen=True)
class DisplayConfig:
    """Where and how an overlay is drawn.

    Attributes:
        anchor: Chart corner the offsets are measured from.
        x_offset: Horizontal distance from the anchor, in pixels.
        y_offset: Vertical distance from the anchor, in pixels.
        font_family: Font face name.
        font_size: Font size in points.
        color: Text color name.
    """

    anchor: AnchorCorner = AnchorCorner.TOP_RIGHT
    x_offset: int = 230
    y_offset: int = 100
    font_family: str = "Consolas"
    font_size: int = 10
    color: str = "LightGray"

    def __post_init__(self) -> None:
        if not isinstance(self.anchor, AnchorCorner):
            raise _invalid(f"anchor must be an AnchorCorner, got {self.anchor!r}")
        _require_int("x_offset", self.x_offset, 0)
        _require_int("y_offset", self.y_offset, 0)
        _require_int("font_size", self.font_size, MIN_FONT_SIZE, MAX_FONT_SIZE)


@dataclass(frozen=True)
class BarSpeedConfig:
    """Configuration for BarSpeedIndicator.

    Attributes:
        symbol: Instrument whose history is queried.
        calendar: Session boundaries used to pick the window.
        window: Lookback lengths.
        display: Overlay placement.
    """

    symbol: str = ""
    calendar: SessionCalendar = field(default_factory=SessionCalendar)
    window: WindowConfig = field(default_factory=WindowConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


@dataclass(frozen=True)
class BarSizeConfig:
    """Configuration for the ATR / bar range panel.

    Attributes:
        atr_period: Period of the host-supplied ATR, shown in the label.
        atr_in_ticks: Express ATR in ticks instead of points.
        tr_in_ticks: Express bar ranges in ticks instead of points.
        show_atr: Print the current ATR row.
        show_previous: Print the previous bar range row.
        show_current: Print the current bar range row.
        show_risk: Append the contracts-for-risk column.
        max_risk: Maximum dollar risk per trade.
        risk_add_ticks: Ticks added to every size before sizing the position.
        display: Overlay placement.
    """

    atr_period: int = 14
    atr_in_ticks: bool = True
    tr_in_ticks: bool = True
    show_atr: bool = True
    show_previous: bool = True
    show_current: bool = True
    show_risk: bool = True
    max_risk: float = 75.0
    risk_add_ticks: int = 2
    display: DisplayConfig = field(default_factory=lambda: DisplayConfig(y_offset=10))

    def __post_init__(self) -> None:
        _require_int("atr_period", self.atr_period, 1)
        _require_int("risk_add_ticks", self.risk_add_ticks, 0)
        if not 0 <= self.max_risk <= MAX_RISK_LIMIT:
            raise _invalid(f"max_risk must be in [0, {MAX_RISK_LIMIT:.0f}], got {self.max_risk}")

    @property
    def any_row_enabled(self) -> bool:
        return self.show_atr or self.show_previous or self.show_current


def parse_time_of_day(value: str) -> time:
    """Parse an ``HH:MM`` string into a time."""
    try:
        hour_str, minute_str = value.strip().split(":")
        return time(int(hour_str), int(minute_str))
    except ValueError as e:
        raise _invalid(f"Expected HH:MM time of day, got {value!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise _invalid(f"{name} must be an integer, got {raw!r}") from e


def load_config_from_env() -> BarSpeedConfig:
    """Build a BarSpeedConfig from environment variables.

    Environment variables:
        BARSPEED_SYMBOL: Instrument symbol (default: "").
        BARSPEED_MARKET_OPEN: Session open, HH:MM (default: "09:30").
        BARSPEED_MARKET_CLOSE: Session close, HH:MM (default: "17:00").
        BARSPEED_WINDOW_OPEN: Lookback minutes while open (default: 10).
        BARSPEED_WINDOW_CLOSED: Lookback minutes while closed (default: 60).
        BARSPEED_X_OFFSET: Overlay x offset (default: 230).
        BARSPEED_Y_OFFSET: Overlay y offset (default: 100).
        BARSPEED_FONT_SIZE: Overlay font size (default: 10).
    """
    calendar = SessionCalendar(
        open_time=parse_time_of_day(os.getenv("BARSPEED_MARKET_OPEN", "09:30")),
        close_time=parse_time_of_day(os.getenv("BARSPEED_MARKET_CLOSE", "17:00")),
    )
    window = WindowConfig(
        minutes_when_open=_env_int("BARSPEED_WINDOW_OPEN", 10),
        minutes_when_closed=_env_int("BARSPEED_WINDOW_CLOSED", 60),
    )
    display = DisplayConfig(
        x_offset=_env_int("BARSPEED_X_OFFSET", 230),
        y_offset=_env_int("BARSPEED_Y_OFFSET", 100),
        font_size=_env_int("BARSPEED_FONT_SIZE", 10),
    )
    return BarSpeedConfig(
        symbol=os.getenv("BARSPEED_SYMBOL", "").strip().upper(),
        calendar=calendar,
        window=window,
        display=display,
    )
