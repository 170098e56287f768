"""barspeed — bar speed and bar size overlays for tick charts.

Measures how fast tick bars are printing (average bar duration and
bars per minute over a session-aware trailing window) and formats ATR /
bar range panels with a fixed-risk position sizer.

Quick start::

    from barspeed import create_indicator_from_env
    indicator = create_indicator_from_env()
    indicator.on_bar_close()
    overlay = indicator.render()
"""

from __future__ import annotations

import os

from barspeed.bar_size import contracts_for_risk, range_lines, render_bar_size, to_units
from barspeed.calendar import SessionState, classify_session, is_session_open
from barspeed.config import (
    AggregationKind,
    BarSizeConfig,
    BarSpeedConfig,
    DisplayConfig,
    HistoryProviderType,
    SessionCalendar,
    WindowConfig,
    load_config_from_env,
)
from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.estimator import BarRateEstimator, compute_rate, select_window_minutes
from barspeed.formatting import format_duration, render_bar_speed
from barspeed.indicators import BarSizeIndicator, BarSpeedIndicator
from barspeed.log import configure_logging
from barspeed.models.bar import TickBar
from barspeed.models.bar_size import BarSizeSnapshot
from barspeed.models.instrument import InstrumentSpec
from barspeed.models.overlay import AnchorCorner, Font, Overlay
from barspeed.models.sample import Advisory, BarRateSample
from barspeed.providers import create_provider

__version__ = "0.1.0"

__all__ = [
    # Indicators
    "BarSpeedIndicator",
    "BarSizeIndicator",
    "create_indicator_from_env",
    # Estimator
    "BarRateEstimator",
    "SessionState",
    "classify_session",
    "is_session_open",
    "select_window_minutes",
    "compute_rate",
    # Formatting
    "format_duration",
    "render_bar_speed",
    "render_bar_size",
    "to_units",
    "contracts_for_risk",
    "range_lines",
    # Config
    "AggregationKind",
    "HistoryProviderType",
    "SessionCalendar",
    "WindowConfig",
    "DisplayConfig",
    "BarSpeedConfig",
    "BarSizeConfig",
    "load_config_from_env",
    # Errors
    "BarSpeedError",
    "BarSpeedErrorCode",
    # Models
    "TickBar",
    "BarRateSample",
    "Advisory",
    "BarSizeSnapshot",
    "InstrumentSpec",
    "AnchorCorner",
    "Font",
    "Overlay",
    # Providers
    "create_provider",
    # Logging
    "configure_logging",
]


def create_indicator_from_env() -> BarSpeedIndicator:
    """Zero-config factory — reads settings and the provider from env vars.

    Environment variables (in addition to those read by
    ``load_config_from_env``):
        BARSPEED_PROVIDER: History provider, "mock" or "frame" (default: "frame").
        BARSPEED_HISTORY_PATH: Directory of per-symbol history files for the
            frame provider (default: "data/history").
        BARSPEED_AGGREGATION: Chart aggregation (default: "tick").
    """
    config = load_config_from_env()
    provider_type = HistoryProviderType(os.getenv("BARSPEED_PROVIDER", "frame").strip().lower())
    aggregation = AggregationKind(os.getenv("BARSPEED_AGGREGATION", "tick").strip().lower())

    kwargs: dict[str, object] = {"aggregation": aggregation}
    if provider_type is HistoryProviderType.FRAME:
        kwargs["base_path"] = os.getenv("BARSPEED_HISTORY_PATH", "data/history")

    return BarSpeedIndicator(config, create_provider(provider_type, **kwargs))
