"""Display text for bar speed results."""

from __future__ import annotations

import math

from barspeed.errors import BarSpeedErrorCode
from barspeed.models.sample import Advisory, BarRateResult

INSUFFICIENT_DATA_MESSAGE = "Interval does not contain enough bars"
UNSUPPORTED_AGGREGATION_MESSAGE = "The Bar Speed Indicator\nonly works on Tick Charts"

ADVISORY_TEXT: dict[BarSpeedErrorCode, str] = {
    BarSpeedErrorCode.UNSUPPORTED_AGGREGATION: UNSUPPORTED_AGGREGATION_MESSAGE,
    BarSpeedErrorCode.INSUFFICIENT_DATA: INSUFFICIENT_DATA_MESSAGE,
}


def format_number(value: float) -> str:
    """Integral values without decimals, others with one (``12.0 -> "12"``)."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def format_duration(seconds: float) -> str:
    """Human-readable duration: ``45s``, ``1m``, ``1m 30s``."""
    if seconds >= 60:
        text = f"{math.floor(seconds / 60)}m"
        remainder = int(seconds) % 60
        if remainder >= 1:
            text += f" {remainder}s"
        return text
    return f"{format_number(seconds)}s"


def render_bar_speed(result: BarRateResult) -> str:
    """Three-line bar speed panel, or the advisory text."""
    if isinstance(result, Advisory):
        return ADVISORY_TEXT.get(result.code, result.message)

    lines = [f"BAR SPEED [last {result.window_minutes}m]"]
    if result.has_data:
        bpm = result.bars_per_minute
        lines.append(f"1 bar = {format_duration(result.avg_bar_duration_seconds)}")
        lines.append(f"1 min = {format_number(bpm)} bar{'s' if bpm >= 2 else ''}")
    else:
        lines.append(INSUFFICIENT_DATA_MESSAGE)
    return "\n".join(lines)
