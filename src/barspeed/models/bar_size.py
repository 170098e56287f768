"""ATR / bar range snapshot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BarSizeSnapshot:
    """Bar sizes at one update, all in price units.

    Attributes:
        atr: Host-supplied average true range of the current bar.
        previous_range: High minus low of the last closed bar.
        current_range: High minus low of the forming bar.
    """

    atr: float
    previous_range: float
    current_range: float
