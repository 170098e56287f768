"""Bar speed models."""

from barspeed.models.bar import TickBar
from barspeed.models.bar_size import BarSizeSnapshot
from barspeed.models.instrument import InstrumentSpec
from barspeed.models.overlay import AnchorCorner, Font, Overlay
from barspeed.models.sample import Advisory, BarRateResult, BarRateSample

__all__ = [
    "TickBar",
    "BarSizeSnapshot",
    "InstrumentSpec",
    "AnchorCorner",
    "Font",
    "Overlay",
    "Advisory",
    "BarRateResult",
    "BarRateSample",
]
