"""Instrument specification."""

from __future__ import annotations

from dataclasses import dataclass

from barspeed.errors import BarSpeedError, BarSpeedErrorCode


@dataclass(frozen=True)
class InstrumentSpec:
    """Contract parameters needed to convert prices into ticks and dollars.

    Attributes:
        symbol: Instrument symbol.
        tick_size: Minimum price increment.
        tick_cost: Dollar value of one tick for one contract.
    """

    symbol: str
    tick_size: float
    tick_cost: float

    def __post_init__(self) -> None:
        if self.tick_size <= 0 or self.tick_cost <= 0:
            raise BarSpeedError(
                f"{self.symbol}: tick_size and tick_cost must be positive",
                code=BarSpeedErrorCode.INVALID_CONFIG,
            )
