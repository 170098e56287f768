"""ATR and bar range panel with a fixed-dollar-risk position sizer.

The ATR itself comes from the host platform; this module only converts
sizes between points and ticks, sizes positions, and formats the panel.
"""

from __future__ import annotations

import pandas as pd

from barspeed.config import BarSizeConfig
from barspeed.models.bar import TickBar
from barspeed.models.bar_size import BarSizeSnapshot
from barspeed.models.instrument import InstrumentSpec

LABEL_WIDTH = 15


def to_units(value: float, tick_size: float, in_ticks: bool) -> float:
    """Express a price distance in ticks, or leave it in points."""
    return value / tick_size if in_ticks else value


def contracts_for_risk(
    size: float,
    instrument: InstrumentSpec,
    max_risk: float,
    add_ticks: int = 0,
) -> float:
    """Contracts that keep a stop of ``size`` (+ ``add_ticks``) within ``max_risk``.

    Zero when ``size`` is not positive.
    """
    if size <= 0:
        return 0.0
    risk_in_ticks = size / instrument.tick_size + add_ticks
    return max_risk / (risk_in_ticks * instrument.tick_cost)


def range_lines(
    bars: pd.DataFrame,
    atr: pd.Series,
    instrument: InstrumentSpec,
    atr_in_ticks: bool = True,
    tr_in_ticks: bool = True,
) -> pd.DataFrame:
    """ATR and bar range line series in the configured units.

    Args:
        bars: Frame with ``high`` and ``low`` columns.
        atr: Host-supplied ATR values aligned with ``bars``' index.
        instrument: Tick size used for conversion.
        atr_in_ticks: Express ATR in ticks.
        tr_in_ticks: Express bar range in ticks.

    Returns:
        DataFrame with ``ATR`` and ``TR`` columns on ``bars``' index.
    """
    tr = bars["high"] - bars["low"]
    return pd.DataFrame(
        {
            "ATR": to_units(atr.reindex(bars.index), instrument.tick_size, atr_in_ticks),
            "TR": to_units(tr, instrument.tick_size, tr_in_ticks),
        },
        index=bars.index,
    )


def _row(label: str, value: float, decimals: int, contracts: float, show_risk: bool) -> str:
    text = f"{label}{value:.{decimals}f}".ljust(LABEL_WIDTH)
    if show_risk:
        text += f"|  {contracts:.1f}"
    return text + "\n"


def render_bar_size(
    snapshot: BarSizeSnapshot,
    config: BarSizeConfig,
    instrument: InstrumentSpec,
) -> str | None:
    """Format the bar size panel; None when every row is disabled."""
    if not config.any_row_enabled:
        return None

    def contracts(size: float) -> float:
        return contracts_for_risk(size, instrument, config.max_risk, config.risk_add_ticks)

    text = "BarSize".ljust(LABEL_WIDTH)
    if config.show_risk:
        risk = config.max_risk
        text += f"  Risk ${int(risk) if float(risk).is_integer() else risk}"
    text += "\n"

    if config.show_atr:
        text += _row(
            f"ATR[{config.atr_period}]: ",
            to_units(snapshot.atr, instrument.tick_size, config.atr_in_ticks),
            1 if config.atr_in_ticks else 2,
            contracts(snapshot.atr),
            config.show_risk,
        )

    tr_decimals = 0 if config.tr_in_ticks else 2
    if config.show_previous:
        text += _row(
            "Previous: ",
            to_units(snapshot.previous_range, instrument.tick_size, config.tr_in_ticks),
            tr_decimals,
            contracts(snapshot.previous_range),
            config.show_risk,
        )
    if config.show_current:
        text += _row(
            "Current: ",
            to_units(snapshot.current_range, instrument.tick_size, config.tr_in_ticks),
            tr_decimals,
            contracts(snapshot.current_range),
            config.show_risk,
        )

    return text


def snapshot_from_bars(atr: float, previous: TickBar, current: TickBar) -> BarSizeSnapshot:
    """Build a snapshot from the host ATR and the last two bars."""
    return BarSizeSnapshot(
        atr=atr,
        previous_range=previous.range,
        current_range=current.range,
    )
