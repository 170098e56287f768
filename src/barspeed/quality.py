"""Data quality validation for tick bar history."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from barspeed.models.bar import TickBar

VALUE_COLUMNS = ["open", "high", "low", "close", "volume"]


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_history_frame(df: pd.DataFrame) -> ValidationResult:
    """Run quality checks on a tick bar history frame.

    The frame is checked as stored: a blank volume or price cell counts as a
    null, it is not filled in. An empty frame passes; it simply yields zero
    counts downstream.

    Checks:
        1. No NaT timestamps and no NaN/Inf prices or volume
        2. Volume sanity (non-negative)
        3. Tick count sanity (positive when present)
        4. OHLC consistency (high >= low, high >= open/close, low <= open/close)
    """
    result = ValidationResult()
    values = df.reindex(columns=VALUE_COLUMNS).apply(pd.to_numeric, errors="coerce")

    # 1. No NaN/Inf
    nan_count = int((~np.isfinite(values.to_numpy(dtype=float, na_value=np.nan))).sum())
    if "timestamp" in df.columns:
        nan_count += int(df["timestamp"].isna().sum())
    if nan_count:
        result.checks.append(ValidationCheck("no_nulls", False, f"{nan_count} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 2. Volume sanity
    neg_vol = int((values["volume"] < 0).sum())
    if neg_vol:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 3. Tick count sanity
    if "tick_count" in df.columns:
        ticks = pd.to_numeric(df["tick_count"], errors="coerce")
        bad_ticks = int((ticks <= 0).sum())
    else:
        bad_ticks = 0
    if bad_ticks:
        result.checks.append(
            ValidationCheck("tick_count_sanity", False, f"{bad_ticks} bars with tick_count <= 0")
        )
    else:
        result.checks.append(ValidationCheck("tick_count_sanity", True))

    # 4. OHLC consistency
    o, h, low, c = (values[col] for col in ("open", "high", "low", "close"))
    inconsistent = int(((h < low) | (h < o) | (h < c) | (low > o) | (low > c)).sum())
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result


def validate_history(bars: list[TickBar]) -> ValidationResult:
    """Run the frame checks on a list of bars."""
    rows = [
        {
            "timestamp": b.timestamp,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "volume": b.volume,
            "tick_count": b.tick_count,
        }
        for b in bars
    ]
    return validate_history_frame(
        pd.DataFrame(rows, columns=["timestamp", *VALUE_COLUMNS, "tick_count"])
    )
