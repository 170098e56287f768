"""pandas-backed history provider with Parquet/CSV persistence.

Storage layout: ``{base_path}/{SYMBOL}.parquet`` (or ``.csv``), one row per
bar with columns ``timestamp, open, high, low, close, volume, tick_count``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from barspeed.config import AggregationKind
from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.models.bar import TickBar
from barspeed.providers.base import BaseHistoryProvider
from barspeed.quality import validate_history_frame

logger = logging.getLogger(__name__)

COLUMNS = ["timestamp", "open", "high", "low", "close", "volume", "tick_count"]


class FrameHistoryProvider(BaseHistoryProvider):
    """History held as one timestamp-sorted DataFrame per symbol.

    Range counts use binary search on the timestamp column, so counting a
    window is O(log n) regardless of history length.
    """

    def __init__(
        self,
        aggregation: AggregationKind = AggregationKind.TICK,
        base_path: Path | str | None = None,
        validate: bool = True,
    ) -> None:
        self._aggregation = aggregation
        self.base_path = Path(base_path) if base_path else None
        self.validate = validate
        self._frames: dict[str, pd.DataFrame] = {}

    # --- Loading / storing ---

    def set_frame(self, symbol: str, df: pd.DataFrame) -> None:
        """Register history for ``symbol``; the frame is copied and sorted."""
        missing = [c for c in ("timestamp", "open", "high", "low", "close") if c not in df.columns]
        if missing:
            raise BarSpeedError(
                f"{symbol}: history frame is missing columns {missing}",
                code=BarSpeedErrorCode.PROVIDER_ERROR,
            )
        frame = df.copy()
        frame["timestamp"] = pd.to_datetime(frame["timestamp"])
        if "volume" not in frame.columns:
            frame["volume"] = 0.0
        if "tick_count" not in frame.columns:
            frame["tick_count"] = pd.NA
        frame = frame.sort_values("timestamp", kind="stable").reset_index(drop=True)

        if self.validate:
            result = validate_history_frame(frame)
            if not result.passed:
                msgs = "; ".join(c.message for c in result.failed_checks)
                raise BarSpeedError(
                    f"{symbol}: history validation failed: {msgs}",
                    code=BarSpeedErrorCode.PROVIDER_ERROR,
                )

        self._frames[symbol.upper()] = frame[COLUMNS]
        logger.debug(
            "Loaded %d bars for %s", len(frame), symbol.upper(),
            extra={"symbol": symbol.upper(), "bar_count": len(frame)},
        )

    def set_bars(self, symbol: str, bars: list[TickBar]) -> None:
        self.set_frame(symbol, self._bars_to_df(bars))

    def load(self, symbol: str) -> None:
        """Load ``symbol`` from ``base_path`` (Parquet preferred over CSV)."""
        if self.base_path is None:
            raise BarSpeedError(
                "No base_path configured for history files",
                code=BarSpeedErrorCode.PROVIDER_ERROR,
            )
        key = symbol.upper()
        parquet_fp = self.base_path / f"{key}.parquet"
        csv_fp = self.base_path / f"{key}.csv"
        try:
            if parquet_fp.exists():
                df = pd.read_parquet(parquet_fp)
            elif csv_fp.exists():
                df = pd.read_csv(csv_fp)
            else:
                raise BarSpeedError(
                    f"No history file for {key} in {self.base_path}",
                    code=BarSpeedErrorCode.NO_DATA,
                )
        except (OSError, ValueError) as e:
            raise BarSpeedError(
                f"Failed to read history for {key}: {e}",
                code=BarSpeedErrorCode.PROVIDER_ERROR,
            ) from e
        self.set_frame(key, df)

    def store(self, symbol: str) -> Path:
        """Write ``symbol``'s history to ``base_path`` as Parquet."""
        if self.base_path is None:
            raise BarSpeedError(
                "No base_path configured for history files",
                code=BarSpeedErrorCode.PROVIDER_ERROR,
            )
        key = symbol.upper()
        self.base_path.mkdir(parents=True, exist_ok=True)
        fp = self.base_path / f"{key}.parquet"
        self._frame(key).to_parquet(fp, compression="snappy")
        return fp

    # --- Provider implementation ---

    def current_aggregation(self) -> AggregationKind:
        return self._aggregation

    def get_bars(
        self,
        symbol: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TickBar]:
        frame = self._frame(symbol.upper())
        lo, hi = self._bounds(frame, start, end)
        return self._df_to_bars(frame.iloc[lo:hi])

    def count_bars_in_range(
        self,
        symbol: str,
        aggregation: AggregationKind,
        start: datetime,
        end: datetime,
    ) -> int:
        if aggregation is not self._aggregation:
            return super().count_bars_in_range(symbol, aggregation, start, end)
        lo, hi = self._bounds(self._frame(symbol.upper()), start, end)
        return max(hi - lo, 0)

    def latest_closed_bar_time(self, symbol: str) -> datetime:
        frame = self._frame(symbol.upper())
        if len(frame) < 2:
            raise BarSpeedError(
                f"No closed bars available for {symbol}",
                code=BarSpeedErrorCode.NO_DATA,
                retryable=True,
            )
        return pd.Timestamp(frame["timestamp"].iloc[-2]).to_pydatetime()

    def capabilities(self) -> set[str]:
        caps = {"bars", "count"}
        if self.base_path is not None:
            caps.add("persistent")
        return caps

    # ---- helpers ----

    def _frame(self, key: str) -> pd.DataFrame:
        if key not in self._frames:
            if self.base_path is None:
                raise BarSpeedError(
                    f"No history loaded for {key}",
                    code=BarSpeedErrorCode.NO_DATA,
                )
            self.load(key)
        return self._frames[key]

    @staticmethod
    def _bounds(
        frame: pd.DataFrame, start: datetime | None, end: datetime | None,
    ) -> tuple[int, int]:
        ts = frame["timestamp"]
        lo = 0 if start is None else int(ts.searchsorted(pd.Timestamp(start), side="left"))
        hi = len(frame) if end is None else int(ts.searchsorted(pd.Timestamp(end), side="right"))
        return lo, hi

    @staticmethod
    def _bars_to_df(bars: list[TickBar]) -> pd.DataFrame:
        records = [
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
        return pd.DataFrame(records, columns=COLUMNS)

    @staticmethod
    def _df_to_bars(df: pd.DataFrame) -> list[TickBar]:
        bars: list[TickBar] = []
        for _, row in df.iterrows():
            bars.append(TickBar(
                timestamp=pd.Timestamp(row["timestamp"]).to_pydatetime(),
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=float(row["volume"]) if pd.notna(row.get("volume")) else 0.0,
                tick_count=int(row["tick_count"]) if pd.notna(row.get("tick_count")) else None,
            ))
        return bars
