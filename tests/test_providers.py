"""Contract tests for history providers (mock and pandas-backed)."""

from datetime import datetime, timedelta

import pandas as pd
import pytest

from barspeed.config import AggregationKind, HistoryProviderType
from barspeed.errors import BarSpeedError, BarSpeedErrorCode
from barspeed.models.bar import TickBar
from barspeed.providers import create_provider
from barspeed.providers.frame import FrameHistoryProvider
from barspeed.providers.mock import MockHistoryProvider

START = datetime(2024, 1, 16, 9, 58)
END = datetime(2024, 1, 16, 10, 0)


class TestRegistry:
    def test_create_mock(self):
        provider = create_provider(HistoryProviderType.MOCK)
        assert isinstance(provider, MockHistoryProvider)
        assert provider.current_aggregation() is AggregationKind.TICK

    def test_create_frame_with_kwargs(self, tmp_path):
        provider = create_provider(
            HistoryProviderType.FRAME, aggregation=AggregationKind.TIME, base_path=tmp_path,
        )
        assert isinstance(provider, FrameHistoryProvider)
        assert provider.current_aggregation() is AggregationKind.TIME
        assert "persistent" in provider.capabilities()


class TestMockHistoryProvider:
    def test_empty_by_default(self, mock_provider):
        assert mock_provider.get_bars("ES") == []

    def test_preset_bars_sorted(self, mock_provider, sample_tick_bars):
        mock_provider.set_bars("es", list(reversed(sample_tick_bars)))
        bars = mock_provider.get_bars("ES")
        assert [b.timestamp for b in bars] == [b.timestamp for b in sample_tick_bars]

    def test_range_filter_inclusive(self, mock_provider, sample_tick_bars):
        mock_provider.set_bars("ES", sample_tick_bars)
        assert len(mock_provider.get_bars("ES", START, END)) == 5
        assert len(mock_provider.get_bars("ES", START + timedelta(seconds=1), END)) == 4

    def test_count(self, mock_provider, sample_tick_bars):
        mock_provider.set_bars("ES", sample_tick_bars)
        assert mock_provider.count_bars_in_range("ES", AggregationKind.TICK, START, END) == 5

    def test_count_wrong_aggregation(self, mock_provider):
        with pytest.raises(BarSpeedError) as exc_info:
            mock_provider.count_bars_in_range("ES", AggregationKind.TIME, START, END)
        assert exc_info.value.code == BarSpeedErrorCode.UNSUPPORTED_AGGREGATION

    def test_latest_closed_bar_time(self, mock_provider, sample_tick_bars):
        mock_provider.set_bars("ES", sample_tick_bars)
        assert mock_provider.latest_closed_bar_time("ES") == sample_tick_bars[-2].timestamp

    def test_latest_closed_needs_two_bars(self, mock_provider, sample_tick_bars):
        mock_provider.set_bars("ES", sample_tick_bars[:1])
        with pytest.raises(BarSpeedError) as exc_info:
            mock_provider.latest_closed_bar_time("ES")
        assert exc_info.value.code == BarSpeedErrorCode.NO_DATA

    def test_set_aggregation(self, mock_provider):
        mock_provider.set_aggregation(AggregationKind.RENKO)
        assert mock_provider.current_aggregation() is AggregationKind.RENKO


class TestFrameHistoryProvider:
    def test_count_uses_inclusive_bounds(self, sample_tick_bars):
        provider = FrameHistoryProvider()
        provider.set_bars("ES", sample_tick_bars)
        assert provider.count_bars_in_range("ES", AggregationKind.TICK, START, END) == 5
        assert provider.count_bars_in_range(
            "ES", AggregationKind.TICK, START + timedelta(seconds=30), END - timedelta(seconds=30),
        ) == 3

    def test_count_outside_history(self, sample_tick_bars):
        provider = FrameHistoryProvider()
        provider.set_bars("ES", sample_tick_bars)
        later = END + timedelta(hours=1)
        assert provider.count_bars_in_range("ES", AggregationKind.TICK, later, later) == 0

    def test_get_bars_returns_models(self, sample_tick_bars):
        provider = FrameHistoryProvider()
        provider.set_bars("ES", sample_tick_bars)
        bars = provider.get_bars("ES", START, START + timedelta(seconds=30))
        assert len(bars) == 2
        assert all(isinstance(b, TickBar) for b in bars)
        assert bars[0] == sample_tick_bars[0]

    def test_unsorted_frame(self):
        df = pd.DataFrame({
            "timestamp": [END, START],
            "open": [1.0, 1.0],
            "high": [1.0, 1.0],
            "low": [1.0, 1.0],
            "close": [1.0, 1.0],
        })
        provider = FrameHistoryProvider()
        provider.set_frame("ES", df)
        assert provider.latest_closed_bar_time("ES") == START

    def test_missing_columns(self):
        provider = FrameHistoryProvider()
        with pytest.raises(BarSpeedError) as exc_info:
            provider.set_frame("ES", pd.DataFrame({"timestamp": [START]}))
        assert exc_info.value.code == BarSpeedErrorCode.PROVIDER_ERROR

    def test_validation_rejects_inconsistent_bars(self):
        bad = TickBar(timestamp=START, open=10.0, high=9.0, low=11.0, close=10.0)
        provider = FrameHistoryProvider()
        with pytest.raises(BarSpeedError) as exc_info:
            provider.set_bars("ES", [bad])
        assert exc_info.value.code == BarSpeedErrorCode.PROVIDER_ERROR

    def test_validation_can_be_disabled(self):
        bad = TickBar(timestamp=START, open=10.0, high=9.0, low=11.0, close=10.0)
        provider = FrameHistoryProvider(validate=False)
        provider.set_bars("ES", [bad])
        assert len(provider.get_bars("ES")) == 1

    def test_empty_history(self):
        provider = FrameHistoryProvider()
        provider.set_bars("ES", [])
        assert provider.count_bars_in_range("ES", AggregationKind.TICK, START, END) == 0

    def test_unknown_symbol_without_base_path(self):
        provider = FrameHistoryProvider()
        with pytest.raises(BarSpeedError) as exc_info:
            provider.get_bars("ES")
        assert exc_info.value.code == BarSpeedErrorCode.NO_DATA

    def test_store_and_load_parquet(self, tmp_path, sample_tick_bars):
        writer = FrameHistoryProvider(base_path=tmp_path)
        writer.set_bars("ES", sample_tick_bars)
        fp = writer.store("ES")
        assert fp == tmp_path / "ES.parquet"

        reader = FrameHistoryProvider(base_path=tmp_path)
        assert reader.count_bars_in_range("es", AggregationKind.TICK, START, END) == 5

    def test_load_csv(self, tmp_path):
        (tmp_path / "NQ.csv").write_text(
            "timestamp,open,high,low,close,volume,tick_count\n"
            "2024-01-16 09:59:00,17000,17001,16999,17000.5,12,500\n"
            "2024-01-16 09:59:40,17000.5,17002,17000,17001,9,500\n"
            "2024-01-16 10:00:10,17001,17001.5,17000.5,17001,4,500\n"
        )
        provider = FrameHistoryProvider(base_path=tmp_path)
        assert provider.latest_closed_bar_time("NQ") == datetime(2024, 1, 16, 9, 59, 40)
        bars = provider.get_bars("NQ")
        assert bars[0].tick_count == 500

    def test_load_csv_blank_volume_rejected(self, tmp_path):
        (tmp_path / "NQ.csv").write_text(
            "timestamp,open,high,low,close,volume,tick_count\n"
            "2024-01-16 09:59:00,17000,17001,16999,17000.5,12,500\n"
            "2024-01-16 09:59:40,17000.5,17002,17000,17001,,500\n"
        )
        provider = FrameHistoryProvider(base_path=tmp_path)
        with pytest.raises(BarSpeedError) as exc_info:
            provider.load("NQ")
        assert exc_info.value.code == BarSpeedErrorCode.PROVIDER_ERROR
        assert "NaN/Inf" in exc_info.value.message

    def test_missing_volume_column_filled(self, tmp_path):
        (tmp_path / "NQ.csv").write_text(
            "timestamp,open,high,low,close\n"
            "2024-01-16 09:59:00,17000,17001,16999,17000.5\n"
            "2024-01-16 09:59:40,17000.5,17002,17000,17001\n"
        )
        provider = FrameHistoryProvider(base_path=tmp_path)
        bars = provider.get_bars("NQ")
        assert [b.volume for b in bars] == [0.0, 0.0]
        assert bars[0].tick_count is None

    def test_missing_file(self, tmp_path):
        provider = FrameHistoryProvider(base_path=tmp_path)
        with pytest.raises(BarSpeedError) as exc_info:
            provider.load("ES")
        assert exc_info.value.code == BarSpeedErrorCode.NO_DATA

    def test_capabilities_without_path(self):
        assert FrameHistoryProvider().capabilities() == {"bars", "count"}
