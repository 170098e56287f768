"""Shared fixtures for barspeed tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from barspeed.config import SessionCalendar, WindowConfig
from barspeed.models.bar import TickBar
from barspeed.models.instrument import InstrumentSpec
from barspeed.providers.mock import MockHistoryProvider

# Tuesday, inside the default 09:30-17:00 session
SESSION_TIME = datetime(2024, 1, 16, 10, 0)


@pytest.fixture
def mock_provider() -> MockHistoryProvider:
    return MockHistoryProvider()


@pytest.fixture
def calendar() -> SessionCalendar:
    return SessionCalendar()


@pytest.fixture
def window() -> WindowConfig:
    return WindowConfig(minutes_when_open=10, minutes_when_closed=60)


@pytest.fixture
def sample_tick_bars() -> list[TickBar]:
    """5 tick bars, 30 seconds apart, starting at 09:58."""
    base = datetime(2024, 1, 16, 9, 58)
    bars = []
    for i in range(5):
        ts = base + timedelta(seconds=30 * i)
        bars.append(TickBar(
            timestamp=ts,
            open=4800.0 + i * 0.25,
            high=4801.0 + i * 0.25,
            low=4799.5 + i * 0.25,
            close=4800.5 + i * 0.25,
            volume=50.0 + i,
            tick_count=100,
        ))
    return bars


@pytest.fixture
def es_contract() -> InstrumentSpec:
    """E-mini S&P: 0.25 tick, $12.50 per tick."""
    return InstrumentSpec(symbol="ES", tick_size=0.25, tick_cost=12.5)
