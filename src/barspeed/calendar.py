"""Session classification — is the market open at a given instant.

Weekends are always closed. Holidays and early closes are not modelled.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum

from barspeed.config import SessionCalendar

SATURDAY = 5


class SessionState(Enum):
    """Market session state at an instant."""

    OPEN = "open"
    CLOSED = "closed"


def is_weekend(d: date) -> bool:
    """Check if a date falls on Saturday or Sunday."""
    return d.weekday() >= SATURDAY


def session_bounds(reference_time: datetime, calendar: SessionCalendar) -> tuple[datetime, datetime]:
    """Open and close instants on the same day as ``reference_time``.

    Seconds of the calendar times are ignored; the result carries the
    reference time's tzinfo.
    """
    d = reference_time.date()
    tz = reference_time.tzinfo
    market_open = datetime.combine(
        d, time(calendar.open_time.hour, calendar.open_time.minute), tzinfo=tz,
    )
    market_close = datetime.combine(
        d, time(calendar.close_time.hour, calendar.close_time.minute), tzinfo=tz,
    )
    return market_open, market_close


def classify_session(reference_time: datetime, calendar: SessionCalendar) -> SessionState:
    """Classify ``reference_time`` as inside or outside the session.

    Open iff the instant lies within [open, close] (both inclusive) on a
    weekday.
    """
    if is_weekend(reference_time.date()):
        return SessionState.CLOSED

    market_open, market_close = session_bounds(reference_time, calendar)
    if market_open <= reference_time <= market_close:
        return SessionState.OPEN
    return SessionState.CLOSED


def is_session_open(reference_time: datetime, calendar: SessionCalendar) -> bool:
    return classify_session(reference_time, calendar) is SessionState.OPEN

