# bikeflow/traffic/time_filter.py
from __future__ import annotations

import math

import pandas as pd

from bikeflow.config import WINDOW_MINUTES

NO_FILTER = -1
LAST_MINUTE = 24 * 60 - 1


def minutes_since_midnight(ts) -> int:
    return ts.hour * 60 + ts.minute


def _minute_of_day(col: pd.Series) -> pd.Series:
    return col.dt.hour * 60 + col.dt.minute


def filter_trips_by_time(trips: pd.DataFrame, time_filter: int) -> pd.DataFrame:
    """
    Keep trips that start or end within WINDOW_MINUTES of time_filter
    (minutes since midnight). Dates are ignored and there is no wraparound
    at midnight: 23:50 and 00:30 are 1400 minutes apart.

    NO_FILTER returns `trips` itself.
    """
    if time_filter == NO_FILTER:
        return trips

    started = _minute_of_day(trips["started_at"])
    ended = _minute_of_day(trips["ended_at"])

    keep = ((started - time_filter).abs() <= WINDOW_MINUTES) | (
        (ended - time_filter).abs() <= WINDOW_MINUTES
    )
    return trips.loc[keep]


def parse_time_filter(raw) -> int:
    """
    Slider/query value -> minute of day or NO_FILTER.
    Junk becomes NO_FILTER, anything past the ends is clamped.
    """
    if raw is None:
        return NO_FILTER
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return NO_FILTER
    if not math.isfinite(value):
        return NO_FILTER
    t = int(value)
    return max(NO_FILTER, min(t, LAST_MINUTE))
