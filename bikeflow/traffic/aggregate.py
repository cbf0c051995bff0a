# bikeflow/traffic/aggregate.py
from __future__ import annotations

from typing import Dict, List, Sequence

import pandas as pd

from bikeflow.models import Station, StationTraffic


def _counts_by(trips: pd.DataFrame, col: str) -> Dict[str, int]:
    if trips.empty:
        return {}
    return {str(k): int(v) for k, v in trips.groupby(col).size().items()}


def compute_station_traffic(
    stations: Sequence[Station],
    trips: pd.DataFrame,
) -> List[StationTraffic]:
    """
    Per-station departures (by start_station_id) and arrivals
    (by end_station_id) for the given trips.

    Returns a new StationTraffic per station, in input order. Neither the
    stations nor the trips are modified, and trips pointing at unknown
    stations are simply not counted.
    """
    departures = _counts_by(trips, "start_station_id")
    arrivals = _counts_by(trips, "end_station_id")

    return [
        StationTraffic(
            station=s,
            arrivals=arrivals.get(s.station_id, 0),
            departures=departures.get(s.station_id, 0),
        )
        for s in stations
    ]


def max_total_traffic(traffic: Sequence[StationTraffic]) -> int:
    return max((t.total_traffic for t in traffic), default=0)
