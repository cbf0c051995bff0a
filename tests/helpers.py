"""Small builders shared by the test modules."""

import pandas as pd

from bikeflow.models import Station


def make_stations():
    return [
        Station(station_id="A", lat=0.0, lon=0.0, name="Alpha"),
        Station(station_id="B", lat=1.0, lon=1.0, name="Beta"),
    ]


def make_trips(rows):
    """rows: (start_id, end_id, "HH:MM" start, "HH:MM" end), all on 2024-03-01."""
    return pd.DataFrame(
        {
            "start_station_id": [r[0] for r in rows],
            "end_station_id": [r[1] for r in rows],
            "started_at": pd.to_datetime([f"2024-03-01 {r[2]}" for r in rows]),
            "ended_at": pd.to_datetime([f"2024-03-01 {r[3]}" for r in rows]),
        }
    )
