# bikeflow/models.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Station:
    station_id: str  # feed short_name, matches trip log ids
    lat: float
    lon: float
    name: str = ""


@dataclass(frozen=True)
class StationTraffic:
    station: Station
    arrivals: int = 0
    departures: int = 0

    @property
    def station_id(self) -> str:
        return self.station.station_id

    @property
    def total_traffic(self) -> int:
        return self.arrivals + self.departures

    @property
    def departure_ratio(self) -> float | None:
        # None instead of 0/0
        total = self.total_traffic
        if total == 0:
            return None
        return self.departures / total
