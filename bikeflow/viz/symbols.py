# bikeflow/viz/symbols.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

from bikeflow.config import (
    COLOR_ARRIVALS,
    COLOR_BALANCED,
    COLOR_DEPARTURES,
    COLOR_NO_FLOW,
)
from bikeflow.models import StationTraffic
from bikeflow.viz.scales import flow_scale, radius_scale


@dataclass(frozen=True)
class Symbol:
    station_id: str
    lat: float
    lon: float
    radius: float
    flow: Optional[float]  # 0 / 0.5 / 1, None = station had no trips
    tooltip: str

    @property
    def color(self) -> str:
        return flow_color(self.flow)

    def to_dict(self) -> Dict:
        d = asdict(self)
        d["color"] = self.color
        return d


@dataclass
class SymbolDiff:
    enter: List[Symbol] = field(default_factory=list)
    update: List[Symbol] = field(default_factory=list)
    exit: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.enter or self.update or self.exit)

    def to_dict(self) -> Dict:
        return {
            "enter": [s.to_dict() for s in self.enter],
            "update": [s.to_dict() for s in self.update],
            "exit": list(self.exit),
        }


def flow_color(flow: Optional[float]) -> str:
    if flow is None:
        return COLOR_NO_FLOW
    if flow >= 1:
        return COLOR_DEPARTURES
    if flow <= 0:
        return COLOR_ARRIVALS
    return COLOR_BALANCED


def tooltip_text(t: StationTraffic) -> str:
    return f"{t.total_traffic} trips ({t.departures} departures, {t.arrivals} arrivals)"


def build_symbols(traffic: Sequence[StationTraffic], time_filter: int) -> List[Symbol]:
    """
    One proportional symbol per station.

      - radius: sqrt scale of total traffic, range depends on the filter
      - flow: departures / total quantized to 0, 0.5, 1
              (None when the station has no trips, so 0/0 never leaks out)
    """
    r = radius_scale(traffic, time_filter)
    q = flow_scale()

    symbols = []
    for t in traffic:
        ratio = t.departure_ratio
        symbols.append(
            Symbol(
                station_id=t.station_id,
                lat=t.station.lat,
                lon=t.station.lon,
                radius=r(t.total_traffic),
                flow=q(ratio) if ratio is not None else None,
                tooltip=tooltip_text(t),
            )
        )
    return symbols


def reconcile(old: Sequence[Symbol], new: Sequence[Symbol]) -> SymbolDiff:
    """
    Keyed join on station_id.

      enter:  in new only   (new order)
      update: in both, changed (new order)
      exit:   in old only   (old order)
    """
    old_by_id = {s.station_id: s for s in old}
    new_ids = {s.station_id for s in new}

    diff = SymbolDiff()
    for s in new:
        prev = old_by_id.get(s.station_id)
        if prev is None:
            diff.enter.append(s)
        elif prev != s:
            diff.update.append(s)

    diff.exit = [s.station_id for s in old if s.station_id not in new_ids]
    return diff
