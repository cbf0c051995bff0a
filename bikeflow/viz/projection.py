# bikeflow/viz/projection.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from bikeflow.viz.symbols import Symbol

TILE_SIZE = 512  # px per world width at zoom 0
MAX_LAT = 85.051129


@dataclass(frozen=True)
class Viewport:
    center_lat: float
    center_lon: float
    zoom: float
    width: int
    height: int

    def _world(self, lat: float, lon: float) -> Tuple[float, float]:
        # Web Mercator, in pixels at this zoom
        lat = max(-MAX_LAT, min(MAX_LAT, lat))
        scale = TILE_SIZE * (2 ** self.zoom)
        x = (lon + 180.0) / 360.0 * scale
        s = math.sin(math.radians(lat))
        y = (0.5 - math.log((1 + s) / (1 - s)) / (4 * math.pi)) * scale
        return x, y

    def project(self, lat: float, lon: float) -> Tuple[float, float]:
        """lat/lon -> pixel offset from the top-left corner of the viewport."""
        cx, cy = self._world(self.center_lat, self.center_lon)
        x, y = self._world(lat, lon)
        return x - cx + self.width / 2, y - cy + self.height / 2


@dataclass(frozen=True)
class PlacedSymbol:
    symbol: Symbol
    cx: float
    cy: float


def place_symbols(symbols: Sequence[Symbol], viewport: Viewport) -> List[PlacedSymbol]:
    placed = []
    for s in symbols:
        cx, cy = viewport.project(s.lat, s.lon)
        placed.append(PlacedSymbol(symbol=s, cx=cx, cy=cy))
    return placed
