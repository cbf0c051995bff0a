# bikeflow/config.py
from __future__ import annotations

import os
from dataclasses import dataclass


# ============================================================
# FEEDS
# ============================================================
DEFAULT_STATIONS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-stations.json"
DEFAULT_TRIPS_URL = "https://dsc106.com/labs/lab07/data/bluebikes-traffic-2024-03.csv"


# ============================================================
# MAP
# ============================================================
CENTER_LAT = 42.36027
CENTER_LON = -71.09415
ZOOM_START = 12
MIN_ZOOM = 5
MAX_ZOOM = 18
TILES = "cartodbpositron"

BIKE_LANE_SOURCES = [
    (
        "boston_route",
        "https://bostonopendata-boston.opendata.arcgis.com/datasets/boston::existing-bike-network-2022.geojson",
    ),
    (
        "cambridge_route",
        "https://raw.githubusercontent.com/cambridgegis/cambridgegis_data/main/Recreation/Bike_Facilities/RECREATION_BikeFacilities.geojson",
    ),
]
BIKE_LANE_STYLE = {
    "color": "#32D400",
    "weight": 5,
    "opacity": 0.6,
}


# ============================================================
# SYMBOLS
# ============================================================
WINDOW_MINUTES = 60

RADIUS_RANGE_ALL = (0.0, 25.0)
RADIUS_RANGE_FILTERED = (3.0, 50.0)

FLOW_BUCKETS = (0.0, 0.5, 1.0)

# departures-heavy / balanced / arrivals-heavy, grey = no trips
COLOR_DEPARTURES = "steelblue"
COLOR_BALANCED = "#8e6bb8"
COLOR_ARRIVALS = "darkorange"
COLOR_NO_FLOW = "#999999"

SYMBOL_STROKE = "white"
SYMBOL_STROKE_WIDTH = 1
SYMBOL_OPACITY = 0.6


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    stations_url: str = DEFAULT_STATIONS_URL
    trips_url: str = DEFAULT_TRIPS_URL
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"
    title: str = "Bluebikes Traffic"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            stations_url=os.environ.get("STATIONS_URL", DEFAULT_STATIONS_URL),
            trips_url=os.environ.get("TRIPS_URL", DEFAULT_TRIPS_URL),
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "8080")),
            debug=_env_flag("DEBUG"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            title=os.environ.get("MAP_TITLE", "Bluebikes Traffic"),
        )
