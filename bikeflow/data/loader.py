# bikeflow/data/loader.py
from __future__ import annotations

import json
import logging
import math
import urllib.request
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd

from bikeflow.models import Station

log = logging.getLogger(__name__)

TRIP_COLUMNS = ["start_station_id", "end_station_id", "started_at", "ended_at"]


class FeedError(ValueError):
    """A station or trip feed was readable but not in the expected shape."""


def _is_url(source: str | Path) -> bool:
    return str(source).startswith(("http://", "https://"))


def _http_get_json(url: str, timeout: int = 30) -> Dict[str, Any]:
    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": "bikeflow/0.1",
            "Accept": "application/json",
        },
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return json.loads(resp.read().decode("utf-8"))


def _read_json(source: str | Path) -> Dict[str, Any]:
    if _is_url(source):
        return _http_get_json(str(source))
    with open(source) as f:
        return json.load(f)


def load_stations(source: str | Path) -> List[Station]:
    """
    Load stations from a GBFS-style station_information feed:

      {"data": {"stations": [{"short_name": "A32000", "lat": .., "lon": .., ...}]}}

    Stations are keyed by short_name (the id used in the trip log).
    Records without an id or with unusable coordinates are skipped.
    """
    raw = _read_json(source)

    records = raw.get("data", {}).get("stations") if isinstance(raw, dict) else None
    if not isinstance(records, list):
        raise FeedError("station feed has no data.stations list")

    stations: List[Station] = []
    skipped = 0
    for s in records:
        sid = s.get("short_name")
        if sid is None or str(sid).strip() == "":
            skipped += 1
            continue
        try:
            lat = float(s["lat"])
            lon = float(s["lon"])
        except (KeyError, TypeError, ValueError):
            skipped += 1
            continue
        if not (math.isfinite(lat) and math.isfinite(lon)):
            skipped += 1
            continue

        stations.append(
            Station(
                station_id=str(sid).strip(),
                lat=lat,
                lon=lon,
                name=str(s.get("name") or ""),
            )
        )

    if skipped:
        log.warning("skipped %d station records without id or coordinates", skipped)

    return stations


def _parse_timestamps(col: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(col, errors="coerce", format="ISO8601")
    if len(col) and parsed.isna().all():
        # non-ISO exports, e.g. "03/01/2024 08:00"
        parsed = pd.to_datetime(col, errors="coerce", format="mixed")
    return parsed


def empty_trips() -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "start_station_id": pd.Series(dtype="object"),
            "end_station_id": pd.Series(dtype="object"),
            "started_at": pd.Series(dtype="datetime64[ns]"),
            "ended_at": pd.Series(dtype="datetime64[ns]"),
        }
    )
    return df[TRIP_COLUMNS]


def load_trips(source: str | Path) -> pd.DataFrame:
    """
    Load the trip log CSV.

    Returns a DataFrame with:
      - start_station_id (str)
      - end_station_id (str)
      - started_at (datetime)
      - ended_at (datetime)

    Timestamps are parsed once here; rows that do not parse are dropped.
    """
    df = pd.read_csv(
        source,
        dtype={"start_station_id": str, "end_station_id": str},
    )
    df.columns = [c.strip() for c in df.columns]

    missing = [c for c in TRIP_COLUMNS if c not in df.columns]
    if missing:
        raise FeedError(f"trip feed missing columns: {', '.join(missing)}")

    out = pd.DataFrame()
    out["start_station_id"] = df["start_station_id"].astype(str).str.strip()
    out["end_station_id"] = df["end_station_id"].astype(str).str.strip()
    out["started_at"] = _parse_timestamps(df["started_at"])
    out["ended_at"] = _parse_timestamps(df["ended_at"])

    before = len(out)
    out = out.dropna(subset=["started_at", "ended_at"]).reset_index(drop=True)
    if len(out) < before:
        log.warning("dropped %d trips with unparseable timestamps", before - len(out))

    return out


def load_dataset(
    stations_source: str | Path,
    trips_source: str | Path,
) -> Tuple[List[Station], pd.DataFrame]:
    """
    Load both feeds once. A failing feed is logged and replaced by an
    empty result so the map still comes up.
    """
    try:
        stations = load_stations(stations_source)
        log.info("loaded %d stations from %s", len(stations), stations_source)
    except Exception:
        log.exception("error loading stations from %s", stations_source)
        stations = []

    try:
        trips = load_trips(trips_source)
        log.info("loaded %d trips from %s", len(trips), trips_source)
    except Exception:
        log.exception("error loading trips from %s", trips_source)
        trips = empty_trips()

    return stations, trips
