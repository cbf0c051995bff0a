# bikeflow/server.py
from __future__ import annotations

import logging
import math
from typing import List, Sequence

import pandas as pd
from flask import Flask, Response, abort, jsonify, request

from bikeflow.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, ZOOM_START, Settings
from bikeflow.data.loader import load_dataset
from bikeflow.models import Station
from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.time_filter import filter_trips_by_time, parse_time_filter
from bikeflow.util.log import setup_logging
from bikeflow.viz.projection import Viewport
from bikeflow.viz.render import render_map_document
from bikeflow.viz.snapshot import render_snapshot_svg
from bikeflow.viz.symbols import Symbol, build_symbols, reconcile
from bikeflow.viz.time_slider import format_time

log = logging.getLogger(__name__)

MAX_SNAPSHOT_PX = 4096


def station_symbols(
    stations: Sequence[Station],
    trips: pd.DataFrame,
    time_filter: int,
) -> List[Symbol]:
    """
    filter -> aggregate -> symbols, always from the loaded (unmodified)
    stations and trips.
    """
    filtered = filter_trips_by_time(trips, time_filter)
    traffic = compute_station_traffic(stations, filtered)
    return build_symbols(traffic, time_filter)


def _float_arg(name: str, default: float) -> float:
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        abort(400, description=f"bad value for {name}: {raw!r}")
    if not math.isfinite(value):
        abort(400, description=f"{name} must be a finite number, got {raw!r}")
    return value


def _viewport_from_request() -> Viewport:
    vp = Viewport(
        center_lat=_float_arg("lat", CENTER_LAT),
        center_lon=_float_arg("lon", CENTER_LON),
        zoom=_float_arg("zoom", ZOOM_START),
        width=int(_float_arg("width", 960)),
        height=int(_float_arg("height", 640)),
    )
    if not (MIN_ZOOM <= vp.zoom <= MAX_ZOOM):
        abort(400, description=f"zoom must be between {MIN_ZOOM} and {MAX_ZOOM}")
    if not (0 < vp.width <= MAX_SNAPSHOT_PX and 0 < vp.height <= MAX_SNAPSHOT_PX):
        abort(400, description=f"width/height must be in 1..{MAX_SNAPSHOT_PX}")
    return vp


def create_app(
    stations: Sequence[Station],
    trips: pd.DataFrame,
    settings: Settings | None = None,
) -> Flask:
    """
    Routes:
      /               map page for ?t= (minutes since midnight, -1 = any time)
      /api/symbols    symbol diff from ?prev= to ?t= (all symbols enter without prev)
      /snapshot.svg   symbol layer placed for a viewport (?lat, lon, zoom, width, height)
    """
    settings = settings or Settings()
    stations = list(stations)

    app = Flask(__name__)

    @app.route("/")
    def _index():
        t_cur = parse_time_filter(request.args.get("t"))
        symbols = station_symbols(stations, trips, t_cur)
        return render_map_document(symbols, t_cur, title=settings.title)

    @app.route("/api/symbols")
    def _symbols():
        t_cur = parse_time_filter(request.args.get("t"))
        new = station_symbols(stations, trips, t_cur)

        raw_prev = request.args.get("prev")
        if raw_prev is None:
            old = []
        else:
            old = station_symbols(stations, trips, parse_time_filter(raw_prev))

        diff = reconcile(old, new)
        log.debug(
            "t=%s: %d enter, %d update, %d exit",
            t_cur, len(diff.enter), len(diff.update), len(diff.exit),
        )

        payload = diff.to_dict()
        payload["time_filter"] = t_cur
        payload["label"] = format_time(t_cur)
        return jsonify(payload)

    @app.route("/snapshot.svg")
    def _snapshot():
        t_cur = parse_time_filter(request.args.get("t"))
        viewport = _viewport_from_request()
        symbols = station_symbols(stations, trips, t_cur)
        return Response(render_snapshot_svg(symbols, viewport), mimetype="image/svg+xml")

    return app


def serve_traffic_map(settings: Settings | None = None):
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    stations, trips = load_dataset(settings.stations_url, settings.trips_url)
    if not stations:
        log.warning("no stations loaded, the map will be empty")

    app = create_app(stations, trips, settings)
    app.run(host=settings.host, port=int(settings.port), debug=bool(settings.debug))
