# bikeflow/viz/render.py
from __future__ import annotations

from typing import Sequence

import folium

from bikeflow.config import CENTER_LAT, CENTER_LON, MAX_ZOOM, MIN_ZOOM, TILES, ZOOM_START
from bikeflow.viz.legend import build_legend_widget
from bikeflow.viz.map_layer import add_bike_lanes, add_station_symbols
from bikeflow.viz.symbols import Symbol
from bikeflow.viz.time_slider import build_time_slider


def build_map(
    symbols: Sequence[Symbol],
    time_filter: int,
    *,
    title: str | None = None,
    api_url: str = "/api/symbols",
) -> folium.Map:
    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=ZOOM_START,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles=TILES,
    )

    # bike lanes under the stations
    add_bike_lanes(m)

    # stations
    add_station_symbols(m, symbols)

    # widgets
    html = m.get_root().html
    html.add_child(build_time_slider(time_filter, api_url=api_url))
    html.add_child(build_legend_widget())

    # title + wrap so widgets sit on-map
    html.add_child(
        folium.Element(
            f"""
<style>
#map-wrap {{
  position: relative;
  width: 100%;
}}
#map-wrap .leaflet-container {{
  width: 100% !important;
  height: 90vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  font-family: sans-serif;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  {"const t=document.createElement('div');t.id='map-title';t.textContent=%r;wrap.appendChild(t);" % title if title else ""}

  ["time-filter", "map-legend"].forEach((id) => {{
    const el = document.getElementById(id);
    if (el) wrap.appendChild(el);
  }});
}});
</script>
"""
        )
    )

    return m


def render_map_document(symbols, time_filter, *, title=None, api_url="/api/symbols") -> str:
    """
    Full HTML page for the current symbols and filter value.
    """
    m = build_map(symbols, time_filter, title=title, api_url=api_url)
    return m.get_root().render()
