# bikeflow/viz/map_layer.py
from __future__ import annotations

from typing import List, Sequence, Tuple

import folium
from branca.element import MacroElement
from jinja2 import Template

from bikeflow.config import (
    BIKE_LANE_SOURCES,
    BIKE_LANE_STYLE,
    SYMBOL_OPACITY,
    SYMBOL_STROKE,
    SYMBOL_STROKE_WIDTH,
)
from bikeflow.viz.symbols import Symbol


# ============================================================
# BIKE LANES (decorative, fetched by the browser)
# ============================================================
class BikeLaneOverlay(MacroElement):
    """
    Line overlay loaded from a GeoJSON URL in the browser, so the server
    never has to download the network data itself.
    """

    _template = Template(
        """
        {% macro script(this, kwargs) %}
        fetch({{ this.url|tojson }})
            .then((resp) => resp.json())
            .then((data) => {
                L.geoJSON(data, {
                    interactive: false,
                    style: () => ({{ this.style|tojson }}),
                }).addTo({{ this._parent.get_name() }});
            })
            .catch((err) => console.error({{ this.source_id|tojson }}, err));
        {% endmacro %}
        """
    )

    def __init__(self, source_id: str, url: str, style: dict | None = None):
        super().__init__()
        self._name = "BikeLaneOverlay"
        self.source_id = source_id
        self.url = url
        self.style = dict(style or BIKE_LANE_STYLE)


def add_bike_lanes(m, sources=BIKE_LANE_SOURCES, style=BIKE_LANE_STYLE):
    for source_id, url in sources:
        BikeLaneOverlay(source_id, url, style).add_to(m)


# ============================================================
# STATION SYMBOLS
# ============================================================
class SymbolRegistry(MacroElement):
    """
    Exposes the map and every station marker to page scripts:

      window.bikeflowMap
      window.bikeflowSymbols[station_id] -> L.CircleMarker

    Must be added after the markers so their variables exist.
    """

    _template = Template(
        """
        {% macro script(this, kwargs) %}
        window.bikeflowMap = {{ this._parent.get_name() }};
        window.bikeflowSymbols = {
        {%- for sid, var in this.markers %}
            {{ sid|tojson }}: {{ var }},
        {%- endfor %}
        };
        {% endmacro %}
        """
    )

    def __init__(self, markers: List[Tuple[str, str]]):
        super().__init__()
        self._name = "SymbolRegistry"
        self.markers = markers


def station_marker(s: Symbol) -> folium.CircleMarker:
    return folium.CircleMarker(
        location=[s.lat, s.lon],
        radius=s.radius,
        color=SYMBOL_STROKE,
        weight=SYMBOL_STROKE_WIDTH,
        fill=True,
        fill_color=s.color,
        fill_opacity=SYMBOL_OPACITY,
        tooltip=s.tooltip,
    )


def add_station_symbols(m, symbols: Sequence[Symbol]) -> SymbolRegistry:
    markers = []
    for s in symbols:
        marker = station_marker(s)
        marker.add_to(m)
        markers.append((s.station_id, marker.get_name()))

    registry = SymbolRegistry(markers)
    registry.add_to(m)
    return registry
