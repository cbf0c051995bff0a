# bikeflow/viz/legend.py
import folium

from bikeflow.config import (
    COLOR_ARRIVALS,
    COLOR_BALANCED,
    COLOR_DEPARTURES,
    COLOR_NO_FLOW,
)


def build_legend_widget():
    """
    Floating legend for the departure/arrival colour buckets.
    """
    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  bottom: 24px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  font-family: sans-serif;
  z-index: 1200;
}}

.legend-dot {{
  width: 10px;
  height: 10px;
  border-radius: 50%;
  display: inline-block;
  margin-right: 6px;
}}
</style>

<div id="map-legend">
  <div><b>Legend</b></div>
  <div><span class="legend-dot" style="background:{COLOR_DEPARTURES}"></span> more departures</div>
  <div><span class="legend-dot" style="background:{COLOR_BALANCED}"></span> balanced</div>
  <div><span class="legend-dot" style="background:{COLOR_ARRIVALS}"></span> more arrivals</div>
  <div><span class="legend-dot" style="background:{COLOR_NO_FLOW}"></span> no trips</div>
</div>
"""
    )
