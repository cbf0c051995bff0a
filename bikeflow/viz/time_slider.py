# bikeflow/viz/time_slider.py
import json

import folium

from bikeflow.traffic.time_filter import LAST_MINUTE, NO_FILTER


def format_time(minutes: int) -> str:
    """
    Minutes since midnight -> "8:05 AM" style clock label.
    NO_FILTER has no label.
    """
    if minutes == NO_FILTER:
        return ""
    h, m = divmod(int(minutes), 60)
    h %= 24
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {suffix}"


def build_time_slider(time_filter: int, *, api_url: str = "/api/symbols"):
    """
    Floating time-of-day slider.

    On every `input` event the page asks the server for the symbol diff
    between the filter currently drawn and the new one, then applies it
    to window.bikeflowSymbols. Requests are chained so each input is fully
    applied before the next one starts.
    """
    label = format_time(time_filter)
    hidden = "none" if time_filter == NO_FILTER else "inline"
    any_time = "block" if time_filter == NO_FILTER else "none"

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  top: 12px;
  right: 16px;
  z-index: 1300;
  background: rgba(255,255,255,0.95);
  padding: 8px 14px;
  border-radius: 10px;
  font-size: 13px;
  box-shadow: 0 1px 4px rgba(0,0,0,0.2);
  font-family: sans-serif;
}}

#time-filter label {{
  display: flex;
  gap: 8px;
  align-items: baseline;
}}

#time-slider {{
  width: 220px;
}}

#time-filter time,
#time-filter em {{
  display: block;
  text-align: right;
  min-height: 1.2em;
}}

#any-time {{
  color: #777;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{NO_FILTER}" max="{LAST_MINUTE}" value="{time_filter}">
  </label>
  <time id="selected-time" style="display:{hidden};">{label}</time>
  <em id="any-time" style="display:{any_time};">(any time)</em>
</div>

<script>
(function () {{
  const API_URL = {json.dumps(api_url)};
  let applied = {time_filter};
  let queue = Promise.resolve();

  function showLabel(t, label) {{
    const selected = document.getElementById("selected-time");
    const anyTime = document.getElementById("any-time");
    if (t === {NO_FILTER}) {{
      selected.textContent = "";
      selected.style.display = "none";
      anyTime.style.display = "block";
    }} else {{
      selected.textContent = label;
      selected.style.display = "inline";
      anyTime.style.display = "none";
    }}
  }}

  function styleFor(sym) {{
    return {{ radius: sym.radius, fillColor: sym.color }};
  }}

  function applyDiff(diff) {{
    const map = window.bikeflowMap;
    const markers = window.bikeflowSymbols || {{}};

    diff.exit.forEach((sid) => {{
      const mk = markers[sid];
      if (mk) {{
        mk.remove();
        delete markers[sid];
      }}
    }});

    diff.update.forEach((sym) => {{
      const mk = markers[sym.station_id];
      if (!mk) return;
      mk.setStyle(styleFor(sym));
      mk.setRadius(sym.radius);
      mk.setTooltipContent(sym.tooltip);
    }});

    diff.enter.forEach((sym) => {{
      const existing = markers[sym.station_id];
      if (existing) existing.remove();
      const mk = L.circleMarker([sym.lat, sym.lon], {{
        radius: sym.radius,
        color: "white",
        weight: 1,
        fill: true,
        fillColor: sym.color,
        fillOpacity: 0.6,
      }}).bindTooltip(sym.tooltip);
      if (map) mk.addTo(map);
      markers[sym.station_id] = mk;
    }});

    window.bikeflowSymbols = markers;
  }}

  async function updateScatterPlot(t) {{
    const url = `${{API_URL}}?t=${{t}}&prev=${{applied}}`;
    try {{
      const resp = await fetch(url);
      const diff = await resp.json();
      applyDiff(diff);
      applied = diff.time_filter;
      showLabel(diff.time_filter, diff.label);
    }} catch (err) {{
      console.error("Error updating stations:", err);
    }}
  }}

  function updateTimeDisplay() {{
    const slider = document.getElementById("time-slider");
    const t = Number(slider.value);
    queue = queue.then(() => updateScatterPlot(t));
  }}

  document.addEventListener("DOMContentLoaded", () => {{
    const slider = document.getElementById("time-slider");
    if (!slider) return;
    slider.addEventListener("input", updateTimeDisplay);
    updateTimeDisplay();
  }});
}})();
</script>
"""
    )
