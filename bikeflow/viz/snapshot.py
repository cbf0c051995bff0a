# bikeflow/viz/snapshot.py
from html import escape
from typing import Sequence

from bikeflow.config import SYMBOL_OPACITY, SYMBOL_STROKE, SYMBOL_STROKE_WIDTH
from bikeflow.viz.projection import Viewport, place_symbols
from bikeflow.viz.symbols import Symbol


def render_snapshot_svg(symbols: Sequence[Symbol], viewport: Viewport) -> str:
    """
    Static SVG of the symbol layer for one viewport (no base map).
    Symbols outside the viewport are still written; the SVG clips them.
    """
    circles = []
    for p in place_symbols(symbols, viewport):
        s = p.symbol
        circles.append(
            f'<circle data-station="{escape(s.station_id)}" '
            f'cx="{p.cx:.2f}" cy="{p.cy:.2f}" r="{s.radius:.2f}" '
            f'fill="{s.color}" stroke="{SYMBOL_STROKE}" '
            f'stroke-width="{SYMBOL_STROKE_WIDTH}" opacity="{SYMBOL_OPACITY}">'
            f"<title>{escape(s.tooltip)}</title></circle>"
        )

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{viewport.width}" height="{viewport.height}" '
        f'viewBox="0 0 {viewport.width} {viewport.height}">'
        f"{''.join(circles)}"
        f"</svg>"
    )
