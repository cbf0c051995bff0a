"""Tests for placing symbols in a viewport."""

import unittest

from bikeflow.traffic.aggregate import compute_station_traffic
from bikeflow.traffic.time_filter import NO_FILTER
from bikeflow.viz.projection import Viewport, place_symbols
from bikeflow.viz.snapshot import render_snapshot_svg
from bikeflow.viz.symbols import build_symbols

from helpers import make_stations, make_trips


def _symbols():
    trips = make_trips([("A", "B", "08:00", "08:10"), ("A", "A", "09:00", "09:10")])
    return build_symbols(compute_station_traffic(make_stations(), trips), NO_FILTER)


class TestViewport(unittest.TestCase):

    def test_center_maps_to_middle(self):
        vp = Viewport(center_lat=42.36, center_lon=-71.09, zoom=12, width=800, height=600)
        x, y = vp.project(42.36, -71.09)
        self.assertAlmostEqual(x, 400)
        self.assertAlmostEqual(y, 300)

    def test_axes(self):
        vp = Viewport(center_lat=0, center_lon=0, zoom=3, width=100, height=100)
        x_e, _ = vp.project(0, 10)
        _, y_n = vp.project(10, 0)
        self.assertGreater(x_e, 50)
        self.assertLess(y_n, 50)

    def test_world_width_at_zoom_zero(self):
        vp = Viewport(center_lat=0, center_lon=0, zoom=0, width=512, height=512)
        west, _ = vp.project(0, -180)
        east, _ = vp.project(0, 180)
        self.assertAlmostEqual(east - west, 512)

    def test_zoom_doubles_distances(self):
        a = Viewport(center_lat=0, center_lon=0, zoom=5, width=0, height=0)
        b = Viewport(center_lat=0, center_lon=0, zoom=6, width=0, height=0)
        self.assertAlmostEqual(b.project(0, 1)[0], 2 * a.project(0, 1)[0])


class TestPlaceSymbols(unittest.TestCase):

    def test_viewport_change_moves_but_keeps_style(self):
        symbols = _symbols()
        before = place_symbols(symbols, Viewport(0.5, 0.5, 8, 800, 600))
        after = place_symbols(symbols, Viewport(0.7, 0.2, 9, 1024, 768))

        self.assertEqual(len(before), len(after))
        for p, q in zip(before, after):
            self.assertEqual(p.symbol.station_id, q.symbol.station_id)
            self.assertEqual(p.symbol.radius, q.symbol.radius)
            self.assertEqual(p.symbol.flow, q.symbol.flow)
            self.assertNotEqual((p.cx, p.cy), (q.cx, q.cy))

    def test_snapshot_svg(self):
        svg = render_snapshot_svg(_symbols(), Viewport(0.5, 0.5, 8, 640, 480))
        self.assertTrue(svg.startswith("<svg"))
        self.assertIn('data-station="A"', svg)
        self.assertIn('data-station="B"', svg)
        self.assertIn('width="640"', svg)
        self.assertEqual(svg.count("<circle"), 2)


if __name__ == "__main__":
    unittest.main()
