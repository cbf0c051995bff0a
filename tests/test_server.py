"""Tests for the Flask app, the slider label and the ambient helpers."""

import logging
import os
import unittest
from unittest.mock import patch

from bikeflow.config import COLOR_NO_FLOW, Settings
from bikeflow.server import create_app, serve_traffic_map, station_symbols
from bikeflow.traffic.time_filter import NO_FILTER
from bikeflow.util.log import setup_logging
from bikeflow.viz.time_slider import format_time

from helpers import make_stations, make_trips


class TestFormatTime(unittest.TestCase):

    def test_twelve_hour_clock(self):
        self.assertEqual(format_time(0), "12:00 AM")
        self.assertEqual(format_time(8 * 60 + 5), "8:05 AM")
        self.assertEqual(format_time(12 * 60 + 30), "12:30 PM")
        self.assertEqual(format_time(23 * 60 + 59), "11:59 PM")

    def test_no_filter_has_no_label(self):
        self.assertEqual(format_time(NO_FILTER), "")


class TestApp(unittest.TestCase):

    def setUp(self):
        self.stations = make_stations()
        self.trips = make_trips([("A", "B", "08:00", "08:10")])
        app = create_app(self.stations, self.trips, Settings(title="Test Map"))
        app.testing = True
        self.client = app.test_client()

    def test_index_renders_map_and_slider(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn('id="time-slider"', html)
        self.assertIn("window.bikeflowSymbols", html)
        self.assertIn('"A":', html)
        self.assertIn("Test Map", html)
        self.assertIn("(any time)", html)

    def test_index_with_filter_shows_label(self):
        html = self.client.get("/?t=480").get_data(as_text=True)
        self.assertIn("8:00 AM", html)
        self.assertIn('value="480"', html)

    def test_symbols_without_prev_enter_everything(self):
        data = self.client.get("/api/symbols?t=-1").get_json()

        self.assertEqual(data["time_filter"], NO_FILTER)
        self.assertEqual(data["label"], "")
        self.assertEqual([s["station_id"] for s in data["enter"]], ["A", "B"])
        self.assertEqual(data["update"], [])
        self.assertEqual(data["exit"], [])
        for s in data["enter"]:
            self.assertAlmostEqual(s["radius"], 25)

    def test_symbols_diff_between_filters(self):
        data = self.client.get("/api/symbols?t=480&prev=-1").get_json()

        self.assertEqual(data["enter"], [])
        self.assertEqual(data["label"], "8:00 AM")
        radii = {s["station_id"]: s["radius"] for s in data["update"]}
        self.assertAlmostEqual(radii["A"], 50)
        self.assertAlmostEqual(radii["B"], 50)

    def test_same_filter_is_empty_diff(self):
        data = self.client.get("/api/symbols?t=480&prev=480").get_json()
        self.assertEqual((data["enter"], data["update"], data["exit"]), ([], [], []))

    def test_window_with_no_trips(self):
        data = self.client.get("/api/symbols?t=30").get_json()
        for s in data["enter"]:
            self.assertIsNone(s["flow"])
            self.assertEqual(s["color"], COLOR_NO_FLOW)
            self.assertAlmostEqual(s["radius"], 3)

    def test_requests_do_not_compound(self):
        first = self.client.get("/api/symbols?t=-1").get_json()
        self.client.get("/api/symbols?t=480")
        self.client.get("/api/symbols?t=30")
        again = self.client.get("/api/symbols?t=-1").get_json()
        self.assertEqual(first, again)

    def test_bad_filter_value_means_any_time(self):
        data = self.client.get("/api/symbols?t=noon").get_json()
        self.assertEqual(data["time_filter"], NO_FILTER)

    def test_non_finite_filter_means_any_time(self):
        for path in ("/api/symbols?t=inf", "/api/symbols?t=1e400&prev=nan"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 200, path)
            self.assertEqual(resp.get_json()["time_filter"], NO_FILTER)
        self.assertEqual(self.client.get("/?t=inf").status_code, 200)
        self.assertEqual(self.client.get("/snapshot.svg?t=-inf").status_code, 200)

    def test_snapshot(self):
        resp = self.client.get("/snapshot.svg?lat=0.5&lon=0.5&zoom=8&width=400&height=300")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.mimetype, "image/svg+xml")
        self.assertIn('data-station="B"', resp.get_data(as_text=True))

    def test_snapshot_rejects_bad_viewport(self):
        self.assertEqual(self.client.get("/snapshot.svg?zoom=abc").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?zoom=30").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?width=0").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?width=nan").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?width=inf").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?lat=nan").status_code, 400)
        self.assertEqual(self.client.get("/snapshot.svg?lon=-inf").status_code, 400)

    def test_station_symbols_pipeline(self):
        a, b = station_symbols(self.stations, self.trips, NO_FILTER)
        self.assertEqual((a.flow, b.flow), (1, 0))


class TestServe(unittest.TestCase):

    @patch("bikeflow.server.load_dataset")
    @patch("flask.Flask.run")
    def test_serve_loads_once_and_runs(self, run, load):
        load.return_value = (make_stations(), make_trips([("A", "B", "08:00", "08:10")]))
        settings = Settings(stations_url="s.json", trips_url="t.csv", port=9000)

        serve_traffic_map(settings)

        load.assert_called_once_with("s.json", "t.csv")
        run.assert_called_once_with(host="127.0.0.1", port=9000, debug=False)


class TestAmbient(unittest.TestCase):

    def test_settings_from_env(self):
        env = {"PORT": "9090", "DEBUG": "true", "TRIPS_URL": "trips.csv", "LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env):
            s = Settings.from_env()
        self.assertEqual(s.port, 9090)
        self.assertTrue(s.debug)
        self.assertEqual(s.trips_url, "trips.csv")
        self.assertEqual(s.log_level, "DEBUG")

    def test_setup_logging_is_idempotent(self):
        logger = setup_logging("INFO")
        count = len(logger.handlers)
        setup_logging("DEBUG")
        self.assertEqual(len(logger.handlers), count)
        self.assertEqual(logger.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
