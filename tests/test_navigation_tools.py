"""Tests for the navigation tools."""
from unittest.mock import MagicMock

import pytest

from gis_viewport.state import state


def _register_and_get(tool_name: str):
    """Register navigation tools against a mock MCP and extract the named tool."""
    from gis_viewport.tools.navigation import register_navigation_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register_navigation_tools(mock_mcp)
    return tools[tool_name]


FAKE_GEOCODE_RESULTS = [
    {
        "display_name": "Mount Hood, Hood River County, Oregon, United States",
        "lat": "45.3736",
        "lon": "-121.6959",
        "type": "peak",
        "boundingbox": ["45.3536", "45.3936", "-121.7159", "-121.6759"],
    },
    {
        "display_name": "Mount Hood Meadows, Clackamas County, Oregon, United States",
        "lat": "45.3300",
        "lon": "-121.6660",
        "type": "resort",
        "boundingbox": ["45.3200", "45.3400", "-121.6760", "-121.6560"],
    },
]


def _make_fake_geocode_response(results=None):
    fake = MagicMock()
    fake.raise_for_status = MagicMock()
    fake.json.return_value = FAKE_GEOCODE_RESULTS if results is None else results
    return fake


class TestSetCenter:
    def test_moves_and_records(self):
        set_center = _register_and_get("set_center")
        result = set_center(lat=48.85, lon=2.35)
        assert "Moved" in result
        assert state.projection.center.lat_lon.lat == pytest.approx(48.85)
        assert state.history.size() == 1

    def test_without_saving(self):
        set_center = _register_and_get("set_center")
        set_center(lat=48.85, lon=2.35, save_position=False)
        assert state.history.size() == 0

    def test_invalid_latitude(self):
        set_center = _register_and_get("set_center")
        result = set_center(lat=95.0, lon=0.0)
        assert result.startswith("Error: Invalid position")
        assert state.history.size() == 0

    def test_utm_center_in_mercator_view(self):
        set_center_utm = _register_and_get("set_center_utm")
        result = set_center_utm(zone=32, band="U", easting=691000.0, northing=5334000.0)
        assert "Moved" in result
        ll = state.projection.center.lat_lon
        assert ll.lat == pytest.approx(48.13, abs=0.05)
        assert ll.lon == pytest.approx(11.57, abs=0.05)

    def test_invalid_utm_band(self):
        set_center_utm = _register_and_get("set_center_utm")
        result = set_center_utm(zone=32, band="I", easting=691000.0, northing=5334000.0)
        assert result.startswith("Error: Invalid UTM position")


class TestPan:
    def test_pan_by_pixels_is_not_recorded(self):
        pan = _register_and_get("pan")
        result = pan(dx=100.0)
        assert "Panned" in result
        assert state.projection.center.lat_lon.lon > 0.0
        assert state.history.size() == 0

    def test_pan_by_direction(self):
        pan = _register_and_get("pan")
        pan(direction="Up")
        assert state.projection.center.lat_lon.lat > 0.0

    def test_unknown_direction(self):
        pan = _register_and_get("pan")
        assert pan(direction="diagonal").startswith("Error")


class TestGoToPlace:
    def test_multiple_results_are_listed(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: _make_fake_geocode_response())

        result = go_to_place(query="Mount Hood")
        assert "1." in result
        assert "2." in result
        assert "peak" in result
        assert len(state.pending_geocode_candidates) == 2
        assert state.history.size() == 0

    def test_single_result_fits_view(self, monkeypatch):
        import httpx
        from gis_viewport.core.bbox import get_bbox
        go_to_place = _register_and_get("go_to_place")
        monkeypatch.setattr(
            httpx, "get", lambda *a, **kw: _make_fake_geocode_response(FAKE_GEOCODE_RESULTS[:1])
        )

        result = go_to_place(query="Mount Hood")
        assert "Found 1 result" in result
        assert "View fitted" in result
        bbox = get_bbox(state.projection)
        assert bbox.south <= 45.3536 and bbox.north >= 45.3936
        assert state.history.size() == 1
        assert state.pending_geocode_candidates == []

    def test_point_result_centers_view(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        point = [{"display_name": "Somewhere", "lat": "10.5", "lon": "20.5", "type": "node"}]
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: _make_fake_geocode_response(point))

        result = go_to_place(query="Somewhere")
        assert "Moved" in result
        assert state.projection.center.lat_lon.lat == pytest.approx(10.5)
        assert state.projection.scale.x_mpp == 4.0

    def test_no_results(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: _make_fake_geocode_response([]))
        assert "no locations found" in go_to_place(query="xyzzy").lower()

    def test_network_error(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")

        def raise_error(*a, **kw):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx, "get", raise_error)
        assert go_to_place(query="Mount Hood").startswith("Error contacting geocoding service")

    def test_http_error(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        request = httpx.Request("GET", "https://nominatim.openstreetmap.org/search")
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: httpx.Response(503, request=request))
        assert go_to_place(query="Mount Hood") == "Error: Nominatim returned HTTP 503."

    def test_limit_clamped(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        captured = {}

        def fake_get(url, **kwargs):
            captured["params"] = kwargs.get("params", {})
            captured["headers"] = kwargs.get("headers", {})
            return _make_fake_geocode_response([])

        monkeypatch.setattr(httpx, "get", fake_get)
        go_to_place(query="test", limit=99)
        assert captured["params"]["limit"] == 10
        assert captured["headers"]["User-Agent"].startswith("gis-viewport")
        go_to_place(query="test", limit=0)
        assert captured["params"]["limit"] == 1


class TestSelectGeocodeResult:
    def test_select_moves_to_candidate(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        select = _register_and_get("select_geocode_result")
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: _make_fake_geocode_response())

        go_to_place(query="Mount Hood")
        result = select(number=2)
        assert "Mount Hood Meadows" in result
        assert state.projection.center.lat_lon.lat == pytest.approx(45.33)
        assert state.pending_geocode_candidates == []

    def test_nothing_pending(self):
        select = _register_and_get("select_geocode_result")
        assert "go_to_place first" in select(number=1)

    def test_out_of_range(self, monkeypatch):
        import httpx
        go_to_place = _register_and_get("go_to_place")
        select = _register_and_get("select_geocode_result")
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: _make_fake_geocode_response())
        go_to_place(query="Mount Hood")
        assert "between 1 and 2" in select(number=3)


class TestFit:
    def test_fit_bbox(self):
        fit_bbox = _register_and_get("fit_bbox")
        result = fit_bbox(north=48.9, south=48.8, east=2.4, west=2.3)
        assert result.startswith("View fitted")
        assert state.history.size() == 1

    def test_fit_bbox_invalid(self):
        fit_bbox = _register_and_get("fit_bbox")
        result = fit_bbox(north=48.0, south=49.0, east=2.4, west=2.3)
        assert result.startswith("Error: Invalid bounding box")

    def test_fit_bbox_invalid_initial_scale(self):
        fit_bbox = _register_and_get("fit_bbox")
        result = fit_bbox(north=48.9, south=48.8, east=2.4, west=2.3, initial_mpp=0.0)
        assert result.startswith("Error")

    def test_fit_too_large(self):
        fit_bbox = _register_and_get("fit_bbox")
        result = fit_bbox(north=85.0, south=-85.0, east=180.0, west=-180.0)
        assert result.startswith("Warning")

    def test_fit_gpx(self, tmp_path):
        fit_gpx = _register_and_get("fit_gpx")
        path = tmp_path / "walk.gpx"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
            "  <trk><trkseg>\n"
            '    <trkpt lat="48.13" lon="11.57"/>\n'
            '    <trkpt lat="48.17" lon="11.60"/>\n'
            "  </trkseg></trk>\n"
            "</gpx>\n"
        )
        result = fit_gpx(file_path=str(path))
        assert "1 track(s)" in result
        assert "2 position(s)" in result
        assert state.projection.center.lat_lon.lat == pytest.approx(48.15)

    def test_fit_gpx_missing_file(self, tmp_path):
        fit_gpx = _register_and_get("fit_gpx")
        assert "not found" in fit_gpx(file_path=str(tmp_path / "missing.gpx"))

    def test_fit_gpx_without_positions(self, tmp_path):
        fit_gpx = _register_and_get("fit_gpx")
        path = tmp_path / "empty.gpx"
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1"></gpx>\n'
        )
        assert "no positions" in fit_gpx(file_path=str(path))
