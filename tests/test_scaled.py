"""Tests for rescaled views used by export and printing."""
import pytest


def _source(draw_mode=None, mpp=10.0):
    from gis_viewport.core.projection import ViewportProjection
    from gis_viewport.core.scale import Scale
    from gis_viewport.models import DrawMode, GeoCoord
    return ViewportProjection(
        center=GeoCoord.from_lat_lon(51.5, -0.12),
        scale=Scale(x_mpp=mpp, y_mpp=mpp),
        draw_mode=draw_mode or DrawMode.MERCATOR,
        width=800,
        height=600,
    )


def _assert_same_framing(a, b):
    from gis_viewport.core.bbox import get_bbox
    box_a = get_bbox(a)
    box_b = get_bbox(b)
    assert box_b.north == pytest.approx(box_a.north, abs=1e-9)
    assert box_b.south == pytest.approx(box_a.south, abs=1e-9)
    assert box_b.east == pytest.approx(box_a.east, abs=1e-9)
    assert box_b.west == pytest.approx(box_a.west, abs=1e-9)


class TestDerive:
    def test_square_target_keeps_aspect_ratio(self):
        from gis_viewport.core.scaled import derive
        source = _source()
        derived = derive(source, 1000, 1000)
        assert (derived.width, derived.height) == (1000, 750)
        assert derived.scale.x_mpp == pytest.approx(8.0)
        assert derived.scale.y_mpp == pytest.approx(8.0)
        _assert_same_framing(source, derived)

    def test_double_size(self):
        from gis_viewport.core.scaled import derive
        source = _source()
        derived = derive(source, 1600, 1600)
        assert (derived.width, derived.height) == (1600, 1200)
        assert derived.scale.x_mpp == pytest.approx(5.0)
        _assert_same_framing(source, derived)

    @pytest.mark.parametrize("size", [(97, 1000), (1001, 500), (333, 333)])
    def test_fractional_factor_keeps_framing(self, size):
        from gis_viewport.core.scaled import derive
        source = _source()
        derived = derive(source, *size)
        assert derived.width <= size[0]
        assert derived.height <= size[1]
        _assert_same_framing(source, derived)

    def test_fractional_factor_in_utm(self):
        from gis_viewport.core.scaled import derive
        from gis_viewport.models import DrawMode
        source = _source(DrawMode.UTM)
        derived = derive(source, 333, 333)
        assert (derived.width, derived.height) == (333, 250)
        assert derived.central_width_m == pytest.approx(source.central_width_m)
        assert derived.central_height_m == pytest.approx(source.central_height_m)

    def test_utm_view(self):
        from gis_viewport.core.scaled import derive
        from gis_viewport.models import DrawMode
        source = _source(DrawMode.UTM)
        derived = derive(source, 400, 400)
        assert derived.draw_mode is DrawMode.UTM
        assert derived.center == source.center
        assert (derived.width, derived.height) == (400, 300)
        assert derived.central_width_m == pytest.approx(source.central_width_m)

    def test_result_does_not_alias_source(self):
        from gis_viewport.core.scaled import derive
        from gis_viewport.models import GeoCoord
        source = _source()
        derived = derive(source, 1000, 1000)
        assert derived.scale is not source.scale
        derived.scale.zoom_out()
        derived.set_center(GeoCoord.from_lat_lon(0.0, 0.0))
        assert source.scale.x_mpp == 10.0
        assert source.center == GeoCoord.from_lat_lon(51.5, -0.12)

    def test_explicit_scale(self):
        from gis_viewport.core.scale import Scale
        from gis_viewport.core.scaled import derive
        source = _source()
        explicit = Scale(x_mpp=2.0, y_mpp=2.0)
        derived = derive(source, 1000, 1000, explicit)
        assert derived.scale.x_mpp == 2.0
        assert derived.scale is not explicit
        assert (derived.width, derived.height) == (1000, 750)

    def test_derived_scale_out_of_range(self):
        from gis_viewport.core.scaled import derive
        source = _source(mpp=1 / 32)
        with pytest.raises(ValueError):
            derive(source, 8000, 6000)

    def test_empty_target(self):
        from gis_viewport.core.scaled import derive
        with pytest.raises(ValueError):
            derive(_source(), 0, 600)


class TestImageSize:
    def test_finer_scale_needs_more_pixels(self):
        from gis_viewport.core.scaled import image_size_for
        assert image_size_for(_source(), 5.0) == (1600, 1200)
        assert image_size_for(_source(), 20.0, 40.0) == (400, 150)


class TestTileGrid:
    def test_grid_layout(self):
        from gis_viewport.core.scaled import tile_grid_centers
        from gis_viewport.models import DrawMode
        source = _source(DrawMode.UTM, mpp=1.0)
        c = source.center.utm
        grid = tile_grid_centers(source, 3, 2)
        assert len(grid) == 6
        cells = {(row, col): coord.utm for row, col, coord in grid}

        assert cells[(1, 2)].easting == pytest.approx(c.easting)
        assert cells[(1, 2)].northing == pytest.approx(c.northing + 300)
        assert cells[(2, 1)].easting == pytest.approx(c.easting - 800)
        assert cells[(2, 1)].northing == pytest.approx(c.northing - 300)
        assert all(u.zone == c.zone for u in cells.values())

    def test_single_cell_is_the_center(self):
        from gis_viewport.core.scaled import tile_grid_centers
        from gis_viewport.models import DrawMode
        source = _source(DrawMode.UTM, mpp=1.0)
        [(row, col, coord)] = tile_grid_centers(source, 1, 1)
        assert (row, col) == (1, 1)
        assert coord == source.center

    def test_requires_utm(self):
        from gis_viewport.core.scaled import tile_grid_centers
        with pytest.raises(ValueError, match="UTM"):
            tile_grid_centers(_source(), 2, 2)
