"""Tests for the meters-per-pixel Scale model."""
import pytest
from pydantic import ValidationError


class TestScaleBounds:
    def test_defaults(self):
        from gis_viewport.core.scale import Scale
        s = Scale()
        assert s.x_mpp == 4.0
        assert s.y_mpp == 4.0
        assert s.is_square

    def test_construction_out_of_range(self):
        from gis_viewport.core.scale import Scale
        with pytest.raises(ValidationError):
            Scale(x_mpp=0.01)
        with pytest.raises(ValidationError):
            Scale(y_mpp=40000.0)

    def test_assignment_is_validated(self):
        from gis_viewport.core.scale import Scale
        s = Scale()
        with pytest.raises(ValidationError):
            s.x_mpp = 0.0

    def test_set_is_all_or_nothing(self):
        from gis_viewport.core.scale import Scale
        s = Scale(x_mpp=8.0, y_mpp=8.0)
        with pytest.raises(ValueError, match="y_mpp"):
            s.set(2.0, 100000.0)
        assert s.x_mpp == 8.0
        assert s.y_mpp == 8.0

    def test_set_single_value_is_square(self):
        from gis_viewport.core.scale import Scale
        s = Scale()
        s.set(0.5)
        assert s.x_mpp == 0.5
        assert s.y_mpp == 0.5


class TestZoom:
    def test_zoom_in_halves(self):
        from gis_viewport.core.scale import Scale
        s = Scale(x_mpp=4.0, y_mpp=8.0)
        assert s.zoom_in() is True
        assert (s.x_mpp, s.y_mpp) == (2.0, 4.0)

    def test_zoom_in_at_minimum_is_rejected(self):
        from gis_viewport.core.scale import Scale, MPP_MIN
        s = Scale(x_mpp=MPP_MIN, y_mpp=MPP_MIN)
        assert s.zoom_in() is False
        assert s.x_mpp == MPP_MIN

    def test_zoom_out_to_maximum(self):
        from gis_viewport.core.scale import Scale, MPP_MAX
        s = Scale(x_mpp=16384.0, y_mpp=16384.0)
        assert s.zoom_out() is True
        assert s.x_mpp == MPP_MAX
        assert s.zoom_out() is False
        assert s.x_mpp == MPP_MAX

    def test_zoom_rejected_if_only_one_axis_would_leave_range(self):
        from gis_viewport.core.scale import Scale
        s = Scale(x_mpp=1.0, y_mpp=32768.0)
        assert s.zoom_out() is False
        assert (s.x_mpp, s.y_mpp) == (1.0, 32768.0)


class TestScaleLabel:
    def test_integral_square(self):
        from gis_viewport.core.scale import Scale
        assert Scale(x_mpp=4.0, y_mpp=4.0).to_string() == "4 mpp"

    def test_fractional(self):
        from gis_viewport.core.scale import Scale
        assert Scale(x_mpp=0.5, y_mpp=0.5).to_string() == "0.5 mpp"
        assert Scale(x_mpp=123.45678, y_mpp=123.45678).to_string() == "123.45678 mpp"
        assert Scale(x_mpp=1 / 3, y_mpp=1 / 3).to_string() == "0.33333333 mpp"

    def test_non_square(self):
        from gis_viewport.core.scale import Scale
        s = Scale(x_mpp=12.0, y_mpp=34.0)
        assert s.to_string("pixelfact") == "12/34f pixelfact"
        assert str(s) == "12/34f mpp"

    def test_from_string(self):
        from gis_viewport.core.scale import Scale
        s = Scale.from_string("12/34f pixelfact")
        assert (s.x_mpp, s.y_mpp) == (12.0, 34.0)
        assert Scale.from_string("0.5 mpp").y_mpp == 0.5

    def test_from_string_rejects_garbage(self):
        from gis_viewport.core.scale import Scale
        with pytest.raises(ValueError):
            Scale.from_string("four mpp")

    def test_from_string_rejects_out_of_range(self):
        from gis_viewport.core.scale import Scale
        with pytest.raises(ValueError):
            Scale.from_string("65536 mpp")
