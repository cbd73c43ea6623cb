"""Test module for coaster.camera

The tests are run using pytest.
"""

import math

import pytest

from coaster.camera import CameraState, StandardCamera
from coaster.common import Point

CANVAS_WIDTH = 800.0
CANVAS_HEIGHT = 600.0


@pytest.fixture
def camera():
    """Camera at the world origin without zoom."""
    return StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT)


###############################################################################
# Forward mapping
###############################################################################


class TestTransform:
    """Test world to canvas mapping."""

    def test_scale_then_flip(self):
        """Zoom 2 at the origin maps (3, 4) to (6, H - 8)."""
        camera = StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, zoom=2.0)
        point = camera.transform_point(Point(3.0, 4.0))
        assert point.x == pytest.approx(6.0)
        assert point.y == pytest.approx(CANVAS_HEIGHT - 8.0)

    def test_unzoomed_pan(self):
        """Without zoom the camera shifts by the top-left point and flips y."""
        camera = StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, top_left=Point(10.0, 20.0))
        assert camera.transform_x(15.0) == pytest.approx(5.0)
        assert camera.transform_y(50.0) == pytest.approx(CANVAS_HEIGHT - 30.0)

    def test_ground_maps_to_canvas_bottom(self, camera):
        """World y = 0 is the bottom canvas row."""
        assert camera.transform_y(0.0) == pytest.approx(CANVAS_HEIGHT)

    def test_axis_helpers_match_point_transform(self):
        """transform_x/transform_y agree with transform_point."""
        camera = StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, top_left=Point(-5.0, 12.0), zoom=1.5)
        point = camera.transform_point(Point(7.0, 9.0))
        assert camera.transform_x(7.0) == pytest.approx(point.x)
        assert camera.transform_y(9.0) == pytest.approx(point.y)


###############################################################################
# Inverse mapping
###############################################################################


class TestInverseTransform:
    """Test canvas to world mapping."""

    @pytest.mark.parametrize("zoom", [0.5, 1.0, 2.0, 7.25])
    @pytest.mark.parametrize("top_left", [Point(0.0, 0.0), Point(-30.0, 15.0), Point(123.4, -56.7)])
    def test_round_trip(self, zoom, top_left):
        """inverse_transform_point undoes transform_point."""
        camera = StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, top_left=top_left, zoom=zoom)
        for point in [Point(0.0, 0.0), Point(3.0, 4.0), Point(-250.0, 980.5)]:
            restored = camera.inverse_transform_point(camera.transform_point(point))
            assert restored.x == pytest.approx(point.x, abs=1e-6)
            assert restored.y == pytest.approx(point.y, abs=1e-6)

    def test_inverse_axis_helpers(self):
        """Canvas pixels map back to world coordinates one axis at a time."""
        camera = StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, top_left=Point(10.0, 20.0), zoom=2.0)
        assert camera.inverse_transform_x(40.0) == pytest.approx(30.0)
        assert camera.inverse_transform_y(CANVAS_HEIGHT) == pytest.approx(20.0)
        assert camera.inverse_transform_y(CANVAS_HEIGHT - 100.0) == pytest.approx(70.0)


###############################################################################
# Pan and zoom
###############################################################################


class TestPanAndZoom:
    """Test camera updates rebuild the transform."""

    def test_update_top_left(self, camera):
        """Panning changes where a world point lands."""
        camera.update_top_left(Point(100.0, 0.0))
        assert camera.top_left() == Point(100.0, 0.0)
        assert camera.transform_x(100.0) == pytest.approx(0.0)

    def test_pan(self, camera):
        """pan moves the top-left point relative to its current position."""
        camera.pan(5.0, -3.0)
        camera.pan(1.0, 1.0)
        assert camera.top_left() == Point(6.0, -2.0)

    def test_set_zoom(self, camera):
        """A new zoom replaces the transform."""
        before = camera.transform
        camera.set_zoom(4.0)
        assert camera.transform is not before
        assert camera.zoom == 4.0
        assert camera.transform_x(2.0) == pytest.approx(8.0)

    def test_state_snapshot(self, camera):
        """state captures pan and zoom."""
        camera.update_top_left(Point(1.0, 2.0))
        camera.set_zoom(3.0)
        assert camera.state == CameraState(Point(1.0, 2.0), 3.0)
        assert camera.state.top_left == camera.top_left()

    @pytest.mark.parametrize("zoom", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_zoom(self, camera, zoom):
        """Zoom must be a positive finite number."""
        with pytest.raises(ValueError):
            camera.set_zoom(zoom)
        with pytest.raises(ValueError):
            StandardCamera(CANVAS_WIDTH, CANVAS_HEIGHT, zoom=zoom)

    @pytest.mark.parametrize("size", [(0.0, 600.0), (800.0, -1.0), (math.nan, 600.0)])
    def test_invalid_canvas(self, size):
        """Canvas dimensions must be positive."""
        with pytest.raises(ValueError):
            StandardCamera(size[0], size[1])
