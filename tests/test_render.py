"""Test module for coaster.render

The tests are run using pytest.
"""

import pytest

from coaster.camera import StandardCamera
from coaster.common import Point
from coaster.render import RenderStyle, TrackRenderer
from coaster.track import CubicTrack


@pytest.fixture
def camera():
    """100 x 50 pixel canvas looking at the world origin."""
    return StandardCamera(100.0, 50.0)


class TestTrackRenderer:
    """Test the SVG output of tracks and riders."""

    def test_track_spanning_the_canvas(self, camera):
        """Ten samples, each with a scaffold and a rail segment."""
        track = CubicTrack.from_points([(0.0, 10.0), (50.0, 20.0), (100.0, 10.0)])
        svg = TrackRenderer(camera).to_svg_string(track, precision=10.0)
        assert svg.count("<line") == 20
        assert 'id="scaffolds"' in svg
        assert 'id="rail"' in svg
        assert "<circle" not in svg

    def test_short_track(self, camera):
        """Samples off the track are skipped; the last sample gets no rail."""
        track = CubicTrack.from_points([(20.0, 10.0), (60.0, 20.0)])
        drawing = TrackRenderer(camera).render(track, precision=10.0)
        assert drawing.tostring().count("<line") == 5 + 4

    def test_rider(self, camera):
        """A rider is drawn as a circle."""
        track = CubicTrack.from_points([(0.0, 10.0), (100.0, 10.0)])
        svg = TrackRenderer(camera).to_svg_string(track, precision=25.0, rider=Point(50.0, 10.0))
        assert svg.count("<circle") == 1
        assert 'id="rider"' in svg

    def test_camera_property(self, camera):
        """The renderer exposes the camera it draws through."""
        renderer = TrackRenderer(camera)
        assert renderer.camera is camera
        assert renderer.camera.canvas_width == 100.0

    def test_style(self, camera):
        """Colours come from the style."""
        track = CubicTrack.from_points([(0.0, 10.0), (100.0, 10.0)])
        style = RenderStyle(scaffold_color="#123456", rail_color="#abcdef")
        svg = TrackRenderer(camera, style).to_svg_string(track, precision=50.0)
        assert "#123456" in svg
        assert "#abcdef" in svg

    @pytest.mark.parametrize("precision", [0.0, -5.0])
    def test_invalid_precision(self, camera, precision):
        """Sampling needs a positive distance."""
        track = CubicTrack.from_points([(0.0, 10.0), (100.0, 10.0)])
        with pytest.raises(ValueError):
            TrackRenderer(camera).render(track, precision=precision)

    def test_save_as(self, camera, tmp_path):
        """The drawing is written as an SVG file."""
        track = CubicTrack.from_points([(0.0, 10.0), (100.0, 10.0)])
        filename = tmp_path / "track.svg"
        TrackRenderer(camera).save_as(str(filename), track, precision=20.0)
        content = filename.read_text(encoding="utf-8")
        assert content.startswith("<?xml")
        assert "<svg" in content
