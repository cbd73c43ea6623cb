"""SVG rendering of a track, its scaffolds and a rider as seen through a camera."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import svgwrite
import svgwrite.container

from coaster.camera import StandardCamera
from coaster.common import Point
from coaster.ride import Ride
from coaster.track import CubicTrack, Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderStyle:
    """Colours and sizes used when drawing a track."""

    scaffold_color: str = "#ffe1a3"
    scaffold_width: float = 5.0
    rail_color: str = "#808080"
    rail_width: float = 5.0
    rider_color: str = "black"
    rider_radius: float = 10.0


###############################################################################
# TrackRenderer
###############################################################################
class TrackRenderer:
    """Draws a track onto an SVG canvas the size of the camera's canvas.

    The canvas is sampled every ``precision`` pixels along x; each sample is
    mapped back to world x through the camera. Samples on the track get a
    scaffold from the ground line y = 0 up to the rail, and consecutive
    samples on the track are joined by a rail segment.
    """

    def __init__(self, camera: StandardCamera, style: Optional[RenderStyle] = None):
        self._camera = camera
        self._style = style if style is not None else RenderStyle()

    @property
    def camera(self) -> StandardCamera:
        """The camera used for drawing."""
        return self._camera

    def render(self, track: Track, precision: float = 5.0, rider: Optional[Point] = None) -> svgwrite.Drawing:
        """Render the track and optionally a rider (in world coordinates).

        Args:
            track (Track): the track to draw
            precision (float, optional): sample distance in canvas pixels. Defaults to 5.
            rider (Point, optional): world position of the rider. Defaults to None.

        Returns:
            svgwrite.Drawing: the drawing

        Raises:
            ValueError: If precision is not positive.
        """
        if not precision > 0:
            raise ValueError(f"precision must be positive, got {precision}")

        camera = self._camera
        drawing = svgwrite.Drawing(size=(camera.canvas_width, camera.canvas_height), profile="full")
        scaffolds = drawing.add(drawing.g(id="scaffolds"))
        rail = drawing.add(drawing.g(id="rail"))

        count = 0
        screen_x = 0.0
        while screen_x < camera.canvas_width:
            world_x = camera.inverse_transform_x(screen_x)
            if track.contains(world_x):
                self._draw_scaffold(drawing, scaffolds, track, world_x)
                next_x = camera.inverse_transform_x(screen_x + precision)
                if track.contains(next_x):
                    self._draw_rail(drawing, rail, track, world_x, next_x)
                count += 1
            screen_x += precision
        logger.debug("Rendered %d track samples", count)

        if rider is not None:
            riders = drawing.add(drawing.g(id="rider"))
            center = camera.transform_point(rider)
            riders.add(drawing.circle(center=center, r=self._style.rider_radius, fill=self._style.rider_color))
        return drawing

    def _draw_scaffold(
        self, drawing: svgwrite.Drawing, group: svgwrite.container.Group, track: Track, world_x: float
    ) -> None:
        camera = self._camera
        group.add(
            drawing.line(
                start=camera.transform_point(Point(world_x, 0.0)),
                end=camera.transform_point(Point(world_x, track.height(world_x))),
                stroke=self._style.scaffold_color,
                stroke_width=self._style.scaffold_width,
            )
        )

    def _draw_rail(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        drawing: svgwrite.Drawing,
        group: svgwrite.container.Group,
        track: Track,
        world_x: float,
        next_x: float,
    ) -> None:
        camera = self._camera
        group.add(
            drawing.line(
                start=camera.transform_point(Point(world_x, track.height(world_x))),
                end=camera.transform_point(Point(next_x, track.height(next_x))),
                stroke=self._style.rail_color,
                stroke_width=self._style.rail_width,
            )
        )

    def to_svg_string(self, track: Track, precision: float = 5.0, rider: Optional[Point] = None) -> str:
        """Render and serialize to an SVG string."""
        return self.render(track, precision, rider).tostring()

    def save_as(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        filename: str,
        track: Track,
        precision: float = 5.0,
        rider: Optional[Point] = None,
        pretty: bool = False,
    ) -> None:
        """Render and save as SVG file."""
        self.render(track, precision, rider).saveas(filename, pretty=pretty)


def main():
    """Render a demo track with a rider part way down the first drop."""
    track = CubicTrack.from_points([(0, 300), (150, 120), (300, 220), (450, 60), (600, 150), (800, 40)])
    camera = StandardCamera(800, 400)
    ride = Ride(track, 0.0)
    state = ride.state
    for state in ride.run(0.05, 200):
        pass

    TrackRenderer(camera).save_as("coaster_demo.svg", track, precision=5.0, rider=Point(state.x, state.y))
    print("file saved.")


if __name__ == "__main__":
    main()
