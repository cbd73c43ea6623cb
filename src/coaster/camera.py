"""Camera models mapping world coordinates (y up) to canvas coordinates (y down)."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from coaster.common import Point
from coaster.linalg import AffineTransform2D

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraState:
    """Snapshot of the pan and zoom of a camera."""

    top_left: Point
    zoom: float


###############################################################################
# Camera
###############################################################################
class Camera(ABC):
    """Maps world points to canvas points and back.

    The pan offset is read through the method top_left(), paired with
    update_top_left(). Implementations may expose further settings such as
    the zoom as properties; the state property of StandardCamera bundles the
    pan offset and the zoom in one snapshot.
    """

    @abstractmethod
    def transform_point(self, point: Point) -> Point:
        """World to canvas."""

    @abstractmethod
    def transform_x(self, x: float) -> float:
        """World x to canvas x."""

    @abstractmethod
    def transform_y(self, y: float) -> float:
        """World y to canvas y."""

    @abstractmethod
    def inverse_transform_point(self, point: Point) -> Point:
        """Canvas to world."""

    @abstractmethod
    def inverse_transform_x(self, x: float) -> float:
        """Canvas x to world x."""

    @abstractmethod
    def inverse_transform_y(self, y: float) -> float:
        """Canvas y to world y."""

    @abstractmethod
    def top_left(self) -> Point:
        """World point shown at the canvas' top-left corner (before zoom)."""

    @abstractmethod
    def update_top_left(self, point: Point) -> None:
        """Pan the camera to a new top-left world point."""


###############################################################################
# StandardCamera
###############################################################################
class StandardCamera(Camera):
    """Pan, zoom and y-flip camera for a canvas of fixed size.

    The transform is rebuilt on every pan or zoom change as
        scaling(zoom) @ translation(-left, top + height / zoom) @ flip()
    which maps a world point (x, y) to
        (zoom * (x - left), height - zoom * (y - top))
    i.e. world y grows upwards while canvas y grows downwards.
    """

    def __init__(
        self,
        canvas_width: float,
        canvas_height: float,
        top_left: Point = Point(0.0, 0.0),
        zoom: float = 1.0,
    ):
        """Initialize the camera.

        Args:
            canvas_width (float): canvas width in pixels
            canvas_height (float): canvas height in pixels
            top_left (Point, optional): initial pan offset. Defaults to Point(0, 0).
            zoom (float, optional): initial zoom factor. Defaults to 1.

        Raises:
            ValueError: If a canvas dimension or the zoom is not a positive finite number.
        """
        for name, value in (("canvas_width", canvas_width), ("canvas_height", canvas_height)):
            if not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be a positive number, got {value}")
        self._canvas_width = float(canvas_width)
        self._canvas_height = float(canvas_height)
        self._top_left = Point(float(top_left[0]), float(top_left[1]))
        self._zoom = self._checked_zoom(zoom)
        self._transform = self._build_transform()

    @staticmethod
    def _checked_zoom(zoom: float) -> float:
        if not (math.isfinite(zoom) and zoom > 0):
            raise ValueError(f"Zoom must be a positive number, got {zoom}")
        return float(zoom)

    def _build_transform(self) -> AffineTransform2D:
        transform = (
            AffineTransform2D.scaling(self._zoom)
            @ AffineTransform2D.translation(-self._top_left.x, self._top_left.y + self._canvas_height / self._zoom)
            @ AffineTransform2D.flip()
        )
        logger.debug("Camera transform rebuilt: top_left=%s zoom=%s", self._top_left, self._zoom)
        return transform

    @property
    def canvas_width(self) -> float:
        """Canvas width in pixels."""
        return self._canvas_width

    @property
    def canvas_height(self) -> float:
        """Canvas height in pixels."""
        return self._canvas_height

    @property
    def zoom(self) -> float:
        """Current zoom factor."""
        return self._zoom

    @property
    def transform(self) -> AffineTransform2D:
        """The current world-to-canvas transform."""
        return self._transform

    @property
    def state(self) -> CameraState:
        """Snapshot of pan and zoom."""
        return CameraState(self._top_left, self._zoom)

    def set_zoom(self, zoom: float) -> None:
        """Change the zoom factor and rebuild the transform."""
        self._zoom = self._checked_zoom(zoom)
        self._transform = self._build_transform()

    def pan(self, dx: float, dy: float) -> None:
        """Move the top-left world point by (dx, dy)."""
        self.update_top_left(Point(self._top_left.x + dx, self._top_left.y + dy))

    def top_left(self) -> Point:
        return self._top_left

    def update_top_left(self, point: Point) -> None:
        self._top_left = Point(float(point[0]), float(point[1]))
        self._transform = self._build_transform()

    def transform_point(self, point: Point) -> Point:
        return self._transform.apply(point)

    def transform_x(self, x: float) -> float:
        return self._transform.transform_x(x)

    def transform_y(self, y: float) -> float:
        return self._transform.transform_y(y)

    def inverse_transform_point(self, point: Point) -> Point:
        return self._transform.invert_apply(point)

    def inverse_transform_x(self, x: float) -> float:
        return self._transform.inverse_transform_x(x)

    def inverse_transform_y(self, y: float) -> float:
        return self._transform.inverse_transform_y(y)
