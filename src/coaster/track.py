"""Coaster tracks: the height profile a rider travels along."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from coaster.common import DEFAULT_EPSILON, PointsLike
from coaster.fitter import SplineFitter
from coaster.spline import PiecewiseCubic


class Track(ABC):
    """Height profile of a coaster over the horizontal axis."""

    @abstractmethod
    def contains(self, x: float) -> bool:
        """True if x lies on the track's horizontal extent."""

    @abstractmethod
    def height(self, x: float) -> float:
        """Track height at x, 0 outside the track."""

    @abstractmethod
    def slant(self, x: float) -> float:
        """Slope dy/dx of the track at x, 0 outside the track."""

    @abstractmethod
    def area(self) -> float:
        """Area between the track and the ground line y = 0."""

    @abstractmethod
    def max_acceleration(self) -> float:
        """Largest curvature term y'' found at the knots."""

    @abstractmethod
    def crossings(self, level: float) -> List[float]:
        """Horizontal positions where the track passes height level."""


class CubicTrack(Track):
    """Track following a piecewise cubic, usually a natural spline through the knots."""

    def __init__(self, spline: PiecewiseCubic):
        self._spline = spline

    @classmethod
    def from_points(cls, points: PointsLike, strict: bool = False) -> CubicTrack:
        """Fit a natural spline through the control points and wrap it as a track."""
        return cls(SplineFitter.fit(points, strict=strict))

    @property
    def spline(self) -> PiecewiseCubic:
        """The underlying curve."""
        return self._spline

    def contains(self, x: float) -> bool:
        return self._spline.contains(x)

    def height(self, x: float) -> float:
        return self._spline.evaluate(x)

    def slant(self, x: float) -> float:
        return self._spline.derivative(x)

    def area(self) -> float:
        return self._spline.definite_integral()

    def max_acceleration(self) -> float:
        return self._spline.max_second_derivative()

    def crossings(self, level: float, epsilon: float = DEFAULT_EPSILON) -> List[float]:
        return self._spline.find_crossings(level, epsilon)
