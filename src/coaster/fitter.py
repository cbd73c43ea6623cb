"""Natural cubic spline fitting through a set of 2D control points."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from coaster.common import PointsLike, as_point_array
from coaster.spline import PiecewiseCubic

logger = logging.getLogger(__name__)


class SplineFitError(ValueError):
    """Base exception for spline fitting errors."""


class DuplicateKnotError(SplineFitError):
    """Raised in strict mode when two control points share the same x-coordinate."""


###############################################################################
# SplineFitter
###############################################################################
class SplineFitter:
    """Builds natural cubic splines (zero curvature at both ends) from control points."""

    @classmethod
    def fit(cls, points: PointsLike, strict: bool = False) -> PiecewiseCubic:
        """Fit a natural cubic spline through the given points.

        The points are sorted by x first. Fewer than two points give a curve
        without coefficients, which evaluates to 0 everywhere.

        Algorithm:
        1. Segment widths h[i] and slopes m[i] of the control polygon.
        2. Forward elimination of the tridiagonal system for the second
           derivatives z[1..n-1] at the interior knots.
        3. Back substitution, with z[0] = z[n] = 0 (natural boundary).
        4. Per segment cubic in the local basis (t - x[i]), expanded into
           coefficients of global t.

        Args:
            points: control points as Points, (x, y) tuples or an array of shape (n, 2)
            strict (bool, optional): reject duplicate x-coordinates instead of
                producing non-finite coefficients. Defaults to False.

        Returns:
            PiecewiseCubic: the fitted curve

        Raises:
            DuplicateKnotError: If strict is set and two points share an x-coordinate.
            ValueError: If points are not (x, y) formatted.
        """
        xy = as_point_array(points)
        xy = xy[np.argsort(xy[:, 0], kind="stable")]
        x = xy[:, 0]
        y = xy[:, 1]

        if len(xy) < 2:
            return PiecewiseCubic(x, [], [], [], [])

        if strict:
            cls.check_distinct(x)

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            z = cls.second_derivatives(x, y)
            a, b, c, d = cls.global_coefficients(x, y, z)

        if not all(np.all(np.isfinite(coefficients)) for coefficients in (a, b, c, d)):
            logger.warning("Spline fit produced non-finite coefficients; check for duplicate x-coordinates")

        return PiecewiseCubic(x, a, b, c, d)

    @staticmethod
    def check_distinct(x: NDArray[np.float64]) -> None:
        """Raise DuplicateKnotError if the sorted knots x contain repeated values."""
        repeated = x[1:][np.diff(x) == 0]
        if len(repeated):
            raise DuplicateKnotError(f"Control points share x-coordinates: {sorted(set(repeated.tolist()))}")

    @staticmethod
    def second_derivatives(x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
        """Second derivatives z of the natural spline at the sorted knots x.

        z[0] and z[n] stay 0. With a single segment there are no interior
        knots and z is all zeros.
        """
        n = len(x) - 1
        h = np.diff(x)
        m = np.diff(y) / h

        u = np.zeros(n + 1, dtype=np.float64)
        v = np.zeros(n + 1, dtype=np.float64)
        if n > 1:
            u[1] = 2.0 * (h[0] + h[1])
            v[1] = 6.0 * (m[1] - m[0])
            for i in range(2, n):
                tmp = h[i - 1] / u[i - 1]
                u[i] = 2.0 * (h[i - 1] + h[i]) - h[i - 1] * tmp
                v[i] = 6.0 * (m[i] - m[i - 1]) - v[i - 1] * tmp

        z = np.zeros(n + 1, dtype=np.float64)
        for i in range(n - 1, 0, -1):
            z[i] = (v[i] - h[i] * z[i + 1]) / u[i]
        return z

    @staticmethod
    def global_coefficients(
        x: NDArray[np.float64], y: NDArray[np.float64], z: NDArray[np.float64]
    ) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """Per segment coefficients (a, b, c, d) in global t from knots and second derivatives."""
        h = np.diff(x)
        m = np.diff(y) / h
        xi = x[:-1]

        # local cubic in (t - x[i])
        ai = (z[1:] - z[:-1]) / (6.0 * h)
        bi = z[:-1] / 2.0
        ci = m - h * (2.0 * z[:-1] + z[1:]) / 6.0
        di = y[:-1]

        # expand (t - xi)^3, (t - xi)^2, (t - xi), 1
        a = ai
        b = -3.0 * ai * xi + bi
        c = 3.0 * ai * xi * xi - 2.0 * bi * xi + ci
        d = -ai * xi * xi * xi + bi * xi * xi - ci * xi + di
        return a, b, c, d


def main():
    """Fit a spline through a few points and print its coefficients."""
    spline = SplineFitter.fit([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0), (3.0, 2.0)])
    for i in range(spline.segment_count):
        print(i, spline.coefficients(i))


if __name__ == "__main__":
    main()
