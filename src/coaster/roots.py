"""Root isolation and bisection refinement for (piecewise) cubic polynomials."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, List

from coaster.common import DEFAULT_EPSILON, ScalarFunction, Sign

if TYPE_CHECKING:
    from coaster.spline import PiecewiseCubic

logger = logging.getLogger(__name__)


###############################################################################
# PolynomialRoots
###############################################################################
class PolynomialRoots:
    """Collection of static methods to find the real roots of cubics inside a bounded interval.

    The interval is split at the critical points of the cubic, which makes every
    sub-interval monotonic. A sub-interval therefore holds at most one root, and
    a root is present exactly when the signs at its borders differ. Such roots
    are refined by bisection.
    """

    @staticmethod
    def cubic(a: float, b: float, c: float, d: float) -> ScalarFunction:
        """Return the function t -> a*t^3 + b*t^2 + c*t + d (Horner form)."""

        def evaluate(t: float) -> float:
            return ((a * t + b) * t + c) * t + d

        return evaluate

    @staticmethod
    def critical_points(a: float, b: float, c: float) -> List[float]:
        """Roots of the derivative 3a*t^2 + 2b*t + c of the cubic a*t^3 + b*t^2 + c*t + d.

        Uses the discriminant (2b)^2 - 12ac. A vanishing leading coefficient
        makes the derivative linear; its single root -c / 2b is returned then
        (nothing if b is zero as well).

        Args:
            a (float): cubic coefficient
            b (float): quadratic coefficient
            c (float): linear coefficient

        Returns:
            List[float]: 0, 1 or 2 critical points in ascending order
        """
        if a == 0:
            if b == 0:
                return []
            return [-c / (2.0 * b)]

        discriminant = (2.0 * b) * (2.0 * b) - 12.0 * a * c
        if discriminant == 0:
            return [-2.0 * b / (6.0 * a)]
        if discriminant > 0:
            root = math.sqrt(discriminant)
            return sorted([(-2.0 * b + root) / (6.0 * a), (-2.0 * b - root) / (6.0 * a)])
        # negative or NaN: no real critical points
        return []

    @staticmethod
    def bisect(f: ScalarFunction, low: float, high: float, epsilon: float = DEFAULT_EPSILON) -> float:
        """Refine a root of f inside the bracket [low, high] by bisection.

        The sign of f at the current low end is the anchor: a midpoint with the
        same sign moves low, any other sign moves high. A midpoint landing
        exactly on zero is returned immediately.

        Args:
            f (ScalarFunction): the function, expected to change sign on [low, high]
            low (float): lower bracket end
            high (float): upper bracket end
            epsilon (float, optional): stop once high - low <= epsilon. Defaults to DEFAULT_EPSILON.

        Returns:
            float: midpoint of the final bracket

        Raises:
            ValueError: If epsilon is not positive.
        """
        if not epsilon > 0:
            raise ValueError(f"Bisection tolerance must be positive, got {epsilon}")

        while high - low > epsilon:
            mid = (low + high) / 2.0
            if not low < mid < high:
                # bracket cannot shrink any further in floating point
                break
            mid_sign = Sign.of(f(mid))
            if mid_sign is Sign.ZERO:
                return mid
            if mid_sign is Sign.of(f(low)):
                low = mid
            else:
                high = mid
        return (low + high) / 2.0

    @classmethod
    def bounded_cubic_roots(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        cls,
        a: float,
        b: float,
        c: float,
        d: float,
        low: float,
        high: float,
        epsilon: float = DEFAULT_EPSILON,
    ) -> List[float]:
        """Find the roots of a*t^3 + b*t^2 + c*t + d inside [low, high].

        Zero is a sign class of its own, so a root sitting exactly on a border
        is found only when the neighbouring border has a non-zero value.

        Args:
            a, b, c, d (float): coefficients of the cubic
            low (float): lower end of the interval
            high (float): upper end of the interval
            epsilon (float, optional): bisection tolerance. Defaults to DEFAULT_EPSILON.

        Returns:
            List[float]: the roots found, in ascending order
        """
        f = cls.cubic(a, b, c, d)

        # non-finite critical points fail the strict comparison and drop out
        inner = [t for t in cls.critical_points(a, b, c) if low < t < high]
        borders = [low] + inner + [high]

        roots: List[float] = []
        for border_low, border_high in zip(borders[:-1], borders[1:]):
            if Sign.of(f(border_low)) is not Sign.of(f(border_high)):
                roots.append(cls.bisect(f, border_low, border_high, epsilon))
        return roots

    @classmethod
    def all_intersections(
        cls, spline: PiecewiseCubic, level: float, epsilon: float = DEFAULT_EPSILON
    ) -> List[float]:
        """Find all t where the spline crosses the horizontal line y = level.

        Each segment is searched on its own knot interval for roots of
        f(t) - level. A crossing located exactly on an interior knot may be
        reported by both adjacent segments.

        Args:
            spline (PiecewiseCubic): the curve
            level (float): height of the horizontal line
            epsilon (float, optional): bisection tolerance. Defaults to DEFAULT_EPSILON.

        Returns:
            List[float]: crossings in segment order (ascending)
        """
        crossings: List[float] = []
        for i in range(spline.segment_count):
            a, b, c, d = spline.coefficients(i)
            crossings.extend(
                cls.bounded_cubic_roots(a, b, c, d - level, float(spline.x[i]), float(spline.x[i + 1]), epsilon)
            )
        logger.debug("Found %d crossing(s) at level %s", len(crossings), level)
        return crossings


def main():
    """Find the roots of (t-1)(t-2)(t-3) on [0, 4]."""
    print(PolynomialRoots.bounded_cubic_roots(1.0, -6.0, 11.0, -6.0, 0.0, 4.0))


if __name__ == "__main__":
    main()
