"""Piecewise cubic curve with evaluation, derivative, integral and level-crossing queries."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from coaster.common import DEFAULT_ARC_LENGTH_STEPS, DEFAULT_EPSILON
from coaster.roots import PolynomialRoots

ArrayLike = Union[Sequence[float], NDArray[np.float64]]


def _read_only(values: ArrayLike) -> NDArray[np.float64]:
    array = np.array(values, dtype=np.float64).reshape(-1)
    array.flags.writeable = False
    return array


###############################################################################
# PiecewiseCubic
###############################################################################
class PiecewiseCubic:
    """A piecewise cubic function f of one variable.

    On the knot interval [x[i], x[i+1]] the function is
        f(t) = a[i]*t^3 + b[i]*t^2 + c[i]*t + d[i]
    with the coefficients expressed in global t (not in t - x[i]), so no
    re-centering is needed for evaluation.

    Instances are immutable snapshots: all arrays are read-only and a refit
    produces a new instance. A curve with fewer than two knots evaluates to 0
    everywhere, as does any query outside [x[0], x[-1]]. The 0 doubles as the
    "out of domain" marker; use the ``*_or_none`` variants to tell both apart.
    """

    _x: NDArray[np.float64]
    _a: NDArray[np.float64]
    _b: NDArray[np.float64]
    _c: NDArray[np.float64]
    _d: NDArray[np.float64]

    def __init__(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        x: ArrayLike,
        a: ArrayLike,
        b: ArrayLike,
        c: ArrayLike,
        d: ArrayLike,
    ):
        """Initialize the curve from its knots and per-segment coefficients.

        Args:
            x: knots (breakpoints), expected in strictly ascending order
            a: cubic coefficients, one per segment
            b: quadratic coefficients, one per segment
            c: linear coefficients, one per segment
            d: constant coefficients, one per segment

        Raises:
            ValueError: If the number of knots and coefficients do not match.
        """
        self._x = _read_only(x)
        self._a = _read_only(a)
        self._b = _read_only(b)
        self._c = _read_only(c)
        self._d = _read_only(d)

        segments = len(self._a)
        if not len(self._b) == len(self._c) == len(self._d) == segments:
            raise ValueError(
                f"Coefficient arrays differ in length: a={segments}, b={len(self._b)}, "
                f"c={len(self._c)}, d={len(self._d)}"
            )
        # fewer than two knots come without any coefficients
        if not (len(self._x) == segments + 1 or (segments == 0 and len(self._x) < 2)):
            raise ValueError(f"Expected {segments + 1} knots for {segments} segments, got {len(self._x)}")

        # plain floats for the scalar hot paths
        self._knots: Tuple[float, ...] = tuple(float(v) for v in self._x)

    @classmethod
    def empty(cls) -> PiecewiseCubic:
        """A curve without knots; evaluates to 0 everywhere."""
        return cls([], [], [], [], [])

    # -------------------------------------------------------------------------
    # read-only properties
    # -------------------------------------------------------------------------

    @property
    def x(self) -> NDArray[np.float64]:
        """Read-only view of the knots."""
        return self._x

    @property
    def a(self) -> NDArray[np.float64]:
        """Read-only view of the cubic coefficients."""
        return self._a

    @property
    def b(self) -> NDArray[np.float64]:
        """Read-only view of the quadratic coefficients."""
        return self._b

    @property
    def c(self) -> NDArray[np.float64]:
        """Read-only view of the linear coefficients."""
        return self._c

    @property
    def d(self) -> NDArray[np.float64]:
        """Read-only view of the constant coefficients."""
        return self._d

    @property
    def segment_count(self) -> int:
        """Number of cubic segments."""
        return len(self._a)

    @property
    def domain(self) -> Optional[Tuple[float, float]]:
        """(x[0], x[-1]) or None if the curve has fewer than two knots."""
        if len(self._knots) < 2:
            return None
        return self._knots[0], self._knots[-1]

    def coefficients(self, i: int) -> Tuple[float, float, float, float]:
        """Coefficients (a, b, c, d) of segment i as plain floats."""
        return float(self._a[i]), float(self._b[i]), float(self._c[i]), float(self._d[i])

    # -------------------------------------------------------------------------
    # domain handling
    # -------------------------------------------------------------------------

    def contains(self, t: float) -> bool:
        """True if t lies inside [x[0], x[-1]]. Always False for NaN or fewer than two knots."""
        if len(self._knots) < 2:
            return False
        return self._knots[0] <= t <= self._knots[-1]

    def _outside(self, t: float) -> bool:
        # NaN passes this check on purpose and is evaluated on segment 0
        return len(self._knots) < 2 or t < self._knots[0] or t > self._knots[-1]

    def segment_index(self, t: float) -> int:
        """Index i of the segment with x[i] <= t <= x[i+1].

        The scan runs from the left, so a t exactly on an interior knot maps to
        the lower of the two adjacent segments. Returns 0 for t outside the
        domain or NaN.
        """
        knots = self._knots
        if len(knots) < 2 or math.isnan(t) or t < knots[0] or t > knots[-1]:
            return 0
        for i in range(len(knots) - 1):
            if knots[i] <= t <= knots[i + 1]:
                return i
        return 0

    # -------------------------------------------------------------------------
    # per segment evaluation
    # -------------------------------------------------------------------------

    def evaluate_segment(self, t: float, i: int) -> float:
        """Value of segment i's cubic at t, regardless of the segment's interval."""
        a, b, c, d = self.coefficients(i)
        return ((a * t + b) * t + c) * t + d

    def derivative_segment(self, t: float, i: int) -> float:
        """First derivative of segment i's cubic at t."""
        a, b, c, _ = self.coefficients(i)
        return (3.0 * a * t + 2.0 * b) * t + c

    def second_derivative_segment(self, t: float, i: int) -> float:
        """Second derivative of segment i's cubic at t."""
        return 6.0 * float(self._a[i]) * t + 2.0 * float(self._b[i])

    # -------------------------------------------------------------------------
    # queries
    # -------------------------------------------------------------------------

    def evaluate(self, t: float) -> float:
        """f(t), or 0 outside the domain."""
        if self._outside(t):
            return 0.0
        return self.evaluate_segment(t, self.segment_index(t))

    __call__ = evaluate

    def derivative(self, t: float) -> float:
        """f'(t), or 0 outside the domain."""
        if self._outside(t):
            return 0.0
        return self.derivative_segment(t, self.segment_index(t))

    def second_derivative(self, t: float) -> float:
        """f''(t), or 0 outside the domain."""
        if self._outside(t):
            return 0.0
        return self.second_derivative_segment(t, self.segment_index(t))

    def evaluate_or_none(self, t: float) -> Optional[float]:
        """f(t), or None if t is not inside the domain."""
        return self.evaluate(t) if self.contains(t) else None

    def derivative_or_none(self, t: float) -> Optional[float]:
        """f'(t), or None if t is not inside the domain."""
        return self.derivative(t) if self.contains(t) else None

    def max_second_derivative(self) -> float:
        """Largest second derivative found at the knots.

        Only the knots are sampled, not the whole domain. The result is never
        below 0, which is also the value for a curve without segments.
        """
        return max([0.0] + [self.second_derivative(t) for t in self._knots])

    def definite_integral(self) -> float:
        """Integral of f over its whole domain.

        Simpson's rule per segment, with the segment's own cubic at both ends
        and the midpoint. Simpson's rule is exact for cubics, so is the result.
        """
        total = 0.0
        for i in range(self.segment_count):
            low, high = self._knots[i], self._knots[i + 1]
            mid = (low + high) / 2.0
            total += (
                (high - low)
                / 6.0
                * (self.evaluate_segment(low, i) + 4.0 * self.evaluate_segment(mid, i) + self.evaluate_segment(high, i))
            )
        return total

    def arc_length(self, steps_per_segment: int = DEFAULT_ARC_LENGTH_STEPS) -> float:
        """Length of the curve, composite Simpson's rule on sqrt(1 + f'(t)^2) per segment.

        Args:
            steps_per_segment (int, optional): even number of sub-intervals per segment.
                Defaults to DEFAULT_ARC_LENGTH_STEPS.

        Raises:
            ValueError: If steps_per_segment is not a positive even number.
        """
        if steps_per_segment <= 0 or steps_per_segment % 2:
            raise ValueError(f"steps_per_segment must be positive and even, got {steps_per_segment}")

        weights = np.ones(steps_per_segment + 1, dtype=np.float64)
        weights[1:-1:2] = 4.0
        weights[2:-1:2] = 2.0

        total = 0.0
        for i in range(self.segment_count):
            a, b, c, _ = self.coefficients(i)
            t = np.linspace(self._knots[i], self._knots[i + 1], steps_per_segment + 1)
            slope = (3.0 * a * t + 2.0 * b) * t + c
            step = (self._knots[i + 1] - self._knots[i]) / steps_per_segment
            total += float(np.dot(weights, np.sqrt(1.0 + slope * slope))) * step / 3.0
        return total

    def find_crossings(self, level: float, epsilon: float = DEFAULT_EPSILON) -> List[float]:
        """All t with f(t) == level, each refined to within epsilon."""
        return PolynomialRoots.all_intersections(self, level, epsilon)

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """Sample the curve into a polyline.

        Each segment is split into steps pieces; shared knots appear once.

        Args:
            steps (int): number of pieces per segment

        Returns:
            NDArray[np.float64]: points of shape (segment_count * steps + 1, 2),
                or shape (0, 2) for a curve without segments
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        if self.segment_count == 0:
            return np.empty((0, 2), dtype=np.float64)

        result = np.empty((self.segment_count * steps + 1, 2), dtype=np.float64)
        for i in range(self.segment_count):
            a, b, c, d = self.coefficients(i)
            t = np.linspace(self._knots[i], self._knots[i + 1], steps + 1)
            if i > 0:
                # knot already written by the previous segment
                t = t[1:]
            start = 0 if i == 0 else i * steps + 1
            result[start : start + len(t), 0] = t
            result[start : start + len(t), 1] = ((a * t + b) * t + c) * t + d
        return result

    def __repr__(self) -> str:
        return f"PiecewiseCubic(segments={self.segment_count}, domain={self.domain})"


def main():
    """Evaluate a hand-made curve: t^2 on [0, 1] and 2t - 1 on [1, 2]."""
    curve = PiecewiseCubic([0.0, 1.0, 2.0], [0.0, 0.0], [1.0, 0.0], [0.0, 2.0], [0.0, -1.0])
    for t in (0.0, 0.5, 1.0, 1.5, 2.0, 3.0):
        print(f"f({t}) = {curve.evaluate(t)}  f'({t}) = {curve.derivative(t)}")
    print("integral:", curve.definite_integral())


if __name__ == "__main__":
    main()
