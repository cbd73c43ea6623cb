"""Central module containing types, enums and constants for the coaster kernel."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, NamedTuple, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

###############################################################################
# Types
###############################################################################


class Point(NamedTuple):
    """Immutable 2D point. No identity beyond its coordinates."""

    x: float
    y: float


# single-argument numeric function, e.g. f(x) or a spline used as a function
ScalarFunction = Callable[[float], float]

# rate function f(t, x) as used by the step routines
RateFunction = Callable[[float, float], float]

PointsLike = Union[Sequence[Point], Sequence[Tuple[float, float]], NDArray[np.float64]]


###############################################################################
# Enums and Consts
###############################################################################


class Sign(Enum):
    """Tri-state sign classification used by the root finder."""

    NEGATIVE = auto()
    ZERO = auto()
    POSITIVE = auto()

    @classmethod
    def of(cls, value: float) -> Sign:
        """Classify value. NaN compares false both ways and ends up as ZERO."""
        if value > 0:
            return cls.POSITIVE
        if value < 0:
            return cls.NEGATIVE
        return cls.ZERO


DEFAULT_EPSILON: float = 1.0e-9  # bisection stops once the bracket is this narrow
DEFAULT_GRAVITY: float = 9.81
DEFAULT_ARC_LENGTH_STEPS: int = 16  # Simpson sub-intervals per segment, must be even
DEFAULT_DERIVATIVE_STEP: float = 1.0e-5


###############################################################################
# Functions
###############################################################################


def as_point_array(points: PointsLike) -> NDArray[np.float64]:
    """Convert points to a float64 array of shape (n, 2).

    Args:
        points: Sequence of Points, (x, y) tuples or an array of shape (n, 2).

    Returns:
        NDArray[np.float64]: a fresh array of shape (n, 2)

    Raises:
        ValueError: If the input cannot be read as (x, y) pairs.
    """
    array = np.array(points, dtype=np.float64)
    if array.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"Expected (x, y) formatted points, got array of shape {array.shape}")
    return array


def main() -> None:
    """Print the sign classification of a few values."""
    for value in (-1.5, 0.0, 2.0, float("nan")):
        print(f"{value!r:>6} -> {Sign.of(value)}")


if __name__ == "__main__":
    main()
