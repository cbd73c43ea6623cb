"""Homogeneous 2D affine transforms and the small triangular solvers used to invert them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from coaster.common import Point

MatrixLike = Union[Sequence[Sequence[float]], NDArray[np.float64]]


class SingularMatrixError(ValueError):
    """Raised when a linear system has no unique solution."""


###############################################################################
# Triangular solves
###############################################################################


def lu_decompose(matrix: MatrixLike) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """LU decomposition by Gaussian elimination without pivoting.

    A zero pivot is not guarded against and turns into inf/NaN entries.

    Args:
        matrix: square matrix A

    Returns:
        Tuple[NDArray, NDArray]: unit lower triangular L and upper triangular U with A = L @ U
    """
    upper = np.array(matrix, dtype=np.float64)
    size = upper.shape[0]
    lower = np.eye(size, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        for ref in range(size - 1):
            for row in range(ref + 1, size):
                factor = upper[row, ref] / upper[ref, ref]
                lower[row, ref] = factor
                upper[row, :] -= factor * upper[ref, :]
    return lower, upper


def forward_solve(lower: MatrixLike, rhs: Sequence[float]) -> NDArray[np.float64]:
    """Solve L v = rhs for lower triangular L by forward substitution."""
    lower = np.asarray(lower, dtype=np.float64)
    size = lower.shape[0]
    result = np.zeros(size, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(size):
            result[i] = (rhs[i] - np.dot(lower[i, :i], result[:i])) / lower[i, i]
    return result


def backward_solve(upper: MatrixLike, rhs: Sequence[float]) -> NDArray[np.float64]:
    """Solve U w = rhs for upper triangular U by backward substitution."""
    upper = np.asarray(upper, dtype=np.float64)
    size = upper.shape[0]
    result = np.zeros(size, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        for i in range(size - 1, -1, -1):
            result[i] = (rhs[i] - np.dot(upper[i, i + 1 :], result[i + 1 :])) / upper[i, i]
    return result


###############################################################################
# LinearSolver
###############################################################################
class LinearSolver(ABC):
    """Solves A w = rhs for a small square matrix A."""

    @abstractmethod
    def solve(self, matrix: MatrixLike, rhs: Sequence[float]) -> NDArray[np.float64]:
        """Return w with matrix @ w == rhs."""


class NoPivotLUSolver(LinearSolver):
    """LU elimination without pivoting, then forward and backward substitution.

    Good for the diagonal scale/translate/flip matrices a camera produces.
    Matrices that need row exchanges (e.g. a 90 degree rotation) yield inf/NaN.
    """

    def solve(self, matrix: MatrixLike, rhs: Sequence[float]) -> NDArray[np.float64]:
        lower, upper = lu_decompose(matrix)
        return backward_solve(upper, forward_solve(lower, rhs))


class PivotedLUSolver(LinearSolver):
    """LU elimination with partial (row) pivoting."""

    def solve(self, matrix: MatrixLike, rhs: Sequence[float]) -> NDArray[np.float64]:
        upper = np.array(matrix, dtype=np.float64)
        vector = np.array(rhs, dtype=np.float64)
        size = upper.shape[0]
        lower = np.eye(size, dtype=np.float64)

        for ref in range(size):
            pivot_row = ref + int(np.argmax(np.abs(upper[ref:, ref])))
            if upper[pivot_row, ref] == 0:
                raise SingularMatrixError(f"Matrix is singular, no pivot in column {ref}")
            if pivot_row != ref:
                upper[[ref, pivot_row], :] = upper[[pivot_row, ref], :]
                vector[[ref, pivot_row]] = vector[[pivot_row, ref]]
                lower[[ref, pivot_row], :ref] = lower[[pivot_row, ref], :ref]
            for row in range(ref + 1, size):
                factor = upper[row, ref] / upper[ref, ref]
                lower[row, ref] = factor
                upper[row, :] -= factor * upper[ref, :]

        return backward_solve(upper, forward_solve(lower, vector))


###############################################################################
# AffineTransform2D
###############################################################################
class AffineTransform2D:
    """A 3x3 homogeneous transform acting on 2D points as [x, y, 1].

    Instances are immutable. The inverse is never built explicitly:
    invert_apply solves the linear system through the configured
    LinearSolver instead (NoPivotLUSolver by default).
    """

    _matrix: NDArray[np.float64]
    _solver: LinearSolver

    def __init__(self, matrix: MatrixLike, solver: Optional[LinearSolver] = None):
        """Initialize from a 3x3 matrix.

        Args:
            matrix: the 3x3 homogeneous matrix
            solver (LinearSolver, optional): used by invert_apply. Defaults to NoPivotLUSolver().

        Raises:
            ValueError: If matrix is not of shape (3, 3).
        """
        array = np.array(matrix, dtype=np.float64)
        if array.shape != (3, 3):
            raise ValueError(f"Homogeneous 2D transform requires a 3x3 matrix, got shape {array.shape}")
        array.flags.writeable = False
        self._matrix = array
        self._solver = solver if solver is not None else NoPivotLUSolver()

    @classmethod
    def identity(cls) -> AffineTransform2D:
        """The identity transform."""
        return cls(np.eye(3))

    @classmethod
    def translation(cls, dx: float, dy: float) -> AffineTransform2D:
        """Translate by (dx, dy)."""
        return cls([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])

    @classmethod
    def scaling(cls, factor: float) -> AffineTransform2D:
        """Uniform scale about the origin."""
        return cls([[factor, 0.0, 0.0], [0.0, factor, 0.0], [0.0, 0.0, 1.0]])

    @classmethod
    def flip(cls) -> AffineTransform2D:
        """Mirror at the x-axis, y -> -y."""
        return cls([[1.0, 0.0, 0.0], [0.0, -1.0, 0.0], [0.0, 0.0, 1.0]])

    @property
    def matrix(self) -> NDArray[np.float64]:
        """Read-only 3x3 matrix."""
        return self._matrix

    @property
    def solver(self) -> LinearSolver:
        """Solver used by invert_apply."""
        return self._solver

    def with_solver(self, solver: LinearSolver) -> AffineTransform2D:
        """Same matrix, different solver for invert_apply."""
        return AffineTransform2D(self._matrix, solver)

    def compose(self, other: AffineTransform2D) -> AffineTransform2D:
        """self @ other: the result applies other first, then self."""
        return AffineTransform2D(self._matrix @ other.matrix, self._solver)

    def __matmul__(self, other: AffineTransform2D) -> AffineTransform2D:
        return self.compose(other)

    def apply(self, point: Union[Point, Tuple[float, float]]) -> Point:
        """Transform the point, M @ [x, y, 1], keeping the first two components."""
        result = self._matrix @ np.array([point[0], point[1], 1.0], dtype=np.float64)
        return Point(float(result[0]), float(result[1]))

    def invert_apply(self, point: Union[Point, Tuple[float, float]]) -> Point:
        """Inverse transform of the point by solving M @ w = [x, y, 1]."""
        result = self._solver.solve(self._matrix, [point[0], point[1], 1.0])
        return Point(float(result[0]), float(result[1]))

    # The axis helpers hold the other axis at 0. That is only correct while the
    # matrix has no x/y cross terms (no rotation or shear).

    def transform_x(self, x: float) -> float:
        """x-coordinate of apply((x, 0))."""
        return self.apply((x, 0.0)).x

    def transform_y(self, y: float) -> float:
        """y-coordinate of apply((0, y))."""
        return self.apply((0.0, y)).y

    def inverse_transform_x(self, x: float) -> float:
        """x-coordinate of invert_apply((x, 0))."""
        return self.invert_apply((x, 0.0)).x

    def inverse_transform_y(self, y: float) -> float:
        """y-coordinate of invert_apply((0, y))."""
        return self.invert_apply((0.0, y)).y

    def __repr__(self) -> str:
        return f"AffineTransform2D({self._matrix.tolist()})"


def main():
    """Invert a scale-by-3 transform."""
    print(AffineTransform2D.scaling(3.0).invert_apply(Point(1.0, 1.0)))


if __name__ == "__main__":
    main()
