"""Single-step ODE integrators and a finite difference derivative."""

from __future__ import annotations

from coaster.common import DEFAULT_DERIVATIVE_STEP, RateFunction, ScalarFunction


def euler_step(x: float, t: float, h: float, f: RateFunction) -> float:
    """Advance dx/dt = f(t, x) from t to t + h with the explicit Euler method."""
    return x + h * f(t, x)


def runge_kutta_step(x: float, t: float, h: float, f: RateFunction) -> float:
    """Advance dx/dt = f(t, x) from t to t + h with the classical fourth order Runge-Kutta method."""
    k1 = h * f(t, x)
    k2 = h * f(t + h / 2.0, x + k1 / 2.0)
    k3 = h * f(t + h / 2.0, x + k2 / 2.0)
    k4 = h * f(t + h, x + k3)
    return x + (k1 + 2.0 * k2 + 2.0 * k3 + k4) / 6.0


def approximate_derivative(x: float, f: ScalarFunction, h: float = DEFAULT_DERIVATIVE_STEP) -> float:
    """Centred difference (f(x + h) - f(x - h)) / 2h."""
    return (f(x + h) - f(x - h)) / (2.0 * h)
