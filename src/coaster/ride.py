"""Frictionless ride of a single rider along a track."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator

from coaster.common import DEFAULT_GRAVITY
from coaster.integrators import runge_kutta_step
from coaster.track import Track

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RideState:
    """Position and speed of the rider at time t."""

    t: float
    x: float
    y: float
    speed: float
    finished: bool = False


###############################################################################
# Ride
###############################################################################
class Ride:
    """A rider sliding along a track under gravity, without friction.

    Energy conservation gives the speed at every position,
        v(x)^2 = v0^2 + 2 g (h(x0) - h(x)),
    and the horizontal velocity is v / sqrt(1 + h'(x)^2). The position is
    advanced with a Runge-Kutta step. The ride finishes when the next step
    would leave the track (the rider stays at the last position on the track)
    or when the rider runs out of speed.
    """

    def __init__(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        track: Track,
        x0: float,
        speed: float = 1.0,
        gravity: float = DEFAULT_GRAVITY,
        direction: int = 1,
    ):
        """Initialize the ride.

        Args:
            track (Track): the track to ride on
            x0 (float): horizontal start position, must lie on the track
            speed (float, optional): initial speed along the track. Defaults to 1.
            gravity (float, optional): gravitational acceleration. Defaults to DEFAULT_GRAVITY.
            direction (int, optional): +1 to ride towards larger x, -1 towards smaller x.

        Raises:
            ValueError: If x0 is off the track, speed is negative or direction is not +1/-1.
        """
        if not track.contains(x0):
            raise ValueError(f"Start position {x0} is not on the track")
        if speed < 0:
            raise ValueError(f"Initial speed must not be negative, got {speed}")
        if direction not in (1, -1):
            raise ValueError(f"Direction must be +1 or -1, got {direction}")

        self._track = track
        self._gravity = gravity
        self._direction = direction
        self._energy = speed * speed + 2.0 * gravity * track.height(x0)
        self._state = RideState(0.0, x0, track.height(x0), speed, False)

    @property
    def state(self) -> RideState:
        """The current state."""
        return self._state

    def speed_squared(self, x: float) -> float:
        """v^2 at horizontal position x from energy conservation."""
        return self._energy - 2.0 * self._gravity * self._track.height(x)

    def _horizontal_velocity(self, _t: float, x: float) -> float:
        speed = math.sqrt(max(self.speed_squared(x), 0.0))
        slant = self._track.slant(x)
        return self._direction * speed / math.sqrt(1.0 + slant * slant)

    def step(self, dt: float) -> RideState:
        """Advance the ride by dt and return the new state."""
        state = self._state
        if state.finished:
            return state

        x = runge_kutta_step(state.x, state.t, dt, self._horizontal_velocity)
        t = state.t + dt

        if not self._track.contains(x):
            logger.debug("Rider left the track at t=%s", t)
            self._state = RideState(t, state.x, state.y, state.speed, True)
            return self._state

        speed_squared = self.speed_squared(x)
        stalled = speed_squared <= 0
        if stalled:
            logger.debug("Rider stalled at x=%s, t=%s", x, t)
        self._state = RideState(t, x, self._track.height(x), math.sqrt(max(speed_squared, 0.0)), stalled)
        return self._state

    def run(self, dt: float, max_steps: int) -> Iterator[RideState]:
        """Yield the states of up to max_steps steps, stopping after the ride finished."""
        for _ in range(max_steps):
            state = self.step(dt)
            yield state
            if state.finished:
                break
