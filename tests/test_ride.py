"""Test module for coaster.ride

The tests are run using pytest.
"""

import pytest

from coaster.common import DEFAULT_GRAVITY
from coaster.ride import Ride, RideState
from coaster.track import CubicTrack


@pytest.fixture
def flat():
    """Level track at height 5 from x = 0 to x = 100."""
    return CubicTrack.from_points([(0.0, 5.0), (100.0, 5.0)])


@pytest.fixture
def slope():
    """Straight downhill track from (0, 10) to (10, 0)."""
    return CubicTrack.from_points([(0.0, 10.0), (10.0, 0.0)])


class TestRide:
    """Test the frictionless ride."""

    def test_initial_state(self, flat):
        """The ride starts at time 0 on the track with the given speed."""
        ride = Ride(flat, 10.0, speed=2.0)
        assert ride.state == RideState(0.0, 10.0, 5.0, 2.0, False)

    def test_constant_speed_on_flat_track(self, flat):
        """Without height changes the rider keeps its speed."""
        ride = Ride(flat, 10.0, speed=2.0)
        state = ride.step(0.5)
        assert state.x == pytest.approx(11.0)
        assert state.t == pytest.approx(0.5)
        assert state.speed == pytest.approx(2.0)
        assert not state.finished

    def test_backwards(self, flat):
        """Direction -1 rides towards smaller x."""
        ride = Ride(flat, 10.0, speed=2.0, direction=-1)
        assert ride.step(1.0).x == pytest.approx(8.0)

    def test_leaving_the_track_finishes(self, flat):
        """A step past the end keeps the last position on the track."""
        ride = Ride(flat, 99.0, speed=2.0)
        state = ride.step(1.0)
        assert state.finished
        assert state.x == 99.0
        assert ride.step(1.0) is state

    def test_energy_conservation(self, slope):
        """v^2 = v0^2 + 2 g (h0 - h) along the way down."""
        ride = Ride(slope, 0.0, speed=1.0)
        for state in ride.run(0.01, 50):
            assert state.speed**2 == pytest.approx(1.0 + 2.0 * DEFAULT_GRAVITY * (10.0 - state.y))
        assert ride.state.x > 0.0

    def test_start_at_rest_stalls(self, slope):
        """Without initial speed the rider never gets moving."""
        ride = Ride(slope, 0.0, speed=0.0)
        state = ride.step(0.1)
        assert state.finished
        assert state.x == 0.0

    def test_run_stops_when_finished(self, flat):
        """run yields until the ride is over."""
        ride = Ride(flat, 94.5, speed=1.0)
        states = list(ride.run(1.0, 100))
        assert states[-1].finished
        assert len(states) == 6

    def test_run_respects_max_steps(self, flat):
        """run yields at most max_steps states."""
        ride = Ride(flat, 0.0, speed=1.0)
        assert len(list(ride.run(0.1, 7))) == 7

    @pytest.mark.parametrize(
        "kwargs",
        [{"x0": -1.0}, {"x0": 101.0}, {"x0": 1.0, "speed": -1.0}, {"x0": 1.0, "direction": 0}],
    )
    def test_invalid_arguments(self, flat, kwargs):
        """Start off the track, negative speed and bad direction are rejected."""
        with pytest.raises(ValueError):
            Ride(flat, **kwargs)
