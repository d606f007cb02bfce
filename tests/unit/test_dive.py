"""Unit tests for the dive state machine."""

import pytest
from factories import make_point

from ideasea.navigation import DiveConfig, DiveMode, ProximityCandidate, Vessel, nearest_diveable
from ideasea.navigation.session import dive_check_switch, dive_enter, dive_exit


def candidate(idea_id: str, distance: float) -> ProximityCandidate:
    return ProximityCandidate(idea=make_point(idea_id, distance, 0.0), distance=distance)


class TestDiveMode:
    """Tests for DiveMode."""

    def test_switch_distance_below_threshold(self) -> None:
        """Test an unreachable switch distance is rejected."""
        with pytest.raises(ValueError):
            DiveMode(DiveConfig(threshold=100.0, switch_distance=100.0))

    def test_enter_and_exit(self) -> None:
        """Test the idle/diving transitions."""
        dive = DiveMode()
        idea = make_point("a", 0.0, 0.0)

        dive.enter(idea)
        assert dive.active
        assert dive.target is idea

        dive.exit()
        assert not dive.active
        assert dive.target is None

    def test_exit_when_idle(self) -> None:
        """Test exiting an idle dive is a no-op."""
        dive = DiveMode()
        dive.exit()
        assert not dive.active

    def test_enter_replaces_target(self) -> None:
        """Test entering while diving changes the target."""
        dive = DiveMode()
        dive.enter(make_point("a", 0.0, 0.0))
        dive.enter(make_point("b", 1.0, 0.0))
        assert dive.target.id == "b"

    def test_retarget_only_when_active(self) -> None:
        """Test retargeting an idle dive does nothing."""
        dive = DiveMode()
        dive.retarget(make_point("a", 0.0, 0.0))
        assert dive.target is None


class TestProximitySwitch:
    """Tests for proximity-driven target switching."""

    def test_idle_never_switches(self) -> None:
        """Test no switch happens outside a dive."""
        assert not DiveMode().check_proximity_switch([candidate("a", 1.0)])

    def test_switches_to_nearer_idea(self) -> None:
        """Test the target follows a new nearest idea within reach and notifies."""
        dive = DiveMode()
        switched = []
        dive.on_switch(switched.append)
        dive.enter(make_point("a", 0.0, 0.0))

        assert dive.check_proximity_switch([candidate("b", 79.0), candidate("a", 90.0)])
        assert dive.target.id == "b"
        assert [i.id for i in switched] == ["b"]

    def test_same_target_is_noop(self) -> None:
        """Test the current target being nearest is not a switch."""
        dive = DiveMode()
        dive.enter(make_point("a", 0.0, 0.0))
        assert not dive.check_proximity_switch([candidate("a", 0.0)])

    def test_out_of_reach(self) -> None:
        """Test candidates at or beyond the switch distance are ignored."""
        dive = DiveMode()
        dive.enter(make_point("a", 0.0, 0.0))
        assert not dive.check_proximity_switch([candidate("b", 80.0)])
        assert not dive.check_proximity_switch([])
        assert dive.target.id == "a"

    def test_function_api(self) -> None:
        """Test the plain dive functions drive the same state."""
        dive = DiveMode()
        dive_enter(dive, make_point("a", 0.0, 0.0))
        assert dive_check_switch(dive, [candidate("b", 5.0)])
        dive_exit(dive)
        assert not dive.active


class TestMagnet:
    """Tests for the magnetic pull."""

    def test_pulls_velocity_toward_target(self) -> None:
        """Test velocity gains a fraction of the offset to the target."""
        dive = DiveMode()
        vessel = Vessel(x=0.0, y=0.0)
        dive.enter(make_point("a", 100.0, -50.0))

        dive.apply_magnet(vessel)

        assert vessel.vx == pytest.approx(2.0)
        assert vessel.vy == pytest.approx(-1.0)

    def test_no_pull_when_idle(self) -> None:
        """Test an idle dive leaves the vessel alone."""
        vessel = Vessel(vx=1.0)
        DiveMode().apply_magnet(vessel)
        assert vessel.vx == 1.0


class TestNearestDiveable:
    """Tests for nearest_diveable."""

    def test_strictly_within_threshold(self) -> None:
        """Test the threshold itself is out of reach."""
        assert nearest_diveable([candidate("a", 150.0)], 150.0) is None
        assert nearest_diveable([candidate("a", 149.9)], 150.0).idea.id == "a"
        assert nearest_diveable([], 150.0) is None
