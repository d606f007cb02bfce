"""Unit tests for the auto-zoom camera."""

import math

import pytest
from factories import make_point
from hypothesis import given
from hypothesis import strategies as st

from ideasea.navigation import (
    Camera,
    CameraConfig,
    ProximityCandidate,
    Vessel,
    VisitLog,
    compute_target_zoom,
    nearest_undimmed_distance,
)
from ideasea.navigation.camera import movement_factor, proximity_zoom
from ideasea.navigation.session import camera_update

CONFIG = CameraConfig()


class TestTargetZoom:
    """Tests for the target zoom computation."""

    def test_proximity_extremes(self) -> None:
        """Test far and close thresholds map to the zoom limits."""
        assert proximity_zoom(600.0, CONFIG) == pytest.approx(0.2)
        assert proximity_zoom(10_000.0, CONFIG) == pytest.approx(0.2)
        assert proximity_zoom(math.inf, CONFIG) == pytest.approx(0.2)
        assert proximity_zoom(40.0, CONFIG) == pytest.approx(2.0)
        assert proximity_zoom(0.0, CONFIG) == pytest.approx(2.0)

    def test_proximity_eases_in(self) -> None:
        """Test the midpoint uses the squared interpolation parameter."""
        assert proximity_zoom(320.0, CONFIG) == pytest.approx(0.2 + 0.25 * 1.8)

    def test_movement_factor(self) -> None:
        """Test stopped and cruising speeds."""
        assert movement_factor(1.0, CONFIG) == 0.0
        assert movement_factor(3.5, CONFIG) == pytest.approx(0.5)
        assert movement_factor(50.0, CONFIG) == 1.0

    def test_dive_overrides(self) -> None:
        """Test the dive zoom wins regardless of distance and speed."""
        assert compute_target_zoom(1000.0, 100.0, 0.3, dive_active=True) == 2.0

    def test_cruising(self) -> None:
        """Test fast movement pulls toward the cruising zoom."""
        assert compute_target_zoom(40.0, 100.0, 1.0, dive_active=False) == pytest.approx(0.3)

    def test_stopped(self) -> None:
        """Test a stopped vessel uses the proximity zoom."""
        assert compute_target_zoom(40.0, 0.0, 1.0, dive_active=False) == pytest.approx(2.0)


class TestNearestUndimmed:
    """Tests for skipping dimmed ideas."""

    def test_far_visited_skipped(self) -> None:
        """Test visited ideas beyond the dim distance do not pull."""
        visits = VisitLog()
        visits.visit("a")
        candidates = [
            ProximityCandidate(make_point("a", 200.0, 0.0), 200.0),
            ProximityCandidate(make_point("b", 300.0, 0.0), 300.0),
        ]
        assert nearest_undimmed_distance(candidates, visits, 120.0) == 300.0
        assert nearest_undimmed_distance(candidates, None, 120.0) == 200.0

    def test_close_visited_still_counts(self) -> None:
        """Test a visited idea within the dim distance still pulls."""
        visits = VisitLog()
        visits.visit("a")
        candidates = [ProximityCandidate(make_point("a", 50.0, 0.0), 50.0)]
        assert nearest_undimmed_distance(candidates, visits, 120.0) == 50.0

    def test_nothing_qualifies(self) -> None:
        """Test no candidates give infinity."""
        assert nearest_undimmed_distance([], None, 120.0) == math.inf


class TestCamera:
    """Tests for Camera."""

    def test_follows_smoothly(self) -> None:
        """Test one update moves a lerp fraction toward the target."""
        camera = Camera(800, 600)
        camera.follow(Vessel(x=100.0, y=-50.0))
        camera.update()
        assert camera.x == pytest.approx(8.0)
        assert camera.y == pytest.approx(-4.0)

    def test_dt_scaling(self) -> None:
        """Test two unit frames equal one double frame."""
        a = Camera(800, 600)
        b = Camera(800, 600)
        target = Vessel(x=100.0)
        a.follow(target)
        b.follow(target)
        a.update(1.0)
        a.update(1.0)
        b.update(2.0)
        assert a.x == pytest.approx(b.x)

    def test_viewport_occlusion(self) -> None:
        """Test a side panel shifts the view center left."""
        camera = Camera(1000, 800, CameraConfig(initial_zoom=1.0))
        camera.occluded_right = 200.0

        view = camera.viewport()

        assert (view.left, view.right) == (-400.0, 600.0)
        assert (view.top, view.bottom) == (-400.0, 400.0)
        assert camera.world_to_screen(0.0, 0.0) == (400.0, 400.0)
        assert camera.screen_to_world(400.0, 400.0) == (0.0, 0.0)

    def test_screen_world_round_trip(self) -> None:
        """Test screen and world transforms invert each other with a side panel."""
        camera = Camera(800, 600, CameraConfig(initial_zoom=0.75))
        camera.snap_to(120.0, -40.0)
        camera.resize(1600, 900)
        camera.occluded_right = 300.0

        for wx, wy in [(0.0, 0.0), (120.0, -40.0), (-3500.5, 2750.25), (5000.0, -5000.0)]:
            sx, sy = camera.world_to_screen(wx, wy)
            assert camera.screen_to_world(sx, sy) == pytest.approx((wx, wy))

        # The camera position sits at the center of the unoccluded area
        assert camera.world_to_screen(120.0, -40.0) == pytest.approx((650.0, 450.0))

    def test_camera_update_frame(self) -> None:
        """Test the frame reports the camera after the update."""
        camera = Camera(800, 600)
        frame = camera_update(camera, 1.0, Vessel(), dive_active=True, nearest_distance=math.inf)
        assert frame.zoom == camera.zoom
        assert camera.target_zoom == 2.0
        assert frame.zoom > 0.3

    @given(
        st.floats(allow_nan=False),
        st.floats(min_value=0.0, max_value=1000.0),
        st.integers(min_value=1, max_value=50),
    )
    def test_zoom_stays_in_range(self, target: float, dt: float, frames: int) -> None:
        """Test zoom never leaves [min_zoom, max_zoom]."""
        camera = Camera(800, 600)
        camera.follow(Vessel())
        camera.set_target_zoom(target)
        for _ in range(frames):
            camera.update(dt)
            assert camera.min_zoom <= camera.zoom <= camera.max_zoom
