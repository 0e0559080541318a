"""Tests for the navigation state machine."""

import pytest

from nucchart.chart.geometry import CellGeometry
from nucchart.chart.navigation import NavigationController
from nucchart.chart.transform import ViewTransform, centering_transform

VIEWPORT = (1024, 768)
INITIAL = ViewTransform(5.5, 160, 736)
CELLS = {
    'He4': CellGeometry(128, -128, 64, 64),
    'H3': CellGeometry(128, -64, 64, 64),
}


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class Harness:
    """Controller wired to a frame log and a manual scheduler."""

    def __init__(self, scheduled=True):
        self.clock = FakeClock()
        self.frames = []
        self.scheduled = []
        self.controller = NavigationController(cell_size=64, clock=self.clock)
        self.controller.attach(
            INITIAL, VIEWPORT, self.frames.append,
            scheduler=self._schedule if scheduled else None,
        )

    def _schedule(self, transition, on_frame):
        self.scheduled.append((transition, on_frame))

    def run(self, index=-1, now=None):
        transition, on_frame = self.scheduled[index]
        on_frame(transition.step(now))


# ---------------------------------------------------------------------------
# Unattached
# ---------------------------------------------------------------------------

class TestUnattached:
    def test_moves_are_no_ops(self):
        controller = NavigationController()
        controller.zoom_by(2)
        controller.pan_by(5, 0)
        assert controller.transform is None
        assert not controller.attached

    def test_navigate_returns_none(self):
        assert NavigationController().navigate_to('He4', CELLS) is None

    def test_detach(self):
        h = Harness()
        h.controller.detach()
        assert not h.controller.attached
        h.controller.zoom_by(2)
        assert h.controller.transform is None


# ---------------------------------------------------------------------------
# Immediate moves (no scheduler)
# ---------------------------------------------------------------------------

class TestImmediateMoves:
    def test_attach_shows_initial(self):
        h = Harness(scheduled=False)
        assert h.frames == [INITIAL]
        assert h.controller.transform == INITIAL

    def test_zoom_about_centre(self):
        h = Harness(scheduled=False)
        h.controller.zoom_by(2)
        t = h.controller.transform
        assert t.k == pytest.approx(11)
        assert t.invert((512, 384)) == pytest.approx(INITIAL.invert((512, 384)))
        assert h.frames[-1] == t

    def test_pan_in_cells(self):
        h = Harness(scheduled=False)
        h.controller.pan_by(5, 0)
        assert h.controller.transform == INITIAL.translate(320, 0)

    def test_zoom_in_then_out_round_trips(self):
        h = Harness(scheduled=False)
        h.controller.zoom_by(2)
        h.controller.zoom_by(0.5)
        assert h.controller.transform.is_close(INITIAL)

    def test_non_positive_factor_ignored(self, caplog):
        h = Harness(scheduled=False)
        h.controller.zoom_by(0)
        assert h.controller.transform == INITIAL
        assert 'factor must be positive' in caplog.text

    @pytest.mark.parametrize('factor', [float('inf'), float('nan'), 1e308])
    def test_out_of_range_factor_ignored(self, factor, caplog):
        h = Harness(scheduled=False)
        h.controller.zoom_by(factor)
        assert h.controller.transform == INITIAL
        assert 'zoom_by ignored' in caplog.text

    @pytest.mark.parametrize('cells', [(float('inf'), 0), (0, float('nan')), (1e308, 0)])
    def test_non_finite_pan_ignored(self, cells, caplog):
        h = Harness(scheduled=False)
        h.controller.pan_by(*cells)
        assert h.controller.transform == INITIAL
        assert 'pan_by ignored' in caplog.text

    def test_resize_moves_zoom_centre(self):
        h = Harness(scheduled=False)
        h.controller.resize((512, 384))
        h.controller.zoom_by(2)
        t = h.controller.transform
        assert t.invert((256, 192)) == pytest.approx(INITIAL.invert((256, 192)))


# ---------------------------------------------------------------------------
# Animated moves
# ---------------------------------------------------------------------------

class TestAnimatedMoves:
    def test_declared_transform_is_synchronous(self):
        h = Harness()
        h.controller.zoom_by(2)
        assert h.controller.transform.k == pytest.approx(11)
        assert h.controller.visible_transform == INITIAL
        assert len(h.scheduled) == 1

    def test_frames_reach_target(self):
        h = Harness()
        h.controller.zoom_by(2)
        h.run(now=1.0)
        assert h.controller.visible_transform == h.controller.transform
        assert h.controller.transition is None

    def test_durations(self):
        h = Harness()
        h.controller.zoom_by(2)
        h.controller.navigate_to('He4', CELLS)
        assert [t.duration for t, _ in h.scheduled] == [1.0, 4.0]

    def test_moves_compose_on_declared_transform(self):
        h = Harness()
        h.controller.zoom_by(2)
        h.controller.zoom_by(2)
        assert h.controller.transform.k == pytest.approx(22)

    def test_latest_request_wins(self):
        h = Harness()
        h.controller.zoom_by(2)
        h.controller.pan_by(5, 0)
        first, first_frame = h.scheduled[0]
        assert first.cancelled

        # A late frame of the superseded transition is dropped
        before = list(h.frames)
        first_frame(first.end)
        assert h.frames == before

        h.run(now=1.0)
        assert h.controller.visible_transform == h.controller.transform

    def test_new_transition_starts_from_visible_frame(self):
        h = Harness()
        h.controller.zoom_by(2)
        h.run(now=0.5)
        midway = h.controller.visible_transform
        h.controller.zoom_by(2)
        assert h.scheduled[-1][0].start == midway

    def test_set_transform_cancels(self):
        h = Harness()
        h.controller.zoom_by(2)
        target = ViewTransform(3, 0, 0)
        h.controller.set_transform(target)
        assert h.scheduled[0][0].cancelled
        assert h.controller.transform == target
        assert h.frames[-1] == target


# ---------------------------------------------------------------------------
# navigate_to
# ---------------------------------------------------------------------------

class TestNavigateTo:
    def test_hit(self):
        h = Harness()
        assert h.controller.navigate_to('he-4', CELLS) == 'He4'
        assert h.controller.transform == centering_transform(128, -128, VIEWPORT, 64)

    def test_miss_leaves_transform(self):
        h = Harness()
        h.controller.zoom_by(2)
        before = h.controller.transform
        assert h.controller.navigate_to('U235', CELLS) is None
        assert h.controller.transform == before
        assert len(h.scheduled) == 1

    def test_unparseable(self):
        h = Harness()
        assert h.controller.navigate_to('???', CELLS) is None
        assert h.controller.transform == INITIAL
