"""Tests for view transforms, zoom interpolation and transitions."""

import logging

import pytest

from nucchart.chart.transform import (
    IDENTITY,
    Transition,
    ViewTransform,
    centering_transform,
    ease_cubic_in_out,
    fit_transform,
    interpolate_zoom,
)
from nucchart.chart.scales import LinearScale

VIEWPORT = (1024, 768)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


# ---------------------------------------------------------------------------
# ViewTransform
# ---------------------------------------------------------------------------

class TestViewTransform:
    def test_identity(self):
        assert IDENTITY == ViewTransform(1, 0, 0)
        assert IDENTITY.apply((3, 4)) == (3, 4)

    def test_translate_is_in_content_space(self):
        assert ViewTransform(2, 10, 20).translate(5, 5) == ViewTransform(2, 20, 30)

    def test_scale(self):
        assert ViewTransform(2, 10, 20).scale(3) == ViewTransform(6, 10, 20)

    def test_scaled_about_keeps_point_fixed(self):
        t = ViewTransform(1.5, 40, -20).scaled_about(2, (100, 100))
        assert t.k == 3
        assert t.apply(ViewTransform(1.5, 40, -20).invert((100, 100))) == pytest.approx((100, 100))

    def test_invert(self):
        t = ViewTransform(4, -10, 7)
        assert t.invert(t.apply((12.5, -3))) == pytest.approx((12.5, -3))
        assert t.invert_x(t.apply_x(9)) == pytest.approx(9)
        assert t.invert_y(t.apply_y(-9)) == pytest.approx(-9)

    def test_rescale(self):
        scale = LinearScale((0, 10), (0, 100))
        rescaled = ViewTransform(2, 0, 0).rescale_x(scale)
        assert rescaled.domain == pytest.approx((0, 5))
        assert rescaled.range == scale.range

    @pytest.mark.parametrize('k', [0, -1, float('inf')])
    def test_invalid_scale(self, k):
        with pytest.raises(ValueError):
            ViewTransform(k, 0, 0)

    def test_is_close(self):
        assert ViewTransform(1, 0, 0).is_close(ViewTransform(1 + 1e-12, 1e-12, 0))
        assert not ViewTransform(1, 0, 0).is_close(ViewTransform(1, 1, 0))


# ---------------------------------------------------------------------------
# Initial and navigation transforms
# ---------------------------------------------------------------------------

class TestFitTransform:
    def test_small_chart(self):
        t = fit_transform(2, 2, VIEWPORT, cell_size=64, em=16)
        assert t == ViewTransform(5.5, 160, 736)

    def test_legend_width(self):
        t = fit_transform(2, 2, VIEWPORT, cell_size=64, em=16, legend_width=128)
        # usable width 800 still exceeds the 704 px height
        assert t.k == 5.5
        assert t.x == pytest.approx((800 - 704) / 2 + 48 + 128)

    def test_zero_extent_counts_as_one_cell(self):
        t = fit_transform(0, 0, VIEWPORT, cell_size=64, em=16)
        assert t.k == 11

    def test_no_room(self, caplog):
        with caplog.at_level(logging.WARNING, logger='nucchart.chart.transform'):
            t = fit_transform(10, 10, (50, 50))
        assert t.k == 1
        assert 'no room' in caplog.text


class TestCenteringTransform:
    def test_cell_lands_in_middle(self):
        t = centering_transform(128, -128, VIEWPORT, cell_size=64)
        assert t == ViewTransform(1, 352, 480)
        assert t.apply((128 + 32, -128 + 32)) == (512, 384)


# ---------------------------------------------------------------------------
# Interpolation
# ---------------------------------------------------------------------------

class TestInterpolation:
    @pytest.mark.parametrize('t, expected', [(0, 0), (0.5, 0.5), (1, 1)])
    def test_ease(self, t, expected):
        assert ease_cubic_in_out(t) == pytest.approx(expected)

    def test_ease_is_monotonic(self):
        values = [ease_cubic_in_out(i / 20) for i in range(21)]
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_endpoints(self):
        path = interpolate_zoom((0, 0, 100), (500, 200, 25))
        assert path(0) == pytest.approx((0, 0, 100), abs=1e-9)
        assert path(1) == pytest.approx((500, 200, 25), abs=1e-9)

    def test_pure_zoom(self):
        path = interpolate_zoom((10, 10, 100), (10, 10, 25))
        assert path(0.5) == pytest.approx((10, 10, 50))

    def test_long_pan_zooms_out(self):
        path = interpolate_zoom((0, 0, 100), (10000, 0, 100))
        assert path(0.5)[2] > 100


# ---------------------------------------------------------------------------
# Transition
# ---------------------------------------------------------------------------

class TestTransition:
    def setup_method(self):
        self.clock = FakeClock()
        self.end = IDENTITY.scaled_about(2, (512, 384))
        self.transition = Transition(IDENTITY, self.end, 1.0, VIEWPORT, clock=self.clock)

    def test_starts_at_start(self):
        assert self.transition.step() == IDENTITY
        assert self.transition.active

    def test_ends_at_end(self):
        self.clock.now = 1.0
        assert self.transition.step() == self.end
        assert self.transition.done
        assert not self.transition.active

    def test_midpoint(self):
        self.clock.now = 0.5
        frame = self.transition.step()
        assert 1 < frame.k < 2
        # Zooming about the centre keeps it fixed
        assert frame.invert((512, 384)) == pytest.approx((512, 384))

    def test_explicit_time(self):
        assert self.transition.progress(0.25) == 0.25
        assert self.transition.step(2.0) == self.end

    def test_cancel(self):
        self.transition.cancel()
        assert self.transition.cancelled
        assert not self.transition.active

    def test_finish(self):
        assert self.transition.finish() == self.end
        assert self.transition.done

    def test_zero_duration(self):
        t = Transition(IDENTITY, self.end, 0, VIEWPORT, clock=self.clock)
        assert t.done
        assert t.step() == self.end
