"""
View Transform & Transitions
============================

Pan/zoom state of a chart and the animated moves between two states.

A :class:`ViewTransform` maps content pixels to viewport pixels:

    viewport = content * k + (x, y)

Transitions interpolate between two transforms with the smooth zoom path of
van Wijk & Nuij ("Smooth and efficient zooming and panning", 2003), which
zooms out while travelling long distances and back in on arrival, eased with
a cubic in-out curve.  A :class:`Transition` is a cancellable task: whoever
drives it (a renderer timer, a test) calls :meth:`Transition.step` until it
is done or cancelled.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from nucchart.chart.scales import LinearScale

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

_RHO = math.sqrt(2)
_RHO2 = 2.0
_RHO4 = 4.0
_EPSILON2 = 1e-12


@dataclass(frozen=True)
class ViewTransform:
    """Uniform scale ``k`` followed by a translation ``(x, y)``."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if not (self.k > 0 and math.isfinite(self.k)):
            raise ValueError(f"ViewTransform scale must be positive and finite, got {self.k}")

    def scale(self, factor: float) -> 'ViewTransform':
        return ViewTransform(self.k * factor, self.x, self.y)

    def translate(self, tx: float, ty: float) -> 'ViewTransform':
        """Translate by (tx, ty) content pixels."""
        return ViewTransform(self.k, self.x + self.k * tx, self.y + self.k * ty)

    def scaled_about(self, factor: float, point: Point) -> 'ViewTransform':
        """Scale by ``factor`` keeping the viewport ``point`` fixed."""
        cx, cy = self.invert(point)
        k = self.k * factor
        return ViewTransform(k, point[0] - cx * k, point[1] - cy * k)

    def apply(self, point: Point) -> Point:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def apply_x(self, x: float) -> float:
        return x * self.k + self.x

    def apply_y(self, y: float) -> float:
        return y * self.k + self.y

    def invert(self, point: Point) -> Point:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def invert_x(self, x: float) -> float:
        return (x - self.x) / self.k

    def invert_y(self, y: float) -> float:
        return (y - self.y) / self.k

    def rescale_x(self, scale: LinearScale) -> LinearScale:
        """Scale whose domain is what ``scale``'s range shows through this view."""
        return scale.with_domain([float(scale.invert(self.invert_x(r))) for r in scale.range])

    def rescale_y(self, scale: LinearScale) -> LinearScale:
        return scale.with_domain([float(scale.invert(self.invert_y(r))) for r in scale.range])

    def is_close(self, other: 'ViewTransform', tol: float = 1e-9) -> bool:
        return (math.isclose(self.k, other.k, rel_tol=tol, abs_tol=tol)
                and math.isclose(self.x, other.x, rel_tol=tol, abs_tol=tol)
                and math.isclose(self.y, other.y, rel_tol=tol, abs_tol=tol))


IDENTITY = ViewTransform()


def fit_transform(
    largest_n: int,
    largest_z: int,
    viewport: Tuple[float, float],
    cell_size: float = 64.0,
    em: float = 16.0,
    legend_width: float = 0.0,
) -> ViewTransform:
    """
    Initial transform showing the whole chart.

    The usable area is the viewport minus 6 em (and the legend) horizontally
    and 4 em vertically for the axes.  The chart is scaled to fit it and the
    leftover slack is split evenly.  Content y is negative (Z grows upwards),
    so the chart is shifted down to sit above the bottom margin.
    """
    width, height = viewport
    usable_w = width - 6 * em - legend_width
    usable_h = height - 4 * em

    # Single-row or single-column charts still span one cell
    content_w = max(largest_n, 1) * cell_size
    content_h = max(largest_z, 1) * cell_size

    k = min(usable_w / content_w, usable_h / content_h)
    if not (k > 0 and math.isfinite(k)):
        logger.warning(f"Viewport {width}x{height} leaves no room for the chart; using scale 1")
        k = 1.0

    move_x = (usable_w - content_w * k) / 2
    move_y = (usable_h - content_h * k) / 2
    return ViewTransform(k, move_x + 3 * em + legend_width, usable_h + 2 * em - move_y)


def centering_transform(
    x: float,
    y: float,
    viewport: Tuple[float, float],
    cell_size: float = 64.0,
) -> ViewTransform:
    """Scale-1 transform putting the cell with top-left corner (x, y) in the middle."""
    width, height = viewport
    return IDENTITY.translate(
        -x + width / 2 - cell_size / 2,
        -y + height / 2 - cell_size / 2,
    ).scale(1)


# =============================================================================
# Interpolation
# =============================================================================

def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def interpolate_zoom(
    start: Tuple[float, float, float],
    end: Tuple[float, float, float],
) -> Callable[[float], Tuple[float, float, float]]:
    """
    Smooth zoom path between two views (centre x, centre y, width).

    Returns a function of t in [0, 1] giving the intermediate view.
    """
    ux0, uy0, w0 = start
    ux1, uy1, w1 = end
    dx = ux1 - ux0
    dy = uy1 - uy0
    d2 = dx * dx + dy * dy

    if d2 < _EPSILON2:
        # Same centre: pure zoom
        s = math.log(w1 / w0) / _RHO

        def zoom(t: float):
            return ux0 + t * dx, uy0 + t * dy, w0 * math.exp(_RHO * t * s)

        return zoom

    d1 = math.sqrt(d2)
    b0 = (w1 * w1 - w0 * w0 + _RHO4 * d2) / (2 * w0 * _RHO2 * d1)
    b1 = (w1 * w1 - w0 * w0 - _RHO4 * d2) / (2 * w1 * _RHO2 * d1)
    r0 = math.log(math.sqrt(b0 * b0 + 1) - b0)
    r1 = math.log(math.sqrt(b1 * b1 + 1) - b1)
    s_total = (r1 - r0) / _RHO

    def path(t: float):
        s = t * s_total
        cosh_r0 = math.cosh(r0)
        u = w0 / (_RHO2 * d1) * (cosh_r0 * math.tanh(_RHO * s + r0) - math.sinh(r0))
        return ux0 + u * dx, uy0 + u * dy, w0 * cosh_r0 / math.cosh(_RHO * s + r0)

    return path


class Transition:
    """
    Animated move from one transform to another.

    Args:
        start: Transform currently on screen.
        end: Target transform.
        duration: Seconds; 0 jumps straight to ``end``.
        viewport: (width, height) of the view, used as the zoom centre.
        clock: Time source in seconds.
    """

    def __init__(
        self,
        start: ViewTransform,
        end: ViewTransform,
        duration: float,
        viewport: Tuple[float, float],
        clock: Callable[[], float] = time.monotonic,
    ):
        self.start = start
        self.end = end
        self.duration = float(duration)
        self._clock = clock
        self.started_at = clock()
        self._cancelled = False
        self._done = self.duration <= 0

        width, height = viewport
        self._center = (width / 2, height / 2)
        self._span = max(width, height) or 1.0
        a = start.invert(self._center)
        b = end.invert(self._center)
        self._path = interpolate_zoom(
            (a[0], a[1], self._span / start.k),
            (b[0], b[1], self._span / end.k),
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    @property
    def active(self) -> bool:
        return not (self._done or self._cancelled)

    def cancel(self) -> None:
        self._cancelled = True

    def at(self, t: float) -> ViewTransform:
        """Transform at eased progress ``t`` in [0, 1]."""
        if t >= 1:
            return self.end
        if t <= 0:
            return self.start
        ux, uy, w = self._path(t)
        k = self._span / w
        return ViewTransform(k, self._center[0] - ux * k, self._center[1] - uy * k)

    def progress(self, now: Optional[float] = None) -> float:
        if self.duration <= 0:
            return 1.0
        now = self._clock() if now is None else now
        return min(1.0, max(0.0, (now - self.started_at) / self.duration))

    def step(self, now: Optional[float] = None) -> ViewTransform:
        """Transform for the current time; marks the transition done at the end."""
        p = self.progress(now)
        if p >= 1:
            self._done = True
            return self.end
        return self.at(ease_cubic_in_out(p))

    def finish(self) -> ViewTransform:
        """Jump to the end state."""
        self._done = True
        return self.end

    def __repr__(self):
        state = 'cancelled' if self._cancelled else 'done' if self._done else 'running'
        return f"Transition({self.start} -> {self.end}, {self.duration}s, {state})"
