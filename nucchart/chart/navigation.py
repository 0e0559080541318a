"""
Navigation Controller
=====================

Pan/zoom state machine of one chart::

    Unattached --attach()--> Attached --zoom_by / pan_by / navigate_to--> Attached
        ^                                                                    |
        +------------------------------detach()------------------------------+

While unattached every move is a no-op.  Each move computes its target from
the *declared* transform (the end state of the last request, not whatever
frame is on screen), makes that target the new declared transform, cancels
the running transition and starts a new one from the on-screen frame.  The
latest request always wins.
"""

import logging
import math
import time
from typing import Callable, Mapping, Optional, Tuple

from nucchart.chart.geometry import CellGeometry
from nucchart.chart.transform import Transition, ViewTransform, centering_transform
from nucchart.data.identifiers import parse_to_id

logger = logging.getLogger(__name__)

FrameCallback = Callable[[ViewTransform], None]
Scheduler = Callable[[Transition, FrameCallback], None]


class NavigationController:
    """
    Owns the view transform of one chart.

    Parameters
    ----------
    cell_size : float
        Cell size in content pixels (pan steps are in cells).
    zoom_duration : float
        Seconds for zoom and pan transitions.
    navigate_duration : float
        Seconds for navigation transitions.
    clock : callable
        Time source handed to transitions.
    """

    def __init__(
        self,
        cell_size: float = 64.0,
        zoom_duration: float = 1.0,
        navigate_duration: float = 4.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cell_size = cell_size
        self.zoom_duration = zoom_duration
        self.navigate_duration = navigate_duration
        self._clock = clock

        self._transform: Optional[ViewTransform] = None
        self._visible: Optional[ViewTransform] = None
        self._viewport: Tuple[float, float] = (0.0, 0.0)
        self._transition: Optional[Transition] = None
        self._on_frame: Optional[FrameCallback] = None
        self._scheduler: Optional[Scheduler] = None

    # -----------------------------------------------------------------
    # State
    # -----------------------------------------------------------------

    @property
    def attached(self) -> bool:
        return self._transform is not None

    @property
    def transform(self) -> Optional[ViewTransform]:
        """Declared transform (end state of the latest request)."""
        return self._transform

    @property
    def visible_transform(self) -> Optional[ViewTransform]:
        """Transform of the last frame put on screen."""
        return self._visible

    @property
    def viewport(self) -> Tuple[float, float]:
        return self._viewport

    @property
    def transition(self) -> Optional[Transition]:
        """Running transition, if any."""
        if self._transition is not None and self._transition.active:
            return self._transition
        return None

    def attach(
        self,
        initial: ViewTransform,
        viewport: Tuple[float, float],
        on_frame: FrameCallback,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        """Start managing a freshly drawn chart; ``initial`` is applied at once."""
        self.detach()
        self._viewport = (float(viewport[0]), float(viewport[1]))
        self._on_frame = on_frame
        self._scheduler = scheduler
        self._transform = initial
        self._show(initial)
        logger.debug(f"Navigation attached at {initial} (viewport {self._viewport})")

    def detach(self) -> None:
        self._cancel_transition()
        self._transform = None
        self._visible = None
        self._on_frame = None
        self._scheduler = None

    def resize(self, viewport: Tuple[float, float]) -> None:
        """Update the viewport size used to centre zooms and navigation."""
        self._viewport = (float(viewport[0]), float(viewport[1]))

    # -----------------------------------------------------------------
    # Moves
    # -----------------------------------------------------------------

    def set_transform(self, transform: ViewTransform) -> None:
        """Apply a transform immediately (direct user interaction)."""
        if not self.attached:
            return
        self._cancel_transition()
        self._transform = transform
        self._show(transform)

    def zoom_by(self, factor: float) -> None:
        """Zoom by ``factor`` about the viewport centre."""
        if not self.attached:
            logger.debug("zoom_by ignored: no chart drawn")
            return
        if not (math.isfinite(factor) and factor > 0):
            logger.warning(f"zoom_by ignored: factor must be positive and finite, got {factor}")
            return
        k = self._transform.k * factor
        if not (math.isfinite(k) and k > 0):
            logger.warning(f"zoom_by ignored: scale {k} out of range at factor {factor}")
            return
        center = (self._viewport[0] / 2, self._viewport[1] / 2)
        self._move_to(self._transform.scaled_about(factor, center), self.zoom_duration)

    def pan_by(self, cells_x: float, cells_y: float) -> None:
        """Translate by whole cells (content space)."""
        if not self.attached:
            logger.debug("pan_by ignored: no chart drawn")
            return
        target = self._transform.translate(cells_x * self.cell_size, cells_y * self.cell_size)
        if not (math.isfinite(target.x) and math.isfinite(target.y)):
            logger.warning(f"pan_by ignored: offset must be finite, got ({cells_x}, {cells_y})")
            return
        self._move_to(target, self.zoom_duration)

    def center_on(self, geometry: CellGeometry, duration: Optional[float] = None) -> None:
        """Animate to scale 1 with ``geometry`` in the middle of the viewport."""
        if not self.attached:
            return
        target = centering_transform(geometry.x, geometry.y, self._viewport, self.cell_size)
        self._move_to(target, self.navigate_duration if duration is None else duration)

    def navigate_to(
        self,
        raw: str,
        cells: Mapping[str, CellGeometry],
    ) -> Optional[str]:
        """
        Centre the chart on the nuclide named by ``raw``.

        Returns the parsed identifier if a drawn cell has it, else None (and
        the transform is left alone).
        """
        nuclide = parse_to_id(raw)
        if nuclide is None:
            logger.debug(f"navigate_to: could not parse {raw!r}")
            return None
        if not self.attached:
            logger.debug(f"navigate_to({nuclide}) ignored: no chart drawn")
            return None
        geometry = cells.get(nuclide)
        if geometry is None:
            logger.debug(f"navigate_to: {nuclide} is not on the chart")
            return None
        self.center_on(geometry)
        logger.debug(f"Navigating to {nuclide} at ({geometry.x}, {geometry.y})")
        return nuclide

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _show(self, transform: ViewTransform) -> None:
        self._visible = transform
        if self._on_frame is not None:
            self._on_frame(transform)

    def _cancel_transition(self) -> None:
        if self._transition is not None:
            self._transition.cancel()
            self._transition = None

    def _move_to(self, target: ViewTransform, duration: float) -> None:
        start = self._visible or self._transform
        self._cancel_transition()
        self._transform = target

        if duration <= 0 or self._scheduler is None:
            self._show(target)
            return

        transition = Transition(start, target, duration, self._viewport, clock=self._clock)
        self._transition = transition

        def on_frame(frame: ViewTransform) -> None:
            # Frames of a superseded transition are dropped
            if transition is self._transition and not transition.cancelled:
                self._show(frame)

        self._scheduler(transition, on_frame)
