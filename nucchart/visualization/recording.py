"""
In-memory renderer.

Keeps everything the chart draws as plain dataclasses so the chart can run
headless: tests inspect the scene, click buttons and step animations with an
explicit clock.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from nucchart.chart.legend import Legend
from nucchart.chart.scales import AxisTicks
from nucchart.chart.transform import Transition, ViewTransform
from nucchart.visualization.base import Line, Rect, Renderer, Text

logger = logging.getLogger(__name__)


class RecordingRenderer(Renderer):
    """
    Renderer that records primitives instead of drawing them.

    Args:
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        legend_width: Horizontal space the legend takes out of the viewport.
    """

    def __init__(self, width: float = 1024, height: float = 768, legend_width: float = 0.0):
        super().__init__()
        self.width = float(width)
        self.height = float(height)
        self._legend_width = float(legend_width)

        self.rects: List[Rect] = []
        self.lines: List[Line] = []
        self.texts: List[Text] = []
        self.notification: Optional[str] = None
        self.buttons: Dict[str, Callable[[], None]] = {}
        self.button_containers: Dict[str, Any] = {}
        self.legend: Optional[Legend] = None
        self.transforms: List[ViewTransform] = []
        self.ticks: Optional[Tuple[AxisTicks, AxisTicks]] = None
        self.animations: List[Tuple[Transition, Callable[[ViewTransform], None]]] = []
        self.controller = None

    # ---- scene -------------------------------------------------------------

    def viewport_size(self) -> Tuple[float, float]:
        return self.width, self.height

    def draw_rect(self, rect: Rect) -> None:
        self.rects.append(rect)

    def draw_line(self, line: Line) -> None:
        self.lines.append(line)

    def draw_text(self, text: Text) -> None:
        self.texts.append(text)

    def clear(self) -> None:
        super().clear()
        self.rects.clear()
        self.lines.clear()
        self.texts.clear()
        self.transforms.clear()
        self.ticks = None
        for transition, _ in self.animations:
            transition.cancel()
        self.animations.clear()
        self.controller = None

    def shapes_in(self, layer: str) -> list:
        """All primitives drawn in ``layer``."""
        return [s for s in (*self.rects, *self.lines, *self.texts) if s.layer == layer]

    def visible_shapes(self) -> list:
        return [s for s in (*self.rects, *self.lines, *self.texts) if self.layer_visible(s.layer)]

    # ---- view --------------------------------------------------------------

    @property
    def current_transform(self) -> Optional[ViewTransform]:
        return self.transforms[-1] if self.transforms else None

    def apply_transform(self, transform: ViewTransform, x_ticks: AxisTicks, y_ticks: AxisTicks) -> None:
        self.transforms.append(transform)
        self.ticks = (x_ticks, y_ticks)

    def animate(self, transition: Transition, on_frame: Callable[[ViewTransform], None]) -> None:
        self.animations.append((transition, on_frame))

    def advance(self, now: Optional[float] = None) -> int:
        """
        Step every pending animation once.

        Returns the number of animations still running afterwards.
        """
        running = []
        for transition, on_frame in self.animations:
            if transition.cancelled:
                continue
            on_frame(transition.step(now))
            if transition.active:
                running.append((transition, on_frame))
        self.animations = running
        return len(running)

    def finish_animations(self) -> None:
        """Jump every pending animation to its end state."""
        pending, self.animations = self.animations, []
        for transition, on_frame in pending:
            if not transition.cancelled:
                on_frame(transition.finish())

    def attach_interaction(self, controller) -> None:
        self.controller = controller

    # ---- notification ------------------------------------------------------

    def show_notification(self, message: str) -> None:
        self.notification = message

    def hide_notification(self) -> None:
        self.notification = None

    # ---- buttons -----------------------------------------------------------

    def add_button(self, container: Any, label: str, on_click: Callable[[], None]) -> str:
        self.buttons[label] = on_click
        self.button_containers[label] = container
        return label

    def click(self, label: str) -> None:
        """Simulate a click; disabled buttons ignore it."""
        if not self.buttons_enabled:
            logger.debug(f"Button {label!r} is disabled")
            return
        self.buttons[label]()

    # ---- legend ------------------------------------------------------------

    def draw_legend(self, legend: Legend) -> None:
        self.legend = legend

    def clear_legend(self) -> None:
        self.legend = None

    def legend_width(self) -> float:
        return self._legend_width
