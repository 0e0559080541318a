"""
Renderer Interface
==================

The chart engine draws through a :class:`Renderer`: an abstract 2D surface
that can draw rectangles, lines and text in content pixels, show axes, apply
a pan/zoom transform (optionally animated), toggle layers, and host a legend,
a notification line and navigation buttons.

Content coordinates have y pointing down (screen convention); the chart
places Z upwards by using negative y, so renderers draw exactly what they
are given.

Concrete renderers:
    RecordingRenderer   -- in-memory scene graph (headless, tests)
    MatplotlibRenderer  -- matplotlib figure (interactive, image export)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from nucchart.chart.geometry import CellGeometry
from nucchart.chart.legend import Legend
from nucchart.chart.presentation import (
    LAYER_CELLS,
    LAYER_DECAY_MODES,
    LAYER_HALFLIVES,
    LAYER_LABELS,
    LAYER_MAGIC_NUMBERS,
)
from nucchart.chart.scales import AxisTicks
from nucchart.chart.transform import Transition, ViewTransform

__all__ = [
    'LAYER_CELLS',
    'LAYER_DECAY_MODES',
    'LAYER_HALFLIVES',
    'LAYER_LABELS',
    'LAYER_MAGIC_NUMBERS',
    'Rect',
    'Line',
    'Text',
    'Renderer',
]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: str = 'transparent'
    stroke: Optional[str] = None
    stroke_width: float = 0.0
    layer: str = LAYER_CELLS
    tag: Optional[str] = None


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str = 'black'
    stroke_width: float = 1.0
    layer: str = LAYER_MAGIC_NUMBERS


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    font_size: float = 12.0
    fill: str = 'black'
    anchor: str = 'middle'
    layer: str = LAYER_LABELS
    tag: Optional[str] = None


class Renderer(ABC):
    """
    Drawing surface of one chart (and, optionally, its legend).

    Subclasses implement the drawing primitives; the cell lookup, layer
    visibility bookkeeping and button state have default implementations.
    """

    def __init__(self):
        self._cells: Dict[str, CellGeometry] = {}
        self._hidden_layers = set()
        self._buttons_enabled = True

    # ---- scene -------------------------------------------------------------

    @abstractmethod
    def viewport_size(self) -> Tuple[float, float]:
        """(width, height) of the chart surface in pixels."""

    @abstractmethod
    def draw_rect(self, rect: Rect) -> None:
        ...

    @abstractmethod
    def draw_line(self, line: Line) -> None:
        ...

    @abstractmethod
    def draw_text(self, text: Text) -> None:
        ...

    def clear(self) -> None:
        """Remove everything drawn on the chart surface."""
        self._cells.clear()

    def register_cell(self, cell_id: str, geometry: CellGeometry) -> None:
        """Remember where the cell tagged ``cell_id`` was drawn."""
        self._cells.setdefault(cell_id, geometry)

    def cell_geometry(self, cell_id: str) -> Optional[CellGeometry]:
        return self._cells.get(cell_id)

    @property
    def cells(self) -> Mapping[str, CellGeometry]:
        """Read-only view of the registered cells, used for navigation."""
        return MappingProxyType(self._cells)

    def set_layer_visible(self, layer: str, visible: bool) -> None:
        if visible:
            self._hidden_layers.discard(layer)
        else:
            self._hidden_layers.add(layer)

    def layer_visible(self, layer: str) -> bool:
        return layer not in self._hidden_layers

    # ---- view --------------------------------------------------------------

    @abstractmethod
    def apply_transform(
        self,
        transform: ViewTransform,
        x_ticks: AxisTicks,
        y_ticks: AxisTicks,
    ) -> None:
        """Show the content through ``transform`` with the given axis ticks."""

    @abstractmethod
    def animate(
        self,
        transition: Transition,
        on_frame: Callable[[ViewTransform], None],
    ) -> None:
        """
        Drive ``transition``: call ``on_frame(transition.step())`` on a timer
        until it is done or cancelled.
        """

    def attach_interaction(self, controller) -> None:
        """Hook direct pan/zoom input up to a NavigationController."""

    # ---- notification ------------------------------------------------------

    @abstractmethod
    def show_notification(self, message: str) -> None:
        ...

    @abstractmethod
    def hide_notification(self) -> None:
        ...

    # ---- buttons -----------------------------------------------------------

    @abstractmethod
    def add_button(self, container: Any, label: str, on_click: Callable[[], None]) -> Any:
        """Add a push button to ``container``; returns the button handle."""

    def set_buttons_enabled(self, enabled: bool) -> None:
        self._buttons_enabled = enabled

    @property
    def buttons_enabled(self) -> bool:
        return self._buttons_enabled

    # ---- legend ------------------------------------------------------------

    @abstractmethod
    def draw_legend(self, legend: Legend) -> None:
        ...

    @abstractmethod
    def clear_legend(self) -> None:
        ...

    def legend_width(self) -> float:
        """Width the legend takes out of the chart viewport (0 if separate)."""
        return 0.0
