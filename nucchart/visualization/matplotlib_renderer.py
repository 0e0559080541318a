"""
Matplotlib Renderer
===================

Draws a nuclide chart into a matplotlib figure: chart axes on the left, a
legend column on the right (yield colour bar, decay-mode swatches and the
nuclide-format key).

The chart axes show content pixels directly.  A view transform is applied by
setting the axis limits to the content rectangle visible through it, so
panning and zooming never touch the artists themselves; only text sizes are
rescaled with the zoom level.

Interactive backends get:
    - scroll-wheel zoom about the cursor
    - click-and-drag panning
    - animated transitions on the canvas timer
    - zoom/pan push buttons

Example:
    >>> from nucchart import NuclideChart
    >>> from nucchart.visualization import MatplotlibRenderer
    >>>
    >>> renderer = MatplotlibRenderer(width=1200, height=800)
    >>> chart = NuclideChart(renderer)
    >>> chart.draw(records)
    >>> chart.navigate_to('U235')
    >>> renderer.finish_animations()
    >>> renderer.save('chart.png', dpi=150)
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import matplotlib.colors as mcolors
import matplotlib.lines as mlines
import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.widgets import Button

from nucchart.chart.legend import Legend
from nucchart.chart.presentation import LAYER_DECAY_MODES, TRANSPARENT, MalformedColorFormat, parse_rgb
from nucchart.chart.scales import AxisTicks
from nucchart.chart.transform import Transition, ViewTransform
from nucchart.visualization.base import Line, Rect, Renderer, Text

logger = logging.getLogger(__name__)

# Zoom factor per scroll-wheel step
SCROLL_ZOOM = 1.25

# Figure fractions: [left, bottom, width, height]
_CHART_BOX = [0.02, 0.02, 0.74, 0.96]
_CHART_BOX_NO_LEGEND = [0.02, 0.02, 0.96, 0.96]
_GRADIENT_BOX = [0.82, 0.58, 0.03, 0.34]
_DECAY_BOX = [0.79, 0.22, 0.2, 0.3]
_KEY_BOX = [0.82, 0.02, 0.1, 0.16]
_BUTTON_SIZE = 0.04


def to_mpl_color(color: Optional[str]):
    """Convert a chart colour ('rgb(r, g, b)', '#rrggbb', 'transparent') for matplotlib."""
    if color is None or color == TRANSPARENT:
        return 'none'
    if color.startswith('rgb('):
        r, g, b = parse_rgb(color)
        return (r / 255.0, g / 255.0, b / 255.0)
    if not mcolors.is_color_like(color):
        raise MalformedColorFormat(f"Unsupported colour {color!r}")
    return color


class MatplotlibRenderer(Renderer):
    """
    Renderer backed by a matplotlib figure.

    Args:
        figure: Existing figure to draw into; a new one is created if None.
        width: Figure width in pixels (new figures only).
        height: Figure height in pixels (new figures only).
        dpi: Figure resolution (new figures only).
        legend: Reserve a legend column on the right of the figure.
        frame_interval: Milliseconds between animation frames.

    Attributes:
        fig: The matplotlib Figure.
        ax: Axes holding the chart.
        legend_axes: Axes of the legend column (empty if ``legend`` is False).
    """

    def __init__(
        self,
        figure: Optional[Figure] = None,
        width: float = 1200,
        height: float = 800,
        dpi: float = 100,
        legend: bool = True,
        frame_interval: int = 30,
    ):
        super().__init__()
        if figure is None:
            figure = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self.fig = figure
        self.frame_interval = frame_interval
        self.has_legend = legend

        self.ax: Axes = self.fig.add_axes(_CHART_BOX if legend else _CHART_BOX_NO_LEGEND)
        self._setup_chart_axes()
        self.legend_axes: List[Axes] = []

        self._layers: Dict[str, List[Any]] = {}
        self._legend_layers: Dict[str, List[Any]] = {}
        self._texts: List[Tuple[Any, float]] = []
        self._notification = None
        self._buttons: List[Button] = []
        self._timers: List[Any] = []
        self._animations: List[Tuple[Transition, Callable[[ViewTransform], None]]] = []
        self._callbacks: List[int] = []
        self._drag_start = None
        self._transform: Optional[ViewTransform] = None

    def _setup_chart_axes(self) -> None:
        self.ax.set_autoscale_on(False)
        self.ax.xaxis.tick_top()
        self.ax.tick_params(labelsize=8, length=3)
        for spine in self.ax.spines.values():
            spine.set_linewidth(0.5)

    @property
    def _px_to_pt(self) -> float:
        return 72.0 / self.fig.dpi

    # -----------------------------------------------------------------
    # Scene
    # -----------------------------------------------------------------

    def viewport_size(self) -> Tuple[float, float]:
        bbox = self.ax.bbox
        return float(bbox.width), float(bbox.height)

    def _register(self, artist, layer: str, legend: bool = False) -> None:
        layers = self._legend_layers if legend else self._layers
        layers.setdefault(layer, []).append(artist)
        artist.set_visible(self.layer_visible(layer))

    def draw_rect(self, rect: Rect) -> None:
        patch = mpatches.Rectangle(
            (rect.x, rect.y), rect.width, rect.height,
            facecolor=to_mpl_color(rect.fill),
            edgecolor=to_mpl_color(rect.stroke),
            linewidth=rect.stroke_width * self._px_to_pt,
            gid=rect.tag,
        )
        self.ax.add_patch(patch)
        self._register(patch, rect.layer)

    def draw_line(self, line: Line) -> None:
        artist = mlines.Line2D(
            [line.x1, line.x2], [line.y1, line.y2],
            color=to_mpl_color(line.stroke),
            linewidth=line.stroke_width * self._px_to_pt,
        )
        self.ax.add_line(artist)
        self._register(artist, line.layer)

    def draw_text(self, text: Text) -> None:
        ha = {'middle': 'center', 'start': 'left', 'end': 'right'}.get(text.anchor, 'center')
        artist = self.ax.text(
            text.x, text.y, text.text,
            color=to_mpl_color(text.fill),
            ha=ha, va='baseline',
            fontsize=text.font_size * self._px_to_pt,
            clip_on=True,
            gid=text.tag,
        )
        self._texts.append((artist, text.font_size))
        self._register(artist, text.layer)

    def clear(self) -> None:
        super().clear()
        self._stop_animations()
        self._disconnect_interaction()
        self.ax.cla()
        self._setup_chart_axes()
        self._layers = {}
        self._texts = []
        self._notification = None
        self._transform = None
        self.fig.canvas.draw_idle()

    def set_layer_visible(self, layer: str, visible: bool) -> None:
        super().set_layer_visible(layer, visible)
        for artist in self._layers.get(layer, []) + self._legend_layers.get(layer, []):
            artist.set_visible(visible)
        self.fig.canvas.draw_idle()

    # -----------------------------------------------------------------
    # View
    # -----------------------------------------------------------------

    @property
    def transform(self) -> Optional[ViewTransform]:
        """Transform currently shown."""
        return self._transform

    def apply_transform(self, transform: ViewTransform, x_ticks: AxisTicks, y_ticks: AxisTicks) -> None:
        width, height = self.viewport_size()
        x0, y0 = transform.invert((0.0, 0.0))
        x1, y1 = transform.invert((width, height))
        self.ax.set_xlim(x0, x1)
        # Content y grows downwards
        self.ax.set_ylim(y1, y0)

        self.ax.set_xticks(
            [transform.invert_x(p) for p in x_ticks.positions], labels=list(x_ticks.labels)
        )
        self.ax.set_yticks(
            [transform.invert_y(p) for p in y_ticks.positions], labels=list(y_ticks.labels)
        )

        for artist, size in self._texts:
            artist.set_fontsize(size * transform.k * self._px_to_pt)

        self._transform = transform
        self.fig.canvas.draw_idle()

    def animate(self, transition: Transition, on_frame: Callable[[ViewTransform], None]) -> None:
        entry = (transition, on_frame)
        self._animations.append(entry)
        timer = self.fig.canvas.new_timer(interval=self.frame_interval)

        def tick():
            if transition.cancelled:
                self._end_animation(entry, timer)
                return
            on_frame(transition.step())
            if not transition.active:
                self._end_animation(entry, timer)

        timer.add_callback(tick)
        self._timers.append(timer)
        timer.start()

    def _end_animation(self, entry, timer) -> None:
        timer.stop()
        if timer in self._timers:
            self._timers.remove(timer)
        if entry in self._animations:
            self._animations.remove(entry)

    def finish_animations(self) -> None:
        """Jump running animations to their end state (non-interactive backends)."""
        pending, self._animations = self._animations, []
        for timer in self._timers:
            timer.stop()
        self._timers = []
        for transition, on_frame in pending:
            if not transition.cancelled:
                on_frame(transition.finish())

    def _stop_animations(self) -> None:
        for transition, _ in self._animations:
            transition.cancel()
        for timer in self._timers:
            timer.stop()
        self._animations = []
        self._timers = []

    # -----------------------------------------------------------------
    # Interaction
    # -----------------------------------------------------------------

    def _viewport_point(self, event) -> Tuple[float, float]:
        """Display coordinates -> chart viewport pixels (origin top-left)."""
        bbox = self.ax.bbox
        return event.x - bbox.x0, bbox.y1 - event.y

    def attach_interaction(self, controller) -> None:
        self._disconnect_interaction()
        canvas = self.fig.canvas

        def current():
            return controller.visible_transform or controller.transform

        def on_scroll(event):
            if event.inaxes is not self.ax or current() is None:
                return
            factor = SCROLL_ZOOM ** event.step
            controller.set_transform(current().scaled_about(factor, self._viewport_point(event)))

        def on_press(event):
            if event.inaxes is not self.ax or event.button != 1 or current() is None:
                return
            self._drag_start = (event.x, event.y, current())

        def on_motion(event):
            if self._drag_start is None:
                return
            x, y, start = self._drag_start
            # Display y grows upwards, viewport y downwards
            controller.set_transform(ViewTransform(start.k, start.x + event.x - x, start.y - (event.y - y)))

        def on_release(event):
            self._drag_start = None

        self._callbacks = [
            canvas.mpl_connect('scroll_event', on_scroll),
            canvas.mpl_connect('button_press_event', on_press),
            canvas.mpl_connect('motion_notify_event', on_motion),
            canvas.mpl_connect('button_release_event', on_release),
        ]

    def _disconnect_interaction(self) -> None:
        for cid in self._callbacks:
            self.fig.canvas.mpl_disconnect(cid)
        self._callbacks = []
        self._drag_start = None

    # -----------------------------------------------------------------
    # Notification
    # -----------------------------------------------------------------

    def show_notification(self, message: str) -> None:
        self.hide_notification()
        self._notification = self.ax.text(
            0.5, 0.5, message, transform=self.ax.transAxes,
            ha='center', va='center', fontsize=14, color='dimgray',
        )
        self.fig.canvas.draw_idle()

    def hide_notification(self) -> None:
        if self._notification is not None:
            self._notification.remove()
            self._notification = None
            self.fig.canvas.draw_idle()

    @property
    def notification(self) -> Optional[str]:
        return self._notification.get_text() if self._notification is not None else None

    # -----------------------------------------------------------------
    # Buttons
    # -----------------------------------------------------------------

    def add_button(self, container: Any, label: str, on_click: Callable[[], None]) -> Button:
        """
        Add a push button.

        ``container`` may be an Axes, a figure-fraction box
        ``[left, bottom, width, height]``, or None to append the button to a
        row along the bottom-left corner of the figure.
        """
        if isinstance(container, Axes):
            ax = container
        elif container is not None:
            ax = self.fig.add_axes(list(container))
        else:
            i = len(self._buttons)
            ax = self.fig.add_axes([0.025 + i * (_BUTTON_SIZE + 0.005), 0.03, _BUTTON_SIZE, _BUTTON_SIZE])

        button = Button(ax, label)
        button.on_clicked(lambda event: on_click())
        button.set_active(self.buttons_enabled)
        self._buttons.append(button)
        return button

    def set_buttons_enabled(self, enabled: bool) -> None:
        super().set_buttons_enabled(enabled)
        for button in self._buttons:
            button.set_active(enabled)

    # -----------------------------------------------------------------
    # Legend
    # -----------------------------------------------------------------

    def clear_legend(self) -> None:
        for ax in self.legend_axes:
            ax.remove()
        self.legend_axes = []
        self._legend_layers = {}

    def draw_legend(self, legend: Legend) -> None:
        self.clear_legend()
        if not self.has_legend:
            return

        if legend.yield_legend is not None:
            self._draw_yield_legend(legend.yield_legend)
        if legend.decay_modes is not None:
            self._draw_decay_legend(legend.decay_modes)
        self._draw_format_key(legend.nuclide_format)
        self.fig.canvas.draw_idle()

    def _draw_yield_legend(self, yl) -> None:
        ax = self.fig.add_axes(_GRADIENT_BOX)
        self.legend_axes.append(ax)

        cmap = mcolors.LinearSegmentedColormap.from_list(
            'yield', list(zip(yl.offsets, yl.colors))
        )
        # Row 0 is the top of the bar, i.e. the largest yield
        gradient = np.linspace(1.0, 0.0, 256).reshape(-1, 1)
        ax.imshow(gradient, cmap=cmap, aspect='auto', extent=(0, 1, yl.height, 0))
        ax.set_ylim(yl.height, 0)
        ax.set_xticks([])
        ax.yaxis.tick_right()
        ax.set_yticks([t.position for t in yl.ticks], labels=[t.label for t in yl.ticks])
        ax.tick_params(labelsize=8)
        ax.set_title(yl.title, fontsize=9)

    def _draw_decay_legend(self, dl) -> None:
        ax = self.fig.add_axes(_DECAY_BOX)
        ax.set_axis_off()
        self.legend_axes.append(ax)
        handles = [
            mpatches.Patch(facecolor=m.color, edgecolor='black', linewidth=0.5, label=m.name)
            for m in dl.entries
        ]
        ax.legend(handles=handles, title=dl.title, loc='upper left', fontsize=7,
                  title_fontsize=8, frameon=False)

    def _draw_format_key(self, key) -> None:
        ax = self.fig.add_axes(_KEY_BOX)
        ax.set_axis_off()
        ax.set_xlim(0, key.cell_size)
        ax.set_ylim(key.cell_size, 0)
        ax.set_aspect('equal')
        ax.set_title(key.title, fontsize=9)
        self.legend_axes.append(ax)

        ax.add_patch(mpatches.Rectangle(
            (0, 0), key.cell_size, key.cell_size, facecolor='white', edgecolor='black', linewidth=0.5,
        ))
        scale = ax.bbox.height / key.cell_size if key.cell_size else 1.0
        for line in key.lines:
            artist = ax.text(
                key.cell_size / 2, line.offset, line.text, ha='center', va='baseline',
                fontsize=line.font_size * scale * self._px_to_pt,
            )
            if line.layer is not None:
                self._register(artist, line.layer, legend=True)
        if key.decay_corner:
            s = key.cell_size / 4
            corner = mpatches.Rectangle(
                (3 * s, 3 * s), s, s, facecolor='#cccccc', edgecolor='black', linewidth=0.5,
            )
            ax.add_patch(corner)
            self._register(corner, LAYER_DECAY_MODES, legend=True)

    # -----------------------------------------------------------------
    # Export
    # -----------------------------------------------------------------

    def save(
        self,
        filepath: Union[str, Path],
        dpi: Optional[float] = None,
        transparent: bool = False,
        **kwargs,
    ) -> 'MatplotlibRenderer':
        """
        Save the figure; the format follows the file extension.

        Returns:
            self for method chaining
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self.fig.savefig(filepath, dpi=dpi, transparent=transparent, **kwargs)
        logger.info(f"Chart saved to {filepath}")
        return self

    def close(self) -> None:
        self._stop_animations()
        plt.close(self.fig)
