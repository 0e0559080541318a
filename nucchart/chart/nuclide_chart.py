"""
Nuclide Chart
=============

Host-facing chart handle.  One :class:`NuclideChart` owns one drawing
surface (a :class:`~nucchart.visualization.base.Renderer`), the derived
scales of the last drawn dataset and the navigation state.  Independent
charts never share state.

Usage:
    >>> from nucchart import NuclideChart
    >>> from nucchart.visualization import RecordingRenderer
    >>> chart = NuclideChart(RecordingRenderer())
    >>> chart.draw([{'Z': 2, 'A': 4, 'Symbol': 'He', 'Yield': 50.0}])
    >>> chart.navigate_to('he-4')
    'He4'
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from nucchart.chart.geometry import CellGeometry, cell_geometry
from nucchart.chart.legend import HALFLIFE_LINE, NAME_LINE, REFERENCE_CELL, YIELD_LINE, Legend, build_legend
from nucchart.chart.magic_numbers import MagicNumberLine, magic_number_limits
from nucchart.chart.navigation import NavigationController
from nucchart.chart.presentation import (
    LAYER_CELLS,
    LAYER_DECAY_MODES,
    LAYER_HALFLIVES,
    LAYER_LABELS,
    LAYER_MAGIC_NUMBERS,
    TRANSPARENT,
    decay_mode_color,
    format_yield,
    text_color,
)
from nucchart.chart.scales import AxisScales, YieldColorScale, build_axis_scales, build_color_scale
from nucchart.chart.transform import ViewTransform, fit_transform
from nucchart.config import ChartConfig
from nucchart.data.identifiers import nuclide_id, nuclide_name
from nucchart.data.records import NuclideRecord, RecordInput, coerce_records, verify_data
from nucchart.visualization.base import Line, Rect, Renderer, Text

logger = logging.getLogger(__name__)

# Navigation button labels
ZOOM_IN = '+'
ZOOM_OUT = '-'
PAN_UP = '⇧'
PAN_LEFT = '⇦'
PAN_DOWN = '⇩'
PAN_RIGHT = '⇨'


class NuclideChart:
    """
    Interactive chart of nuclides.

    Parameters
    ----------
    container : Renderer
        Surface the chart is drawn on.
    legend_container : Renderer, optional
        Surface for the legend; defaults to ``container``.
    config : ChartConfig, optional
        Design parameters (cell size, colours, durations, ...).
    clock : callable, optional
        Time source for transitions (seconds); defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        container: Renderer,
        legend_container: Optional[Renderer] = None,
        config: Optional[ChartConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.renderer = container
        self.legend_renderer = legend_container or container
        self.config = config or ChartConfig()

        self._navigation = NavigationController(
            cell_size=self.config.pitch,
            zoom_duration=self.config.zoom_duration,
            navigate_duration=self.config.navigate_duration,
            clock=clock or time.monotonic,
        )

        self._records: List[NuclideRecord] = []
        self._axis_scales: Optional[AxisScales] = None
        self._color_scale: Optional[YieldColorScale] = None
        self._magic_lines: List[MagicNumberLine] = []
        self._legend: Optional[Legend] = None

        self._show_decay_modes = True
        self._show_magic_numbers = True

        self._buttons: List[Any] = []
        self._buttons_enabled = True

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def transform(self) -> Optional[ViewTransform]:
        """Declared view transform; None before the first successful draw."""
        return self._navigation.transform

    @property
    def attached(self) -> bool:
        return self._navigation.attached

    @property
    def navigation(self) -> NavigationController:
        return self._navigation

    @property
    def records(self) -> List[NuclideRecord]:
        return list(self._records)

    @property
    def cells(self) -> Dict[str, CellGeometry]:
        """Drawn cells by identifier."""
        return dict(self.renderer.cells)

    @property
    def color_scale(self) -> Optional[YieldColorScale]:
        return self._color_scale

    @property
    def axis_scales(self) -> Optional[AxisScales]:
        return self._axis_scales

    @property
    def magic_number_lines(self) -> List[MagicNumberLine]:
        return list(self._magic_lines)

    @property
    def legend(self) -> Optional[Legend]:
        return self._legend

    # =========================================================================
    # Drawing
    # =========================================================================

    def clear(self) -> None:
        """Remove the chart, its legend and any notification."""
        self._navigation.detach()
        self.renderer.hide_notification()
        self.renderer.clear()
        self.legend_renderer.clear_legend()

        self._records = []
        self._axis_scales = None
        self._color_scale = None
        self._magic_lines = []
        self._legend = None

    def notify(self, message: str) -> None:
        """Clear the chart and show a message in its place."""
        self.clear()
        self.renderer.show_notification(message)

    def draw(
        self,
        data: RecordInput,
        compare: bool = False,
        show_decay_modes: bool = True,
        show_magic_numbers: bool = True,
        yields: bool = True,
    ) -> None:
        """
        Draw a dataset, replacing whatever was drawn before.

        Args:
            data: Records, mappings or a DataFrame with Z, A, Symbol, Yield,
                HalflifeText and DecayMode.
            compare: Colour yield ratios on the fixed comparison domain.
            show_decay_modes: Initial visibility of the decay-mode corners.
            show_magic_numbers: Initial visibility of the magic-number lines.
            yields: Label the legend as yields (True) or production (False).
        """
        self.clear()
        self._show_decay_modes = show_decay_modes
        self._show_magic_numbers = show_magic_numbers

        if not verify_data(data):
            logger.warning("Nothing to draw: no nuclide data")
            self.notify(self.config.empty_message)
            return

        records, rejected = coerce_records(data)
        if not records:
            logger.warning(f"Nothing to draw: all {rejected} nuclide entries were rejected")
            self.notify(self.config.empty_message)
            return

        cfg = self.config
        has_yields = any(r.has_yield for r in records)
        has_decay_modes = any(r.has_decay_mode for r in records)

        self._records = records
        self._axis_scales = build_axis_scales(records, cfg.pitch)
        self._color_scale = build_color_scale(records, compare=compare, config=cfg) if has_yields else None
        self._magic_lines = magic_number_limits(records, cfg.magic_numbers)
        self._legend = build_legend(self._color_scale, has_yields, has_decay_modes, compare, yields)

        for record in records:
            self._draw_cell(record, compare, has_yields)
        for line in self._magic_lines:
            for seg in line.segments(cfg.pitch, cfg.magic_number_offset):
                self.renderer.draw_line(Line(seg.x1, seg.y1, seg.x2, seg.y2, layer=LAYER_MAGIC_NUMBERS))

        self.legend_renderer.draw_legend(self._legend)
        self._apply_visibility()

        viewport = self.renderer.viewport_size()
        initial = fit_transform(
            self._axis_scales.largest_n,
            self._axis_scales.largest_z,
            viewport,
            cell_size=cfg.pitch,
            em=cfg.em,
            legend_width=self.renderer.legend_width(),
        )
        self._navigation.attach(initial, viewport, self._apply_transform, scheduler=self.renderer.animate)
        self.renderer.attach_interaction(self._navigation)

        logger.info(
            f"Drew {len(self.renderer.cells)} nuclides (N <= {self._axis_scales.largest_n}, "
            f"Z <= {self._axis_scales.largest_z}, compare={compare}, skipped={rejected})"
        )

    def _draw_cell(self, record: NuclideRecord, compare: bool, has_yields: bool) -> None:
        cfg = self.config
        cell_id = nuclide_id(record, cfg.placeholder_symbol)
        geometry = cell_geometry(record, cfg.cell_size, cfg.cell_padding)

        if self.renderer.cell_geometry(cell_id) is not None:
            logger.warning(f"Duplicate nuclide {cell_id}; navigation keeps the first one")
        else:
            self.renderer.register_cell(cell_id, geometry)

        fill = self._color_scale.fill_for(record) if self._color_scale is not None else TRANSPARENT
        label_color = text_color(fill)
        s = cfg.cell_size / REFERENCE_CELL
        cx = geometry.center[0]

        self.renderer.draw_rect(Rect(
            geometry.x, geometry.y, geometry.width, geometry.height,
            fill=fill, stroke='black', stroke_width=0.5, layer=LAYER_CELLS, tag=cell_id,
        ))
        self.renderer.draw_text(Text(
            cx, geometry.y + NAME_LINE[0] * s, nuclide_name(record, cfg.placeholder_symbol),
            font_size=NAME_LINE[1] * s, fill=label_color, layer=LAYER_LABELS, tag=cell_id,
        ))
        if has_yields:
            self.renderer.draw_text(Text(
                cx, geometry.y + YIELD_LINE[0] * s,
                format_yield(record, 'ratio' if compare else 'yield', cfg.undefined_ratio),
                font_size=YIELD_LINE[1] * s, fill=label_color, layer=LAYER_LABELS, tag=cell_id,
            ))
        if record.halflife_text:
            self.renderer.draw_text(Text(
                cx, geometry.y + HALFLIFE_LINE[0] * s, record.halflife_text,
                font_size=HALFLIFE_LINE[1] * s, fill=label_color, layer=LAYER_HALFLIVES, tag=cell_id,
            ))
        if record.has_decay_mode:
            corner = geometry.inset(0.75, 0.75, 0.25, 0.25)
            self.renderer.draw_rect(Rect(
                corner.x, corner.y, corner.width, corner.height,
                fill=decay_mode_color(record), layer=LAYER_DECAY_MODES, tag=cell_id,
            ))

    def _apply_transform(self, transform: ViewTransform) -> None:
        x_ticks, y_ticks = self._axis_scales.ticks_for(transform)
        self.renderer.apply_transform(transform, x_ticks, y_ticks)

    def _apply_visibility(self) -> None:
        renderers = [self.renderer]
        if self.legend_renderer is not self.renderer:
            renderers.append(self.legend_renderer)
        for renderer in renderers:
            renderer.set_layer_visible(LAYER_DECAY_MODES, self._show_decay_modes)
            renderer.set_layer_visible(LAYER_MAGIC_NUMBERS, self._show_magic_numbers)

    # =========================================================================
    # Visibility
    # =========================================================================

    def set_decay_mode_visibility(self, visible: bool) -> None:
        """Show or hide the decay-mode corners (cells and legend key)."""
        self._show_decay_modes = bool(visible)
        self._apply_visibility()

    def set_magic_number_visibility(self, visible: bool) -> None:
        self._show_magic_numbers = bool(visible)
        self._apply_visibility()

    # =========================================================================
    # Navigation
    # =========================================================================

    def zoom_by(self, factor: float) -> None:
        """Zoom about the viewport centre; no-op before a successful draw."""
        self._navigation.resize(self.renderer.viewport_size())
        self._navigation.zoom_by(factor)

    def pan_by(self, cells_x: float, cells_y: float) -> None:
        """Pan by whole cells; no-op before a successful draw."""
        self._navigation.pan_by(cells_x, cells_y)

    def navigate_to(self, raw: str) -> Optional[str]:
        """
        Centre the chart on a nuclide given as free text ('U235', 'he-4').

        Returns the identifier navigated to, or None if it is not on the chart.
        """
        self._navigation.resize(self.renderer.viewport_size())
        return self._navigation.navigate_to(raw, self.renderer.cells)

    # =========================================================================
    # Buttons
    # =========================================================================

    def _button_actions(self):
        step = self.config.zoom_step
        pan = self.config.pan_step
        return [
            (ZOOM_IN, lambda: self.zoom_by(step)),
            (ZOOM_OUT, lambda: self.zoom_by(1 / step)),
            (PAN_UP, lambda: self.pan_by(0, pan)),
            (PAN_LEFT, lambda: self.pan_by(pan, 0)),
            (PAN_DOWN, lambda: self.pan_by(0, -pan)),
            (PAN_RIGHT, lambda: self.pan_by(-pan, 0)),
        ]

    def add_navigation_buttons(self, container: Any = None) -> List[Any]:
        """Add zoom and pan buttons to ``container``; returns the button handles."""
        for label, action in self._button_actions():
            self._buttons.append(self.renderer.add_button(container, label, self._guarded(action)))
        self.renderer.set_buttons_enabled(self._buttons_enabled)
        return list(self._buttons)

    def _guarded(self, action: Callable[[], None]) -> Callable[[], None]:
        def on_click():
            if self._buttons_enabled:
                action()
        return on_click

    def enable_navigation_buttons(self) -> None:
        self._buttons_enabled = True
        self.renderer.set_buttons_enabled(True)

    def disable_navigation_buttons(self) -> None:
        self._buttons_enabled = False
        self.renderer.set_buttons_enabled(False)

    def __repr__(self):
        return f"NuclideChart(nuclides={len(self.renderer.cells)}, attached={self.attached})"
