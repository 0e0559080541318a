"""
Chart Module
============

Everything between nuclide records and a renderer.

Key Components:
    geometry: Cell placement on the Z/N grid
    scales: Axis scales, tick generation and the yield colour scale
    magic_numbers: Bounded magic-number boundary lines
    transform: ViewTransform, smooth zoom interpolation, transitions
    navigation: Pan/zoom state machine with navigate-to-nuclide
    presentation: Decay-mode table, number formatting, text contrast
    legend: Legend model (yield gradient, decay modes, nuclide format key)
    nuclide_chart: NuclideChart host handle
"""

from nucchart.chart.geometry import CellGeometry, GridPosition, cell_geometry, position_of
from nucchart.chart.scales import (
    AxisScales,
    ColorScale,
    LinearScale,
    LogScale,
    YieldColorScale,
    build_axis_scales,
    build_color_scale,
)
from nucchart.chart.magic_numbers import LineSegment, MagicNumberLine, magic_number_limits
from nucchart.chart.transform import IDENTITY, Transition, ViewTransform, centering_transform, fit_transform
from nucchart.chart.navigation import NavigationController
from nucchart.chart.presentation import (
    DECAY_MODES,
    MalformedColorFormat,
    format_legend_yield,
    format_yield,
    text_color,
)
from nucchart.chart.legend import Legend, build_legend
from nucchart.chart.nuclide_chart import NuclideChart

__all__ = [
    "CellGeometry",
    "GridPosition",
    "cell_geometry",
    "position_of",
    "AxisScales",
    "ColorScale",
    "LinearScale",
    "LogScale",
    "YieldColorScale",
    "build_axis_scales",
    "build_color_scale",
    "LineSegment",
    "MagicNumberLine",
    "magic_number_limits",
    "IDENTITY",
    "Transition",
    "ViewTransform",
    "centering_transform",
    "fit_transform",
    "NavigationController",
    "DECAY_MODES",
    "MalformedColorFormat",
    "format_legend_yield",
    "format_yield",
    "text_color",
    "Legend",
    "build_legend",
    "NuclideChart",
]
