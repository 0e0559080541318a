"""
Legend model.

Everything a renderer needs to draw the chart legend, built from the same
colour scale and decay-mode table as the cells:

- yield legend: title, colour gradient and log axis ticks
- decay-mode legend: one swatch per decay mode
- nuclide-format key: a sample cell explaining the text layout
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from nucchart.chart.presentation import (
    DECAY_MODES,
    LAYER_HALFLIVES,
    DecayModeStyle,
    format_legend_yield,
    format_ratio_tick,
    yield_key_label,
    yield_legend_title,
)
from nucchart.chart.scales import LogScale, YieldColorScale

# Tick counts of the yield legend axis
_YIELD_TICKS = 5
_RATIO_TICKS = 2

# Text lines of a cell: (offset from the cell top, font size), for a 64 px cell
NAME_LINE = (14.0, 12.0)
YIELD_LINE = (24.0, 8.0)
HALFLIFE_LINE = (34.0, 8.0)
REFERENCE_CELL = 64.0


@dataclass(frozen=True)
class LegendTick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class YieldLegend:
    """
    Attributes:
        title: Heading ('Yield ratio', 'Production (μC⁻¹)', ...).
        colors: Gradient anchors, bottom to top.
        offsets: Gradient stop offsets in [0, 1].
        scale: Log scale from yield onto legend pixels (top = largest).
        ticks: Axis ticks; unlabelled ticks carry an empty label.
        height: Gradient height in pixels.
    """

    title: str
    colors: Tuple[str, ...]
    offsets: Tuple[float, ...]
    scale: LogScale
    ticks: Tuple[LegendTick, ...]
    height: float


@dataclass(frozen=True)
class DecayModeLegend:
    title: str
    entries: Tuple[DecayModeStyle, ...]


@dataclass(frozen=True)
class KeyLine:
    text: str
    offset: float
    font_size: float
    layer: Optional[str] = None


@dataclass(frozen=True)
class NuclideFormatKey:
    """Sample cell: text lines plus the decay-mode corner when shown."""

    title: str
    cell_size: float
    lines: Tuple[KeyLine, ...]
    decay_corner: bool


@dataclass(frozen=True)
class Legend:
    yield_legend: Optional[YieldLegend]
    decay_modes: Optional[DecayModeLegend]
    nuclide_format: NuclideFormatKey


def build_yield_legend(
    color_scale: YieldColorScale,
    yields: bool = True,
) -> YieldLegend:
    lo, hi = min(color_scale.legend_range), max(color_scale.legend_range)
    # Largest value at the top
    scale = LogScale(color_scale.domain, (hi, lo))

    if color_scale.compare:
        ticks = tuple(
            LegendTick(v, float(scale(v)), format_ratio_tick(v, color_scale.domain))
            for v in scale.ticks(_RATIO_TICKS)
        )
    else:
        ticks = tuple(
            LegendTick(
                v,
                float(scale(v)),
                format_legend_yield(v, 'yields') if scale.tick_label_visible(v, _YIELD_TICKS) else '',
            )
            for v in scale.ticks(_YIELD_TICKS)
        )

    n = len(color_scale.colors.colors)
    return YieldLegend(
        title=yield_legend_title(color_scale.compare, yields),
        colors=color_scale.colors.colors,
        offsets=tuple(i / (n - 1) for i in range(n)),
        scale=scale,
        ticks=ticks,
        height=hi - lo,
    )


def build_nuclide_format_key(
    has_yields: bool,
    has_decay_modes: bool,
    compare: bool,
    cell_size: float = REFERENCE_CELL,
) -> NuclideFormatKey:
    lines = [KeyLine('Isotope', *NAME_LINE)]
    if has_yields:
        lines.append(KeyLine(yield_key_label(compare), *YIELD_LINE))
    lines.append(KeyLine('half life', *HALFLIFE_LINE, layer=LAYER_HALFLIVES))
    return NuclideFormatKey(
        title='Nuclide format',
        cell_size=cell_size,
        lines=tuple(lines),
        decay_corner=has_decay_modes,
    )


def build_legend(
    color_scale: Optional[YieldColorScale],
    has_yields: bool,
    has_decay_modes: bool,
    compare: bool = False,
    yields: bool = True,
) -> Legend:
    """Assemble the full legend of one drawn chart."""
    return Legend(
        yield_legend=build_yield_legend(color_scale, yields) if color_scale is not None else None,
        decay_modes=DecayModeLegend('Decay modes', DECAY_MODES) if has_decay_modes else None,
        nuclide_format=build_nuclide_format_key(has_yields, has_decay_modes, compare),
    )
