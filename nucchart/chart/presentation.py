"""
Presentation Formatting
=======================

Text and colour decisions shared by the cells and the legend:

- decay-mode table (short code -> display name, colour)
- yield / yield-ratio cell text
- legend tick labels, including the sentinel values of comparison mode
- label colour with enough contrast against a cell fill
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from nucchart.data.records import NuclideRecord

logger = logging.getLogger(__name__)

TRANSPARENT = 'transparent'

# Drawing layers; decay-mode corners, half-lives and magic lines can be toggled
LAYER_CELLS = 'cells'
LAYER_LABELS = 'labels'
LAYER_HALFLIVES = 'halflives'
LAYER_DECAY_MODES = 'decay_modes'
LAYER_MAGIC_NUMBERS = 'magic_numbers'

# Lower limit used in place of 0 on log axes
ZERO_APPROXIMATION = 0.00001


@dataclass(frozen=True)
class DecayModeStyle:
    code: str
    name: str
    color: str


# Legend order
DECAY_MODES: Tuple[DecayModeStyle, ...] = (
    DecayModeStyle('a', 'α emission', '#fffe49'),
    DecayModeStyle('p', 'proton emission', '#ffa425'),
    DecayModeStyle('2p', '2-proton emission', '#ffa425'),
    DecayModeStyle('n', 'neutron emission', '#9fd7ff'),
    DecayModeStyle('2n', '2-neutron emission', '#9fd7ff'),
    DecayModeStyle('ec', 'electron capture', '#ff7e75'),
    DecayModeStyle('2ec', 'double electron capture', '#ff7e75'),
    DecayModeStyle('b-', 'β- decay', '#62aeff'),
    DecayModeStyle('2b-', 'double β- decay', '#62aeff'),
    DecayModeStyle('b+', 'β+ decay', '#ff7e75'),
    DecayModeStyle('it', 'internal transition', '#ffffff'),
    DecayModeStyle('sf', 'spontaneous fission', '#5cbc57'),
    DecayModeStyle('is', 'isotopic abundance', '#000000'),
    DecayModeStyle('cluster', 'cluster', '#a564cc'),
    DecayModeStyle('?', '?', '#cccccc'),
)

DECAY_MODE_BY_CODE: Dict[str, DecayModeStyle] = {m.code: m for m in DECAY_MODES}
UNKNOWN_DECAY_MODE = DECAY_MODE_BY_CODE['?']


def decay_mode_style(code: Optional[str]) -> Optional[DecayModeStyle]:
    """Style of a decay-mode short code; unknown codes fall back to '?'."""
    if code is None:
        return None
    style = DECAY_MODE_BY_CODE.get(code)
    if style is None:
        style = DECAY_MODE_BY_CODE.get(code.lower())
    if style is None:
        logger.debug(f"Unknown decay mode {code!r}, shown as '?'")
        return UNKNOWN_DECAY_MODE
    return style


def decay_mode_color(record: NuclideRecord) -> str:
    if record.decay_mode is None:
        return TRANSPARENT
    return decay_mode_style(record.decay_mode.mode).color


# =============================================================================
# Number formatting
# =============================================================================

def to_exponential(value: float, digits: int) -> str:
    """Exponential notation without exponent padding: 50 -> '5.00e+1'."""
    mantissa, exponent = f"{value:.{digits}e}".split('e')
    exp = int(exponent)
    return f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"


def format_yield(record: NuclideRecord, unit: str = 'yield', undefined_ratio: float = -1.0) -> str:
    """
    Yield text of a cell.

    'ratio' gives two decimals ('undefined' for the divide-by-zero sentinel);
    anything else gives three significant digits in exponential notation.
    """
    value = record.yield_
    if not value:
        return ''
    if unit == 'ratio':
        if value == undefined_ratio:
            return 'undefined'
        return f"{value:.2f}"
    return to_exponential(value, 2)


def _is(value: float, target: float) -> bool:
    return math.isclose(value, target, rel_tol=1e-9, abs_tol=0.0)


def format_legend_yield(value: float, unit: str = 'yields') -> str:
    """
    Legend axis label.

    The log axis cannot hold 0, so 1e-5 stands in for it and is shown as '0'.
    Ratios only label 0, 1/1 and the saturated top '≥ 100/1'.
    """
    if unit == 'ratio':
        if _is(value, ZERO_APPROXIMATION):
            return '0'
        if _is(value, 1):
            return '1/1'
        if _is(value, 100):
            return '≥ 100/1'
        return ''
    if unit == 'yields' and _is(value, ZERO_APPROXIMATION):
        return '0'
    return to_exponential(value, 0)


def format_ratio_tick(value: float, domain: Tuple[float, float] = (0.01, 100.0)) -> str:
    """Tick label of the comparison legend: bottom reads '0', top '≥ top'."""
    lo, hi = domain
    if _is(value, lo):
        return '0'
    if _is(value, hi):
        return f"≥ {hi:g}"
    return f"{value:g}"


def yield_legend_title(compare: bool, yields: bool) -> str:
    if compare:
        return 'Yield ratio' if yields else 'Production ratio'
    return 'Yield (μC⁻¹)' if yields else 'Production (μC⁻¹)'


def yield_key_label(compare: bool) -> str:
    """Label of the yield line in the nuclide-format key."""
    return 'ratio' if compare else 'yield (μC⁻¹)'


# =============================================================================
# Text contrast
# =============================================================================

class MalformedColorFormat(ValueError):
    """A fill colour that is not 'rgb(r, g, b)'."""


def parse_rgb(color: str) -> Tuple[float, float, float]:
    """
    Parse 'rgb(r, g, b)'.

    Raises:
        MalformedColorFormat: If the string does not hold exactly three numbers.
    """
    if not (isinstance(color, str) and color.startswith('rgb(') and color.endswith(')')):
        raise MalformedColorFormat(f"Invalid format of background color: {color!r}")
    parts = color[4:-1].replace(' ', '').split(',')
    if len(parts) != 3:
        raise MalformedColorFormat(f"Invalid format of background color: {color!r}")
    try:
        r, g, b = (float(p) for p in parts)
    except ValueError as exc:
        raise MalformedColorFormat(f"Invalid format of background color: {color!r}") from exc
    return r, g, b


def brightness(rgb: Tuple[float, float, float]) -> float:
    """Perceived brightness of a fill (W3C AERT weights with a heavier blue term)."""
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 144) / 1000


def text_color(fill: Optional[str], threshold: float = 120.0) -> str:
    """
    Label colour for a cell fill: white on dark fills, black otherwise.

    Unparseable fills are logged and get black text; one bad cell must not
    stop the chart from drawing.
    """
    if fill is None or fill == TRANSPARENT:
        return 'black'
    try:
        rgb = parse_rgb(fill)
    except MalformedColorFormat as exc:
        logger.error(f"Can't set text color of nuclide. {exc}")
        return 'black'
    return 'white' if brightness(rgb) < threshold else 'black'
