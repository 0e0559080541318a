"""
Scale Builder
=============

Continuous scales derived from a record set:

1. Linear axis scales for N (horizontal) and Z (vertical, inverted so Z
   grows upwards).
2. A logarithmic yield -> colour scale and the legend scale it is read
   against.

Colour scale construction
-------------------------
The colour anchors must sit evenly on the *rendered legend axis*, which is
logarithmic.  The stops are therefore found in two steps:

    legend:  log scale  [y_min, y_max]  ->  [0, 100] px
    stops:   legend.invert(0), legend.invert(25), ..., legend.invert(100)
    colour:  log scale  stops  ->  anchors (blue, cyan, green, yellow, red)

The colour scale is piecewise linear in log10 space between the stops and
interpolates the anchors in RGB.

Tick generation follows the usual 1/2/5 x 10^k increments for linear scales
and powers of ten (or 1..9 x 10^k for short spans) for log scales, so the
axis and legend ticks land on round values.

Key Components:
    LinearScale, LogScale, ColorScale: Scale primitives
    AxisScales / build_axis_scales: N and Z axes
    YieldColorScale / build_color_scale: Yield colouring
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import matplotlib.colors as mcolors
import numpy as np

from nucchart.chart.presentation import TRANSPARENT
from nucchart.config import ChartConfig
from nucchart.data.records import NuclideRecord

logger = logging.getLogger(__name__)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


# =============================================================================
# Tick generation
# =============================================================================

def tick_increment(start: float, stop: float, count: int) -> float:
    """
    Tick spacing for ``count`` ticks over [start, stop].

    Positive results are the step itself; negative results are -1/step
    (kept as an integer inverse to avoid float noise for steps below 1).
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def linear_ticks(start: float, stop: float, count: int) -> List[float]:
    """Round tick values within [start, stop]; empty for count <= 0."""
    if count is None or count <= 0:
        return []
    if not (math.isfinite(start) and math.isfinite(stop)):
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    inc = tick_increment(start, stop, count)
    if inc == 0 or not math.isfinite(inc):
        return []

    if inc > 0:
        lo, hi = math.ceil(start / inc), math.floor(stop / inc)
        ticks = [(lo + i) * inc for i in range(hi - lo + 1)]
    else:
        inv = -inc
        lo, hi = math.ceil(start * inv), math.floor(stop * inv)
        ticks = [(lo + i) / inv for i in range(hi - lo + 1)]

    if reverse:
        ticks.reverse()
    return ticks


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def log_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    """
    Tick values of a base-10 log scale.

    Spans shorter than ``count`` decades get 1..9 x 10^k ticks; longer spans
    get powers of ten with a round decade step.
    """
    if start <= 0 or stop <= 0:
        return []
    reverse = stop < start
    if reverse:
        start, stop = stop, start

    i, j = math.log10(start), math.log10(stop)
    ticks: List[float] = []
    if j - i < count:
        lo, hi = _round_half_up(i) - 1, _round_half_up(j) + 1
        for p in range(lo, hi):
            base = 10.0 ** p
            for k in range(1, 10):
                t = base * k
                if t < start:
                    continue
                if t > stop:
                    break
                ticks.append(t)
    else:
        ticks = [10.0 ** e for e in linear_ticks(i, j, min(j - i, count))]

    if reverse:
        ticks.reverse()
    return ticks


# =============================================================================
# Scale primitives
# =============================================================================

def _piecewise(x, xp: np.ndarray, fp: np.ndarray):
    """
    Piecewise-linear map through (xp, fp), extrapolating past the ends.

    ``xp`` may be increasing or decreasing.  ``fp`` is 1-D, or 2-D with one
    row per knot (colour channels).
    """
    if xp[0] > xp[-1]:
        xp = xp[::-1]
        fp = fp[::-1]
    x = np.asarray(x, dtype=float)
    idx = np.clip(np.searchsorted(xp, x, side='right') - 1, 0, len(xp) - 2)
    x0, x1 = xp[idx], xp[idx + 1]
    with np.errstate(divide='ignore', invalid='ignore'):
        t = np.where(x1 != x0, (x - x0) / (x1 - x0), 0.5)
    f0, f1 = fp[idx], fp[idx + 1]
    if fp.ndim == 2:
        t = t[..., None]
    return f0 + t * (f1 - f0)


class LinearScale:
    """Affine map from a numeric domain to a pixel range."""

    def __init__(self, domain: Sequence[float], range_: Sequence[float]):
        if len(domain) != 2 or len(range_) != 2:
            raise ValueError("LinearScale needs a two-value domain and range")
        self.domain: Tuple[float, float] = (float(domain[0]), float(domain[1]))
        self.range: Tuple[float, float] = (float(range_[0]), float(range_[1]))

    @staticmethod
    def _normalize(value, a: float, b: float):
        # Degenerate extents map everything to the middle
        if b == a:
            return np.full(np.shape(value), 0.5)
        return (np.asarray(value, dtype=float) - a) / (b - a)

    def __call__(self, value):
        r0, r1 = self.range
        return r0 + self._normalize(value, *self.domain) * (r1 - r0)

    def invert(self, value):
        d0, d1 = self.domain
        return d0 + self._normalize(value, *self.range) * (d1 - d0)

    def ticks(self, count: int = 10) -> List[float]:
        return linear_ticks(self.domain[0], self.domain[1], count)

    def with_domain(self, domain: Sequence[float]) -> 'LinearScale':
        return LinearScale(domain, self.range)

    def __repr__(self):
        return f"LinearScale(domain={self.domain}, range={self.range})"


class LogScale:
    """
    Base-10 logarithmic scale, piecewise linear in log space.

    The domain may have more than two knots (one per range value) and must
    be strictly positive.
    """

    def __init__(self, domain: Sequence[float], range_: Sequence[float]):
        if len(domain) < 2 or len(domain) != len(range_):
            raise ValueError(
                f"LogScale needs matching domain/range of length >= 2, "
                f"got {len(domain)} and {len(range_)}"
            )
        domain = np.asarray(domain, dtype=float)
        if np.any(domain <= 0):
            raise ValueError(f"LogScale domain must be strictly positive, got {domain.tolist()}")
        self.domain: Tuple[float, ...] = tuple(domain.tolist())
        self.range: Tuple[float, ...] = tuple(float(r) for r in range_)
        self._log_domain = np.log10(domain)
        self._range = np.asarray(self.range, dtype=float)

    def __call__(self, value):
        with np.errstate(divide='ignore', invalid='ignore'):
            log_value = np.log10(np.asarray(value, dtype=float))
        return _piecewise(log_value, self._log_domain, self._range)

    def invert(self, value):
        return 10.0 ** _piecewise(value, self._range, self._log_domain)

    def ticks(self, count: int = 10) -> List[float]:
        return log_ticks(self.domain[0], self.domain[-1], count)

    def tick_label_visible(self, value: float, count: int = 10) -> bool:
        """
        Whether a tick gets a label when ``count`` labels are wanted.

        Keeps the labels of 1, 2, 3 ... x 10^k up to a crowding limit so a
        dense decade does not print nine labels.
        """
        limit = max(1.0, 10 * count / max(1, len(self.ticks())))
        i = value / 10.0 ** _round_half_up(math.log10(value))
        if i * 10 < 10 - 0.5:
            i *= 10
        return i <= limit

    def __repr__(self):
        return f"LogScale(domain={self.domain}, range={self.range})"


def _to_rgb255(color: str) -> np.ndarray:
    return np.asarray(mcolors.to_rgb(color), dtype=float) * 255.0


def format_rgb(rgb: Iterable[float]) -> str:
    """'rgb(r, g, b)' with channels rounded and clamped to 0..255."""
    channels = [max(0, min(255, _round_half_up(c))) for c in rgb]
    return f"rgb({channels[0]}, {channels[1]}, {channels[2]})"


class ColorScale:
    """Log scale whose range is a list of colours, interpolated in RGB."""

    def __init__(self, domain: Sequence[float], colors: Sequence[str]):
        if len(domain) != len(colors):
            raise ValueError(
                f"ColorScale needs one colour per domain knot, got {len(domain)} and {len(colors)}"
            )
        domain = np.asarray(domain, dtype=float)
        if np.any(domain <= 0):
            raise ValueError(f"ColorScale domain must be strictly positive, got {domain.tolist()}")
        self.domain: Tuple[float, ...] = tuple(domain.tolist())
        self.colors: Tuple[str, ...] = tuple(colors)
        self._log_domain = np.log10(domain)
        self._rgb = np.vstack([_to_rgb255(c) for c in colors])

    def rgb(self, value: float) -> np.ndarray:
        return _piecewise(math.log10(value), self._log_domain, self._rgb)

    def __call__(self, value: float) -> str:
        return format_rgb(self.rgb(value))


# =============================================================================
# Axis scales
# =============================================================================

@dataclass(frozen=True)
class AxisTicks:
    """Ticks of one axis in viewport pixels."""

    positions: Tuple[float, ...] = ()
    labels: Tuple[str, ...] = ()

    def __len__(self):
        return len(self.positions)


def integer_ticks(scale: LinearScale, count: int) -> AxisTicks:
    """Ticks of ``scale`` restricted to whole N or Z values."""
    values = [int(round(v)) for v in scale.ticks(count) if float(v).is_integer()]
    return AxisTicks(
        positions=tuple(float(scale(v)) for v in values),
        labels=tuple(str(v) for v in values),
    )


@dataclass(frozen=True)
class AxisScales:
    """N and Z axis scales of one drawn dataset."""

    largest_n: int
    largest_z: int
    x: LinearScale
    y: LinearScale

    def ticks_for(self, transform) -> Tuple[AxisTicks, AxisTicks]:
        """Axis ticks of the view seen through ``transform``."""
        x_view = transform.rescale_x(self.x)
        y_view = transform.rescale_y(self.y)
        return integer_ticks(x_view, self.largest_n), integer_ticks(y_view, self.largest_z)


def build_axis_scales(records: Sequence[NuclideRecord], cell_size: float = 64.0) -> AxisScales:
    """
    Linear N and Z scales covering the record set.

    x maps [-0.5, largestN - 0.5] onto [0, largestN * cell]; y maps
    [0.5, -largestZ + 0.5] onto [0, largestZ * cell].  Tick values land on
    cell centres.
    """
    if not records:
        raise ValueError("Cannot build axis scales from an empty record set")
    largest_n = max(r.N for r in records)
    largest_z = max(r.Z for r in records)
    x = LinearScale((-0.5, largest_n - 0.5), (0.0, largest_n * cell_size))
    y = LinearScale((0.5, -largest_z + 0.5), (0.0, largest_z * cell_size))
    return AxisScales(largest_n=largest_n, largest_z=largest_z, x=x, y=y)


# =============================================================================
# Yield colour scale
# =============================================================================

class YieldColorScale:
    """
    Yield (or yield ratio) -> fill colour.

    Attributes:
        domain: Yield domain, [1, max yield] or the fixed comparison domain.
        compare: True when colouring ratios.
        legend_scale: Log scale from ``domain`` onto the legend pixel range.
        stops: Yield values at which the colour anchors sit.
        colors: ColorScale over ``stops``.
    """

    def __init__(
        self,
        domain: Tuple[float, float],
        anchors: Sequence[str],
        legend_range: Tuple[float, float] = (0.0, 100.0),
        compare: bool = False,
        undefined_ratio: float = -1.0,
    ):
        self.domain = (float(domain[0]), float(domain[1]))
        self.compare = compare
        self.undefined_ratio = undefined_ratio
        self.legend_range = (float(legend_range[0]), float(legend_range[1]))

        self.legend_scale = LogScale(self.domain, self.legend_range)

        n_colors = len(anchors)
        lo, hi = min(self.legend_range), max(self.legend_range)
        step = (hi - lo) / (n_colors - 1)
        positions = [lo + i * step for i in range(n_colors)]
        self.stops: Tuple[float, ...] = tuple(float(self.legend_scale.invert(p)) for p in positions)
        self.colors = ColorScale(self.stops, anchors)

    def __call__(self, value: float) -> str:
        return self.colors(value)

    def fill_for(self, record: NuclideRecord) -> str:
        """Fill colour of a cell; transparent when there is nothing to show."""
        value = record.yield_
        if value is None or value == 0:
            return TRANSPARENT
        if self.compare and value == self.undefined_ratio:
            # Divide-by-zero ratios read as "at least the top of the scale"
            return self.colors(self.domain[1])
        if value < 0:
            logger.debug(f"No colour for negative yield {value} (Z={record.Z}, A={record.A})")
            return TRANSPARENT
        return self.colors(value)

    def __repr__(self):
        return f"YieldColorScale(domain={self.domain}, compare={self.compare})"


def yield_domain(
    records: Sequence[NuclideRecord],
    compare: bool,
    config: ChartConfig,
) -> Optional[Tuple[float, float]]:
    """Domain of the yield colour scale, or None when no scale can be built."""
    yields = [r.yield_ for r in records if r.yield_ is not None]
    if not yields:
        return None
    if compare:
        return config.compare_domain

    max_yield = max(yields)
    if max_yield <= 0:
        logger.warning(f"Largest yield is {max_yield}; no yield colour scale built")
        return None
    if max_yield == 1:
        logger.warning("Largest yield is 1; widening the colour domain to [1, 10]")
        return (1.0, 10.0)
    return (1.0, float(max_yield))


def build_color_scale(
    records: Sequence[NuclideRecord],
    compare: bool = False,
    config: Optional[ChartConfig] = None,
) -> Optional[YieldColorScale]:
    """Yield colour scale for the record set, None if no record has a yield."""
    config = config or ChartConfig()
    domain = yield_domain(records, compare, config)
    if domain is None:
        return None
    return YieldColorScale(
        domain,
        config.yield_colors,
        legend_range=config.legend_range,
        compare=compare,
        undefined_ratio=config.undefined_ratio,
    )
