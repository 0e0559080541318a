"""
Chart Configuration
===================

Single home for the chart design parameters: cell geometry, magic numbers,
yield colour anchors, legend range, animation timings and navigation steps.

Example::

    from nucchart.config import ChartConfig

    config = ChartConfig(cell_size=48, navigate_duration=2.0)
    config.save_yaml('chart.yaml')

    # Later
    config = ChartConfig.from_yaml('chart.yaml')
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml


MAGIC_NUMBERS: Tuple[int, ...] = (2, 8, 20, 28, 50, 82, 126)

# Blue, cyan, green, yellow, red
YIELD_COLORS: Tuple[str, ...] = ('#0000FF', '#44FFFF', '#00FF00', '#FFFF00', '#FF0000')


@dataclass
class ChartConfig:
    """
    Design parameters of a nuclide chart.

    Attributes:
        cell_size: Side length of one nuclide cell (pixels).
        cell_padding: Gap added between neighbouring cells (pixels).
        magic_numbers: Shell closures marked by boundary lines.
        magic_number_offset: How many cells the magic lines overshoot the data.
        em: Size of one em in pixels; axis and legend margins are in em.
        yield_colors: Colour anchors of the yield scale, low to high.
        legend_range: Pixel range of the yield legend axis.
        compare_domain: Fixed ratio domain used in comparison mode.
        undefined_ratio: Yield sentinel for a divide-by-zero ratio.
        placeholder_symbol: Symbol used for records without one.
        zoom_duration: Seconds taken by zoom and pan transitions.
        navigate_duration: Seconds taken by navigation transitions.
        zoom_step: Factor applied by the zoom buttons.
        pan_step: Cells moved by the pan buttons.
        frame_interval: Milliseconds between animation frames.
        empty_message: Notification shown when there is nothing to draw.
    """

    cell_size: float = 64.0
    cell_padding: float = 0.0
    magic_numbers: Tuple[int, ...] = MAGIC_NUMBERS
    magic_number_offset: float = 5.0
    em: float = 16.0
    yield_colors: Tuple[str, ...] = YIELD_COLORS
    legend_range: Tuple[float, float] = (0.0, 100.0)
    compare_domain: Tuple[float, float] = (0.01, 100.0)
    undefined_ratio: float = -1.0
    placeholder_symbol: str = 'noname'
    zoom_duration: float = 1.0
    navigate_duration: float = 4.0
    zoom_step: float = 2.0
    pan_step: int = 5
    frame_interval: int = 30
    empty_message: str = 'No nuclide data to show'
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.magic_numbers = tuple(int(m) for m in self.magic_numbers)
        self.yield_colors = tuple(self.yield_colors)
        self.legend_range = tuple(self.legend_range)
        self.compare_domain = tuple(self.compare_domain)

        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.cell_padding < 0:
            raise ValueError(f"cell_padding must be >= 0, got {self.cell_padding}")
        if len(self.yield_colors) < 2:
            raise ValueError(
                f"yield_colors needs at least two anchors, got {len(self.yield_colors)}"
            )
        if len(self.legend_range) != 2 or self.legend_range[0] == self.legend_range[1]:
            raise ValueError(f"legend_range must be two distinct values, got {self.legend_range}")
        lo, hi = self.compare_domain
        if lo <= 0 or hi <= 0 or lo == hi:
            raise ValueError(
                f"compare_domain must be two distinct positive values, got {self.compare_domain}"
            )
        if self.zoom_duration < 0 or self.navigate_duration < 0:
            raise ValueError("Transition durations must be >= 0")
        if self.zoom_step <= 0:
            raise ValueError(f"zoom_step must be positive, got {self.zoom_step}")
        if self.frame_interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {self.frame_interval}")

    @property
    def pitch(self) -> float:
        """Distance between the origins of neighbouring cells."""
        return self.cell_size + self.cell_padding

    # ---- serialisation -----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python representation (tuples become lists)."""
        d = asdict(self)
        for key, value in d.items():
            if isinstance(value, tuple):
                d[key] = list(value)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'ChartConfig':
        """Build a config from a mapping; unknown keys go into ``extra``."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in d.items() if k in known}
        unknown = {k: v for k, v in d.items() if k not in known}
        if unknown:
            kwargs.setdefault('extra', {}).update(unknown)
        return cls(**kwargs)

    def save_yaml(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        return path

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'ChartConfig':
        with open(path) as f:
            d = yaml.safe_load(f) or {}
        if not isinstance(d, dict):
            raise ValueError(f"Chart config in {path} must be a mapping, got {type(d).__name__}")
        return cls.from_dict(d)
