"""
Magic Number Boundary Lines
===========================

Magic-number shells are marked with pairs of lines bracketing the shell
boundary: vertical lines at N = m and N = m + 1, horizontal lines at Z = m
and Z = m - 1 (in cell units).  To keep the lines from running across the
whole chart, each pair only spans the data next to it plus a small margin:

    vertical pair   spans  [min Z, max Z]  of nuclides with |m - N| <= 1
    horizontal pair spans  [min N, max N]  of nuclides with |m - Z| <= 1

Bounds start at the +/-1000 sentinels; a pair whose bounds never moved has
no neighbouring data and is not drawn.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from nucchart.config import MAGIC_NUMBERS
from nucchart.data.records import NuclideRecord

UNBOUNDED_MIN = 1000
UNBOUNDED_MAX = -1000


@dataclass(frozen=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return float(np.hypot(self.x2 - self.x1, self.y2 - self.y1))


@dataclass(frozen=True)
class MagicNumberLine:
    """Bounds of the data adjacent to one magic number."""

    number: int
    min_z: int = UNBOUNDED_MIN
    max_z: int = UNBOUNDED_MAX
    min_n: int = UNBOUNDED_MIN
    max_n: int = UNBOUNDED_MAX

    @property
    def vertical_bounded(self) -> bool:
        """True if any nuclide has N within 1 of the magic number."""
        return self.min_z < UNBOUNDED_MIN and self.max_z > UNBOUNDED_MAX

    @property
    def horizontal_bounded(self) -> bool:
        """True if any nuclide has Z within 1 of the magic number."""
        return self.min_n < UNBOUNDED_MIN and self.max_n > UNBOUNDED_MAX

    def vertical_segments(self, cell_size: float, offset: float = 5.0) -> List[LineSegment]:
        if not self.vertical_bounded:
            return []
        y1 = (-self.min_z + 1 + offset) * cell_size
        y2 = (-self.max_z - offset) * cell_size
        return [
            LineSegment(x * cell_size, y1, x * cell_size, y2)
            for x in (self.number, self.number + 1)
        ]

    def horizontal_segments(self, cell_size: float, offset: float = 5.0) -> List[LineSegment]:
        if not self.horizontal_bounded:
            return []
        x1 = (self.min_n - offset) * cell_size
        x2 = (self.max_n + 1 + offset) * cell_size
        return [
            LineSegment(x1, -z * cell_size, x2, -z * cell_size)
            for z in (self.number, self.number - 1)
        ]

    def segments(self, cell_size: float, offset: float = 5.0) -> List[LineSegment]:
        """All drawable segments, vertical pair first."""
        return (self.vertical_segments(cell_size, offset)
                + self.horizontal_segments(cell_size, offset))


def magic_number_limits(
    records: Sequence[NuclideRecord],
    magic_numbers: Optional[Sequence[int]] = None,
) -> List[MagicNumberLine]:
    """
    Compute the data bounds next to each magic number.

    Args:
        records: Nuclides of the chart.
        magic_numbers: Shell closures; defaults to 2, 8, 20, 28, 50, 82, 126.

    Returns:
        One MagicNumberLine per magic number, in the given order.
    """
    if magic_numbers is None:
        magic_numbers = MAGIC_NUMBERS

    z = np.fromiter((r.Z for r in records), dtype=int, count=len(records))
    n = np.fromiter((r.N for r in records), dtype=int, count=len(records))

    lines: List[MagicNumberLine] = []
    for m in magic_numbers:
        near_n = np.abs(m - n) <= 1
        near_z = np.abs(m - z) <= 1
        bounds = {}
        if near_n.any():
            bounds['min_z'] = int(z[near_n].min())
            bounds['max_z'] = int(z[near_n].max())
        if near_z.any():
            bounds['min_n'] = int(n[near_z].min())
            bounds['max_n'] = int(n[near_z].max())
        lines.append(MagicNumberLine(number=int(m), **bounds))
    return lines
