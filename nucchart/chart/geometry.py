"""Grid placement of nuclide cells (N across, Z upwards)."""

from dataclasses import dataclass
from typing import Tuple

from nucchart.data.records import NuclideRecord

DEFAULT_CELL_SIZE = 64.0


@dataclass(frozen=True)
class GridPosition:
    """Top-left pixel corner of a cell."""

    x: float
    y: float


@dataclass(frozen=True)
class CellGeometry:
    """Pixel rectangle of a drawn cell."""

    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2

    def inset(self, fx: float, fy: float, fw: float, fh: float) -> 'CellGeometry':
        """Sub-rectangle given as fractions of this cell (decay-mode corner etc.)."""
        return CellGeometry(
            self.x + fx * self.width,
            self.y + fy * self.height,
            fw * self.width,
            fh * self.height,
        )


def position_of(
    record: NuclideRecord,
    cell_size: float = DEFAULT_CELL_SIZE,
    padding: float = 0.0,
) -> GridPosition:
    """
    Pixel position of a nuclide.

    x grows with N = A - Z.  Z grows upwards, so pixel y is -Z times the
    cell pitch; the renderer's y axis is flipped to match.
    """
    pitch = cell_size + padding
    return GridPosition(x=(record.A - record.Z) * pitch, y=-(record.Z * pitch))


def cell_geometry(
    record: NuclideRecord,
    cell_size: float = DEFAULT_CELL_SIZE,
    padding: float = 0.0,
) -> CellGeometry:
    pos = position_of(record, cell_size, padding)
    return CellGeometry(pos.x, pos.y, cell_size, cell_size)
