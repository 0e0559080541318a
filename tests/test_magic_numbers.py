"""Tests for cell placement and magic-number boundary lines."""

import pytest

from nucchart.chart.geometry import CellGeometry, cell_geometry, position_of
from nucchart.chart.magic_numbers import (
    UNBOUNDED_MAX,
    UNBOUNDED_MIN,
    LineSegment,
    MagicNumberLine,
    magic_number_limits,
)
from nucchart.data.records import NuclideRecord

HE4 = NuclideRecord(Z=2, A=4, symbol='He')
H3 = NuclideRecord(Z=1, A=3, symbol='H')


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

class TestGeometry:
    def test_position(self):
        pos = position_of(HE4)
        assert (pos.x, pos.y) == (128.0, -128.0)

    def test_z_grows_upwards(self):
        assert position_of(HE4).y < position_of(H3).y

    def test_padding_widens_pitch(self):
        pos = position_of(HE4, cell_size=64, padding=4)
        assert (pos.x, pos.y) == (136, -136)

    def test_cell_geometry(self):
        assert cell_geometry(H3) == CellGeometry(128.0, -64.0, 64.0, 64.0)

    def test_center(self):
        assert cell_geometry(H3).center == (160.0, -32.0)

    def test_decay_corner(self):
        corner = cell_geometry(HE4).inset(0.75, 0.75, 0.25, 0.25)
        assert corner == CellGeometry(176.0, -80.0, 16.0, 16.0)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

class TestMagicNumberLimits:
    def test_one_line_per_magic_number(self):
        lines = magic_number_limits([HE4, H3])
        assert [line.number for line in lines] == [2, 8, 20, 28, 50, 82, 126]

    def test_bounds_next_to_data(self):
        line = magic_number_limits([HE4, H3])[0]
        assert (line.min_z, line.max_z) == (1, 2)
        assert (line.min_n, line.max_n) == (2, 2)

    def test_far_magic_numbers_unbounded(self):
        line = magic_number_limits([HE4, H3])[1]
        assert line == MagicNumberLine(8)
        assert (line.min_z, line.max_z) == (UNBOUNDED_MIN, UNBOUNDED_MAX)
        assert line.segments(64) == []

    def test_custom_magic_numbers(self):
        lines = magic_number_limits([HE4], magic_numbers=[3])
        assert len(lines) == 1
        assert lines[0].vertical_bounded and lines[0].horizontal_bounded

    def test_empty_records(self):
        lines = magic_number_limits([])
        assert all(line.segments(64) == [] for line in lines)


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------

class TestSegments:
    def test_four_segments(self):
        segments = magic_number_limits([HE4, H3])[0].segments(64, offset=5)
        assert segments == [
            LineSegment(128, 320, 128, -448),
            LineSegment(192, 320, 192, -448),
            LineSegment(-192, -128, 512, -128),
            LineSegment(-192, -64, 512, -64),
        ]

    def test_one_sided_bounds(self):
        # Z = 20 sits on a magic number, N = 10 is far from every one
        line = magic_number_limits([NuclideRecord(Z=20, A=30)], magic_numbers=[20])[0]
        assert not line.vertical_bounded
        assert line.horizontal_bounded
        segments = line.segments(64)
        assert len(segments) == 2
        assert all(s.y1 == s.y2 for s in segments)

    def test_segments_overshoot_data(self):
        line = magic_number_limits([HE4, H3])[0]
        vertical = line.vertical_segments(64, offset=5)[0]
        assert vertical.length == pytest.approx((2 - 1 + 1 + 2 * 5) * 64)
