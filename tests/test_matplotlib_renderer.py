"""Tests for the matplotlib renderer (Agg backend, no display needed)."""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest
from matplotlib.backend_bases import MouseEvent

from nucchart.chart.nuclide_chart import NuclideChart
from nucchart.chart.presentation import LAYER_DECAY_MODES, LAYER_MAGIC_NUMBERS, MalformedColorFormat
from nucchart.config import ChartConfig
from nucchart.visualization.matplotlib_renderer import SCROLL_ZOOM, MatplotlibRenderer, to_mpl_color

HE4_H3 = [
    {'Z': 2, 'A': 4, 'Symbol': 'He', 'Yield': 50, 'HalflifeText': 'stable', 'DecayMode': {'Mode': 'is'}},
    {'Z': 1, 'A': 3, 'Symbol': 'H', 'HalflifeText': '12.3 y', 'DecayMode': {'Mode': 'b-'}},
]


@pytest.fixture
def renderer():
    r = MatplotlibRenderer(width=1000, height=800, dpi=100)
    yield r
    r.close()


@pytest.fixture
def chart(renderer):
    c = NuclideChart(renderer)
    c.draw(HE4_H3)
    return c


# ---------------------------------------------------------------------------
# Colour conversion
# ---------------------------------------------------------------------------

class TestColorConversion:
    def test_rgb(self):
        assert to_mpl_color('rgb(255, 0, 51)') == pytest.approx((1.0, 0.0, 0.2))

    def test_hex_passes_through(self):
        assert to_mpl_color('#5cbc57') == '#5cbc57'

    @pytest.mark.parametrize('color', [None, 'transparent'])
    def test_transparent(self, color):
        assert to_mpl_color(color) == 'none'

    def test_malformed(self):
        with pytest.raises(MalformedColorFormat):
            to_mpl_color('not-a-colour')


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------

class TestDrawing:
    def test_viewport_is_chart_axes(self, renderer):
        width, height = renderer.viewport_size()
        assert width == pytest.approx(1000 * 0.74)
        assert height == pytest.approx(800 * 0.96)

    def test_artists_created(self, chart, renderer):
        # Two cells and two decay corners
        assert len(renderer.ax.patches) == 4
        assert len(renderer.ax.lines) == 4
        gids = {p.get_gid() for p in renderer.ax.patches}
        assert gids == {'He4', 'H3'}

    def test_limits_follow_transform(self, chart, renderer):
        t = chart.transform
        width, height = renderer.viewport_size()
        x0, y0 = t.invert((0, 0))
        x1, y1 = t.invert((width, height))
        assert renderer.ax.get_xlim() == pytest.approx((x0, x1))
        assert renderer.ax.get_ylim() == pytest.approx((y1, y0))
        assert renderer.transform == t

    def test_font_scales_with_zoom(self, chart, renderer):
        name = next(t for t in renderer.ax.texts if t.get_text() == 'He 4')
        assert name.get_fontsize() == pytest.approx(12 * chart.transform.k * 0.72)

    def test_legend_axes(self, chart, renderer):
        # Gradient, decay modes and format key
        assert len(renderer.legend_axes) == 3

    def test_no_legend_column(self):
        r = MatplotlibRenderer(width=1000, height=800, legend=False)
        try:
            NuclideChart(r).draw(HE4_H3)
            assert r.legend_axes == []
            assert r.viewport_size()[0] == pytest.approx(960)
        finally:
            r.close()

    def test_redraw_replaces_artists(self, chart, renderer):
        chart.draw(HE4_H3[:1])
        assert len(renderer.ax.patches) == 2
        assert len(renderer.legend_axes) == 3

    def test_save(self, chart, renderer, tmp_path):
        out = tmp_path / 'charts' / 'chart.png'
        assert renderer.save(out) is renderer
        assert out.exists()
        assert out.stat().st_size > 0


class TestLayers:
    def test_hidden_layers(self, chart, renderer):
        chart.set_decay_mode_visibility(False)
        corners = [p for p in renderer.ax.patches if p.get_width() == 16]
        assert corners and not any(p.get_visible() for p in corners)
        assert all(p.get_visible() for p in renderer.ax.patches if p.get_width() == 64)

    def test_decay_toggle_keeps_mode_list(self, chart, renderer):
        chart.set_decay_mode_visibility(False)
        _, decay_ax, key_ax = renderer.legend_axes
        assert decay_ax.get_legend().get_visible()
        # Only the corner square of the format key follows the toggle
        key_corner = [p for p in key_ax.patches if p.get_width() == 16]
        assert key_corner and not key_corner[0].get_visible()

    def test_magic_lines(self, chart, renderer):
        chart.set_magic_number_visibility(False)
        assert not any(line.get_visible() for line in renderer.ax.lines)
        chart.set_magic_number_visibility(True)
        assert all(line.get_visible() for line in renderer.ax.lines)

    def test_initial_visibility(self, renderer):
        NuclideChart(renderer).draw(HE4_H3, show_magic_numbers=False)
        assert not renderer.layer_visible(LAYER_MAGIC_NUMBERS)
        assert not any(line.get_visible() for line in renderer.ax.lines)
        assert renderer.layer_visible(LAYER_DECAY_MODES)


# ---------------------------------------------------------------------------
# Notification
# ---------------------------------------------------------------------------

class TestNotification:
    def test_empty_data(self, renderer):
        NuclideChart(renderer).draw([])
        assert renderer.notification == ChartConfig().empty_message

    def test_hidden_by_draw(self, renderer):
        chart = NuclideChart(renderer)
        chart.notify('Loading...')
        assert renderer.notification == 'Loading...'
        chart.draw(HE4_H3)
        assert renderer.notification is None


# ---------------------------------------------------------------------------
# Animation and interaction
# ---------------------------------------------------------------------------

class TestAnimation:
    def test_finish_animations(self, chart, renderer):
        initial = chart.transform
        chart.zoom_by(2)
        # Agg timers never fire
        assert renderer.transform == initial
        renderer.finish_animations()
        assert renderer.transform == chart.transform

    def test_clear_stops_animations(self, chart, renderer):
        chart.navigate_to('He4')
        chart.clear()
        renderer.finish_animations()
        assert renderer.transform is None

    def test_scroll_zoom(self, chart, renderer):
        initial = chart.transform
        bbox = renderer.ax.bbox
        event = MouseEvent('scroll_event', renderer.fig.canvas,
                           (bbox.x0 + bbox.x1) / 2, (bbox.y0 + bbox.y1) / 2, step=1)
        renderer.fig.canvas.callbacks.process('scroll_event', event)
        assert chart.transform.k == pytest.approx(initial.k * SCROLL_ZOOM)
        assert renderer.transform == chart.transform


class TestButtons:
    def test_buttons(self, chart, renderer):
        buttons = chart.add_navigation_buttons()
        assert [b.label.get_text() for b in buttons] == ['+', '-', '⇧', '⇦', '⇩', '⇨']
        assert all(b.get_active() for b in buttons)

    def test_disable(self, chart, renderer):
        buttons = chart.add_navigation_buttons()
        chart.disable_navigation_buttons()
        assert not any(b.get_active() for b in buttons)
        chart.enable_navigation_buttons()
        assert all(b.get_active() for b in buttons)

    def test_button_in_box(self, renderer):
        button = renderer.add_button([0.9, 0.9, 0.05, 0.05], 'x', lambda: None)
        assert button.ax in renderer.fig.axes


def teardown_module(module):
    plt.close('all')
