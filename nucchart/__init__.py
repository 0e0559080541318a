"""
nucchart: Interactive Chart of Nuclides
=======================================

Draws nuclides on a Z/N grid, coloured by yield on a logarithmic scale, with
decay-mode corners, half-lives and magic-number boundary lines, and provides
animated pan/zoom navigation to any drawn nuclide.

Modules:
    data: Nuclide record schema, identifier codec, record file loading
    chart: Scales, magic-number lines, view transforms, navigation, legend
           and the NuclideChart handle
    visualization: Renderer interface, in-memory and matplotlib renderers
    config: ChartConfig design parameters (YAML load/save)

Example:
    >>> from nucchart import NuclideChart, load_records
    >>> from nucchart.visualization import MatplotlibRenderer
    >>>
    >>> renderer = MatplotlibRenderer()
    >>> chart = NuclideChart(renderer)
    >>> chart.draw(load_records('data/demo_nuclides.parquet'))
    >>> chart.navigate_to('O16')
"""

__version__ = "1.0.0"

from nucchart.config import ChartConfig
from nucchart.data import NuclideRecord, DecayMode, load_records, nuclide_id, parse_to_id, verify_data
from nucchart.chart import NuclideChart, ViewTransform
from nucchart import data, chart, visualization

__all__ = [
    "ChartConfig",
    "NuclideRecord",
    "DecayMode",
    "load_records",
    "nuclide_id",
    "parse_to_id",
    "verify_data",
    "NuclideChart",
    "ViewTransform",
    "data",
    "chart",
    "visualization",
]
