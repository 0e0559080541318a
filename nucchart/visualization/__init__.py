"""
Visualization Module
====================

Renderers the chart draws through.

Main Classes:
    Renderer: Abstract drawing surface
    RecordingRenderer: In-memory scene graph (headless use, tests)
    MatplotlibRenderer: matplotlib figure with interactive pan/zoom and image export
"""

from nucchart.visualization.base import Line, Rect, Renderer, Text
from nucchart.visualization.recording import RecordingRenderer
from nucchart.visualization.matplotlib_renderer import MatplotlibRenderer

__all__ = ['Line', 'Rect', 'Renderer', 'Text', 'RecordingRenderer', 'MatplotlibRenderer']
