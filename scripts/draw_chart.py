#!/usr/bin/env python3
"""
Nuclide Chart Drawing Script
============================

Draws a chart of nuclides from a record file and saves it as an image.

Record files hold one nuclide per entry with the fields
Z, A, Symbol, Yield, HalflifeText and DecayMode (JSON, CSV or Parquet).

Usage:
    python scripts/draw_chart.py data/nuclides.json --output chart.png

    # Yield ratios of two measurements
    python scripts/draw_chart.py data/ratios.csv --compare --output ratios.png

    # Zoom in on a nuclide before saving
    python scripts/draw_chart.py data/nuclides.parquet --navigate U235

    # Custom design parameters
    python scripts/draw_chart.py data/nuclides.json --config chart.yaml
"""

import argparse
import logging
from pathlib import Path

import matplotlib

matplotlib.use('Agg')

from nucchart import ChartConfig, NuclideChart, load_records  # noqa: E402
from nucchart.visualization import MatplotlibRenderer  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main():
    """Main drawing script."""
    parser = argparse.ArgumentParser(
        description='Draw a chart of nuclides from a record file',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('input', type=str, help='Record file (.json, .csv or .parquet)')
    parser.add_argument(
        '--output',
        type=str,
        default='nuclide_chart.png',
        help='Image file to write (default: nuclide_chart.png)'
    )
    parser.add_argument('--config', type=str, default=None, help='ChartConfig YAML file')
    parser.add_argument('--compare', action='store_true', help='Colour yield ratios')
    parser.add_argument('--production', action='store_true',
                        help='Label values as production instead of yield')
    parser.add_argument('--no-decay-modes', action='store_true', help='Hide decay-mode corners')
    parser.add_argument('--no-magic-numbers', action='store_true', help='Hide magic-number lines')
    parser.add_argument('--navigate', type=str, default=None,
                        help="Centre the chart on a nuclide, e.g. 'U235'")
    parser.add_argument('--zoom', type=float, default=None, help='Extra zoom factor')
    parser.add_argument('--width', type=int, default=1600, help='Image width in pixels')
    parser.add_argument('--height', type=int, default=1000, help='Image height in pixels')
    parser.add_argument('--dpi', type=int, default=100, help='Image resolution')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file does not exist: {input_path}")
        return 1

    config = ChartConfig.from_yaml(args.config) if args.config else ChartConfig()

    try:
        records = load_records(input_path)
    except ValueError as exc:
        logger.error(f"Could not read {input_path}: {exc}")
        return 1

    renderer = MatplotlibRenderer(
        width=args.width, height=args.height, dpi=args.dpi, frame_interval=config.frame_interval,
    )
    chart = NuclideChart(renderer, config=config)
    chart.draw(
        records,
        compare=args.compare,
        show_decay_modes=not args.no_decay_modes,
        show_magic_numbers=not args.no_magic_numbers,
        yields=not args.production,
    )
    if not chart.attached:
        logger.error("Nothing was drawn")
        return 1

    if args.navigate:
        if chart.navigate_to(args.navigate) is None:
            logger.warning(f"{args.navigate!r} is not on the chart")
    if args.zoom:
        chart.zoom_by(args.zoom)
    renderer.finish_animations()

    renderer.save(args.output, dpi=args.dpi)
    renderer.close()
    logger.info(f"✓ Drew {len(chart.cells):,} nuclides")
    return 0


if __name__ == '__main__':
    exit(main())
