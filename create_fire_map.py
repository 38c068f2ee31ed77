"""
Build the wildfire map, and optionally the scatter plot and a fire's brightness chart
"""

import argparse
import logging
from firemap.charts import plot_scatter
from firemap.config import DEFAULT_DATASET, OUTPUT_DIR
from firemap.data_manager import DataManager
from firemap.timeseries import nearest_detection
from firemap.visualizer import FireMapVisualizer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--data', default=str(DEFAULT_DATASET),
                        help="Detection CSV file or directory of CSV files")
    parser.add_argument('--output', default=str(OUTPUT_DIR / 'fire_map.html'),
                        help="Where to write the map HTML")
    parser.add_argument('--focal', nargs=2, type=float, metavar=('LAT', 'LON'),
                        help="Chart the fire nearest to this point")
    parser.add_argument('--chart', default=str(OUTPUT_DIR / 'fire_chart.png'),
                        help="Where to write the brightness chart")
    parser.add_argument('--scatter', default=None,
                        help="Also write the FRP/brightness scatter plot here")
    parser.add_argument('--no-boundaries', action='store_true',
                        help="Skip downloading country and state outlines")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    dm = DataManager(args.data)
    working_set = dm.load(include_boundaries=not args.no_boundaries)

    visualizer = FireMapVisualizer(working_set)
    visualizer.create_visualization(args.output)

    if args.scatter:
        plot_scatter(working_set.detections, args.scatter)
        logging.info(f"Saved scatter plot to {args.scatter}")

    if args.focal:
        focal = nearest_detection(working_set.detections, *args.focal)
        if focal is None:
            logging.warning("No detections to chart")
        else:
            visualizer.create_fire_chart(focal, args.chart)


if __name__ == "__main__":
    main()
