#!/usr/bin/env python3
"""
Pixel occupancy of a hexagonal pixel sensor.

Reads local hit positions from ROOT files (or generates a uniform demo sample),
assigns them to hexagonal pixels and writes a pixel map.
"""

import argparse
import time

import numpy as np
import matplotlib
matplotlib.use('Agg')

from hexpix.detector_config import get_detector_configs, load_detector_configs
from hexpix.hit_analysis.occupancy import analyze_sensor_hits
from hexpix.hit_analysis.plotting import plot_hex_pixel_map, save_figure
from hexpix.hit_analysis.read_hits import open_hit_files, read_local_hits
from hexpix.utils.histogram_utils import make_hits_per_pixel_histogram


def generate_demo_hits(config, n_hits, seed=0):
    """Uniform hits over the grid bounding box plus one pitch of margin"""
    rng = np.random.default_rng(seed)
    width, height = config.get_grid_size()
    x = rng.uniform(-config.pitch, width, n_hits)
    y = rng.uniform(-config.side - config.pitch, height, n_hits)
    return x, y


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('files', nargs='*', help='ROOT files with local hit positions')
    parser.add_argument('--detector', default='HexPixTelescope', help='Sensor name')
    parser.add_argument('--config', help='JSON file with sensor configurations')
    parser.add_argument('--collection', default='HexPixHits', help='Hit collection name')
    parser.add_argument('--tree', default='events', help='Tree name')
    parser.add_argument('--demo', type=int, default=0, metavar='N',
                        help='Use N uniformly generated hits instead of files')
    parser.add_argument('--output', default='hex_pixel_map.png', help='Output image')
    parser.add_argument('--log', action='store_true', help='Logarithmic colour scale')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    configs = load_detector_configs(args.config) if args.config else get_detector_configs()
    if args.detector not in configs:
        print(f"Error: Unknown detector {args.detector}. Available: {', '.join(sorted(configs))}")
        return 1
    config = configs[args.detector]
    print(f"Using {config}")

    start = time.time()
    if args.demo:
        x, y = generate_demo_hits(config, args.demo)
    else:
        if not args.files:
            print("Error: No input files given (use --demo N for a synthetic sample)")
            return 1
        trees, missing = open_hit_files(args.files, tree_name=args.tree)
        if missing:
            print(f"Warning: {len(missing)} files could not be opened. Proceeding with {len(trees)} files.")
        if not trees:
            print("Error: No files available!")
            return 1
        x, y = read_local_hits(trees, args.collection)
    print(f"Loaded {len(x)} hits in {time.time() - start:.2f} s")

    results = analyze_sensor_hits(x, y, config)
    stats = results['stats']
    width, height = results['grid_size']

    print(f"\nGrid size: {width:.3f} x {height:.3f} mm")
    print(f"Hits in grid: {stats['n_in_grid']}, out of grid: {stats['n_out_of_grid']}, "
          f"unresolved: {stats['n_unresolved']}")
    print(f"Fired pixels: {len(results['cells_hit'])} / {config.total_pixels}, "
          f"max hits per pixel: {results['max_hits']}")
    for threshold, occupancy in results['occupancy'].items():
        print(f"  Occupancy (>= {threshold} hits): {occupancy:.4e}")

    hits_hist = make_hits_per_pixel_histogram(results["cells_hit"])
    print("\nHits per fired pixel:")
    for n_hits, n_pixels in zip(hits_hist.axes[0].edges[:-1], hits_hist.values()):
        if n_pixels:
            print(f"  {int(n_hits)}: {int(n_pixels)}")

    fig, _ = plot_hex_pixel_map(results['cells_hit'], config, log=args.log)
    save_figure(fig, args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
