import numpy as np
from collections import Counter

from hexpix.segmentation.hex_indexer import UNRESOLVED, get_pixel_index, InvalidPositionError
from hexpix.utils.vectorized_hit_processing import get_pixel_indices_vectorized, filter_in_grid


def process_hit(hit_pos, config):
    """
    Process a single hit to determine its pixel.

    Parameters:
    -----------
    hit_pos : tuple
        (x, y) or (x, y, z) local hit position
    config : HexDetectorConfig
        Sensor configuration

    Returns:
    --------
    PixelIndex, or UNRESOLVED for non-finite positions. The index may lie
    outside the configured grid.
    """
    try:
        return get_pixel_index(hit_pos, config.pitch)
    except InvalidPositionError:
        return UNRESOLVED


def count_pixel_hits(x, y, config):
    """
    Count hits per hexagonal pixel of a sensor.

    Parameters:
    -----------
    x, y : array-like
        Local hit positions
    config : HexDetectorConfig
        Sensor configuration

    Returns:
    --------
    tuple (cells_hit, stats)
        cells_hit : Counter of (col, row) -> hit count, in-grid pixels only
        stats : dict with n_hits, n_in_grid, n_out_of_grid, n_unresolved
    """
    cols, rows, resolved = get_pixel_indices_vectorized(x, y, config.pitch)
    in_grid = resolved & filter_in_grid(cols, rows, config.n_columns, config.n_rows)

    cells_hit = Counter(zip(cols[in_grid].tolist(), rows[in_grid].tolist()))

    n_hits = int(resolved.size)
    n_unresolved = int(np.count_nonzero(~resolved))
    n_in_grid = int(np.count_nonzero(in_grid))
    stats = {
        'n_hits': n_hits,
        'n_in_grid': n_in_grid,
        'n_out_of_grid': n_hits - n_unresolved - n_in_grid,
        'n_unresolved': n_unresolved,
    }
    return cells_hit, stats


def calculate_occupancy(cells_hit, total_pixels, threshold=1):
    """
    Fraction of pixels with at least `threshold` hits.

    Parameters:
    -----------
    cells_hit : dict
        Dictionary of (col, row) -> hit count
    total_pixels : int
        Number of pixels in the sensor
    threshold : int
        Hit count threshold

    Returns:
    --------
    float : occupancy fraction
    """
    if total_pixels == 0:
        return 0.0

    cells_above = sum(1 for hits in cells_hit.values() if hits >= threshold)

    return cells_above / total_pixels


def analyze_sensor_hits(x, y, config, thresholds=(1, 2, 4)):
    """
    Assign hits to pixels and summarise the occupancy of one sensor.

    Returns:
    --------
    dict with keys 'cells_hit', 'stats', 'occupancy' (threshold -> fraction),
    'max_hits' and 'grid_size'
    """
    cells_hit, stats = count_pixel_hits(x, y, config)

    occupancy = {
        threshold: calculate_occupancy(cells_hit, config.total_pixels, threshold)
        for threshold in thresholds
    }

    if stats['n_unresolved']:
        print(f"Warning: {stats['n_unresolved']} hits in {config.name} have non-finite positions")

    return {
        'cells_hit': cells_hit,
        'stats': stats,
        'occupancy': occupancy,
        'max_hits': max(cells_hit.values()) if cells_hit else 0,
        'grid_size': config.get_grid_size(),
    }
