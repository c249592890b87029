import numpy as np
import matplotlib.pyplot as plt
import mplhep as hep
from matplotlib.collections import PatchCollection
from matplotlib.colors import LogNorm, Normalize
from matplotlib.patches import Rectangle, RegularPolygon

from hexpix.segmentation.hex_indexer import get_pixel_center


def _hexagon_patches(indices, config):
    """Pointy-top hexagons centred on the given pixel indices"""
    side = config.side
    patches = []
    for index in indices:
        center = get_pixel_center(index, config.pitch)
        patches.append(RegularPolygon(center, numVertices=6, radius=side, orientation=0.0))
    return patches


def _draw_grid_outline(ax, config):
    """Bounding box of the grid, anchored at the bottom-left pixel corner"""
    width, height = config.get_grid_size()
    corner = (-config.pitch / 2, -config.side)
    ax.add_patch(Rectangle(corner, width, height, fill=False, edgecolor='red',
                           linestyle='--', linewidth=1.0))
    margin = config.pitch
    ax.set_xlim(corner[0] - margin, corner[0] + width + 1.5 * margin)
    ax.set_ylim(corner[1] - margin, corner[1] + height + margin)
    ax.set_aspect('equal')


def plot_hex_pixel_map(cells_hit, config, ax=None, log=False, cmap='viridis'):
    """
    Draw the hit count of every pixel of a hexagonal sensor.

    Parameters:
    -----------
    cells_hit : dict
        (col, row) -> hit count
    config : HexDetectorConfig
        Sensor configuration
    ax : matplotlib Axes, optional
    log : bool
        Logarithmic colour scale
    cmap : str
        Colour map name

    Returns:
    --------
    tuple (fig, ax)
    """
    plt.style.use(hep.style.CMS)
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 10))
    else:
        fig = ax.figure

    indices = [index for index in cells_hit if config.is_within_pixel_grid(index)]
    values = np.array([cells_hit[index] for index in indices], dtype=float)

    collection = PatchCollection(_hexagon_patches(indices, config), cmap=cmap,
                                 edgecolor='none')
    if values.size:
        if log:
            norm = LogNorm(vmin=max(values.min(), 1), vmax=max(values.max(), 1))
        else:
            norm = Normalize(vmin=0, vmax=values.max())
        collection.set_array(values)
        collection.set_norm(norm)
    ax.add_collection(collection)

    if values.size:
        cbar = fig.colorbar(collection, ax=ax, pad=0.01)
        cbar.set_label('Hits', fontsize=20, labelpad=15)

    _draw_grid_outline(ax, config)
    ax.set_xlabel('x [mm]', fontsize=20)
    ax.set_ylabel('y [mm]', fontsize=20)
    ax.set_title(f'{config.name}: {config.n_columns}x{config.n_rows} pixels, '
                 f'pitch {config.pitch * 1000:.0f} $\\mu$m', fontsize=16)

    return fig, ax


def plot_hits_on_grid(x, y, config, ax=None):
    """Overlay hit positions on the outline of every pixel of the sensor"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 10))
    else:
        fig = ax.figure

    indices = [(col, row) for row in range(config.n_rows) for col in range(config.n_columns)]
    outline = PatchCollection(_hexagon_patches(indices, config), facecolor='none',
                              edgecolor='gray', linewidth=0.5)
    ax.add_collection(outline)

    ax.scatter(np.asarray(x), np.asarray(y), s=4, color='black')

    _draw_grid_outline(ax, config)
    ax.set_xlabel('x [mm]', fontsize=20)
    ax.set_ylabel('y [mm]', fontsize=20)

    return fig, ax


def save_figure(fig, path, dpi=300):
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    print(f"Saved figure to {path}")
