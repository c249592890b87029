import matplotlib.pyplot as plt
import numpy as np
import pytest

from hexpix.detector_config import HexDetectorConfig
from hexpix.hit_analysis.plotting import plot_hex_pixel_map, plot_hits_on_grid, save_figure


@pytest.fixture
def config():
    return HexDetectorConfig(name='Small', n_columns=5, n_rows=4, pitch=0.055)


def test_plot_hex_pixel_map(config):
    cells_hit = {(0, 0): 3, (4, 3): 1, (2, 1): 7, (9, 9): 2}

    fig, ax = plot_hex_pixel_map(cells_hit, config)

    collection = ax.collections[0]
    # out-of-grid pixel (9, 9) is not drawn
    assert len(collection.get_paths()) == 3
    assert sorted(collection.get_array().tolist()) == [1.0, 3.0, 7.0]
    plt.close(fig)


def test_plot_hex_pixel_map_log_scale(config):
    fig, ax = plot_hex_pixel_map({(1, 1): 100, (2, 2): 1}, config, log=True)
    assert ax.collections[0].norm.vmax == 100
    plt.close(fig)


def test_plot_hex_pixel_map_empty(config):
    fig, ax = plot_hex_pixel_map({}, config)
    assert len(ax.collections[0].get_paths()) == 0
    plt.close(fig)


def test_plot_hits_on_grid(config):
    x = np.array([0.0, 0.05])
    y = np.array([0.0, 0.04])

    fig, ax = plot_hits_on_grid(x, y, config)

    assert len(ax.collections[0].get_paths()) == config.total_pixels
    plt.close(fig)


def test_save_figure(config, tmp_path):
    fig, _ = plot_hex_pixel_map({(0, 0): 1}, config)
    path = tmp_path / "map.png"

    save_figure(fig, str(path), dpi=50)

    assert path.exists()
    plt.close(fig)
