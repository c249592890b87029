from hexpix.segmentation.hex_indexer import (
    GridExtent,
    HexGridError,
    IndexInvariantError,
    InvalidPitchError,
    InvalidPositionError,
    PixelIndex,
    UNRESOLVED,
    get_grid_size,
    get_pixel_center,
    get_pixel_index,
    hex_side,
    is_within_pixel_grid,
)
from hexpix.detector_config import HexDetectorConfig, get_detector_configs, load_detector_configs
