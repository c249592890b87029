import json
import math
import os

from hexpix.segmentation.hex_indexer import (
    check_pixel_count,
    get_grid_size,
    get_pixel_index,
    hex_side,
    is_within_pixel_grid,
)


class HexDetectorConfig:
    """Configuration class for hexagonal pixel sensors"""

    # Default side-to-side pitches in mm
    DEFAULT_PITCHES = {
        'hexpix': 0.055,       # 55 micron
        'timepix': 0.055,      # 55 micron
        'hgcal': 6.5,          # 6.5 mm silicon cell
        'maps': 0.025,         # 25 micron
    }

    def __init__(self, name, n_columns, n_rows, pitch=None, detector_class='hexpix', thickness=None):
        """
        Parameters:
        -----------
        name : str
            Sensor name (e.g., 'HexPixTelescope')
        n_columns : int
            Number of pixels along x
        n_rows : int
            Number of pixel rows along y
        pitch : float, optional
            Side-to-side pixel width in mm; defaults to the detector class value
        detector_class : str
            Class of sensor ('hexpix', 'timepix', 'hgcal', 'maps')
        thickness : float, optional
            Sensor thickness in mm, informational only
        """
        self.name = name
        self.detector_class = detector_class.lower()

        if pitch is None:
            if self.detector_class not in self.DEFAULT_PITCHES:
                raise ValueError(f"No default pitch for detector class '{detector_class}' of {name}")
            pitch = self.DEFAULT_PITCHES[self.detector_class]

        pitch = float(pitch)
        if not math.isfinite(pitch) or pitch <= 0:
            raise ValueError(f"Pitch of {name} must be positive, got {pitch}")
        self.pitch = pitch
        self.n_columns = check_pixel_count(n_columns, f"n_columns of {name}")
        self.n_rows = check_pixel_count(n_rows, f"n_rows of {name}")
        self.thickness = None if thickness is None else float(thickness)

    @property
    def side(self):
        return hex_side(self.pitch)

    @property
    def total_pixels(self):
        return self.n_columns * self.n_rows

    def get_grid_size(self):
        return get_grid_size(self.n_columns, self.n_rows, self.pitch)

    def get_pixel_index(self, position):
        return get_pixel_index(position, self.pitch)

    def is_within_pixel_grid(self, index):
        return is_within_pixel_grid(index, self.n_columns, self.n_rows)

    def to_dict(self):
        return {
            'name': self.name,
            'detector_class': self.detector_class,
            'pitch': self.pitch,
            'n_columns': self.n_columns,
            'n_rows': self.n_rows,
            'thickness': self.thickness,
        }

    @classmethod
    def from_dict(cls, data, name=None):
        try:
            return cls(
                name=data.get('name', name),
                n_columns=data['n_columns'],
                n_rows=data['n_rows'],
                pitch=data.get('pitch'),
                detector_class=data.get('detector_class', 'hexpix'),
                thickness=data.get('thickness'),
            )
        except KeyError as exc:
            raise ValueError(f"Missing key {exc} in configuration of {name or data.get('name')}") from exc

    def __repr__(self):
        return (f"HexDetectorConfig(name={self.name!r}, n_columns={self.n_columns}, "
                f"n_rows={self.n_rows}, pitch={self.pitch})")


def get_detector_configs():

    DETECTOR_CONFIGS = {
    'HexPixTelescope': HexDetectorConfig(
        name='HexPixTelescope',
        n_columns=256,
        n_rows=256,
        detector_class='hexpix',
        thickness=0.3
    ),
    'TimepixHex': HexDetectorConfig(
        name='TimepixHex',
        n_columns=128,
        n_rows=148,
        detector_class='timepix',
        thickness=0.3
    ),
    'HGCalWafer': HexDetectorConfig(
        name='HGCalWafer',
        n_columns=24,
        n_rows=28,
        detector_class='hgcal',
        thickness=0.3
    ),
    'MAPSHexTest': HexDetectorConfig(
        name='MAPSHexTest',
        n_columns=64,
        n_rows=64,
        detector_class='maps',
        thickness=0.05
    )
    }

    return DETECTOR_CONFIGS


def load_detector_configs(json_path):
    """
    Read sensor configurations from a JSON file of the form
    {"SensorName": {"pitch": 0.055, "n_columns": 64, "n_rows": 64}, ...}
    """
    if not os.path.exists(json_path):
        raise FileNotFoundError(f"Detector configuration file not found: {json_path}")

    with open(json_path, 'r') as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {json_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping of sensor names in {json_path}")

    configs = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Configuration of {name} in {json_path} must be a mapping")
        configs[name] = HexDetectorConfig.from_dict(entry, name=name)
    return configs
