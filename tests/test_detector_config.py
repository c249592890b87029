import json

import pytest

from hexpix.detector_config import HexDetectorConfig, get_detector_configs, load_detector_configs
from hexpix.segmentation.hex_indexer import get_grid_size, hex_side


def test_default_pitch_from_detector_class():
    config = HexDetectorConfig(name='Test', n_columns=10, n_rows=12, detector_class='HGCal')
    assert config.detector_class == 'hgcal'
    assert config.pitch == pytest.approx(6.5)
    assert config.side == pytest.approx(hex_side(6.5))
    assert config.total_pixels == 120


def test_explicit_pitch_overrides_default():
    config = HexDetectorConfig(name='Test', n_columns=2, n_rows=2, pitch=0.1)
    assert config.pitch == pytest.approx(0.1)


def test_unknown_class_without_pitch():
    with pytest.raises(ValueError):
        HexDetectorConfig(name='Test', n_columns=2, n_rows=2, detector_class='strips')


@pytest.mark.parametrize("pitch", [0.0, -0.055, float('nan')])
def test_invalid_pitch(pitch):
    with pytest.raises(ValueError):
        HexDetectorConfig(name='Test', n_columns=2, n_rows=2, pitch=pitch)


def test_negative_pixel_counts():
    with pytest.raises(ValueError):
        HexDetectorConfig(name='Test', n_columns=-1, n_rows=2, pitch=1.0)


def test_geometry_methods():
    config = HexDetectorConfig(name='Test', n_columns=3, n_rows=2, pitch=2.0)
    assert config.get_grid_size() == get_grid_size(3, 2, 2.0)
    assert config.get_pixel_index((0.0, 0.0)) == (0, 0)
    assert config.is_within_pixel_grid((2, 1))
    assert not config.is_within_pixel_grid((3, 1))
    assert not config.is_within_pixel_grid(None)


def test_registry():
    configs = get_detector_configs()
    assert 'HexPixTelescope' in configs
    for name, config in configs.items():
        assert config.name == name
        assert config.pitch > 0
        assert config.total_pixels > 0


def test_dict_round_trip():
    config = HexDetectorConfig(name='Test', n_columns=5, n_rows=7, pitch=0.05, thickness=0.2)
    restored = HexDetectorConfig.from_dict(config.to_dict())
    assert restored.to_dict() == config.to_dict()


def test_from_dict_missing_key():
    with pytest.raises(ValueError, match='n_rows'):
        HexDetectorConfig.from_dict({'n_columns': 4}, name='Broken')


def test_load_detector_configs(tmp_path):
    path = tmp_path / 'sensors.json'
    path.write_text(json.dumps({
        'SensorA': {'pitch': 0.055, 'n_columns': 64, 'n_rows': 32},
        'SensorB': {'detector_class': 'hgcal', 'n_columns': 10, 'n_rows': 10},
    }))

    configs = load_detector_configs(str(path))

    assert set(configs) == {'SensorA', 'SensorB'}
    assert configs['SensorA'].name == 'SensorA'
    assert configs['SensorA'].n_rows == 32
    assert configs['SensorB'].pitch == pytest.approx(6.5)


def test_load_detector_configs_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_detector_configs(str(tmp_path / 'missing.json'))


def test_load_detector_configs_invalid_json(tmp_path):
    path = tmp_path / 'broken.json'
    path.write_text('{"SensorA": ')
    with pytest.raises(ValueError):
        load_detector_configs(str(path))


def test_load_detector_configs_not_a_mapping(tmp_path):
    path = tmp_path / 'list.json'
    path.write_text('[1, 2]')
    with pytest.raises(ValueError):
        load_detector_configs(str(path))


@pytest.mark.parametrize("n_columns, n_rows", [(2.7, 2), (2, 0.5)])
def test_fractional_pixel_counts(n_columns, n_rows):
    with pytest.raises(ValueError, match="whole number"):
        HexDetectorConfig(name='Test', n_columns=n_columns, n_rows=n_rows, pitch=1.0)
