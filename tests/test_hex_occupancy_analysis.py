import importlib.util
import json
from pathlib import Path

import pytest


SCRIPT = Path(__file__).resolve().parent.parent / "analysis_scripts" / "hex_occupancy_analysis.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("hex_occupancy_analysis", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_demo_run(script, tmp_path, capsys):
    output = tmp_path / "map.png"

    status = script.main(["--demo", "500", "--detector", "MAPSHexTest", "--output", str(output)])

    assert status == 0
    assert output.exists()
    out = capsys.readouterr().out
    assert "Occupancy (>= 1 hits)" in out
    assert "Hits per fired pixel" in out


def test_json_config(script, tmp_path):
    config_path = tmp_path / "sensors.json"
    config_path.write_text(json.dumps({"Tiny": {"pitch": 1.0, "n_columns": 3, "n_rows": 3}}))
    output = tmp_path / "tiny.png"

    status = script.main(["--demo", "50", "--config", str(config_path), "--detector", "Tiny",
                          "--output", str(output), "--log"])

    assert status == 0
    assert output.exists()


def test_unknown_detector(script, tmp_path, capsys):
    status = script.main(["--demo", "10", "--detector", "Nope", "--output", str(tmp_path / "x.png")])
    assert status == 1
    assert "Unknown detector" in capsys.readouterr().out


def test_no_input_files(script, tmp_path):
    assert script.main(["--output", str(tmp_path / "x.png")]) == 1


def test_demo_hits_cover_the_grid(script):
    from hexpix.detector_config import HexDetectorConfig

    config = HexDetectorConfig(name="Tiny", n_columns=3, n_rows=3, pitch=1.0)
    x, y = script.generate_demo_hits(config, 100, seed=3)

    assert len(x) == len(y) == 100
    width, height = config.get_grid_size()
    assert x.min() >= -config.pitch and x.max() <= width
