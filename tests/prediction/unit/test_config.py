import pytest
from pathlib import Path
from omegaconf import OmegaConf
from src.common.config.manager import ConfigManager, parse_locations, validate_prediction_config
from src.common.exceptions import ConfigurationError

CONF_DIR = Path(__file__).resolve().parents[3] / "conf"

def test_load_default_profile():
    cfg = ConfigManager(CONF_DIR).load_prediction_config()
    assert cfg.models.files.stage1 == "model_stage1.onnx"
    assert cfg.models.files.stage2 == "model_stage2.onnx"
    assert cfg.models.intra_op_num_threads == 1
    assert cfg.weather.type in ("open_meteo", "static")

def test_missing_profile_raises():
    with pytest.raises(FileNotFoundError):
        ConfigManager(CONF_DIR).load_prediction_config("does_not_exist")

def test_load_bundled_locations():
    locations = ConfigManager(CONF_DIR).load_locations(CONF_DIR / "prediction" / "locations.yaml")
    assert len(locations) > 0
    assert len({loc.name for loc in locations}) == len(locations)

def test_load_locations_relative_to_project_root():
    locations = ConfigManager(CONF_DIR).load_locations("conf/prediction/locations.yaml")
    assert len(locations) > 0

def test_parse_locations_preserves_order():
    entries = OmegaConf.create([
        {"name": "B", "latitude": -12.1, "longitude": -77.0},
        {"name": "A", "latitude": "-12.2", "longitude": -77.1},
    ])
    locations = parse_locations(entries)
    assert [loc.name for loc in locations] == ["B", "A"]
    assert locations[1].latitude == -12.2

def test_parse_locations_rejects_duplicates():
    with pytest.raises(ConfigurationError):
        parse_locations([
            {"name": "A", "latitude": 0, "longitude": 0},
            {"name": "A", "latitude": 1, "longitude": 1},
        ])

def test_parse_locations_rejects_missing_fields():
    with pytest.raises(ConfigurationError):
        parse_locations([{"name": "A", "latitude": 0}])

def test_validate_rejects_wrong_types():
    with pytest.raises(ConfigurationError):
        validate_prediction_config(OmegaConf.create({"models": {"intra_op_num_threads": "many"}}))

def test_validate_fills_defaults():
    cfg = validate_prediction_config(OmegaConf.create({"weather": {"type": "static"}}))
    assert cfg.weather.type == "static"
    assert cfg.weather.static.temperature == 20.0
    assert cfg.server.port == 8000
