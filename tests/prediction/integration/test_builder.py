import pytest
from fastapi.testclient import TestClient
from omegaconf import OmegaConf
from src.prediction.application.builder import PredictionApplicationBuilder
from src.prediction.application.batch_predictor import BatchPredictor
from src.prediction.domain.entities import CongestionLevel
from src.prediction.infrastructure.weather import OpenMeteoWeatherProvider, StaticWeatherProvider
from src.prediction.presentation.api import init_app
from src.common.exceptions import ConfigurationError
from tests.fakes import FakeSession, FakeSessionFactory

@pytest.fixture
def models_dir(tmp_path):
    (tmp_path / "model_stage1.onnx").write_bytes(b"stage1")
    (tmp_path / "model_stage2.onnx").write_bytes(b"stage2")
    return tmp_path

@pytest.fixture
def config(models_dir):
    return OmegaConf.create({
        "prediction": {
            "models": {
                "models_dir": str(models_dir),
                "files": {"stage1": "model_stage1.onnx", "stage2": "model_stage2.onnx"},
            },
            "weather": {
                "type": "static",
                "static": {"temperature": 21.0, "precipitation": 0.0, "rain": 0.0, "wind_speed": 6.0},
            },
            "timezone": "America/Lima",
            "locations": [
                {"name": "Av. Larco y Av. Benavides", "latitude": -12.1254, "longitude": -77.0297},
                {"name": "Ovalo Gutierrez", "latitude": -12.1096, "longitude": -77.0367},
            ],
        }
    })

@pytest.fixture
def session_factory():
    return FakeSessionFactory({
        "stage1": FakeSession(outputs=[[0.2, 0.7, 0.1]]),
        "stage2": FakeSession(outputs=[1.2]),
    })

def test_build_components(config, session_factory):
    builder = PredictionApplicationBuilder(config)
    predictor = (
        builder
        .build_locations()
        .build_weather_provider()
        .build_time_provider()
        .build_session_cache(session_factory=session_factory)
        .build_predictor()
    )
    
    assert isinstance(predictor, BatchPredictor)
    assert isinstance(builder.weather_provider, StaticWeatherProvider)
    assert [loc.name for loc in builder.location_provider.get_locations()] == [
        "Av. Larco y Av. Benavides", "Ovalo Gutierrez"
    ]
    components = builder.get_components()
    assert components['session_cache'] is predictor.session_cache
    assert components['metrics_collector'] is predictor.metrics_collector

@pytest.mark.asyncio
async def test_built_predictor_runs_batch(config, session_factory):
    builder = PredictionApplicationBuilder(config)
    predictor = builder.build_session_cache(session_factory=session_factory).build_predictor()
    
    result = await predictor.predict(hour=18, day=5)
    
    assert sorted(session_factory.created) == ["stage1", "stage2"]
    assert [p.congestion for p in result.predictions] == [CongestionLevel.MODERATE] * 2
    assert result.predictions[0].probability == pytest.approx(0.7)
    assert result.weather.temperature == 21.0
    assert builder.metrics_collector.get_metrics().batches_completed == 1

def test_open_meteo_provider_selected(config):
    config.prediction.weather.type = "open_meteo"
    builder = PredictionApplicationBuilder(config).build_weather_provider()
    assert isinstance(builder.weather_provider, OpenMeteoWeatherProvider)
    assert builder.weather_provider.timezone == "America/Lima"

def test_unknown_weather_provider_rejected(config):
    config.prediction.weather.type = "satellite"
    with pytest.raises(ConfigurationError):
        PredictionApplicationBuilder(config).build_weather_provider()

def test_empty_locations_rejected(config):
    config.prediction.locations = []
    config.prediction.locations_file = None
    with pytest.raises(ConfigurationError):
        PredictionApplicationBuilder(config).build_locations()

def test_missing_model_file_reported_through_api(config, session_factory, models_dir):
    (models_dir / "model_stage2.onnx").unlink()
    builder = PredictionApplicationBuilder(config).build_session_cache(session_factory=session_factory)
    client = TestClient(init_app(builder))
    
    response = client.get("/predict")
    
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to generate predictions"
    assert "model_stage2.onnx" in body["details"]
    assert client.get("/ready").status_code == 503

def test_api_end_to_end(config, session_factory):
    builder = PredictionApplicationBuilder(config).build_session_cache(session_factory=session_factory)
    client = TestClient(init_app(builder))
    
    response = client.get("/predict", params={"hour": "7", "day": "2"})
    
    assert response.status_code == 200
    body = response.json()
    assert (body["hour"], body["day"]) == (7, 2)
    assert [p["congestionLabel"] for p in body["predictions"]] == ["Moderate", "Moderate"]
    assert client.get("/ready").status_code == 200
