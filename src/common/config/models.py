from dataclasses import dataclass, field
from typing import Optional, Dict, List

@dataclass
class ModelStoreConfig:
    models_dir: str = "public/models"
    files: Dict[str, str] = field(default_factory=lambda: {
        "stage1": "model_stage1.onnx",
        "stage2": "model_stage2.onnx",
    })
    intra_op_num_threads: int = 1

@dataclass
class WeatherConfig:
    type: str = "open_meteo"
    url: str = "https://api.open-meteo.com/v1/forecast"
    timeout_seconds: float = 10.0
    cache_ttl_seconds: int = 900
    static: Dict[str, float] = field(default_factory=lambda: {
        "temperature": 20.0,
        "precipitation": 0.0,
        "rain": 0.0,
        "wind_speed": 10.0,
    })

@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000

@dataclass
class LocationConfig:
    name: str
    latitude: float
    longitude: float

@dataclass
class PredictionConfig:
    models: ModelStoreConfig = field(default_factory=ModelStoreConfig)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    timezone: Optional[str] = "America/Lima"
    locations_file: Optional[str] = "conf/prediction/locations.yaml"
    locations: List[LocationConfig] = field(default_factory=list) # Inline locations take precedence over locations_file
