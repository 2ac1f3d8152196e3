from omegaconf import DictConfig, OmegaConf
from pathlib import Path
from typing import Dict, Optional

from ..domain import LocationProvider, SessionFactory, TimeProvider, WeatherContext, WeatherProvider
from ..infrastructure.artifact_store import FileArtifactStore
from ..infrastructure.locations import StaticLocationProvider
from ..infrastructure.session_cache import ModelSessionCache
from ..infrastructure.time_provider import SystemTimeProvider
from ..infrastructure.weather import OpenMeteoWeatherProvider, StaticWeatherProvider
from .batch_predictor import BatchPredictor
from .inference import InferenceRunner
from ...common.config.manager import ConfigManager, parse_locations, validate_prediction_config
from ...common.exceptions import ConfigurationError
from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector

class PredictionApplicationBuilder:
    """
    Builder pattern for constructing the congestion prediction service.
    Centralizes component instantiation and wiring.
    """
    
    def __init__(self, config: DictConfig, config_dir: Path = Path("conf")):
        self.config = config
        self.prediction_cfg = validate_prediction_config(config.prediction)
        self.config_manager = ConfigManager(config_dir)
        self.metrics_collector = MetricsCollector()
        self.logger = setup_logger(__name__)
        
        # Components
        self.location_provider: Optional[LocationProvider] = None
        self.weather_provider: Optional[WeatherProvider] = None
        self.time_provider: Optional[TimeProvider] = None
        self.artifact_store: Optional[FileArtifactStore] = None
        self.session_cache: Optional[ModelSessionCache] = None
        self.predictor: Optional[BatchPredictor] = None

    def build_locations(self) -> 'PredictionApplicationBuilder':
        inline = self.prediction_cfg.get('locations', None)
        if inline:
            locations = parse_locations(inline)
        else:
            locations_file = self.prediction_cfg.get('locations_file', None)
            if not locations_file:
                raise ConfigurationError("No locations configured")
            locations = self.config_manager.load_locations(locations_file)
        
        if not locations:
            raise ConfigurationError("Location list is empty")
        self.logger.info(f"Loaded {len(locations)} locations")
        self.location_provider = StaticLocationProvider(locations)
        return self

    def build_time_provider(self) -> 'PredictionApplicationBuilder':
        self.time_provider = SystemTimeProvider(self.prediction_cfg.get('timezone', None))
        return self

    def build_weather_provider(self) -> 'PredictionApplicationBuilder':
        weather_cfg = self.prediction_cfg.weather
        provider_type = weather_cfg.get('type', 'open_meteo')
        
        if provider_type == 'static':
            values: Dict[str, float] = OmegaConf.to_container(weather_cfg.static, resolve=True)
            self.weather_provider = StaticWeatherProvider(WeatherContext(
                temperature=float(values['temperature']),
                precipitation=float(values['precipitation']),
                rain=float(values['rain']),
                wind_speed=float(values['wind_speed'])
            ))
        elif provider_type == 'open_meteo':
            self.weather_provider = OpenMeteoWeatherProvider(
                url=weather_cfg.get('url', "https://api.open-meteo.com/v1/forecast"),
                timeout=weather_cfg.get('timeout_seconds', 10.0),
                cache_ttl=weather_cfg.get('cache_ttl_seconds', 900),
                timezone=self.prediction_cfg.get('timezone', None) or "auto"
            )
        else:
            raise ConfigurationError(f"Unknown weather provider type: {provider_type}")
        self.logger.info(f"Weather provider: {provider_type}")
        return self

    def build_artifact_store(self) -> 'PredictionApplicationBuilder':
        models_cfg = self.prediction_cfg.models
        self.artifact_store = FileArtifactStore(
            models_dir=models_cfg.models_dir,
            files=OmegaConf.to_container(models_cfg.files, resolve=True)
        )
        return self

    def build_session_cache(self, session_factory: Optional[SessionFactory] = None) -> 'PredictionApplicationBuilder':
        if not self.artifact_store:
            self.build_artifact_store()
        if session_factory is None:
            from ..infrastructure.onnx_session import OnnxSessionFactory
            session_factory = OnnxSessionFactory(
                intra_op_num_threads=self.prediction_cfg.models.get('intra_op_num_threads', 1)
            )
        self.session_cache = ModelSessionCache(
            artifact_store=self.artifact_store,
            session_factory=session_factory,
            metrics_collector=self.metrics_collector
        )
        return self

    def build_predictor(self) -> BatchPredictor:
        if not self.location_provider:
            self.build_locations()
        if not self.weather_provider:
            self.build_weather_provider()
        if not self.time_provider:
            self.build_time_provider()
        if not self.session_cache:
            self.build_session_cache()
        
        self.predictor = BatchPredictor(
            location_provider=self.location_provider,
            weather_provider=self.weather_provider,
            session_cache=self.session_cache,
            time_provider=self.time_provider,
            runner=InferenceRunner(metrics_collector=self.metrics_collector),
            metrics_collector=self.metrics_collector
        )
        return self.predictor

    def get_components(self) -> Dict:
        """Returns built components for external use (e.g. health endpoints)"""
        return {
            'location_provider': self.location_provider,
            'weather_provider': self.weather_provider,
            'time_provider': self.time_provider,
            'artifact_store': self.artifact_store,
            'session_cache': self.session_cache,
            'predictor': self.predictor,
            'metrics_collector': self.metrics_collector
        }
