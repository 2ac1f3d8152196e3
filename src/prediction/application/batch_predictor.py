"""
Batch orchestration: every location, every model, one fused prediction each.
"""
import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple, Union

from ..domain.entities import (
    BatchPredictionResult, Location, ModelSessions, Prediction, TimeContext, WeatherContext
)
from ..domain.protocols import LocationProvider, TimeProvider, WeatherProvider
from ..infrastructure.session_cache import ModelSessionCache
from ..infrastructure.time_provider import SystemTimeProvider
from .ensemble import aggregate
from .features import build_feature_vector
from .inference import InferenceRunner
from ...common.exceptions import PredictionError, WeatherProviderError
from ...common.logging import setup_logger, log_execution_time
from ...common.metrics import MetricsCollector

Override = Optional[Union[int, str]]


def parse_override(value: Override) -> Optional[int]:
    """
    Returns the override as an int, or None when absent or not an integer.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class BatchPredictor:
    """
    Produces a congestion prediction for every configured location.

    Model failures degrade a single result (see InferenceRunner); weather,
    model loading and aggregation failures abort the whole batch.
    """

    def __init__(
        self,
        location_provider: LocationProvider,
        weather_provider: WeatherProvider,
        session_cache: ModelSessionCache,
        time_provider: Optional[TimeProvider] = None,
        runner: Optional[InferenceRunner] = None,
        metrics_collector: Optional[MetricsCollector] = None
    ):
        self.location_provider = location_provider
        self.weather_provider = weather_provider
        self.session_cache = session_cache
        self.time_provider = time_provider or SystemTimeProvider()
        self.metrics_collector = metrics_collector
        self.runner = runner or InferenceRunner(metrics_collector=metrics_collector)
        self.logger = setup_logger(__name__)

    def resolve_time(self, hour: Override = None, day: Override = None) -> TimeContext:
        current = self.time_provider.now()
        resolved_hour = parse_override(hour)
        resolved_day = parse_override(day)
        return TimeContext(
            hour=current.hour if resolved_hour is None else resolved_hour,
            day=current.day if resolved_day is None else resolved_day
        )

    @staticmethod
    def centroid(locations: Sequence[Location]) -> Tuple[float, float]:
        if not locations:
            raise PredictionError("No locations configured")
        lat = sum(loc.latitude for loc in locations) / len(locations)
        lon = sum(loc.longitude for loc in locations) / len(locations)
        return lat, lon

    @log_execution_time(logging.getLogger(__name__))
    async def predict(self, hour: Override = None, day: Override = None) -> BatchPredictionResult:
        start = time.time()
        try:
            result = await self._predict(hour, day)
        except Exception:
            if self.metrics_collector:
                self.metrics_collector.record_batch_failure()
            raise
        if self.metrics_collector:
            self.metrics_collector.record_batch((time.time() - start) * 1000)
        return result

    async def _predict(self, hour: Override, day: Override) -> BatchPredictionResult:
        time_ctx = self.resolve_time(hour, day)
        locations = list(self.location_provider.get_locations())

        center_lat, center_lon = self.centroid(locations)
        weather = await self._fetch_weather(center_lat, center_lon, time_ctx)

        sessions = await self.session_cache.acquire()

        predictions = await asyncio.to_thread(
            self._predict_locations, locations, time_ctx, weather, sessions
        )
        self.logger.info(
            f"Batch completed: {len(predictions)} locations (hour={time_ctx.hour}, day={time_ctx.day})"
        )
        return BatchPredictionResult(
            predictions=predictions,
            weather=weather,
            timestamp=datetime.now(timezone.utc).isoformat(),
            hour=time_ctx.hour,
            day=time_ctx.day
        )

    async def _fetch_weather(self, latitude: float, longitude: float, time_ctx: TimeContext) -> WeatherContext:
        try:
            return await asyncio.to_thread(
                self.weather_provider.get_weather, latitude, longitude, time_ctx.hour, time_ctx.day
            )
        except WeatherProviderError:
            raise
        except Exception as e:
            raise WeatherProviderError(f"Weather lookup failed: {e}") from e

    def _predict_locations(
        self,
        locations: Sequence[Location],
        time_ctx: TimeContext,
        weather: WeatherContext,
        sessions: ModelSessions
    ) -> List[Prediction]:
        available: List[Tuple[str, Any]] = sessions.available()
        predictions = []
        for location in locations:
            features = build_feature_vector(location, time_ctx, weather)
            results = [
                self.runner.run(session, features, model_name=name)
                for name, session in available
            ]
            final = aggregate(results)
            predictions.append(Prediction(
                location=location.name,
                latitude=location.latitude,
                longitude=location.longitude,
                congestion=final.congestion,
                congestion_label=final.congestion.label,
                probability=final.probability,
                degraded_models=[r.model_name for r in results if r.is_degraded]
            ))
        return predictions
