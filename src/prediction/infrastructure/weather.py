"""
Weather providers for the prediction batch.
"""
import threading
import time
from datetime import datetime
from typing import Dict, Optional, Tuple

import requests

from ..domain.entities import WeatherContext
from .time_provider import day_of_week
from ...common.exceptions import WeatherProviderError
from ...common.logging import setup_logger

HOURLY_VARIABLES = ("temperature_2m", "precipitation", "rain", "wind_speed_10m")


class StaticWeatherProvider:
    """
    Returns the same weather for every request. Useful offline and in tests.
    """
    def __init__(self, weather: WeatherContext):
        self.weather = weather

    def get_weather(self, latitude: float, longitude: float, hour: int, day: int) -> WeatherContext:
        return self.weather


class OpenMeteoWeatherProvider:
    """
    Hourly forecast from the Open-Meteo API.

    Picks the first forecast hour that falls on the requested day of week
    (0 = Sunday) and hour. Results are cached in memory for cache_ttl seconds.
    """

    def __init__(
        self,
        url: str = "https://api.open-meteo.com/v1/forecast",
        timeout: float = 10.0,
        cache_ttl: float = 900.0,
        timezone: str = "auto",
        session: Optional[requests.Session] = None
    ):
        self.url = url
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self.timezone = timezone
        self.session = session or requests.Session()
        self._cache: Dict[Tuple[float, float, int, int], Tuple[float, WeatherContext]] = {}
        self._cache_lock = threading.Lock()
        self.logger = setup_logger(__name__)

    def get_weather(self, latitude: float, longitude: float, hour: int, day: int) -> WeatherContext:
        key = (round(latitude, 4), round(longitude, 4), hour, day)
        now = time.time()
        with self._cache_lock:
            cached = self._cache.get(key)
            if cached and cached[0] > now:
                return cached[1]

        weather = self._fetch(latitude, longitude, hour, day)

        with self._cache_lock:
            self._cache[key] = (now + self.cache_ttl, weather)
        return weather

    def _fetch(self, latitude: float, longitude: float, hour: int, day: int) -> WeatherContext:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "hourly": ",".join(HOURLY_VARIABLES),
            "forecast_days": 7,
            "timezone": self.timezone,
        }
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise WeatherProviderError(f"Open-Meteo request failed: {e}") from e

        self.logger.debug(f"Fetched forecast for ({latitude:.4f}, {longitude:.4f})")
        return parse_hourly_forecast(payload, hour, day)


def parse_hourly_forecast(payload: dict, hour: int, day: int) -> WeatherContext:
    """
    Extracts the WeatherContext for (hour, day of week) from an Open-Meteo
    hourly payload.
    """
    hourly = payload.get("hourly")
    if not hourly or "time" not in hourly:
        raise WeatherProviderError("Forecast payload has no hourly data")

    for idx, stamp in enumerate(hourly["time"]):
        moment = datetime.fromisoformat(stamp)
        if moment.hour != hour or day_of_week(moment) != day:
            continue
        try:
            values = [hourly[name][idx] for name in HOURLY_VARIABLES]
        except (KeyError, IndexError) as e:
            raise WeatherProviderError(f"Forecast payload is missing {e}") from e
        if any(v is None for v in values):
            raise WeatherProviderError(f"Forecast has gaps at {stamp}")
        temperature, precipitation, rain, wind_speed = (float(v) for v in values)
        return WeatherContext(
            temperature=temperature,
            precipitation=precipitation,
            rain=rain,
            wind_speed=wind_speed
        )

    raise WeatherProviderError(f"No forecast available for hour={hour}, day={day}")
