"""
Feature vector construction.
"""
from typing import List
from ..domain.entities import Location, TimeContext, WeatherContext

# Column order the stage1/stage2 models were trained on. Must not change.
FEATURE_ORDER = (
    "latitude",
    "longitude",
    "hour",
    "day",
    "temperature",
    "precipitation",
    "rain",
    "wind_speed",
)

def build_feature_vector(location: Location, time: TimeContext, weather: WeatherContext) -> List[float]:
    return [
        float(location.latitude),
        float(location.longitude),
        float(time.hour),
        float(time.day),
        float(weather.temperature),
        float(weather.precipitation),
        float(weather.rain),
        float(weather.wind_speed),
    ]
