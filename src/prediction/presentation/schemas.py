from pydantic import BaseModel, Field
from typing import List

from ..domain.entities import BatchPredictionResult, Prediction, WeatherContext

class PredictionResponse(BaseModel):
    """
    Congestion prediction for a single camera location.
    """
    location: str = Field(..., description="Camera location name")
    latitude: float = Field(..., description="Latitude")
    longitude: float = Field(..., description="Longitude")
    congestion: int = Field(..., ge=0, le=2, description="Congestion level (0=Low, 1=Moderate, 2=High)")
    congestion_label: str = Field(..., serialization_alias="congestionLabel", description="Congestion level label")
    probability: float = Field(..., description="Confidence reported by the deciding model")

    @classmethod
    def from_prediction(cls, prediction: Prediction) -> "PredictionResponse":
        return cls(
            location=prediction.location,
            latitude=prediction.latitude,
            longitude=prediction.longitude,
            congestion=int(prediction.congestion),
            congestion_label=prediction.congestion_label,
            probability=prediction.probability
        )

class WeatherResponse(BaseModel):
    temperature: float = Field(..., description="Air temperature at 2m (C)")
    precipitation: float = Field(..., description="Total precipitation (mm)")
    rain: float = Field(..., description="Rain (mm)")
    wind_speed: float = Field(..., description="Wind speed at 10m (km/h)")

    @classmethod
    def from_weather(cls, weather: WeatherContext) -> "WeatherResponse":
        return cls(
            temperature=weather.temperature,
            precipitation=weather.precipitation,
            rain=weather.rain,
            wind_speed=weather.wind_speed
        )

class BatchPredictionResponse(BaseModel):
    predictions: List[PredictionResponse]
    weather: WeatherResponse
    timestamp: str = Field(..., description="Batch timestamp (ISO-8601, UTC)")
    hour: int
    day: int = Field(..., description="Day of week, 0 = Sunday")

    @classmethod
    def from_result(cls, result: BatchPredictionResult) -> "BatchPredictionResponse":
        return cls(
            predictions=[PredictionResponse.from_prediction(p) for p in result.predictions],
            weather=WeatherResponse.from_weather(result.weather),
            timestamp=result.timestamp,
            hour=result.hour,
            day=result.day
        )

class ErrorResponse(BaseModel):
    error: str
    details: str
