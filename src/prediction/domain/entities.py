"""
Domain entities for the Congestion Prediction module.
"""
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, List, Optional, Tuple

class CongestionLevel(IntEnum):
    """
    Ordinal congestion classification. The integer value is the model class
    index and is compared directly during ensemble fusion.
    """
    LOW = 0
    MODERATE = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return CONGESTION_LABELS[self]


CONGESTION_LABELS = {
    CongestionLevel.LOW: "Low",
    CongestionLevel.MODERATE: "Moderate",
    CongestionLevel.HIGH: "High",
}


class InferenceOutcome(str, Enum):
    """
    Whether a model result came from a healthy run or from the fail-soft fallback.
    """
    OK = "ok"
    DEGRADED = "degraded"


@dataclass(frozen=True)
class Location:
    """
    A monitored camera location. Identity is the name.
    """
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class TimeContext:
    hour: int # 0-23
    day: int # Day of week, 0 = Sunday


@dataclass(frozen=True)
class WeatherContext:
    """
    Weather shared by every location of a batch, sampled at the network centroid.
    """
    temperature: float # Celsius, 2m
    precipitation: float # mm
    rain: float # mm
    wind_speed: float # km/h, 10m


@dataclass(frozen=True)
class ModelInferenceResult:
    """
    Output of a single model for a single location.
    """
    congestion: CongestionLevel
    probability: float
    outcome: InferenceOutcome = InferenceOutcome.OK
    model_name: Optional[str] = None

    @classmethod
    def fallback(cls, model_name: Optional[str] = None) -> "ModelInferenceResult":
        return cls(
            congestion=CongestionLevel.LOW,
            probability=0.0,
            outcome=InferenceOutcome.DEGRADED,
            model_name=model_name
        )

    @property
    def is_degraded(self) -> bool:
        return self.outcome is InferenceOutcome.DEGRADED


@dataclass
class Prediction:
    """
    Final congestion prediction for one location.
    """
    location: str
    latitude: float
    longitude: float
    congestion: CongestionLevel
    congestion_label: str
    probability: float
    degraded_models: List[str] = field(default_factory=list)


@dataclass
class BatchPredictionResult:
    """
    Predictions for every configured location, in configuration order.
    """
    predictions: List[Prediction]
    weather: WeatherContext
    timestamp: str # ISO-8601, UTC
    hour: int
    day: int


@dataclass
class ModelSessions:
    """
    The pair of loaded model handles.
    """
    stage1: Optional[Any] = None
    stage2: Optional[Any] = None

    @property
    def complete(self) -> bool:
        return self.stage1 is not None and self.stage2 is not None

    def available(self) -> List[Tuple[str, Any]]:
        """Returns (name, session) for every loaded session, stage1 first."""
        return [
            (name, session)
            for name, session in (("stage1", self.stage1), ("stage2", self.stage2))
            if session is not None
        ]
