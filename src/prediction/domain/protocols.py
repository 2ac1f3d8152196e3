"""
Domain protocols for the Congestion Prediction module.
"""
from typing import Any, Dict, List, Optional, Protocol, Sequence
from .entities import Location, TimeContext, WeatherContext

class ModelSession(Protocol):
    """
    A loaded, runnable model. Mirrors the onnxruntime InferenceSession surface.
    """
    @property
    def input_names(self) -> List[str]:
        ...

    @property
    def output_names(self) -> List[str]:
        ...

    def run(self, output_names: Optional[List[str]], feeds: Dict[str, Any]) -> List[Any]:
        ...

class SessionFactory(Protocol):
    """
    Builds a runnable session from raw model bytes.
    """
    def create(self, model_bytes: bytes) -> ModelSession:
        ...

class ArtifactStore(Protocol):
    """
    Source of serialized model artifacts, keyed by stage name.
    """
    def load(self, name: str) -> bytes:
        ...

class WeatherProvider(Protocol):
    def get_weather(self, latitude: float, longitude: float, hour: int, day: int) -> WeatherContext:
        ...

class LocationProvider(Protocol):
    def get_locations(self) -> Sequence[Location]:
        ...

class TimeProvider(Protocol):
    def now(self) -> TimeContext:
        ...
