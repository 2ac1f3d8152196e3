"""
Domain module initialization.
"""
from .entities import (
    CongestionLevel,
    CONGESTION_LABELS,
    InferenceOutcome,
    Location,
    TimeContext,
    WeatherContext,
    ModelInferenceResult,
    Prediction,
    BatchPredictionResult,
    ModelSessions
)
from .protocols import (
    ModelSession,
    SessionFactory,
    ArtifactStore,
    WeatherProvider,
    LocationProvider,
    TimeProvider
)
