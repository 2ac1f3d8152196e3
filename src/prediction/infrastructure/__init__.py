"""
Infrastructure module initialization.
"""
from .artifact_store import FileArtifactStore
from .locations import StaticLocationProvider
from .session_cache import ModelSessionCache
from .time_provider import SystemTimeProvider
from .weather import OpenMeteoWeatherProvider, StaticWeatherProvider

__all__ = [
    "FileArtifactStore",
    "StaticLocationProvider",
    "ModelSessionCache",
    "SystemTimeProvider",
    "OpenMeteoWeatherProvider",
    "StaticWeatherProvider"
]
