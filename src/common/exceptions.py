class PredictionError(Exception):
    """Base exception for all congestion prediction errors."""
    pass

class ModelLoadError(PredictionError):
    """Raised when model artifacts cannot be loaded into sessions."""
    pass

class InferenceError(PredictionError):
    """Raised when a model output cannot be decoded."""
    pass

class NoModelsAvailableError(PredictionError):
    """Raised when there are no model results to aggregate for a location."""
    pass

class WeatherProviderError(PredictionError):
    """Raised when the weather context cannot be retrieved."""
    pass

class ConfigurationError(PredictionError):
    """Raised when configuration is invalid."""
    pass
