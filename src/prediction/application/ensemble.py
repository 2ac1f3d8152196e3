"""
Cross-model fusion.
"""
from typing import Iterable
from ..domain.entities import ModelInferenceResult
from ...common.exceptions import NoModelsAvailableError

def aggregate(results: Iterable[ModelInferenceResult]) -> ModelInferenceResult:
    """
    Pessimistic fusion: keeps the result with the highest congestion level.
    On equal levels the first result is kept, probability included.
    """
    final = None
    for result in results:
        if final is None or result.congestion > final.congestion:
            final = result
    if final is None:
        raise NoModelsAvailableError("No models loaded")
    return final
