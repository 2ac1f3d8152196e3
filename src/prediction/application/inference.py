"""
Single-model inference and output decoding.
"""
import math
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..domain.entities import CongestionLevel, ModelInferenceResult
from ..domain.protocols import ModelSession
from .features import FEATURE_ORDER
from ...common.exceptions import InferenceError
from ...common.logging import setup_logger
from ...common.metrics import MetricsCollector

# Reported confidence for regression-style outputs, where no class score exists.
SCALAR_OUTPUT_PROBABILITY = 1.0


def to_float_array(raw: Any) -> np.ndarray:
    """
    Normalizes a raw model output (float or int64 tensor, list, scalar) into
    a flat float64 array.
    """
    return np.asarray(raw, dtype=np.float64).ravel()


def decode_output(raw: Any) -> Tuple[CongestionLevel, float]:
    """
    Decodes a model output into (congestion level, probability).

    Outputs with three or more values are class scores: the first index holding
    the maximum wins and its score is the probability; NaN scores are skipped.
    Shorter outputs are a regression value, clamped into the valid levels and
    rounded half-up.
    """
    values = to_float_array(raw)
    if values.size == 0:
        raise InferenceError("Model returned an empty output")

    if values.size >= 3:
        if np.isnan(values).all():
            raise InferenceError("Model returned NaN class scores")
        # NaN scores never win
        max_idx = int(np.nanargmax(values))
        max_val = float(values[max_idx])
        try:
            level = CongestionLevel(max_idx)
        except ValueError as e:
            raise InferenceError(f"Class index {max_idx} is not a congestion level") from e
        return level, max_val

    value = float(values[0])
    if math.isnan(value):
        raise InferenceError("Model returned a NaN regression value")
    # Clamp first so infinite outputs land on the nearest valid level
    value = min(2.0, max(0.0, value))
    level = CongestionLevel(math.floor(value + 0.5))
    return level, SCALAR_OUTPUT_PROBABILITY


class InferenceRunner:
    """
    Runs one model session against one feature vector.
    Failures are absorbed and reported as a degraded Low/0.0 result.
    """

    def __init__(self, metrics_collector: Optional[MetricsCollector] = None):
        self.metrics_collector = metrics_collector
        self.logger = setup_logger(__name__)

    def run(
        self,
        session: ModelSession,
        features: Sequence[float],
        model_name: Optional[str] = None
    ) -> ModelInferenceResult:
        try:
            input_tensor = np.asarray(features, dtype=np.float32).reshape(1, len(FEATURE_ORDER))
            input_name = session.input_names[0]
            output_name = session.output_names[0]
            outputs = session.run([output_name], {input_name: input_tensor})
            congestion, probability = decode_output(outputs[0])
            return ModelInferenceResult(
                congestion=congestion,
                probability=probability,
                model_name=model_name
            )
        except Exception as e:
            self.logger.error(f"Inference failed for model {model_name or 'unknown'}: {e}", exc_info=True)
            if self.metrics_collector:
                self.metrics_collector.record_inference_failure()
            return ModelInferenceResult.fallback(model_name)
