from dataclasses import dataclass
from typing import Dict, List
import threading
import time

@dataclass
class PredictionMetrics:
    """Prediction service metrics"""
    batches_completed: int
    batches_failed: int
    inference_failures: int
    artifact_loads: int
    avg_batch_time_ms: float
    uptime_seconds: float
    
    def to_dict(self) -> Dict:
        return {
            'batches_completed': self.batches_completed,
            'batches_failed': self.batches_failed,
            'inference_failures': self.inference_failures,
            'artifact_loads': self.artifact_loads,
            'avg_batch_time_ms': self.avg_batch_time_ms,
            'uptime_seconds': self.uptime_seconds
        }


class MetricsCollector:
    """Collects and aggregates prediction metrics"""
    
    def __init__(self):
        self.batch_times: List[float] = []
        self.batches_completed = 0
        self.batches_failed = 0
        self.inference_failures = 0
        self.artifact_loads = 0
        self.start_time = time.time()
        self._lock = threading.Lock()
    
    def record_batch(self, duration_ms: float):
        with self._lock:
            self.batch_times.append(duration_ms)
            self.batches_completed += 1
            # Keep buffer size manageable
            if len(self.batch_times) > 1000:
                self.batch_times.pop(0)
    
    def record_batch_failure(self):
        with self._lock:
            self.batches_failed += 1
    
    def record_inference_failure(self):
        with self._lock:
            self.inference_failures += 1
    
    def record_artifact_load(self):
        with self._lock:
            self.artifact_loads += 1
    
    def get_metrics(self) -> PredictionMetrics:
        with self._lock:
            avg_batch = sum(self.batch_times) / len(self.batch_times) if self.batch_times else 0.0
            return PredictionMetrics(
                batches_completed=self.batches_completed,
                batches_failed=self.batches_failed,
                inference_failures=self.inference_failures,
                artifact_loads=self.artifact_loads,
                avg_batch_time_ms=avg_batch,
                uptime_seconds=time.time() - self.start_time
            )
