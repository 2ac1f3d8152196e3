"""
Health and readiness endpoints.
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Optional

from ....infrastructure.session_cache import ModelSessionCache
from .....common.metrics import MetricsCollector

app = FastAPI()

_session_cache: Optional[ModelSessionCache] = None
_metrics_collector: Optional[MetricsCollector] = None

def init_health(session_cache: ModelSessionCache, metrics_collector: Optional[MetricsCollector] = None):
    global _session_cache, _metrics_collector
    _session_cache = session_cache
    _metrics_collector = metrics_collector

def _models_loaded() -> bool:
    return _session_cache is not None and _session_cache.is_loaded

@app.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "models_loaded": _models_loaded(),
        "metrics": _metrics_collector.get_metrics().to_dict() if _metrics_collector else {},
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

@app.get("/ready")
async def readiness_check():
    """Readiness check: ready once both model sessions are loaded"""
    if not _models_loaded():
        return JSONResponse(
            status_code=503,
            content={
                "status": "not ready",
                "reason": "Models not loaded"
            }
        )
    return {"status": "ready", "models_loaded": True}
