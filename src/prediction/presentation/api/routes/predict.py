"""
Batch congestion prediction endpoint.
"""
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from typing import Optional

from ....application.batch_predictor import BatchPredictor
from ...schemas import BatchPredictionResponse, ErrorResponse
from .....common.logging import setup_logger

app = FastAPI()
logger = setup_logger(__name__)

# Singleton
_predictor: Optional[BatchPredictor] = None

def init_predictor(predictor: BatchPredictor):
    global _predictor
    _predictor = predictor

def get_predictor() -> BatchPredictor:
    if _predictor is None:
        raise HTTPException(503, "Predictor not initialized")
    return _predictor

@app.get("/predict", response_model=BatchPredictionResponse)
async def predict(hour: Optional[str] = None, day: Optional[str] = None):
    """
    Predicts congestion for every camera location.

    `hour` and `day` (day of week, 0 = Sunday) override the current time
    only when the whole value is an integer, surrounding spaces allowed.
    Anything else ("8.0", "12abc", "") is ignored and the current time is used.
    """
    predictor = get_predictor()
    try:
        result = await predictor.predict(hour=hour, day=day)
    except Exception as e:
        logger.error(f"Prediction error: {e}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Failed to generate predictions",
                details=str(e)
            ).model_dump()
        )
    return BatchPredictionResponse.from_result(result)
