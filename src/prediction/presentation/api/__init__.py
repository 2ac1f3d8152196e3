"""
API package.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .routes import health, predict
from ...application.builder import PredictionApplicationBuilder

# Initialize main app
app = FastAPI(title="CerebroVial Congestion Prediction API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(predict.app.router, tags=["prediction"])
app.include_router(health.app.router, tags=["health"])

def init_app(builder: PredictionApplicationBuilder) -> FastAPI:
    """
    Wires a built application into the routes.
    """
    predictor = builder.predictor or builder.build_predictor()
    predict.init_predictor(predictor)
    health.init_health(builder.session_cache, builder.metrics_collector)
    return app
