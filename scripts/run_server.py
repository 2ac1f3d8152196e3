import os
import sys
import hydra
import uvicorn
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.prediction.presentation.api import app, init_app
from src.prediction.application.builder import PredictionApplicationBuilder
from src.common.logging import setup_logger

logger = setup_logger("cerebrovial.server")

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    logger.info("Configuration loaded.")
    
    builder = PredictionApplicationBuilder(cfg, config_dir=hydra.utils.to_absolute_path("conf"))
    (
        builder
        .build_locations()
        .build_weather_provider()
        .build_time_provider()
        .build_session_cache()
        .build_predictor()
    )
    init_app(builder)

    # Warm the model cache so the first request does not pay the load
    @app.on_event("startup")
    async def startup_event():
        try:
            await builder.session_cache.acquire()
        except Exception as e:
            logger.error(f"Failed to preload models: {e}")

    server_cfg = builder.prediction_cfg.server
    logger.info(f"Starting server at http://{server_cfg.host}:{server_cfg.port}")
    uvicorn.run(app, host=server_cfg.host, port=server_cfg.port)

if __name__ == "__main__":
    main()
