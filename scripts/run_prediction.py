import os
import sys
import json
import asyncio
import hydra
from omegaconf import DictConfig

# Add src to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.prediction.application.builder import PredictionApplicationBuilder
from src.prediction.presentation.schemas import BatchPredictionResponse

@hydra.main(version_base=None, config_path="../conf", config_name="config")
def main(cfg: DictConfig):
    """
    Runs one prediction batch and prints it as JSON.

    Usage:
        python scripts/run_prediction.py +hour=8 +day=1
        python scripts/run_prediction.py prediction.weather.type=static
    """
    builder = PredictionApplicationBuilder(cfg, config_dir=hydra.utils.to_absolute_path("conf"))
    predictor = builder.build_predictor()
    
    result = asyncio.run(predictor.predict(hour=cfg.get('hour'), day=cfg.get('day')))
    response = BatchPredictionResponse.from_result(result)
    print(json.dumps(response.model_dump(by_alias=True), indent=2))

if __name__ == "__main__":
    main()
