from omegaconf import DictConfig, ListConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pathlib import Path
from typing import List, Union

from .models import PredictionConfig
from ...prediction.domain.entities import Location
from ..exceptions import ConfigurationError

class ConfigManager:
    """Centralizes loading and validation of prediction configuration"""
    
    def __init__(self, config_dir: Path = Path("conf")):
        self.config_dir = Path(config_dir)
    
    def load_prediction_config(self, profile: str = "default") -> DictConfig:
        """Loads a prediction profile, validated against PredictionConfig"""
        config_path = self.config_dir / "prediction" / f"{profile}.yaml"
        
        if not config_path.exists():
            raise FileNotFoundError(f"Config not found: {config_path}")
        
        cfg = OmegaConf.load(config_path)
        required_keys = ['models', 'weather']
        for key in required_keys:
            if key not in cfg:
                raise ConfigurationError(f"Missing required config key: {key}")
        
        return validate_prediction_config(cfg)

    def load_locations(self, path: Union[str, Path]) -> List[Location]:
        """Loads the ordered camera location list from a YAML file"""
        locations_path = Path(path)
        if not locations_path.is_absolute() and not locations_path.exists():
            locations_path = self.config_dir.parent / locations_path
        if not locations_path.exists():
            raise FileNotFoundError(f"Locations file not found: {locations_path}")
        
        cfg = OmegaConf.load(locations_path)
        if 'locations' not in cfg:
            raise ConfigurationError(f"Missing 'locations' key in {locations_path}")
        return parse_locations(cfg.locations)


def validate_prediction_config(cfg: DictConfig) -> DictConfig:
    """
    Merges a raw prediction config onto the typed schema so wrong types fail early.
    """
    try:
        return OmegaConf.merge(OmegaConf.structured(PredictionConfig), cfg)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid prediction config: {e}") from e


def parse_locations(entries: Union[ListConfig, list]) -> List[Location]:
    """
    Converts raw config entries into Location entities, preserving order.
    """
    if OmegaConf.is_config(entries):
        entries = OmegaConf.to_container(entries, resolve=True)
    
    locations = []
    seen = set()
    for entry in entries:
        try:
            location = Location(
                name=str(entry['name']),
                latitude=float(entry['latitude']),
                longitude=float(entry['longitude'])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid location entry {entry!r}: {e}") from e
        if location.name in seen:
            raise ConfigurationError(f"Duplicate location name: {location.name}")
        seen.add(location.name)
        locations.append(location)
    return locations
