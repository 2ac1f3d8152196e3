from pathlib import Path
from typing import Dict, Union

from ...common.exceptions import ModelLoadError

class FileArtifactStore:
    """
    Reads serialized models from a directory, keyed by stage name.
    """
    def __init__(self, models_dir: Union[str, Path], files: Dict[str, str]):
        self.models_dir = Path(models_dir)
        self.files = dict(files)

    def path_for(self, name: str) -> Path:
        if name not in self.files:
            raise ModelLoadError(f"No artifact configured for model '{name}'")
        return self.models_dir / self.files[name]

    def load(self, name: str) -> bytes:
        return self.path_for(name).read_bytes()
