import yaml
from pathlib import Path
from pydantic import BaseModel
from typing import Dict, Any, List, Optional

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

class PlacementPoint(BaseModel):
    place: int
    points: float

class PointSystemConfig(BaseModel):
    per_kill_points: float = 1
    placement_points: List[PlacementPoint] = []

class AppDefaults(BaseModel):
    welcome_bonus: float = 0.0
    max_team_members: int = 5
    notifications_limit: int = 10
    top_players_count: int = 3
    tournament_image: str
    tournament_ai_hint: str
    tournament_map: str
    tournament_version: str
    user_avatar: str
    user_banner: str
    team_avatar: str
    round_names: Dict[int, str]
    point_system: PointSystemConfig
    team_sizes: Dict[str, int]

class ModelConfig(BaseModel):
    provider: str
    label: str
    model_id: Optional[str] = None  # Optional override
    api_config: Optional[Dict[str, Any]] = None  # Optional API-specific config

class ConfigRegistry:
    def __init__(self, config_dir: Path = CONFIG_DIR):
        self.models: Dict[str, ModelConfig] = {}
        self.defaults = self._load_defaults(config_dir / "defaults.yaml")
        self._load_models(config_dir / "models.yaml")

    def _load_defaults(self, path: Path) -> AppDefaults:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return AppDefaults(**data)

    def _load_models(self, path: Path):
        with open(path, "r") as f:
            data = yaml.safe_load(f)
            for key, val in data.get("models", {}).items():
                self.models[key] = ModelConfig(**val)

    def get_model(self, model_key: str) -> Optional[ModelConfig]:
        return self.models.get(model_key)

    def list_models(self) -> Dict[str, ModelConfig]:
        return self.models

# Singleton instance
registry = ConfigRegistry()
