import os

import yaml

from settings_schema import DosingSettings, validate_settings

APP_VERSION = "1.0.0"
DEFAULT_SETTINGS_PATH = "settings.yaml"


class YamlConfig:
    """Load and save dosing settings to a YAML file."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.environ.get("GRIPDOSE_SETTINGS", DEFAULT_SETTINGS_PATH)

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def save(self, data: dict) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f, sort_keys=False)


def load_settings(cfg: YamlConfig) -> DosingSettings:
    """Return validated settings, defaults filling anything not on disk."""
    return validate_settings(cfg.load())


def save_settings(cfg: YamlConfig, settings: DosingSettings) -> None:
    cfg.save(settings.model_dump(mode="json"))
