import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    # Searched below the project root, in order
    "search_dirs": [".", "build", "out", "debug"],
    # Prepended to the flags of a compile_flags.txt file to make them runnable
    "flags_driver": "clang++",
}


class ConfigManager:
    """
    Loads user settings from ~/.compdb/config.json, on top of DEFAULT_CONFIG.
    """
    def __init__(self):
        self.config_dir = Path.home() / ".compdb"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = DEFAULT_CONFIG.copy()

        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    config.update(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)

        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
