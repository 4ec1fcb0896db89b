"""
Configuration loading for pattern tables and scoring parameters.

Configs are YAML files in atscore/config/ (or ATSCORE_CONFIG_PATH) and are
loaded once through OmegaConf, then served from an in-memory cache.
"""

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config"
CONFIG_PATH = Path(os.getenv("ATSCORE_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))


class ConfigRegistry:
    """
    Registry for loading and caching YAML configurations.

    Each config is stored as {config_dir}/{name}.yaml, e.g.
    keyword_tables.yaml, job_vocabulary.yaml, scoring.yaml.
    """

    def __init__(self, config_dir: Path = None):
        """
        Initialize the config registry.

        Args:
            config_dir: Directory holding the YAML files. Defaults to
                        ATSCORE_CONFIG_PATH from environment, then the packaged configs
        """
        if config_dir is None:
            config_dir = CONFIG_PATH

        self.config_dir = Path(config_dir)
        self._cache: Dict[str, Dict[str, Any]] = {}

    def get_config(self, name: str) -> Dict[str, Any]:
        """
        Get a config by name, loading and caching it if necessary.

        Args:
            name: Config name without extension (e.g., 'scoring')

        Returns:
            Dict containing the resolved configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        config_path = self.get_config_path(name)

        if not config_path.exists():
            raise FileNotFoundError(f"Config '{name}' not found at {config_path}")

        config = OmegaConf.load(config_path)
        config_dict = OmegaConf.to_container(config, resolve=True)

        self._cache[name] = config_dict
        return config_dict

    def get_config_path(self, name: str) -> Path:
        """Get the file path for a named config."""
        return self.config_dir / f"{name}.yaml"

    def clear_cache(self):
        """Clear the config cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a config is in the cache."""
        return name in self._cache


# Process-wide registry used by the contexts
config_registry = ConfigRegistry()


def get_config(name: str) -> Dict[str, Any]:
    """Shortcut for config_registry.get_config(name)."""
    return config_registry.get_config(name)
