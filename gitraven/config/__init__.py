"""Configuration Management Package"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

from gitraven import MIN_DESCRIPTION_LENGTH

logger = logging.getLogger(__name__)

# Valid configuration values
VALID_PROVIDERS = {"auto", "claude", "ollama"}

# Never written to disk
SECRET_FIELDS = {"api_key"}


@dataclass
class Config:
    """Generator configuration with sensible defaults.

    Built once at the CLI boundary and passed into the generator; nothing
    below the CLI reads the environment.
    """
    provider: str = "auto"
    model: Optional[str] = None
    api_key: Optional[str] = None
    ollama_host: Optional[str] = None
    timeout: int = 300
    max_tokens: int = 500
    temperature: float = 0.3
    analysis_max_tokens: int = 300
    analysis_temperature: float = 0.1
    max_description_length: int = 72

    def to_dict(self) -> dict:
        return {
            k: v for k, v in asdict(self).items()
            if v is not None and k not in SECRET_FIELDS
        }

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        for name in ("timeout", "max_tokens", "analysis_max_tokens", "max_description_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                default = getattr(defaults, name)
                warnings.append(f"Invalid {name} '{value}', using {default}")
                setattr(self, name, default)

        for name in ("temperature", "analysis_temperature"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
                default = getattr(defaults, name)
                warnings.append(f"Invalid {name} '{value}', using {default}")
                setattr(self, name, default)

        if self.max_description_length < MIN_DESCRIPTION_LENGTH:
            default = defaults.max_description_length
            warnings.append(
                f"max_description_length must be at least {MIN_DESCRIPTION_LENGTH}, using {default}"
            )
            self.max_description_length = default

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)} - SECRET_FIELDS
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            logger.warning("Config warning: %s", warning)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".gitravenrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, IOError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "VALID_PROVIDERS",
]
