"""YAML settings for the flight plan core.

The shipped ``config/settings.yaml`` holds a single ``flight_plan`` section:

    flight_plan:
      centerline_distance_nm: 5.0      # final fix distance when no approach is selected
      runway_leg_path_terminator: TF   # leg type of synthesized runway legs

Typical usage example:
    from fmsplan.core.config import ConfigLoader

    config = ConfigLoader.load("config/settings.yaml")
    distance = config.get("flight_plan.centerline_distance_nm", default=5.0)
"""

from pathlib import Path
from typing import Any

import yaml

from fmsplan.core.logging_system import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Raised when settings cannot be loaded or are invalid."""


class ConfigLoader:
    """Read-only view of a settings document.

    Examples:
        >>> config = ConfigLoader({"flight_plan": {"centerline_distance_nm": 7.0}})
        >>> config.get("flight_plan.centerline_distance_nm")
        7.0
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data if data is not None else {}

    @classmethod
    def load(cls, path: str | Path) -> "ConfigLoader":
        """Load settings from a YAML file.

        An empty file gives empty settings, so every key falls back to its
        default.

        Raises:
            ConfigError: If the file is missing, unreadable or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")

        logger.info("Loaded settings from %s (sections: %s)", path, ", ".join(data) or "none")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``"flight_plan.centerline_distance_nm"``.

        Returns ``default`` when any part of the key is missing or when the
        path runs into a value that is not a section.
        """
        value: Any = self._data
        for part in key.split("."):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]

        return value
