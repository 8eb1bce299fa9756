"""Logging system for the flight plan core.

Loggers are configured from a YAML document with a global level, a console
handler, an optional combined log file and per-component overrides under the
``components`` section. The combined log is rotated on every initialization,
keeping the last few sessions.

Platform-specific log locations (used when ``use_platform_dir`` is set):
    - macOS: ~/Library/Logs/FmsPlan/fmsplan.log
    - Linux: ~/.fmsplan/logs/fmsplan.log
    - Windows: %AppData%/FmsPlan/Logs/fmsplan.log

Library modules only call ``get_logger``. The root logger is left to the host
application unless it calls ``initialize_logging``.

Typical usage example:
    from fmsplan.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")  # application startup only
    logger = get_logger(__name__)
    logger.info("Approach %s selected", ident)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}

DEFAULT_LOG_FILENAME = "fmsplan.log"


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory.
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "FmsPlan"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "FmsPlan" / "Logs"
    else:
        return Path.home() / ".fmsplan" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = DEFAULT_LOG_FILENAME, keep_count: int = 5) -> None:
    """Rotate the combined log, keeping the last ``keep_count`` sessions.

    ``fmsplan.log`` becomes ``fmsplan.log.1``, older files shift up by one and
    anything beyond ``keep_count`` is deleted.

    Args:
        log_dir: Directory containing log files.
        log_filename: Base name of the log file.
        keep_count: Number of old logs to keep.
    """
    log_file = log_dir / log_filename
    if not log_file.exists():
        return

    oldest_log = log_dir / f"{log_filename}.{keep_count}"
    if oldest_log.exists():
        oldest_log.unlink()

    for i in range(keep_count - 1, 0, -1):
        old_log = log_dir / f"{log_filename}.{i}"
        if old_log.exists():
            old_log.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = False) -> None:
    """Initialize the logging system.

    Args:
        config_path: Path to a logging YAML file. Defaults are used when None.
        use_platform_dir: Write the combined log to the platform log directory
            instead of the ``log_dir`` from the configuration.

    Raises:
        LoggingError: If the configuration file is missing or invalid.
    """
    global _logging_config

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e

        _logging_config = _merge_defaults(loaded)
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    combined = _logging_config["combined_log"]
    if combined.get("enabled", False):
        log_dir = Path(_logging_config["log_dir"])
        log_dir.mkdir(parents=True, exist_ok=True)
        rotate_logs(
            log_dir,
            combined.get("filename", DEFAULT_LOG_FILENAME),
            combined.get("backup_count", 5),
        )

    _configure_root_logger()

    # Component levels must be re-applied to loggers handed out earlier.
    for name, logger in _loggers_cache.items():
        _apply_component_config(name, logger)


def _get_default_config() -> dict[str, Any]:
    return {
        "version": 1,
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": False,
            "filename": DEFAULT_LOG_FILENAME,
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "components": {},
    }


def _merge_defaults(loaded: dict[str, Any]) -> dict[str, Any]:
    config = _get_default_config()
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key] = {**config[key], **value}
        else:
            config[key] = value
    return config


def _configure_root_logger() -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, _logging_config.get("level", "INFO")))
    root_logger.handlers.clear()

    console = _logging_config.get("console", {})
    if console.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    combined = _logging_config.get("combined_log", {})
    if combined.get("enabled", False):
        log_file = Path(_logging_config["log_dir"]) / combined.get("filename", DEFAULT_LOG_FILENAME)

        # Rotation already happened in initialize_logging.
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        """Format time with milliseconds using dot separator."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    return MillisecondFormatter(
        _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S"),
    )


def _apply_component_config(name: str, logger: logging.Logger) -> None:
    """Apply the most specific ``components`` entry matching ``name``.

    ``fmsplan.flightplan`` configures every logger below that package unless a
    longer entry such as ``fmsplan.flightplan.plan`` overrides it.
    """
    components = _logging_config.get("components", {})
    matches = [key for key in components if name == key or name.startswith(f"{key}.")]
    if not matches:
        return

    component_config = components[max(matches, key=len)]
    if not component_config.get("enabled", True):
        logger.disabled = True
        return

    logger.disabled = False
    if "level" in component_config:
        logger.setLevel(getattr(logging, component_config["level"]))


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module or component.

    Loggers are cached. Requesting one never touches the root logger; handlers
    are only installed by an explicit call to ``initialize_logging``.

    Args:
        name: Logger name, normally ``__name__``.

    Returns:
        Configured logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _apply_component_config(name, logger)

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Flush and close all handlers, and forget cached loggers and components."""
    global _logging_config

    logging.shutdown()
    _loggers_cache.clear()
    _logging_config = {}
