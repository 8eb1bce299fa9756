"""Configuration, logging and event dispatch shared by the flight plan core."""

from fmsplan.core.config import ConfigError, ConfigLoader
from fmsplan.core.event_bus import Event, EventBus, EventPriority
from fmsplan.core.logging_system import LoggingError, get_logger, initialize_logging

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "Event",
    "EventBus",
    "EventPriority",
    "LoggingError",
    "get_logger",
    "initialize_logging",
]
