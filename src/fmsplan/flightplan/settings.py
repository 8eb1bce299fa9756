"""Tunable flight plan settings.

Typical usage:
    config = ConfigLoader.load("config/settings.yaml")
    settings = FlightPlanSettings.from_config(config)
"""

from dataclasses import dataclass

from fmsplan.core.config import ConfigError, ConfigLoader
from fmsplan.navigation.procedures import PathTerminator


@dataclass(frozen=True)
class FlightPlanSettings:
    """Settings shared by every segment of a plan.

    Attributes:
        centerline_distance_nm: How far out on the extended runway centerline
            the synthesized final fix is placed when no approach is selected
        runway_leg_path_terminator: Leg type of synthesized destination
            runway legs
    """

    centerline_distance_nm: float = 5.0
    runway_leg_path_terminator: PathTerminator = PathTerminator.TF

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "FlightPlanSettings":
        """Build settings from the ``flight_plan`` section of a configuration.

        Missing keys keep their defaults.

        Raises:
            ConfigError: If a value has the wrong type or is out of range.
        """
        defaults = cls()

        try:
            distance = float(config.get("flight_plan.centerline_distance_nm", defaults.centerline_distance_nm))
            terminator = PathTerminator(
                config.get("flight_plan.runway_leg_path_terminator", defaults.runway_leg_path_terminator.value)
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid flight_plan settings: {e}") from e

        if distance <= 0:
            raise ConfigError(f"flight_plan.centerline_distance_nm must be positive, got {distance}")

        return cls(centerline_distance_nm=distance, runway_leg_path_terminator=terminator)
