"""Flight plan elements: navigation legs and discontinuities.

A flight plan is an ordered sequence of elements. Most elements are
navigation legs built from published procedure legs or synthesized from
airport and runway data; a ``Discontinuity`` marks a place where no path is
known between the legs around it.

Two legs denote the same navigational element when their identifier, path
terminator and contributing procedure match, regardless of object identity.

Typical usage:
    leg = NavigationLeg.from_procedure_leg(procedure.legs[0], procedure.ident)
    runway_leg = NavigationLeg.from_airport_and_runway(ksfo, rw28l, "I28L")
"""

import math
from dataclasses import dataclass

from fmsplan.navigation.procedures import (
    Airport,
    Fix,
    PathTerminator,
    ProcedureLeg,
    Runway,
    WaypointDescriptor,
)

EARTH_RADIUS_NM = 3440.065

LegKey = tuple[str, PathTerminator, str]


@dataclass(frozen=True)
class NavigationLeg:
    """A flyable flight plan leg.

    Attributes:
        identifier: Leg identifier shown to the crew
        path_terminator: ARINC 424 leg type
        waypoint_descriptor: Kind of object the fix is
        fix: Fix the leg is defined by, if any
        course: Course or heading in degrees, if any
        distance: Distance in nautical miles, if any
        time_min: Leg time in minutes, if any
        altitude_ft: Altitude constraint in feet, if any
        procedure_ident: Procedure that contributed the leg, "" for manual legs
        annotation: Free-form display text
    """

    identifier: str
    path_terminator: PathTerminator
    waypoint_descriptor: WaypointDescriptor = WaypointDescriptor.WAYPOINT
    fix: Fix | None = None
    course: float | None = None
    distance: float | None = None
    time_min: float | None = None
    altitude_ft: float | None = None
    procedure_ident: str = ""
    annotation: str = ""

    is_discontinuity = False

    @property
    def key(self) -> LegKey:
        """Comparison key used to decide whether two legs are the same."""
        return (self.identifier, self.path_terminator, self.procedure_ident)

    def is_same_leg(self, other: "FlightPlanElement") -> bool:
        """Check whether ``other`` denotes the same leg.

        Args:
            other: Any flight plan element

        Returns:
            True if ``other`` is a navigation leg with an equal key
        """
        return not other.is_discontinuity and self.key == other.key

    def __str__(self) -> str:
        if self.procedure_ident:
            return f"{self.path_terminator.value} {self.identifier} ({self.procedure_ident})"
        return f"{self.path_terminator.value} {self.identifier}"

    @classmethod
    def from_procedure_leg(cls, leg: ProcedureLeg, procedure_ident: str) -> "NavigationLeg":
        """Convert a published procedure leg.

        Args:
            leg: Leg as coded in the navigation database
            procedure_ident: Identifier of the procedure the leg belongs to

        Returns:
            Navigation leg tagged with ``procedure_ident``
        """
        return cls(
            identifier=leg.ident,
            path_terminator=leg.path_terminator,
            waypoint_descriptor=leg.waypoint_descriptor,
            fix=leg.fix,
            course=leg.course,
            distance=leg.distance,
            time_min=leg.time_min,
            altitude_ft=leg.altitude_ft,
            procedure_ident=procedure_ident,
            annotation=procedure_ident,
        )

    @classmethod
    def from_airport_and_runway(
        cls,
        airport: Airport,
        runway: Runway | None,
        procedure_ident: str = "",
        path_terminator: PathTerminator = PathTerminator.TF,
    ) -> "NavigationLeg":
        """Synthesize a leg ending at a runway threshold.

        Without a runway the leg ends at the airport reference point instead.

        Args:
            airport: Airport owning the runway
            runway: Selected runway, or None
            procedure_ident: Procedure the leg stands in for, "" if none
            path_terminator: Leg type of the synthesized leg
        """
        if runway is None:
            return cls(
                identifier=airport.ident,
                path_terminator=path_terminator,
                waypoint_descriptor=WaypointDescriptor.AIRPORT,
                fix=airport.location,
                procedure_ident=procedure_ident,
                annotation=procedure_ident or airport.ident,
            )

        return cls(
            identifier=runway.ident,
            path_terminator=path_terminator,
            waypoint_descriptor=WaypointDescriptor.RUNWAY,
            fix=runway.threshold,
            course=runway.bearing,
            procedure_ident=procedure_ident,
            annotation=procedure_ident or airport.ident,
        )

    @classmethod
    def destination_extended_centerline(
        cls, airport: Airport, runway: Runway, distance_nm: float
    ) -> "NavigationLeg":
        """Synthesize a course-to-fix leg lined up with a runway.

        The fix sits ``distance_nm`` before the threshold on the extended
        centerline and the course is the runway's landing course.
        """
        ident = f"CF{runway.ident.removeprefix('RW')}"
        latitude, longitude = _project(
            runway.threshold.latitude,
            runway.threshold.longitude,
            (runway.bearing + 180.0) % 360.0,
            distance_nm,
        )

        return cls(
            identifier=ident,
            path_terminator=PathTerminator.CF,
            waypoint_descriptor=WaypointDescriptor.TERMINAL_WAYPOINT,
            fix=Fix(ident, latitude, longitude),
            course=runway.bearing,
            distance=distance_nm,
            annotation=f"{airport.ident} EXT CTR",
        )

    @classmethod
    def from_fix(
        cls,
        fix: Fix,
        waypoint_descriptor: WaypointDescriptor = WaypointDescriptor.WAYPOINT,
        path_terminator: PathTerminator = PathTerminator.TF,
    ) -> "NavigationLeg":
        """Create a manually entered leg to ``fix``."""
        return cls(
            identifier=fix.ident,
            path_terminator=path_terminator,
            waypoint_descriptor=waypoint_descriptor,
            fix=fix,
        )


@dataclass(frozen=True)
class Discontinuity:
    """Marks a gap with no guaranteed path between two legs."""

    is_discontinuity = True

    def __str__(self) -> str:
        return "F-PLN DISCONTINUITY"


FlightPlanElement = NavigationLeg | Discontinuity


def _project(latitude: float, longitude: float, bearing: float, distance_nm: float) -> tuple[float, float]:
    """Great circle destination point, degrees in and out."""
    lat1 = math.radians(latitude)
    lon1 = math.radians(longitude)
    brg = math.radians(bearing)
    d = distance_nm / EARTH_RADIUS_NM

    lat2 = math.asin(math.sin(lat1) * math.cos(d) + math.cos(lat1) * math.sin(d) * math.cos(brg))
    lon2 = lon1 + math.atan2(
        math.sin(brg) * math.sin(d) * math.cos(lat1),
        math.cos(d) - math.sin(lat1) * math.sin(lat2),
    )

    return math.degrees(lat2), (math.degrees(lon2) + 540.0) % 360.0 - 180.0
