"""Published navigation data: airports, runways and terminal procedures.

Everything here is read-only data handed out by a navigation database. The
flight plan references these objects but never mutates them, so they are
frozen dataclasses holding tuples.
"""

from dataclasses import dataclass
from enum import Enum


class PathTerminator(Enum):
    """ARINC 424 path and terminator codes.

    The first letter describes the path (course, track, heading, direct,
    arc...), the second how the leg ends (fix, altitude, distance, manual...).
    """

    IF = "IF"  # Initial fix
    TF = "TF"  # Track to fix
    CF = "CF"  # Course to fix
    DF = "DF"  # Direct to fix
    FA = "FA"  # Fix to altitude
    FC = "FC"  # Track from fix for a distance
    FD = "FD"  # Track from fix to DME distance
    FM = "FM"  # From fix to manual termination
    CA = "CA"  # Course to altitude
    CD = "CD"  # Course to DME distance
    CI = "CI"  # Course to intercept
    CR = "CR"  # Course to radial
    RF = "RF"  # Constant radius arc
    AF = "AF"  # Arc to fix
    VA = "VA"  # Heading to altitude
    VD = "VD"  # Heading to DME distance
    VI = "VI"  # Heading to intercept
    VM = "VM"  # Heading to manual termination
    VR = "VR"  # Heading to radial
    PI = "PI"  # Procedure turn
    HA = "HA"  # Hold to altitude
    HF = "HF"  # Hold to fix
    HM = "HM"  # Hold to manual termination


class WaypointDescriptor(Enum):
    """What kind of database object a leg's fix is."""

    AIRPORT = "airport"
    RUNWAY = "runway"
    WAYPOINT = "waypoint"
    TERMINAL_WAYPOINT = "terminal_waypoint"
    VOR = "vor"
    NDB = "ndb"
    LOCALIZER = "localizer"


class ProcedureKind(Enum):
    """Terminal procedure family."""

    DEPARTURE = "departure"
    ARRIVAL = "arrival"
    APPROACH = "approach"


@dataclass(frozen=True)
class Fix:
    """A named geographic point.

    Attributes:
        ident: Database identifier (e.g., "CREEK", "RW28L", "KSFO")
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
    """

    ident: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Airport:
    """Airport reference data.

    Attributes:
        ident: ICAO identifier
        name: Airport name
        location: Airport reference point
        elevation_ft: Field elevation in feet MSL
    """

    ident: str
    name: str
    location: Fix
    elevation_ft: float = 0.0


@dataclass(frozen=True)
class Runway:
    """One landing/takeoff direction of a runway.

    Attributes:
        ident: Runway identifier including the "RW" prefix (e.g., "RW28L")
        airport_ident: ICAO identifier of the owning airport
        threshold: Threshold position, named after the runway
        bearing: Landing course in degrees
        length_ft: Runway length in feet
    """

    ident: str
    airport_ident: str
    threshold: Fix
    bearing: float
    length_ft: float = 0.0


@dataclass(frozen=True)
class ProcedureLeg:
    """One coded leg of a published procedure.

    Geometry fields are optional: a heading-to-altitude leg has no fix, a
    track-to-fix leg has no course. Absent data stays absent.

    Attributes:
        ident: Leg identifier shown to the crew (fix ident or synthetic name)
        path_terminator: ARINC 424 leg type
        waypoint_descriptor: Kind of object the fix is
        fix: Terminating or originating fix
        course: Magnetic course or heading in degrees
        distance: Distance in nautical miles
        time_min: Leg time in minutes (holds)
        altitude_ft: Altitude constraint in feet, if any
    """

    ident: str
    path_terminator: PathTerminator
    waypoint_descriptor: WaypointDescriptor = WaypointDescriptor.WAYPOINT
    fix: Fix | None = None
    course: float | None = None
    distance: float | None = None
    time_min: float | None = None
    altitude_ft: float | None = None


@dataclass(frozen=True)
class ProcedureTransition:
    """A named alternative leg sequence joining or leaving a procedure.

    For approaches these are the approach vias; for departures and arrivals
    they are enroute or runway transitions.
    """

    ident: str
    legs: tuple[ProcedureLeg, ...] = ()


@dataclass(frozen=True)
class Procedure:
    """A published departure, arrival or approach.

    Attributes:
        ident: Procedure identifier (e.g., "I28L", "OFFSH9", "SERFR3")
        kind: Procedure family
        legs: Common (primary) path
        missed_legs: Missed approach path, approaches only
        transitions: Enroute transitions or approach vias
        runway_transitions: Runway specific legs, keyed by runway ident
        runway_ident: Runway the approach serves, if any
    """

    ident: str
    kind: ProcedureKind
    legs: tuple[ProcedureLeg, ...] = ()
    missed_legs: tuple[ProcedureLeg, ...] = ()
    transitions: tuple[ProcedureTransition, ...] = ()
    runway_transitions: tuple[ProcedureTransition, ...] = ()
    runway_ident: str | None = None

    def find_transition(self, ident: str) -> ProcedureTransition | None:
        """Find an enroute transition or approach via by identifier."""
        return next((t for t in self.transitions if t.ident == ident), None)

    def find_runway_transition(self, runway_ident: str | None) -> ProcedureTransition | None:
        """Find the runway transition serving ``runway_ident``.

        Returns:
            The matching transition, or None when no runway is given or the
            procedure has no transition for it.
        """
        if runway_ident is None:
            return None
        return next((t for t in self.runway_transitions if t.ident == runway_ident), None)
