"""Shared pytest fixtures for the flight plan tests.

The navigation database fixture publishes two airports:

- KSFO with runways RW28L/RW01R and the OFFSH9 departure.
- KLAX with runways RW24R/RW25L, the SADDE6 arrival and the approaches
  I24R (vias SADDE and SMO, missed approach), R25L, L24R and the visual
  V24R, which has no coded legs.
"""

import pytest

from fmsplan.core.event_bus import EventBus
from fmsplan.flightplan import FlightPlan
from fmsplan.navigation import (
    Airport,
    Fix,
    InMemoryNavigationDatabase,
    PathTerminator,
    Procedure,
    ProcedureKind,
    ProcedureLeg,
    ProcedureTransition,
    Runway,
    WaypointDescriptor,
)

FIXES = {
    "SEPDY": Fix("SEPDY", 37.8108, -122.7467),
    "OFFSH": Fix("OFFSH", 37.5333, -123.0833),
    "SXC": Fix("SXC", 33.3755, -118.4197),
    "SHIVE": Fix("SHIVE", 34.1500, -119.0500),
    "SADDE": Fix("SADDE", 34.0969, -118.8833),
    "BAYST": Fix("BAYST", 34.0200, -118.7000),
    "HUNDA": Fix("HUNDA", 33.9880, -118.2497),
    "FUELR": Fix("FUELR", 33.9700, -118.3300),
    "JETSA": Fix("JETSA", 33.9200, -118.1800),
    "SMO": Fix("SMO", 34.0102, -118.4567),
    "MA24R": Fix("MA24R", 33.9480, -118.4200),
}

KSFO = Airport("KSFO", "San Francisco Intl", Fix("KSFO", 37.6188, -122.3756), elevation_ft=13.0)
KLAX = Airport("KLAX", "Los Angeles Intl", Fix("KLAX", 33.9425, -118.4081), elevation_ft=128.0)

KSFO_RW28L = Runway("RW28L", "KSFO", Fix("RW28L", 37.6117, -122.3581), bearing=284.0, length_ft=11870.0)
KSFO_RW01R = Runway("RW01R", "KSFO", Fix("RW01R", 37.6069, -122.3816), bearing=14.0, length_ft=8650.0)
KLAX_RW24R = Runway("RW24R", "KLAX", Fix("RW24R", 33.9521, -118.4019), bearing=249.0, length_ft=8926.0)
KLAX_RW25L = Runway("RW25L", "KLAX", Fix("RW25L", 33.9373, -118.3830), bearing=249.0, length_ft=11095.0)


def tf(ident: str, **kwargs) -> ProcedureLeg:
    """Track-to-fix leg to one of the fixture fixes."""
    return ProcedureLeg(ident, PathTerminator.TF, fix=FIXES[ident], **kwargs)


def if_(ident: str) -> ProcedureLeg:
    """Initial fix leg at one of the fixture fixes."""
    return ProcedureLeg(ident, PathTerminator.IF, fix=FIXES[ident])


def runway_leg(runway: Runway, path_terminator: PathTerminator = PathTerminator.TF) -> ProcedureLeg:
    """Procedure leg ending at a runway threshold."""
    return ProcedureLeg(
        runway.ident,
        path_terminator,
        waypoint_descriptor=WaypointDescriptor.RUNWAY,
        fix=runway.threshold,
    )


OFFSH9 = Procedure(
    ident="OFFSH9",
    kind=ProcedureKind.DEPARTURE,
    legs=(if_("SEPDY"), tf("OFFSH")),
    transitions=(ProcedureTransition("SXC", (if_("OFFSH"), tf("SXC"))),),
    runway_transitions=(
        ProcedureTransition(
            "RW28L",
            (
                runway_leg(KSFO_RW28L, PathTerminator.IF),
                ProcedureLeg("520", PathTerminator.CA, course=284.0, altitude_ft=520.0),
                ProcedureLeg("SEPDY", PathTerminator.DF, fix=FIXES["SEPDY"]),
            ),
        ),
        ProcedureTransition(
            "RW01R",
            (
                runway_leg(KSFO_RW01R, PathTerminator.IF),
                ProcedureLeg("500", PathTerminator.VA, course=14.0, altitude_ft=500.0),
                ProcedureLeg("SEPDY", PathTerminator.DF, fix=FIXES["SEPDY"]),
            ),
        ),
    ),
)

SADDE6 = Procedure(
    ident="SADDE6",
    kind=ProcedureKind.ARRIVAL,
    legs=(if_("SADDE"), tf("BAYST")),
    transitions=(ProcedureTransition("SHIVE", (if_("SHIVE"), tf("SADDE"))),),
    runway_transitions=(ProcedureTransition("RW24R", (tf("BAYST"), tf("HUNDA"))),),
)

I24R = Procedure(
    ident="I24R",
    kind=ProcedureKind.APPROACH,
    legs=(if_("HUNDA"), tf("FUELR", altitude_ft=2200.0), runway_leg(KLAX_RW24R)),
    missed_legs=(
        ProcedureLeg("1000", PathTerminator.CA, course=249.0, altitude_ft=1000.0),
        ProcedureLeg("SMO", PathTerminator.DF, waypoint_descriptor=WaypointDescriptor.VOR, fix=FIXES["SMO"]),
        ProcedureLeg(
            "SMO",
            PathTerminator.HM,
            waypoint_descriptor=WaypointDescriptor.VOR,
            fix=FIXES["SMO"],
            course=69.0,
            time_min=1.0,
        ),
    ),
    transitions=(
        ProcedureTransition("SADDE", (if_("SADDE"), tf("HUNDA"))),
        ProcedureTransition("SMO", (if_("SMO"), tf("HUNDA"))),
    ),
    runway_ident="RW24R",
)

R25L = Procedure(
    ident="R25L",
    kind=ProcedureKind.APPROACH,
    legs=(if_("JETSA"), runway_leg(KLAX_RW25L)),
    runway_ident="RW25L",
)

L24R = Procedure(
    ident="L24R",
    kind=ProcedureKind.APPROACH,
    legs=(if_("HUNDA"), tf("FUELR"), ProcedureLeg("MA24R", PathTerminator.CF, fix=FIXES["MA24R"], course=249.0)),
    runway_ident="RW24R",
)

V24R = Procedure(ident="V24R", kind=ProcedureKind.APPROACH, runway_ident="RW24R")


@pytest.fixture
def nav_db() -> InMemoryNavigationDatabase:
    """Navigation database with KSFO and KLAX."""
    db = InMemoryNavigationDatabase()

    for airport in (KSFO, KLAX):
        db.add_airport(airport)
    for runway in (KSFO_RW28L, KSFO_RW01R, KLAX_RW24R, KLAX_RW25L):
        db.add_runway(runway)

    db.add_procedure("KSFO", OFFSH9)
    db.add_procedure("KLAX", SADDE6)
    for approach in (I24R, R25L, L24R, V24R):
        db.add_procedure("KLAX", approach)

    return db


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus."""
    return EventBus()


@pytest.fixture
def plan(nav_db: InMemoryNavigationDatabase, event_bus: EventBus) -> FlightPlan:
    """Empty flight plan wired to the fixture database and bus."""
    return FlightPlan(nav_db, event_bus=event_bus)
