"""Navigation database access and published navigation data.

Typical usage:
    from fmsplan.navigation import InMemoryNavigationDatabase

    db = InMemoryNavigationDatabase()
    db.load_from_yaml("data/navdata.yaml")
"""

from fmsplan.navigation.navdata import (
    InMemoryNavigationDatabase,
    NavigationDatabase,
    NavigationDatabaseError,
)
from fmsplan.navigation.procedures import (
    Airport,
    Fix,
    PathTerminator,
    Procedure,
    ProcedureKind,
    ProcedureLeg,
    ProcedureTransition,
    Runway,
    WaypointDescriptor,
)

__all__ = [
    "Airport",
    "Fix",
    "InMemoryNavigationDatabase",
    "NavigationDatabase",
    "NavigationDatabaseError",
    "PathTerminator",
    "Procedure",
    "ProcedureKind",
    "ProcedureLeg",
    "ProcedureTransition",
    "Runway",
    "WaypointDescriptor",
]
