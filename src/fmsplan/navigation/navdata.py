"""Navigation database interface used by the flight plan.

The flight plan only needs a handful of lookups keyed by airport: the airport
itself, its runways, and its published departures, arrivals and approaches.
Lookups are coroutines because real backends sit behind a network or a
separate process.

``InMemoryNavigationDatabase`` holds the data in dictionaries and can be
filled from a YAML document:

    airports:
      - ident: KSFO
        name: San Francisco Intl
        latitude: 37.6188
        longitude: -122.3756
        runways:
          - {ident: RW28L, latitude: 37.6117, longitude: -122.3581, bearing: 284}
        procedures:
          - ident: I28L
            kind: approach
            runway: RW28L
            legs:
              - {ident: AXMUL, type: IF, fix: AXMUL}
              - {ident: RW28L, type: TF, descriptor: runway, fix: RW28L}
    fixes:
      AXMUL: {latitude: 37.58, longitude: -122.25}

Typical usage:
    db = InMemoryNavigationDatabase()
    db.load_from_yaml("data/navdata.yaml")

    approaches = await db.get_approaches("KSFO")
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml

from fmsplan.core.logging_system import get_logger
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

logger = get_logger(__name__)


class NavigationDatabaseError(Exception):
    """Raised by a navigation database backend when a lookup cannot be served.

    The flight plan never catches this; it reaches the caller unchanged.
    """


class NavigationDatabase(ABC):
    """Asynchronous lookup service for published navigation data."""

    @abstractmethod
    async def get_airport(self, ident: str) -> Airport | None:
        """Resolve an airport by ICAO identifier, None when unknown."""

    @abstractmethod
    async def get_runways(self, airport_ident: str) -> list[Runway]:
        """List the runways of an airport."""

    @abstractmethod
    async def get_departures(self, airport_ident: str) -> list[Procedure]:
        """List the published departures of an airport."""

    @abstractmethod
    async def get_arrivals(self, airport_ident: str) -> list[Procedure]:
        """List the published arrivals of an airport."""

    @abstractmethod
    async def get_approaches(self, airport_ident: str) -> list[Procedure]:
        """List the published approaches of an airport."""


class InMemoryNavigationDatabase(NavigationDatabase):
    """Navigation database backed by dictionaries.

    Attributes:
        airports: Airports keyed by identifier
        runways: Runways keyed by airport identifier
        procedures: Procedures keyed by airport identifier

    Examples:
        >>> db = InMemoryNavigationDatabase()
        >>> db.add_airport(ksfo)
        >>> db.add_procedure("KSFO", ils28l)
    """

    def __init__(self) -> None:
        self.airports: dict[str, Airport] = {}
        self.runways: dict[str, list[Runway]] = {}
        self.procedures: dict[str, list[Procedure]] = {}

    def add_airport(self, airport: Airport) -> None:
        """Add or replace an airport."""
        self.airports[airport.ident] = airport
        logger.debug("Added airport %s", airport.ident)

    def add_runway(self, runway: Runway) -> None:
        """Add a runway to its airport's runway list."""
        self.runways.setdefault(runway.airport_ident, []).append(runway)

    def add_procedure(self, airport_ident: str, procedure: Procedure) -> None:
        """Add a procedure published for ``airport_ident``."""
        self.procedures.setdefault(airport_ident, []).append(procedure)
        logger.debug("Added %s %s for %s", procedure.kind.value, procedure.ident, airport_ident)

    async def get_airport(self, ident: str) -> Airport | None:
        return self.airports.get(ident)

    async def get_runways(self, airport_ident: str) -> list[Runway]:
        return list(self.runways.get(airport_ident, []))

    async def get_departures(self, airport_ident: str) -> list[Procedure]:
        return self._procedures_of_kind(airport_ident, ProcedureKind.DEPARTURE)

    async def get_arrivals(self, airport_ident: str) -> list[Procedure]:
        return self._procedures_of_kind(airport_ident, ProcedureKind.ARRIVAL)

    async def get_approaches(self, airport_ident: str) -> list[Procedure]:
        return self._procedures_of_kind(airport_ident, ProcedureKind.APPROACH)

    def _procedures_of_kind(self, airport_ident: str, kind: ProcedureKind) -> list[Procedure]:
        return [p for p in self.procedures.get(airport_ident, []) if p.kind == kind]

    def count(self) -> int:
        """Return the number of airports in the database."""
        return len(self.airports)

    def clear(self) -> None:
        """Remove all airports, runways and procedures."""
        self.airports.clear()
        self.runways.clear()
        self.procedures.clear()
        logger.info("Cleared navigation database")

    def load_from_yaml(self, yaml_path: str | Path) -> int:
        """Load airports, runways and procedures from a YAML file.

        Invalid airports and procedures are skipped with a warning; the rest
        of the file still loads.

        Args:
            yaml_path: Path to the YAML document

        Returns:
            Number of airports loaded

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Navigation data not found: {yaml_path}")

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        fixes = {
            ident: Fix(ident, float(entry["latitude"]), float(entry["longitude"]))
            for ident, entry in (data.get("fixes") or {}).items()
        }

        count = 0
        for entry in data.get("airports") or []:
            try:
                airport = Airport(
                    ident=entry["ident"],
                    name=entry.get("name", entry["ident"]),
                    location=Fix(entry["ident"], float(entry["latitude"]), float(entry["longitude"])),
                    elevation_ft=float(entry.get("elevation_ft", 0.0)),
                )
                runways = [_parse_runway(airport.ident, r) for r in entry.get("runways") or []]
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping invalid airport entry: %s", e)
                continue

            self.add_airport(airport)
            for runway in runways:
                self.add_runway(runway)

            known_fixes = {**fixes, **{r.ident: r.threshold for r in runways}}
            for proc_entry in entry.get("procedures") or []:
                try:
                    self.add_procedure(airport.ident, _parse_procedure(proc_entry, known_fixes))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping invalid procedure at %s: %s", airport.ident, e)

            count += 1

        logger.info("Loaded %d airports from %s", count, yaml_path)
        return count


def _parse_runway(airport_ident: str, entry: dict[str, Any]) -> Runway:
    ident = entry["ident"]
    return Runway(
        ident=ident,
        airport_ident=airport_ident,
        threshold=Fix(ident, float(entry["latitude"]), float(entry["longitude"])),
        bearing=float(entry["bearing"]),
        length_ft=float(entry.get("length_ft", 0.0)),
    )


def _parse_procedure(entry: dict[str, Any], fixes: dict[str, Fix]) -> Procedure:
    return Procedure(
        ident=entry["ident"],
        kind=ProcedureKind(entry["kind"]),
        legs=_parse_legs(entry.get("legs"), fixes),
        missed_legs=_parse_legs(entry.get("missed_legs"), fixes),
        transitions=_parse_transitions(entry.get("transitions"), fixes),
        runway_transitions=_parse_transitions(entry.get("runway_transitions"), fixes),
        runway_ident=entry.get("runway"),
    )


def _parse_transitions(entries: list | None, fixes: dict[str, Fix]) -> tuple[ProcedureTransition, ...]:
    return tuple(
        ProcedureTransition(ident=t["ident"], legs=_parse_legs(t.get("legs"), fixes))
        for t in entries or []
    )


def _parse_legs(entries: list | None, fixes: dict[str, Fix]) -> tuple[ProcedureLeg, ...]:
    return tuple(_parse_leg(leg, fixes) for leg in entries or [])


def _parse_leg(entry: dict[str, Any], fixes: dict[str, Fix]) -> ProcedureLeg:
    fix = None
    if entry.get("fix") is not None:
        if entry["fix"] not in fixes:
            raise ValueError(f"unknown fix {entry['fix']!r}")
        fix = fixes[entry["fix"]]

    return ProcedureLeg(
        ident=entry["ident"],
        path_terminator=PathTerminator(entry["type"]),
        waypoint_descriptor=WaypointDescriptor(entry.get("descriptor", "waypoint")),
        fix=fix,
        course=_optional_float(entry.get("course")),
        distance=_optional_float(entry.get("distance")),
        time_min=_optional_float(entry.get("time_min")),
        altitude_ft=_optional_float(entry.get("altitude_ft")),
    )


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)
