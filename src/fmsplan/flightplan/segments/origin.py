"""Origin segment: the departure airport and runway."""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import AirportNotFoundError, MissingOriginError, RunwayNotFoundError
from fmsplan.flightplan.legs import NavigationLeg
from fmsplan.flightplan.segments.base import FlightPlanSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import Airport, PathTerminator, Runway

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class OriginSegment(FlightPlanSegment):
    """Holds the single initial-fix leg at the origin runway or airport.

    Attributes:
        origin_airport: Selected departure airport
        origin_runway: Selected departure runway
    """

    segment_class = SegmentClass.ORIGIN

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self.origin_airport: Airport | None = None
        self.origin_runway: Runway | None = None

    async def set_origin_airport(self, ident: str) -> None:
        """Select the departure airport.

        Clears the origin runway and any selected departure.

        Raises:
            AirportNotFoundError: If the airport is not in the database
        """
        airport = await self.flight_plan.nav_db.get_airport(ident)
        if airport is None:
            raise AirportNotFoundError(f"Unknown origin airport '{ident}'")

        self.origin_airport = airport
        self.origin_runway = None
        self.set_legs([self.origin_leg(airport, None)])
        self.flight_plan.departure_segment.clear_departure()

        logger.info("Origin set to %s", airport.ident)
        self.flight_plan.restring(self, self.flight_plan.departure_segment)

    async def set_origin_runway(self, ident: str) -> None:
        """Select the departure runway.

        A selected departure is rebuilt so its runway transition matches.

        Raises:
            MissingOriginError: If no origin airport is set
            RunwayNotFoundError: If the runway does not exist at the origin
        """
        airport = self.origin_airport
        if airport is None:
            raise MissingOriginError("Cannot set origin runway without origin airport")

        runways = await self.flight_plan.nav_db.get_runways(airport.ident)
        runway = next((r for r in runways if r.ident == ident), None)
        if runway is None:
            raise RunwayNotFoundError(f"Can't find runway '{ident}' at {airport.ident}")

        departure_segment = self.flight_plan.departure_segment
        departure_legs = None
        if departure_segment.departure is not None:
            departure_legs = departure_segment.build_legs(
                departure_segment.departure, departure_segment.departure_transition, airport, runway
            )

        self.origin_runway = runway
        self.set_legs([self.origin_leg(airport, runway)])
        if departure_legs is not None:
            departure_segment.set_legs(departure_legs)

        logger.info("Origin runway set to %s %s", airport.ident, runway.ident)
        self.flight_plan.restring(self, departure_segment)

    @staticmethod
    def origin_leg(airport: Airport, runway: Runway | None) -> NavigationLeg:
        """The leg the flight plan starts from."""
        return NavigationLeg.from_airport_and_runway(airport, runway, path_terminator=PathTerminator.IF)

    def _copy_selection_to(self, new_segment: "OriginSegment") -> None:
        new_segment.origin_airport = self.origin_airport
        new_segment.origin_runway = self.origin_runway
