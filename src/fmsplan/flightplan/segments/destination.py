"""Destination segment: the arrival airport and runway."""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import AirportNotFoundError, MissingDestinationError, RunwayNotFoundError
from fmsplan.flightplan.legs import NavigationLeg
from fmsplan.flightplan.segments.base import FlightPlanSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import Airport, Runway

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class DestinationSegment(FlightPlanSegment):
    """Holds the destination selection.

    The segment only carries a leg, the destination airport itself, while
    the approach segment is empty. Once a runway or an approach is known the
    approach segment ends the route on the runway instead.

    Attributes:
        destination_airport: Selected arrival airport
        destination_runway: Selected landing runway
    """

    segment_class = SegmentClass.DESTINATION

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self.destination_airport: Airport | None = None
        self.destination_runway: Runway | None = None

    async def set_destination_airport(self, ident: str) -> None:
        """Select the arrival airport.

        Everything that depended on the previous destination (runway,
        arrival, approach via, approach and missed approach) is cleared.

        Raises:
            AirportNotFoundError: If the airport is not in the database
        """
        plan = self.flight_plan

        airport = await plan.nav_db.get_airport(ident)
        if airport is None:
            raise AirportNotFoundError(f"Unknown destination airport '{ident}'")

        self.destination_airport = airport
        self.destination_runway = None

        plan.arrival_segment.clear_arrival()
        await plan.approach_segment.set_approach_procedure(None)
        self.refresh_legs()

        logger.info("Destination set to %s", airport.ident)
        plan.string_segments_forwards(plan.origin_segment, self)
        plan.insert_necessary_discontinuities()

    async def set_destination_runway(self, ident: str) -> None:
        """Select the landing runway.

        Without a selected approach the approach segment is re-derived to fly
        the extended centerline onto the new runway. A selected approach is
        left as it is.

        Raises:
            MissingDestinationError: If no destination airport is set
            RunwayNotFoundError: If the runway does not exist at the destination
        """
        plan = self.flight_plan

        airport = self.destination_airport
        if airport is None:
            raise MissingDestinationError("Cannot set destination runway without destination airport")

        runways = await plan.nav_db.get_runways(airport.ident)
        runway = next((r for r in runways if r.ident == ident), None)
        if runway is None:
            raise RunwayNotFoundError(f"Can't find runway '{ident}' at {airport.ident}")

        self.destination_runway = runway

        plan.arrival_segment.rebuild_for_runway(runway)
        plan.approach_segment.on_runway_selected_without_approach()
        self.refresh_legs()

        logger.info("Destination runway set to %s %s", airport.ident, runway.ident)
        plan.restring(plan.arrival_segment, self)

    def refresh_legs(self) -> None:
        """Show the destination airport while the approach segment is empty."""
        airport = self.destination_airport
        if airport is not None and self.flight_plan.approach_segment.is_empty:
            legs = [NavigationLeg.from_airport_and_runway(airport, None)]
        else:
            legs = []

        if legs != self.all_legs:
            self.set_legs(legs)

    def _copy_selection_to(self, new_segment: "DestinationSegment") -> None:
        new_segment.destination_airport = self.destination_airport
        new_segment.destination_runway = self.destination_runway
