"""Departure segment: the selected SID with its runway and enroute transitions."""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import MissingOriginError, ProcedureNotFoundError
from fmsplan.flightplan.legs import FlightPlanElement
from fmsplan.flightplan.segments.base import FlightPlanSegment, convert_procedure_legs
from fmsplan.flightplan.segments.origin import OriginSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import (
    Airport,
    Procedure,
    ProcedureTransition,
    Runway,
    WaypointDescriptor,
)

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class DepartureSegment(FlightPlanSegment):
    """Legs of the selected departure procedure.

    Attributes:
        departure: Selected departure procedure
        departure_transition: Selected enroute transition of the departure
    """

    segment_class = SegmentClass.DEPARTURE

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self.departure: Procedure | None = None
        self.departure_transition: ProcedureTransition | None = None

    async def set_departure_procedure(
        self, procedure_ident: str | None, transition_ident: str | None = None
    ) -> None:
        """Select a departure procedure, or clear it with None.

        Args:
            procedure_ident: Departure identifier published for the origin
            transition_ident: Optional enroute transition of that departure

        Raises:
            MissingOriginError: If no origin airport is set
            ProcedureNotFoundError: If the departure or transition is unknown
        """
        if procedure_ident is None:
            self.clear_departure()
            self.flight_plan.restring(self)
            return

        origin = self.flight_plan.origin_airport
        if origin is None:
            raise MissingOriginError("Cannot set departure without origin airport")

        departures = await self.flight_plan.nav_db.get_departures(origin.ident)
        matching = next((d for d in departures if d.ident == procedure_ident), None)
        if matching is None:
            raise ProcedureNotFoundError(f"Can't find departure procedure '{procedure_ident}' for {origin.ident}")

        transition = None
        if transition_ident is not None:
            transition = matching.find_transition(transition_ident)
            if transition is None:
                raise ProcedureNotFoundError(
                    f"Departure '{procedure_ident}' has no transition '{transition_ident}'"
                )

        legs = self.build_legs(matching, transition, origin, self.flight_plan.origin_runway)

        self.departure = matching
        self.departure_transition = transition
        self.set_legs(legs)

        logger.info("Departure set to %s%s", matching.ident, f".{transition.ident}" if transition else "")
        self.flight_plan.restring(self)

    def clear_departure(self) -> None:
        """Drop the departure selection and its legs."""
        self.departure = None
        self.departure_transition = None
        self.set_legs([])

    def build_legs(
        self,
        procedure: Procedure,
        transition: ProcedureTransition | None,
        origin: Airport,
        runway: Runway | None,
    ) -> list[FlightPlanElement]:
        """Build the leg sequence for a departure from ``runway``.

        The runway transition matching the runway comes first, then the
        common route and the enroute transition. A leading runway leg is
        replaced by the origin's own leg so the departure strings onto the
        origin segment.
        """
        runway_transition = procedure.find_runway_transition(runway.ident if runway else None)

        legs: list[FlightPlanElement] = list(
            convert_procedure_legs(
                procedure.ident,
                runway_transition.legs if runway_transition else (),
                procedure.legs,
                transition.legs if transition else (),
            )
        )

        first = legs[0] if legs else None
        if first is not None and first.waypoint_descriptor == WaypointDescriptor.RUNWAY:
            legs[0] = OriginSegment.origin_leg(origin, runway)

        return legs

    def _copy_selection_to(self, new_segment: "DepartureSegment") -> None:
        new_segment.departure = self.departure
        new_segment.departure_transition = self.departure_transition
