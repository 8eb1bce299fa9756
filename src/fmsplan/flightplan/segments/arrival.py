"""Arrival segment: the selected STAR with its enroute and runway transitions."""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import MissingDestinationError, ProcedureNotFoundError
from fmsplan.flightplan.legs import FlightPlanElement
from fmsplan.flightplan.segments.base import FlightPlanSegment, convert_procedure_legs
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import Procedure, ProcedureTransition, Runway

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class ArrivalSegment(FlightPlanSegment):
    """Legs of the selected arrival procedure.

    Attributes:
        arrival: Selected arrival procedure
        arrival_transition: Selected enroute transition of the arrival
    """

    segment_class = SegmentClass.ARRIVAL

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self.arrival: Procedure | None = None
        self.arrival_transition: ProcedureTransition | None = None

    async def set_arrival_procedure(
        self, procedure_ident: str | None, transition_ident: str | None = None
    ) -> None:
        """Select an arrival procedure, or clear it with None.

        Raises:
            MissingDestinationError: If no destination airport is set
            ProcedureNotFoundError: If the arrival or transition is unknown
        """
        if procedure_ident is None:
            self.clear_arrival()
            self.flight_plan.restring(self)
            return

        destination = self.flight_plan.destination_airport
        if destination is None:
            raise MissingDestinationError("Cannot set arrival without destination airport")

        arrivals = await self.flight_plan.nav_db.get_arrivals(destination.ident)
        matching = next((a for a in arrivals if a.ident == procedure_ident), None)
        if matching is None:
            raise ProcedureNotFoundError(
                f"Can't find arrival procedure '{procedure_ident}' for {destination.ident}"
            )

        transition = None
        if transition_ident is not None:
            transition = matching.find_transition(transition_ident)
            if transition is None:
                raise ProcedureNotFoundError(f"Arrival '{procedure_ident}' has no transition '{transition_ident}'")

        self.arrival = matching
        self.arrival_transition = transition
        self.set_legs(self.build_legs(matching, transition, self.flight_plan.destination_runway))

        logger.info("Arrival set to %s%s", matching.ident, f".{transition.ident}" if transition else "")
        self.flight_plan.restring(self)

    def clear_arrival(self) -> None:
        """Drop the arrival selection and its legs."""
        self.arrival = None
        self.arrival_transition = None
        self.set_legs([])

    def rebuild_for_runway(self, runway: Runway | None) -> None:
        """Re-derive the legs after the destination runway changed."""
        if self.arrival is None:
            return
        self.set_legs(self.build_legs(self.arrival, self.arrival_transition, runway))

    @staticmethod
    def build_legs(
        procedure: Procedure, transition: ProcedureTransition | None, runway: Runway | None
    ) -> list[FlightPlanElement]:
        """Enroute transition, then common route, then the runway transition."""
        runway_transition = procedure.find_runway_transition(runway.ident if runway else None)

        return list(
            convert_procedure_legs(
                procedure.ident,
                transition.legs if transition else (),
                procedure.legs,
                runway_transition.legs if runway_transition else (),
            )
        )

    def _copy_selection_to(self, new_segment: "ArrivalSegment") -> None:
        new_segment.arrival = self.arrival
        new_segment.arrival_transition = self.arrival_transition
