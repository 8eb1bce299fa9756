"""Approach segment: the selected approach procedure down to the runway.

Selecting an approach touches three places at once: the approach legs, the
missed approach legs and the approach vias offered by the plan. Nothing is
written until the navigation database lookup and the identifier match have
both succeeded, so a failed selection leaves the plan untouched.

When no approach is selected but the destination runway is known, the
segment is filled with a course-to-fix leg on the extended runway centerline
followed by the runway itself.
"""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import MissingDestinationError, ProcedureNotFoundError
from fmsplan.flightplan.legs import FlightPlanElement, NavigationLeg
from fmsplan.flightplan.segments.base import FlightPlanSegment, convert_procedure_legs
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import Procedure, WaypointDescriptor

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class ApproachSegment(FlightPlanSegment):
    """Legs of the selected approach, always ending on the selected runway."""

    segment_class = SegmentClass.APPROACH

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self._approach: Procedure | None = None

    @property
    def approach_procedure(self) -> Procedure | None:
        """The selected approach, None when no approach is selected."""
        return self._approach

    async def set_approach_procedure(self, procedure_ident: str | None) -> None:
        """Select an approach at the destination, or remove it with None.

        On success the approach legs and the missed approach legs are
        replaced, the segment is strung onto the preceding populated segment,
        discontinuities are placed where needed and the approach's vias are
        published as the plan's available vias.

        Args:
            procedure_ident: Approach identifier published for the destination

        Raises:
            MissingDestinationError: If no destination airport is set
            ProcedureNotFoundError: If the destination has no such approach
            NavigationDatabaseError: If the lookup itself fails
        """
        plan = self.flight_plan

        if procedure_ident is None:
            plan.approach_via_segment.clear_approach_via()
            self._approach = None
            self.set_legs(self.create_leg_set([]))
            plan.missed_approach_segment.set_missed_approach_legs([])
            plan.destination_segment.refresh_legs()
            plan.restring(self, plan.missed_approach_segment)

            plan.set_available_approach_vias(None, ())
            logger.info("Approach removed")
            return

        destination = plan.destination_airport
        if destination is None:
            raise MissingDestinationError("Cannot set approach without destination airport")

        approaches = await plan.nav_db.get_approaches(destination.ident)
        matching = next((a for a in approaches if a.ident == procedure_ident), None)
        if matching is None:
            raise ProcedureNotFoundError(
                f"Can't find approach procedure '{procedure_ident}' for {destination.ident}"
            )

        # A via belongs to the approach it was selected for.
        plan.approach_via_segment.clear_approach_via()

        self._approach = matching
        self.set_legs(self.create_leg_set(convert_procedure_legs(matching.ident, matching.legs), matching.ident))

        plan.missed_approach_segment.set_missed_approach_legs(
            convert_procedure_legs(matching.ident, matching.missed_legs)
        )
        plan.destination_segment.refresh_legs()

        # Strings from the preceding populated segment through the missed approach.
        plan.restring(self, plan.missed_approach_segment)

        plan.set_available_approach_vias(matching.ident, matching.transitions)
        logger.info("Approach set to %s at %s", matching.ident, destination.ident)

    def on_runway_selected_without_approach(self) -> None:
        """Re-derive the centerline and runway legs for a new destination runway.

        Does nothing while an approach is selected. Calling it twice in a row
        yields the same legs.
        """
        if self._approach is not None:
            return

        self.set_legs(self.create_leg_set([]))
        logger.debug("Approach legs re-derived for runway %s", self.flight_plan.destination_runway)

    def rebuild_legs(self) -> None:
        """Re-install the selected approach's legs, for instance after a via change.

        The final runway leg installed when the approach was selected is kept,
        so a destination runway changed since then does not reach the approach.
        """
        approach = self._approach
        if approach is None:
            self.set_legs(self.create_leg_set([]))
            return
        if not approach.legs:
            return

        installed_final = self.last_element
        legs = self.create_leg_set(convert_procedure_legs(approach.ident, approach.legs), approach.ident)

        if (
            approach.legs[-1].waypoint_descriptor == WaypointDescriptor.RUNWAY
            and installed_final is not None
            and not installed_final.is_discontinuity
            and installed_final.procedure_ident == approach.ident
            and installed_final.waypoint_descriptor in (WaypointDescriptor.RUNWAY, WaypointDescriptor.AIRPORT)
        ):
            legs[-1] = installed_final

        self.set_legs(legs)

    def create_leg_set(
        self, approach_legs: list[NavigationLeg], procedure_ident: str = ""
    ) -> list[FlightPlanElement]:
        """Derive the installed legs from the raw approach legs.

        With no approach legs and a known destination airport and runway the
        result is an extended centerline leg followed by the runway. Otherwise
        the approach legs are kept, except that a final runway leg is replaced
        by the selected destination runway.

        Args:
            approach_legs: Converted legs of the approach
            procedure_ident: Approach identifier carried by a synthesized
                runway leg
        """
        plan = self.flight_plan
        airport = plan.destination_airport
        runway = plan.destination_runway
        settings = plan.settings

        if not approach_legs:
            if airport is None or runway is None:
                return []

            return [
                NavigationLeg.destination_extended_centerline(airport, runway, settings.centerline_distance_nm),
                NavigationLeg.from_airport_and_runway(
                    airport, runway, path_terminator=settings.runway_leg_path_terminator
                ),
            ]

        legs: list[FlightPlanElement] = list(approach_legs[:-1])
        last_leg = approach_legs[-1]

        if (
            not last_leg.is_discontinuity
            and last_leg.waypoint_descriptor == WaypointDescriptor.RUNWAY
            and airport is not None
        ):
            legs.append(
                NavigationLeg.from_airport_and_runway(
                    airport, runway, procedure_ident, path_terminator=last_leg.path_terminator
                )
            )
        else:
            legs.append(last_leg)

        return legs

    def _copy_selection_to(self, new_segment: "ApproachSegment") -> None:
        new_segment._approach = self._approach
