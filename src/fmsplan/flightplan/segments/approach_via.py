"""Approach via segment: the transition leading onto the selected approach."""

from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import ProcedureNotFoundError
from fmsplan.flightplan.legs import FlightPlanElement, NavigationLeg
from fmsplan.flightplan.segments.base import FlightPlanSegment, convert_procedure_legs
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import Procedure, ProcedureTransition

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class ApproachViaSegment(FlightPlanSegment):
    """Legs of the selected approach via.

    Attributes:
        approach_via: Selected via, one of the plan's available vias
    """

    segment_class = SegmentClass.APPROACH_VIA

    def __init__(self, flight_plan: "FlightPlan") -> None:
        super().__init__(flight_plan)
        self.approach_via: ProcedureTransition | None = None

    def set_approach_via(self, via_ident: str | None) -> None:
        """Select one of the vias offered by the selected approach.

        The approach legs are re-derived from the approach procedure so that
        the approach starts on its first fix again before stringing.

        Args:
            via_ident: Via identifier, or None to remove the via

        Raises:
            ProcedureNotFoundError: If the selected approach offers no such via
        """
        plan = self.flight_plan

        if via_ident is None:
            self.clear_approach_via()
        else:
            via = next((v for v in plan.available_approach_vias if v.ident == via_ident), None)
            approach = plan.approach_segment.approach_procedure
            if via is None or approach is None:
                raise ProcedureNotFoundError(f"Approach via '{via_ident}' is not available")

            self.approach_via = via
            self.set_legs(self.build_legs(via, approach))
            logger.info("Approach via set to %s", via.ident)

        plan.approach_segment.rebuild_legs()
        plan.restring(self, plan.missed_approach_segment)

    def clear_approach_via(self) -> None:
        """Drop the via selection and its legs without re-stringing."""
        self.approach_via = None
        self.set_legs([])

    @staticmethod
    def build_legs(via: ProcedureTransition, approach: Procedure) -> list[FlightPlanElement]:
        """Convert the via legs.

        A via ends on the fix the approach starts from. When it does, the
        approach's own first leg is used as the via's last leg so the two
        segments string together.
        """
        legs: list[FlightPlanElement] = list(convert_procedure_legs(approach.ident, via.legs))

        if legs and approach.legs:
            approach_entry = NavigationLeg.from_procedure_leg(approach.legs[0], approach.ident)
            if legs[-1].identifier == approach_entry.identifier:
                legs[-1] = approach_entry

        return legs

    def _copy_selection_to(self, new_segment: "ApproachViaSegment") -> None:
        new_segment.approach_via = self.approach_via
