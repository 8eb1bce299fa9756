"""Missed approach segment, owned wholesale by the selected approach."""

from fmsplan.flightplan.legs import FlightPlanElement
from fmsplan.flightplan.segments.base import FlightPlanSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass


class MissedApproachSegment(FlightPlanSegment):
    """Missed approach legs of the selected approach.

    Flies on from the end of the approach, so no discontinuity is ever
    placed between the two.
    """

    segment_class = SegmentClass.MISSED_APPROACH

    def set_missed_approach_legs(self, legs: list[FlightPlanElement]) -> None:
        """Replace the missed approach with ``legs``."""
        self.set_legs(legs)
