"""Enroute segment: legs entered by the crew between departure and arrival."""

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.legs import FlightPlanElement
from fmsplan.flightplan.segments.base import FlightPlanSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass

logger = get_logger(__name__)


class EnrouteSegment(FlightPlanSegment):
    """Free-form legs. The only segment editable leg by leg."""

    segment_class = SegmentClass.ENROUTE

    def insert_leg(self, index: int, leg: FlightPlanElement) -> None:
        """Insert ``leg`` before position ``index`` and re-string the plan."""
        self.all_legs.insert(index, leg)
        self.strung = False

        logger.debug("Inserted %s at enroute position %d", leg, index)
        self.flight_plan.restring(self)

    def append_leg(self, leg: FlightPlanElement) -> None:
        """Add ``leg`` at the end of the enroute segment."""
        self.insert_leg(len(self.all_legs), leg)
