"""Flight plan segments, one per flight phase."""

from fmsplan.flightplan.segments.approach import ApproachSegment
from fmsplan.flightplan.segments.approach_via import ApproachViaSegment
from fmsplan.flightplan.segments.arrival import ArrivalSegment
from fmsplan.flightplan.segments.base import FlightPlanSegment, convert_procedure_legs
from fmsplan.flightplan.segments.departure import DepartureSegment
from fmsplan.flightplan.segments.destination import DestinationSegment
from fmsplan.flightplan.segments.enroute import EnrouteSegment
from fmsplan.flightplan.segments.missed_approach import MissedApproachSegment
from fmsplan.flightplan.segments.origin import OriginSegment
from fmsplan.flightplan.segments.segment_class import SegmentClass

__all__ = [
    "ApproachSegment",
    "ApproachViaSegment",
    "ArrivalSegment",
    "DepartureSegment",
    "DestinationSegment",
    "EnrouteSegment",
    "FlightPlanSegment",
    "MissedApproachSegment",
    "OriginSegment",
    "SegmentClass",
    "convert_procedure_legs",
]
