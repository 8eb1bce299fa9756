"""Flight plan legs, segments and the segment stringing logic.

Typical usage:
    from fmsplan.flightplan import FlightPlan

    plan = FlightPlan(nav_db)
    await plan.set_destination("KSFO")
    await plan.set_approach("I28L")
"""

from fmsplan.flightplan.errors import (
    AirportNotFoundError,
    FlightPlanError,
    MissingDestinationError,
    MissingOriginError,
    ProcedureNotFoundError,
    RunwayNotFoundError,
    SegmentNotEditableError,
)
from fmsplan.flightplan.events import ApproachViasChangedEvent, FlightPlanChangedEvent
from fmsplan.flightplan.legs import Discontinuity, FlightPlanElement, NavigationLeg
from fmsplan.flightplan.plan import FlightPlan
from fmsplan.flightplan.segments import FlightPlanSegment, SegmentClass
from fmsplan.flightplan.settings import FlightPlanSettings
from fmsplan.flightplan.stringing import BoundaryState, classify_boundary, legs_connect

__all__ = [
    "AirportNotFoundError",
    "ApproachViasChangedEvent",
    "BoundaryState",
    "Discontinuity",
    "FlightPlan",
    "FlightPlanChangedEvent",
    "FlightPlanElement",
    "FlightPlanError",
    "FlightPlanSegment",
    "FlightPlanSettings",
    "MissingDestinationError",
    "MissingOriginError",
    "NavigationLeg",
    "ProcedureNotFoundError",
    "RunwayNotFoundError",
    "SegmentClass",
    "SegmentNotEditableError",
    "classify_boundary",
    "legs_connect",
]
