"""Errors raised by flight plan editing operations.

A failed operation leaves the plan exactly as it was before the call.
Navigation database failures are not wrapped: backends raise
``fmsplan.navigation.NavigationDatabaseError`` and it reaches the caller as is.
"""


class FlightPlanError(Exception):
    """Base class for flight plan editing errors."""


class MissingDestinationError(FlightPlanError):
    """Raised when an operation needs a destination airport and none is set."""


class MissingOriginError(FlightPlanError):
    """Raised when an operation needs an origin airport and none is set."""


class ProcedureNotFoundError(FlightPlanError):
    """Raised when a procedure or transition identifier is not published."""


class AirportNotFoundError(FlightPlanError):
    """Raised when the navigation database does not know an airport."""


class RunwayNotFoundError(FlightPlanError):
    """Raised when a runway identifier does not exist at the airport."""


class SegmentNotEditableError(FlightPlanError):
    """Raised when an insertion targets the inside of a procedure segment."""
