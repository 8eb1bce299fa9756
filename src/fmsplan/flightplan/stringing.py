"""Classification of segment boundaries.

Two adjacent segments are strung when the last leg of the earlier one and
the first leg of the later one denote the same leg. Classification never
fails; it only looks at the two boundary elements.
"""

from enum import Enum

from fmsplan.flightplan.legs import FlightPlanElement


class BoundaryState(Enum):
    """Connection state of the boundary between two populated segments."""

    UNSTRUNG = "unstrung"
    STRUNG = "strung"


def legs_connect(prev_element: FlightPlanElement | None, next_element: FlightPlanElement | None) -> bool:
    """Check whether two boundary elements are the same navigation leg.

    Args:
        prev_element: Last element of the earlier segment
        next_element: First element of the later segment

    Returns:
        True only for two navigation legs with equal identifier, path
        terminator and procedure
    """
    if prev_element is None or next_element is None:
        return False
    if prev_element.is_discontinuity or next_element.is_discontinuity:
        return False
    return prev_element.is_same_leg(next_element)


def classify_boundary(
    prev_element: FlightPlanElement | None, next_element: FlightPlanElement | None
) -> BoundaryState:
    """Boundary state implied by two boundary elements."""
    return BoundaryState.STRUNG if legs_connect(prev_element, next_element) else BoundaryState.UNSTRUNG
