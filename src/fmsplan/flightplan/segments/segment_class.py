"""Flight plan phases and their editing capabilities."""

from enum import Enum


class SegmentClass(Enum):
    """Flight plan phase, in flight order.

    Each member carries the capabilities of its segment:

    Attributes:
        order: Position of the segment in the plan
        range_editable: Legs can be removed by position. Procedure-backed
            segments are replaced as a whole instead.
        joins_previous: The segment always flies on from the end of the
            preceding segment, so no discontinuity is placed between them.
    """

    ORIGIN = (0, False, False)
    DEPARTURE = (1, False, False)
    ENROUTE = (2, True, False)
    ARRIVAL = (3, False, False)
    APPROACH_VIA = (4, False, False)
    APPROACH = (5, False, False)
    MISSED_APPROACH = (6, False, True)
    DESTINATION = (7, False, False)

    def __init__(self, order: int, range_editable: bool, joins_previous: bool) -> None:
        self.order = order
        self.range_editable = range_editable
        self.joins_previous = joins_previous

    @property
    def label(self) -> str:
        """Display name, e.g. "approach via"."""
        return self.name.lower().replace("_", " ")
