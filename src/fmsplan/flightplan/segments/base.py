"""Base class shared by all flight plan segments.

A segment owns the legs of one phase of the flight. Which edits a segment
accepts is decided by its ``SegmentClass``: free-form segments can have
ranges of legs removed, procedure-backed segments can only be replaced as a
whole through their procedure selection.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.legs import FlightPlanElement, NavigationLeg
from fmsplan.flightplan.segments.segment_class import SegmentClass
from fmsplan.navigation.procedures import ProcedureLeg

if TYPE_CHECKING:
    from fmsplan.flightplan.plan import FlightPlan

logger = get_logger(__name__)


class FlightPlanSegment:
    """Ordered legs of one flight phase.

    Attributes:
        segment_class: Phase this segment represents
        flight_plan: Plan owning the segment
        all_legs: Legs and discontinuities in flight order
        strung: True once the last stringing pass involving this segment
            connected it to its neighbor
    """

    segment_class: SegmentClass

    def __init__(self, flight_plan: "FlightPlan") -> None:
        self.flight_plan = flight_plan
        self.all_legs: list[FlightPlanElement] = []
        self.strung = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.all_legs)} legs, strung={self.strung})"

    @property
    def is_empty(self) -> bool:
        """True when the phase has no legs yet."""
        return not self.all_legs

    @property
    def first_element(self) -> FlightPlanElement | None:
        return self.all_legs[0] if self.all_legs else None

    @property
    def last_element(self) -> FlightPlanElement | None:
        return self.all_legs[-1] if self.all_legs else None

    def set_legs(self, new_legs: list[FlightPlanElement]) -> None:
        """Replace every leg of the segment.

        The segment is unstrung until the plan strings it again.
        """
        self.all_legs = list(new_legs)
        self.strung = False
        logger.debug("%s segment now has %d legs", self.segment_class.label, len(self.all_legs))

    def remove_range(self, from_index: int, to_index: int) -> None:
        """Remove legs ``from_index`` (inclusive) to ``to_index`` (exclusive)."""
        if not self._accepts_range_edit("remove_range"):
            return

        del self.all_legs[from_index:to_index]
        self._after_range_edit()

    def remove_before(self, before_index: int) -> None:
        """Remove every leg before ``before_index``."""
        if not self._accepts_range_edit("remove_before"):
            return

        del self.all_legs[:before_index]
        self._after_range_edit()

    def remove_after(self, from_index: int) -> None:
        """Remove every leg after ``from_index``, keeping that leg."""
        if not self._accepts_range_edit("remove_after"):
            return

        del self.all_legs[from_index + 1 :]
        self._after_range_edit()

    def _accepts_range_edit(self, operation: str) -> bool:
        if self.segment_class.range_editable:
            return True

        logger.debug(
            "Ignoring %s on %s segment: procedure legs are only replaced as a whole",
            operation,
            self.segment_class.label,
        )
        return False

    def _after_range_edit(self) -> None:
        self.strung = False
        self.flight_plan.restring(self)

    def clone(self, for_plan: "FlightPlan") -> "FlightPlanSegment":
        """Copy this segment into ``for_plan``.

        The leg list is copied; legs themselves are immutable and shared.
        Selected procedures and runways are published data and are shared by
        reference.
        """
        new_segment = type(self)(for_plan)
        new_segment.all_legs = list(self.all_legs)
        new_segment.strung = self.strung
        self._copy_selection_to(new_segment)
        return new_segment

    def _copy_selection_to(self, new_segment: "FlightPlanSegment") -> None:
        """Copy phase specific selection state. Segments with state override this."""


def convert_procedure_legs(
    procedure_ident: str, *sequences: Sequence[ProcedureLeg]
) -> list[NavigationLeg]:
    """Convert and join consecutive leg sequences of one procedure.

    Published transitions end on the fix the next part of the procedure
    starts from. Where a sequence starts on the fix the previous one ended
    on, that repeated leg is dropped.

    Args:
        procedure_ident: Procedure the legs belong to
        *sequences: Leg sequences in flight order (transition, common route...)

    Returns:
        Navigation legs tagged with ``procedure_ident``
    """
    legs: list[NavigationLeg] = []

    for sequence in sequences:
        converted = [NavigationLeg.from_procedure_leg(leg, procedure_ident) for leg in sequence]
        if legs and converted and converted[0].identifier == legs[-1].identifier:
            converted = converted[1:]
        legs.extend(converted)

    return legs
