"""Flight plan made of fixed, ordered segments.

The plan owns one segment per flight phase and keeps them connected. After
any segment changes, the boundaries around it are strung again: when the
last leg of one segment and the first leg of the next are the same leg, the
duplicate is dropped from the later segment; otherwise the boundary stays
unstrung and a discontinuity is placed there.

Typical usage:
    plan = FlightPlan(nav_db)
    await plan.set_origin("KSFO")
    await plan.set_destination("KLAX")
    await plan.set_destination_runway("RW24R")
    await plan.set_approach("I24R")

    for element in plan.all_legs:
        print(element)
"""

from fmsplan.core.event_bus import EventBus
from fmsplan.core.logging_system import get_logger
from fmsplan.flightplan.errors import SegmentNotEditableError
from fmsplan.flightplan.events import ApproachViasChangedEvent, FlightPlanChangedEvent
from fmsplan.flightplan.legs import Discontinuity, FlightPlanElement, NavigationLeg
from fmsplan.flightplan.segments import (
    ApproachSegment,
    ApproachViaSegment,
    ArrivalSegment,
    DepartureSegment,
    DestinationSegment,
    EnrouteSegment,
    FlightPlanSegment,
    MissedApproachSegment,
    OriginSegment,
    SegmentClass,
)
from fmsplan.flightplan.settings import FlightPlanSettings
from fmsplan.flightplan.stringing import BoundaryState, classify_boundary
from fmsplan.navigation.navdata import NavigationDatabase
from fmsplan.navigation.procedures import Airport, ProcedureTransition, Runway

logger = get_logger(__name__)

_SEGMENT_ATTRIBUTES = (
    "origin_segment",
    "departure_segment",
    "enroute_segment",
    "arrival_segment",
    "approach_via_segment",
    "approach_segment",
    "missed_approach_segment",
    "destination_segment",
)

BoundaryKey = tuple[SegmentClass, SegmentClass]


class FlightPlan:
    """An editable route made of one segment per flight phase.

    Mutations are expected to run one after the other: an operation that
    awaits the navigation database must complete before the next one starts.

    Attributes:
        nav_db: Navigation database used by procedure and airport selection
        settings: Settings shared by the segments
        event_bus: Bus receiving plan events, if any
    """

    def __init__(
        self,
        nav_db: NavigationDatabase,
        settings: FlightPlanSettings | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.nav_db = nav_db
        self.settings = settings or FlightPlanSettings()
        self.event_bus = event_bus

        self.origin_segment = OriginSegment(self)
        self.departure_segment = DepartureSegment(self)
        self.enroute_segment = EnrouteSegment(self)
        self.arrival_segment = ArrivalSegment(self)
        self.approach_via_segment = ApproachViaSegment(self)
        self.approach_segment = ApproachSegment(self)
        self.missed_approach_segment = MissedApproachSegment(self)
        self.destination_segment = DestinationSegment(self)

        self._available_approach_vias: tuple[ProcedureTransition, ...] = ()
        # Strung boundaries and the exact leg objects that were connected.
        self._strung_boundaries: dict[BoundaryKey, tuple[FlightPlanElement, FlightPlanElement | None]] = {}

    def __repr__(self) -> str:
        return f"FlightPlan({len(self.all_legs)} elements)"

    @property
    def segments(self) -> list[FlightPlanSegment]:
        """All segments in flight order."""
        return [getattr(self, name) for name in _SEGMENT_ATTRIBUTES]

    @property
    def all_legs(self) -> list[FlightPlanElement]:
        """Every element of the plan in flight order."""
        return [element for segment in self.segments for element in segment.all_legs]

    @property
    def origin_airport(self) -> Airport | None:
        return self.origin_segment.origin_airport

    @property
    def origin_runway(self) -> Runway | None:
        return self.origin_segment.origin_runway

    @property
    def destination_airport(self) -> Airport | None:
        return self.destination_segment.destination_airport

    @property
    def destination_runway(self) -> Runway | None:
        return self.destination_segment.destination_runway

    @property
    def available_approach_vias(self) -> tuple[ProcedureTransition, ...]:
        """Vias offered by the selected approach."""
        return self._available_approach_vias

    def set_available_approach_vias(
        self, approach_ident: str | None, vias: tuple[ProcedureTransition, ...]
    ) -> None:
        """Publish the vias of a newly selected (or removed) approach."""
        self._available_approach_vias = tuple(vias)

        if self.event_bus is not None:
            self.event_bus.publish(
                ApproachViasChangedEvent(
                    approach_ident=approach_ident,
                    via_idents=tuple(via.ident for via in self._available_approach_vias),
                )
            )

    def element_at(self, index: int) -> tuple[FlightPlanSegment, int]:
        """Locate a plan element.

        Args:
            index: Position in ``all_legs``

        Returns:
            The owning segment and the position inside it

        Raises:
            IndexError: If ``index`` is outside the plan
        """
        if index >= 0:
            offset = 0
            for segment in self.segments:
                if index < offset + len(segment.all_legs):
                    return segment, index - offset
                offset += len(segment.all_legs)

        raise IndexError(f"Flight plan index {index} out of range")

    def previous_segment(self, segment: FlightPlanSegment) -> FlightPlanSegment | None:
        """Nearest earlier segment that has at least one leg."""
        order = segment.segment_class.order
        for candidate in reversed(self.segments[:order]):
            if candidate.all_legs:
                return candidate
        return None

    def next_segment(self, segment: FlightPlanSegment) -> FlightPlanSegment | None:
        """Nearest later segment that has at least one leg."""
        order = segment.segment_class.order
        for candidate in self.segments[order + 1 :]:
            if candidate.all_legs:
                return candidate
        return None

    def string_segments_forwards(
        self, from_segment: FlightPlanSegment | None, to_segment: FlightPlanSegment | None
    ) -> None:
        """String every boundary between ``from_segment`` and ``to_segment``.

        Empty segments in between are skipped, so the legs on either side of
        an unpopulated phase are strung directly.
        """
        if from_segment is None or to_segment is None:
            return

        first = from_segment.segment_class.order
        last = to_segment.segment_class.order

        prev: FlightPlanSegment | None = None
        for segment in self.segments[first : last + 1]:
            if not segment.all_legs:
                continue
            if prev is not None:
                self._string_boundary(prev, segment)
            if segment.all_legs:
                prev = segment

    def _string_boundary(self, prev: FlightPlanSegment, nxt: FlightPlanSegment) -> BoundaryState:
        key = (prev.segment_class, nxt.segment_class)
        prev_tail = prev.all_legs[-1]
        next_head = nxt.all_legs[0]

        if self._is_recorded_strung(key, prev_tail, next_head):
            prev.strung = nxt.strung = True
            return BoundaryState.STRUNG

        # A discontinuity placed at this boundary earlier does not hide a
        # connection that exists now.
        prev_leg = prev_tail
        if prev_tail.is_discontinuity and len(prev.all_legs) > 1:
            prev_leg = prev.all_legs[-2]

        if classify_boundary(prev_leg, next_head) is BoundaryState.STRUNG:
            if prev_leg is not prev_tail:
                prev.all_legs.pop()
            nxt.all_legs.pop(0)

            self._strung_boundaries[key] = (prev_leg, nxt.first_element)
            prev.strung = nxt.strung = True
            logger.debug("Strung %s onto %s at %s", nxt.segment_class.label, prev.segment_class.label, prev_leg)
            return BoundaryState.STRUNG

        if self._is_joined(prev, nxt):
            self._strung_boundaries[key] = (prev_tail, next_head)
            prev.strung = nxt.strung = True
            return BoundaryState.STRUNG

        self._strung_boundaries.pop(key, None)
        prev.strung = nxt.strung = False
        return BoundaryState.UNSTRUNG

    def _is_recorded_strung(
        self, key: BoundaryKey, prev_tail: FlightPlanElement, next_head: FlightPlanElement
    ) -> bool:
        record = self._strung_boundaries.get(key)
        return record is not None and record[0] is prev_tail and record[1] is next_head

    @staticmethod
    def _is_joined(prev: FlightPlanSegment, nxt: FlightPlanSegment) -> bool:
        return nxt.segment_class.joins_previous and prev.segment_class.order == nxt.segment_class.order - 1

    def insert_necessary_discontinuities(self) -> None:
        """Place exactly one discontinuity at every unstrung boundary.

        Running the pass again without edits in between changes nothing.
        Discontinuities never start or end the plan.
        """
        populated = [segment for segment in self.segments if segment.all_legs]
        live_boundaries: set[BoundaryKey] = set()

        for prev, nxt in zip(populated, populated[1:]):
            if not prev.all_legs or not nxt.all_legs:
                continue

            key = (prev.segment_class, nxt.segment_class)
            live_boundaries.add(key)
            prev_tail = prev.all_legs[-1]
            next_head = nxt.all_legs[0]

            if self._is_joined(prev, nxt) or self._is_recorded_strung(key, prev_tail, next_head):
                continue

            if prev_tail.is_discontinuity and next_head.is_discontinuity:
                del nxt.all_legs[0]
            elif not prev_tail.is_discontinuity and not next_head.is_discontinuity:
                prev.all_legs.append(Discontinuity())
                logger.debug(
                    "Discontinuity between %s and %s", prev.segment_class.label, nxt.segment_class.label
                )

        for key in list(self._strung_boundaries):
            if key not in live_boundaries:
                del self._strung_boundaries[key]

        self._collapse_discontinuity_runs()
        self._trim_plan_edges()

    def _collapse_discontinuity_runs(self) -> None:
        # Keeps the first discontinuity of a run, inside a segment or across one.
        previous_is_discontinuity = False
        for segment in self.segments:
            legs = segment.all_legs
            index = 0
            while index < len(legs):
                if legs[index].is_discontinuity and previous_is_discontinuity:
                    del legs[index]
                    continue
                previous_is_discontinuity = legs[index].is_discontinuity
                index += 1

    def _trim_plan_edges(self) -> None:
        for segment in self.segments:
            while segment.all_legs and segment.all_legs[0].is_discontinuity:
                del segment.all_legs[0]
            if segment.all_legs:
                break

        for segment in reversed(self.segments):
            while segment.all_legs and segment.all_legs[-1].is_discontinuity:
                segment.all_legs.pop()
            if segment.all_legs:
                break

    def restring(self, first: FlightPlanSegment, last: FlightPlanSegment | None = None) -> None:
        """Re-string the segments from ``first`` to ``last`` with their neighbors.

        Strings from the populated segment before ``first`` through the
        populated segment after ``last``, then runs the discontinuity pass.
        """
        last = last or first
        start = self.previous_segment(first) or first
        end = self.next_segment(last) or last

        self.string_segments_forwards(start, end)
        self.insert_necessary_discontinuities()

    def insert_leg_after(self, index: int, leg: NavigationLeg) -> None:
        """Insert a manually entered leg after the element at ``index``.

        The leg goes into the enroute segment: either inside it, or at its
        start when ``index`` is the end of the segment right before it.

        Raises:
            IndexError: If ``index`` is outside the plan
            SegmentNotEditableError: If ``index`` lies inside a procedure
        """
        segment, local_index = self.element_at(index)
        enroute = self.enroute_segment

        if segment is enroute:
            enroute.insert_leg(local_index + 1, leg)
        elif segment is self.previous_segment(enroute) and self._is_segment_end(segment, local_index):
            enroute.insert_leg(0, leg)
        else:
            raise SegmentNotEditableError(
                f"Cannot insert after element {index}: it belongs to the {segment.segment_class.label} segment"
            )

        self._notify_changed("insert_leg_after")

    @staticmethod
    def _is_segment_end(segment: FlightPlanSegment, local_index: int) -> bool:
        """True for the last leg of a segment or the discontinuity after it."""
        legs = segment.all_legs
        if local_index == len(legs) - 1:
            return True
        return local_index == len(legs) - 2 and legs[-1].is_discontinuity

    def delete_range(self, from_index: int, to_index: int) -> None:
        """Delete plan elements ``from_index`` (inclusive) to ``to_index`` (exclusive).

        Only legs of range editable segments are removed; elements belonging
        to procedures stay in place.

        Raises:
            IndexError: If the range is outside the plan
        """
        if not 0 <= from_index <= to_index <= len(self.all_legs):
            raise IndexError(f"Flight plan range {from_index}:{to_index} out of range")

        pieces: list[tuple[FlightPlanSegment, int, int]] = []
        offset = 0
        for segment in self.segments:
            count = len(segment.all_legs)
            low = max(from_index - offset, 0)
            high = min(to_index - offset, count)
            if low < high:
                pieces.append((segment, low, high))
            offset += count

        for segment, low, high in reversed(pieces):
            segment.remove_range(low, high)

        self._notify_changed("delete_range")

    def remove_element_at(self, index: int) -> None:
        """Delete the single element at ``index``."""
        self.delete_range(index, index + 1)

    async def set_origin(self, ident: str) -> None:
        await self.origin_segment.set_origin_airport(ident)
        self._notify_changed("set_origin")

    async def set_origin_runway(self, ident: str) -> None:
        await self.origin_segment.set_origin_runway(ident)
        self._notify_changed("set_origin_runway")

    async def set_departure(self, ident: str | None, transition_ident: str | None = None) -> None:
        await self.departure_segment.set_departure_procedure(ident, transition_ident)
        self._notify_changed("set_departure")

    async def set_destination(self, ident: str) -> None:
        await self.destination_segment.set_destination_airport(ident)
        self._notify_changed("set_destination")

    async def set_destination_runway(self, ident: str) -> None:
        await self.destination_segment.set_destination_runway(ident)
        self._notify_changed("set_destination_runway")

    async def set_arrival(self, ident: str | None, transition_ident: str | None = None) -> None:
        await self.arrival_segment.set_arrival_procedure(ident, transition_ident)
        self._notify_changed("set_arrival")

    async def set_approach(self, ident: str | None) -> None:
        await self.approach_segment.set_approach_procedure(ident)
        self._notify_changed("set_approach")

    def set_approach_via(self, ident: str | None) -> None:
        self.approach_via_segment.set_approach_via(ident)
        self._notify_changed("set_approach_via")

    def _notify_changed(self, operation: str) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(FlightPlanChangedEvent(operation=operation, leg_count=len(self.all_legs)))

    def clone(self) -> "FlightPlan":
        """Create an independent copy for previewing edits.

        The copy has its own segments and leg lists and no event bus, so
        edits to it are never published.
        """
        new_plan = FlightPlan(self.nav_db, self.settings)

        for name, segment in zip(_SEGMENT_ATTRIBUTES, self.segments):
            setattr(new_plan, name, segment.clone(new_plan))

        new_plan._available_approach_vias = self._available_approach_vias
        new_plan._strung_boundaries = dict(self._strung_boundaries)

        logger.debug("Cloned %r", self)
        return new_plan
