"""Tests for the flight plan: stringing, discontinuities, editing and cloning."""

import asyncio

import pytest

from fmsplan.core.event_bus import EventBus
from fmsplan.flightplan import (
    AirportNotFoundError,
    Discontinuity,
    FlightPlan,
    FlightPlanChangedEvent,
    FlightPlanError,
    FlightPlanSettings,
    MissingDestinationError,
    MissingOriginError,
    NavigationLeg,
    ProcedureNotFoundError,
    RunwayNotFoundError,
    SegmentNotEditableError,
)
from fmsplan.navigation import InMemoryNavigationDatabase, PathTerminator

DEPARTURE = ["RW28L", "520", "SEPDY", "OFFSH"]
APPROACH = ["HUNDA", "FUELR", "RW24R", "1000", "SMO", "SMO"]


def idents(plan: FlightPlan) -> list[str]:
    """Plan elements as identifiers, discontinuities as "DISC"."""
    return ["DISC" if e.is_discontinuity else e.identifier for e in plan.all_legs]


def manual(ident: str) -> NavigationLeg:
    """Manually entered track-to-fix leg."""
    return NavigationLeg(ident, PathTerminator.TF)


def assert_discontinuities_well_placed(plan: FlightPlan) -> None:
    """No discontinuity starts or ends the plan, and none are adjacent."""
    elements = plan.all_legs
    if not elements:
        return

    assert not elements[0].is_discontinuity
    assert not elements[-1].is_discontinuity
    for a, b in zip(elements, elements[1:]):
        assert not (a.is_discontinuity and b.is_discontinuity)


@pytest.fixture
def full_plan(plan: FlightPlan) -> FlightPlan:
    """KSFO runway 28L OFFSH9 departure to KLAX runway 24R ILS."""
    asyncio.run(plan.set_origin("KSFO"))
    asyncio.run(plan.set_origin_runway("RW28L"))
    asyncio.run(plan.set_departure("OFFSH9"))
    asyncio.run(plan.set_destination("KLAX"))
    asyncio.run(plan.set_destination_runway("RW24R"))
    asyncio.run(plan.set_approach("I24R"))
    return plan


class TestFlightPlanBasics:
    """Tests for plan structure and lookups."""

    def test_empty_plan(self, plan: FlightPlan) -> None:
        """Test that a new plan has no legs and no selections."""
        assert plan.all_legs == []
        assert plan.origin_airport is None
        assert plan.destination_airport is None
        assert plan.available_approach_vias == ()
        assert plan.settings == FlightPlanSettings()

    def test_full_plan(self, full_plan: FlightPlan) -> None:
        """Test the legs of a complete plan."""
        assert idents(full_plan) == [*DEPARTURE, "DISC", *APPROACH]
        assert_discontinuities_well_placed(full_plan)

    def test_element_at(self, full_plan: FlightPlan) -> None:
        """Test locating elements by plan index."""
        segment, local_index = full_plan.element_at(5)

        assert segment is full_plan.approach_segment
        assert local_index == 0

        with pytest.raises(IndexError):
            full_plan.element_at(len(full_plan.all_legs))
        with pytest.raises(IndexError):
            full_plan.element_at(-1)

    def test_neighbor_segments_skip_empty(self, full_plan: FlightPlan) -> None:
        """Test that neighbor lookups skip unpopulated segments."""
        assert full_plan.next_segment(full_plan.departure_segment) is full_plan.approach_segment
        assert full_plan.previous_segment(full_plan.approach_segment) is full_plan.departure_segment
        assert full_plan.previous_segment(full_plan.origin_segment) is None
        assert full_plan.next_segment(full_plan.missed_approach_segment) is None

    def test_settings_used_for_synthesized_legs(self, nav_db: InMemoryNavigationDatabase) -> None:
        """Test that the centerline distance comes from the settings."""
        plan = FlightPlan(nav_db, FlightPlanSettings(centerline_distance_nm=8.0))

        asyncio.run(plan.set_destination("KLAX"))
        asyncio.run(plan.set_destination_runway("RW24R"))

        assert plan.approach_segment.first_element.distance == 8.0

    def test_errors_share_base_class(self) -> None:
        """Test that editing errors derive from FlightPlanError."""
        for error in (
            AirportNotFoundError,
            MissingDestinationError,
            MissingOriginError,
            ProcedureNotFoundError,
            RunwayNotFoundError,
            SegmentNotEditableError,
        ):
            assert issubclass(error, FlightPlanError)


class TestSegmentStringing:
    """Tests for stringing adjacent segments."""

    def test_equal_boundary_legs_collapse(self, plan: FlightPlan) -> None:
        """Test that the later copy of a shared boundary leg is removed."""
        plan.enroute_segment.set_legs([manual("AAA"), manual("BBB")])
        plan.arrival_segment.set_legs([manual("BBB"), manual("CCC")])

        plan.string_segments_forwards(plan.enroute_segment, plan.arrival_segment)

        assert idents(plan) == ["AAA", "BBB", "CCC"]
        assert plan.enroute_segment.strung
        assert plan.arrival_segment.strung

    def test_collapse_happens_once(self, plan: FlightPlan) -> None:
        """Test that stringing a strung boundary again removes nothing."""
        plan.enroute_segment.set_legs([manual("AAA"), manual("BBB")])
        plan.arrival_segment.set_legs([manual("BBB"), manual("BBB"), manual("CCC")])

        plan.restring(plan.arrival_segment)
        plan.restring(plan.arrival_segment)
        plan.restring(plan.enroute_segment)

        assert idents(plan) == ["AAA", "BBB", "BBB", "CCC"]

    def test_unequal_boundary_gets_one_discontinuity(self, plan: FlightPlan) -> None:
        """Test that an unstrung boundary gets exactly one discontinuity."""
        plan.enroute_segment.set_legs([manual("AAA"), manual("BBB")])
        plan.arrival_segment.set_legs([manual("XXX")])

        plan.restring(plan.arrival_segment)

        assert idents(plan) == ["AAA", "BBB", "DISC", "XXX"]
        assert not plan.enroute_segment.strung
        assert not plan.arrival_segment.strung

    def test_discontinuity_pass_is_idempotent(self, full_plan: FlightPlan) -> None:
        """Test that repeating the pass without edits changes nothing."""
        full_plan.enroute_segment.append_leg(manual("SXC"))
        before = list(full_plan.all_legs)

        full_plan.insert_necessary_discontinuities()
        full_plan.insert_necessary_discontinuities()

        assert full_plan.all_legs == before

    def test_boundary_discontinuity_dropped_when_legs_match(self, plan: FlightPlan) -> None:
        """Test that a boundary that becomes continuous loses its discontinuity."""
        plan.enroute_segment.set_legs([manual("AAA"), manual("BBB")])
        plan.arrival_segment.set_legs([manual("XXX")])
        plan.restring(plan.arrival_segment)

        plan.arrival_segment.set_legs([manual("BBB"), manual("YYY")])
        plan.restring(plan.arrival_segment)

        assert idents(plan) == ["AAA", "BBB", "YYY"]
        assert plan.enroute_segment.strung

    def test_duplicate_discontinuity_removed(self, plan: FlightPlan) -> None:
        """Test that two discontinuities at one boundary become one."""
        plan.enroute_segment.set_legs([manual("AAA"), Discontinuity()])
        plan.arrival_segment.set_legs([Discontinuity(), manual("XXX")])

        plan.insert_necessary_discontinuities()

        assert idents(plan) == ["AAA", "DISC", "XXX"]

    def test_plan_edges_never_discontinuities(self, plan: FlightPlan) -> None:
        """Test that discontinuities are trimmed from both ends of the plan."""
        plan.enroute_segment.set_legs([Discontinuity(), manual("AAA"), Discontinuity()])

        plan.insert_necessary_discontinuities()

        assert idents(plan) == ["AAA"]

    def test_empty_segments_skipped(self, plan: FlightPlan) -> None:
        """Test that stringing looks across unpopulated segments."""
        plan.departure_segment.set_legs([manual("AAA"), manual("BBB")])
        plan.approach_segment.set_legs([manual("BBB"), manual("CCC")])

        plan.string_segments_forwards(plan.origin_segment, plan.destination_segment)

        assert idents(plan) == ["AAA", "BBB", "CCC"]

    def test_string_with_missing_bound(self, plan: FlightPlan) -> None:
        """Test that stringing without both bounds does nothing."""
        plan.enroute_segment.set_legs([manual("AAA")])
        plan.arrival_segment.set_legs([manual("AAA")])

        plan.string_segments_forwards(None, plan.arrival_segment)
        plan.string_segments_forwards(plan.enroute_segment, None)

        assert idents(plan) == ["AAA", "AAA"]

    def test_procedure_legs_do_not_string_onto_manual_legs(self, full_plan: FlightPlan) -> None:
        """Test that a manual leg to a procedure fix is still a different leg."""
        asyncio.run(full_plan.set_approach(None))
        asyncio.run(full_plan.set_arrival("SADDE6"))

        full_plan.insert_leg_after(3, manual("SADDE"))

        assert idents(full_plan) == [
            *DEPARTURE, "DISC", "SADDE", "DISC", "SADDE", "BAYST", "HUNDA", "DISC", "CF24R", "RW24R"
        ]
        assert_discontinuities_well_placed(full_plan)


class TestLegEditing:
    """Tests for inserting and deleting plan elements."""

    def test_insert_inside_enroute(self, plan: FlightPlan) -> None:
        """Test inserting after an enroute leg."""
        plan.enroute_segment.append_leg(manual("AAA"))
        plan.enroute_segment.append_leg(manual("CCC"))

        plan.insert_leg_after(0, manual("BBB"))

        assert idents(plan) == ["AAA", "BBB", "CCC"]

    def test_insert_after_departure(self, full_plan: FlightPlan) -> None:
        """Test that inserting after the last departure leg starts the enroute segment."""
        full_plan.insert_leg_after(3, manual("SXC"))

        assert idents(full_plan) == [*DEPARTURE, "DISC", "SXC", "DISC", *APPROACH]
        assert full_plan.enroute_segment.all_legs[0].identifier == "SXC"
        assert_discontinuities_well_placed(full_plan)

    def test_insert_after_departure_discontinuity(self, full_plan: FlightPlan) -> None:
        """Test that the discontinuity ending the departure also counts as its end."""
        full_plan.insert_leg_after(4, manual("SXC"))

        assert idents(full_plan) == [*DEPARTURE, "DISC", "SXC", "DISC", *APPROACH]

    def test_insert_inside_procedure_rejected(self, full_plan: FlightPlan) -> None:
        """Test that procedure segments cannot be edited leg by leg."""
        before = list(full_plan.all_legs)

        with pytest.raises(SegmentNotEditableError):
            full_plan.insert_leg_after(1, manual("SXC"))
        with pytest.raises(SegmentNotEditableError):
            full_plan.insert_leg_after(6, manual("SXC"))

        assert full_plan.all_legs == before

    def test_insert_out_of_range(self, full_plan: FlightPlan) -> None:
        """Test inserting after a position outside the plan."""
        with pytest.raises(IndexError):
            full_plan.insert_leg_after(99, manual("SXC"))

    def test_remove_enroute_leg(self, full_plan: FlightPlan) -> None:
        """Test that removing the only enroute leg leaves one discontinuity."""
        full_plan.insert_leg_after(3, manual("SXC"))

        full_plan.remove_element_at(5)

        assert idents(full_plan) == [*DEPARTURE, "DISC", *APPROACH]
        assert full_plan.enroute_segment.is_empty

    def test_remove_leg_between_discontinuities(self, plan: FlightPlan) -> None:
        """Test that removing a leg between two discontinuities leaves only one."""
        asyncio.run(plan.set_destination("KLAX"))
        asyncio.run(plan.set_origin("KSFO"))
        plan.insert_leg_after(1, manual("AAA"))
        plan.insert_leg_after(3, manual("SXC"))
        assert idents(plan) == ["KSFO", "DISC", "AAA", "DISC", "SXC", "DISC", "KLAX"]

        plan.remove_element_at(4)

        assert idents(plan) == ["KSFO", "DISC", "AAA", "DISC", "KLAX"]
        assert_discontinuities_well_placed(plan)

        plan.insert_necessary_discontinuities()
        assert idents(plan) == ["KSFO", "DISC", "AAA", "DISC", "KLAX"]

    def test_delete_range_keeps_procedure_legs(self, full_plan: FlightPlan) -> None:
        """Test that a range spanning a procedure only removes enroute legs."""
        full_plan.insert_leg_after(3, manual("SXC"))

        full_plan.delete_range(2, 7)

        assert idents(full_plan) == [*DEPARTURE, "DISC", *APPROACH]

    def test_delete_range_out_of_range(self, full_plan: FlightPlan) -> None:
        """Test invalid ranges."""
        with pytest.raises(IndexError):
            full_plan.delete_range(3, 99)
        with pytest.raises(IndexError):
            full_plan.delete_range(4, 2)


class TestClone:
    """Tests for cloning a plan."""

    def test_clone_has_same_legs(self, full_plan: FlightPlan) -> None:
        """Test that a clone starts equal to the original."""
        clone = full_plan.clone()

        assert clone.all_legs == full_plan.all_legs
        assert clone.approach_segment.approach_procedure is full_plan.approach_segment.approach_procedure
        assert clone.destination_runway is full_plan.destination_runway
        assert clone.available_approach_vias == full_plan.available_approach_vias
        assert clone.event_bus is None

    def test_clone_segments_belong_to_clone(self, full_plan: FlightPlan) -> None:
        """Test that cloned segments report to the clone."""
        clone = full_plan.clone()

        assert all(segment.flight_plan is clone for segment in clone.segments)
        assert all(a is not b for a, b in zip(clone.segments, full_plan.segments))

    def test_editing_clone_leaves_original(self, full_plan: FlightPlan) -> None:
        """Test that the original does not see edits made to the clone."""
        full_plan.insert_leg_after(3, manual("SXC"))
        original = idents(full_plan)
        clone = full_plan.clone()

        clone.remove_element_at(5)
        asyncio.run(clone.set_approach("V24R"))

        assert idents(full_plan) == original
        assert full_plan.approach_segment.approach_procedure.ident == "I24R"
        assert idents(clone) == [*DEPARTURE, "DISC", "CF24R", "RW24R"]

    def test_editing_original_leaves_clone(self, full_plan: FlightPlan) -> None:
        """Test that the clone does not see edits made to the original."""
        clone = full_plan.clone()

        full_plan.set_approach_via("SADDE")

        assert idents(clone) == [*DEPARTURE, "DISC", *APPROACH]
        assert clone.approach_via_segment.approach_via is None


class TestPlanEvents:
    """Tests for plan change notifications."""

    def test_operations_publish_changes(self, plan: FlightPlan, event_bus: EventBus) -> None:
        """Test that each completed operation publishes the resulting leg count."""
        received: list[FlightPlanChangedEvent] = []
        event_bus.subscribe(FlightPlanChangedEvent, received.append)

        asyncio.run(plan.set_destination("KLAX"))
        asyncio.run(plan.set_destination_runway("RW24R"))
        asyncio.run(plan.set_approach("I24R"))

        assert [(e.operation, e.leg_count) for e in received] == [
            ("set_destination", 1),
            ("set_destination_runway", 2),
            ("set_approach", 6),
        ]

    def test_failed_operation_publishes_nothing(self, plan: FlightPlan, event_bus: EventBus) -> None:
        """Test that failures are not announced as changes."""
        received: list[FlightPlanChangedEvent] = []
        event_bus.subscribe(FlightPlanChangedEvent, received.append)

        with pytest.raises(AirportNotFoundError):
            asyncio.run(plan.set_destination("ZZZZ"))
        with pytest.raises(MissingDestinationError):
            asyncio.run(plan.set_approach("I24R"))

        assert received == []

    def test_clone_publishes_nothing(self, full_plan: FlightPlan, event_bus: EventBus) -> None:
        """Test that edits to a clone stay private."""
        received: list[FlightPlanChangedEvent] = []
        event_bus.subscribe(FlightPlanChangedEvent, received.append)

        full_plan.clone().set_approach_via("SADDE")

        assert received == []
