"""Events published by a flight plan on its event bus."""

from dataclasses import dataclass

from fmsplan.core.event_bus import Event


@dataclass
class ApproachViasChangedEvent(Event):
    """The set of approach vias offered for the selected approach changed.

    Attributes:
        approach_ident: Selected approach, None when the approach was cleared
        via_idents: Identifiers of the vias now available
    """

    approach_ident: str | None
    via_idents: tuple[str, ...]


@dataclass
class FlightPlanChangedEvent(Event):
    """A plan mutation finished and the leg sequence may have changed.

    Attributes:
        operation: Name of the operation that completed
        leg_count: Number of elements in the plan afterwards
    """

    operation: str
    leg_count: int
