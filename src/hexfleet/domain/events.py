"""Event queue the rules engine appends to and hosts drain."""

from __future__ import annotations

from dataclasses import dataclass, field

from hexfleet.domain.enums import EventKind


@dataclass(slots=True, frozen=True)
class GameEvent:
    """Single entry of the session event log."""

    sequence: int
    kind: EventKind
    turn: int
    description: str
    details: dict[str, object] = field(default_factory=dict)


@dataclass(slots=True)
class EventLog:
    """Append-only queue of events awaiting the presentation layer."""

    pending: list[GameEvent] = field(default_factory=list)
    next_sequence: int = 1

    def emit(
        self,
        kind: EventKind,
        turn: int,
        description: str,
        **details: object,
    ) -> GameEvent:
        event = GameEvent(
            sequence=self.next_sequence,
            kind=kind,
            turn=turn,
            description=description,
            details=dict(details),
        )
        self.next_sequence += 1
        self.pending.append(event)
        return event

    def drain(self) -> list[GameEvent]:
        """Return and clear every pending event, oldest first."""

        drained = self.pending
        self.pending = []
        return drained

    def __len__(self) -> int:
        return len(self.pending)
