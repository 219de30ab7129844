"""Append-only match event log."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from .ledger import Team


class EventType(Enum):
    """Kinds of notable match occurrences."""
    KICKOFF = "Kickoff"
    HALF_START = "Half Started"
    HALF_END = "Half Ended"
    GOAL = "Goal"
    GOAL_REMOVED = "Goal Removed"
    YELLOW_CARD = "Yellow Card"
    RED_CARD = "Red Card"
    EXTRA_TIME = "Extra Time Added"


@dataclass(frozen=True)
class Event:
    """
    Immutable, timestamped record of something that happened in the match.

    Attributes:
        id: Creation-ordered identifier, unique within a match
        game_time_seconds: True elapsed match time when the event was created
        type: Kind of event
        half: Half the event belongs to
        team: Team involved, absent for half-boundary events
        details: Free-text annotation (player, description)
    """
    id: int
    game_time_seconds: int
    type: EventType
    half: int = 1
    team: Optional[Team] = None
    details: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "game_time_seconds": self.game_time_seconds,
            "type": self.type.value,
            "half": self.half,
            "team": self.team.value if self.team else None,
            "details": self.details,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Event:
        team = data.get("team")
        return cls(
            id=int(data["id"]),
            game_time_seconds=max(0, int(data.get("game_time_seconds", 0))),
            type=EventType(data["type"]),
            half=int(data.get("half", 1)),
            team=Team(team) if team else None,
            details=data.get("details"),
        )


class EventLog:
    """
    Ordered, append-only sequence of events.

    Storage order is append order. ``chronological()`` gives the reporting
    order, most recent first. Existing entries are never changed or removed.
    """

    def __init__(self, events: Optional[List[Event]] = None):
        self._events: List[Event] = list(events or [])

    def append(
        self,
        type: EventType,
        game_time_seconds: int,
        *,
        half: int,
        team: Optional[Team] = None,
        details: Optional[str] = None,
    ) -> Event:
        """Create the next event and add it to the end of the log."""
        if game_time_seconds < 0:
            raise ValueError("Event game time cannot be negative")
        event = Event(
            id=self._next_id(),
            game_time_seconds=int(game_time_seconds),
            type=type,
            half=half,
            team=team,
            details=details,
        )
        self._events.append(event)
        return event

    def _next_id(self) -> int:
        return self._events[-1].id + 1 if self._events else 1

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index: int) -> Event:
        return self._events[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self._events == other._events

    @property
    def events(self) -> List[Event]:
        """Copy of the events in append order."""
        return list(self._events)

    def chronological(self) -> List[Event]:
        """Events for display, most recent first."""
        return list(reversed(self._events))

    def of_type(self, *types: EventType) -> List[Event]:
        return [event for event in self._events if event.type in types]

    def has_half_started(self, half: int) -> bool:
        return any(
            event.type is EventType.HALF_START and event.half == half
            for event in self._events
        )

    def half_started_at(self, half: int) -> Optional[int]:
        """Game time of the latest ``Half Started`` event for ``half``, if any."""
        for event in reversed(self._events):
            if event.type is EventType.HALF_START and event.half == half:
                return event.game_time_seconds
        return None

    def last_game_time(self) -> int:
        """Largest game time stamped so far (0 for an empty log)."""
        return max((event.game_time_seconds for event in self._events), default=0)

    def to_json(self) -> List[Dict[str, Any]]:
        return [event.to_json() for event in self._events]

    @classmethod
    def from_json(cls, data: Optional[List[Dict[str, Any]]]) -> EventLog:
        return cls([Event.from_json(item) for item in data or []])
