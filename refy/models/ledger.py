"""
Score and card counters for the Referee Sideline Assistant.

The counters are plain dataclasses. Only the match engine mutates them, and
every mutation is paired with an event so the ledger can always be rebuilt
by replaying the event log (see ``ledger_from_events``).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from .event_log import Event


class Team(Enum):
    """Sides of the match."""
    HOME = "home"
    AWAY = "away"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class CardKind(Enum):
    """Disciplinary card colours."""
    YELLOW = "yellow"
    RED = "red"


@dataclass
class Score:
    """Goals per team, never negative."""
    home: int = 0
    away: int = 0

    def get(self, team: Team) -> int:
        return getattr(self, team.value)

    def add_goal(self, team: Team) -> int:
        value = self.get(team) + 1
        setattr(self, team.value, value)
        return value

    def remove_goal(self, team: Team) -> int:
        """Decrement the team's goals, flooring at zero."""
        value = max(0, self.get(team) - 1)
        setattr(self, team.value, value)
        return value

    def to_json(self) -> Dict[str, int]:
        return {"home": self.home, "away": self.away}

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "Score":
        data = data or {}
        return cls(
            home=max(0, int(data.get("home", 0))),
            away=max(0, int(data.get("away", 0))),
        )


@dataclass
class TeamCards:
    """Yellow and red cards shown to one team."""
    yellow: int = 0
    red: int = 0

    def get(self, kind: CardKind) -> int:
        return getattr(self, kind.value)

    def add(self, kind: CardKind) -> int:
        value = self.get(kind) + 1
        setattr(self, kind.value, value)
        return value

    def to_json(self) -> Dict[str, int]:
        return {"yellow": self.yellow, "red": self.red}

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "TeamCards":
        data = data or {}
        return cls(
            yellow=max(0, int(data.get("yellow", 0))),
            red=max(0, int(data.get("red", 0))),
        )


@dataclass
class Cards:
    """Cards for both teams."""
    home: TeamCards = field(default_factory=TeamCards)
    away: TeamCards = field(default_factory=TeamCards)

    def for_team(self, team: Team) -> TeamCards:
        return getattr(self, team.value)

    def to_json(self) -> Dict[str, Dict[str, int]]:
        return {"home": self.home.to_json(), "away": self.away.to_json()}

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "Cards":
        data = data or {}
        return cls(
            home=TeamCards.from_json(data.get("home")),
            away=TeamCards.from_json(data.get("away")),
        )


def ledger_from_events(events: Iterable["Event"]) -> Tuple[Score, Cards]:
    """
    Rebuild score and cards by replaying events in append order.

    Args:
        events: Events in storage (append) order

    Returns:
        Tuple of (Score, Cards) equal to what the engine maintained live
    """
    from .event_log import EventType

    score = Score()
    cards = Cards()
    for event in events:
        if event.team is None:
            continue
        if event.type is EventType.GOAL:
            score.add_goal(event.team)
        elif event.type is EventType.GOAL_REMOVED:
            score.remove_goal(event.team)
        elif event.type is EventType.YELLOW_CARD:
            cards.for_team(event.team).add(CardKind.YELLOW)
        elif event.type is EventType.RED_CARD:
            cards.for_team(event.team).add(CardKind.RED)
    return score, cards
