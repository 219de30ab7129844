"""
Match model for the Referee Sideline Assistant.

This module contains the MatchData dataclass which represents the complete
state of a refereed match: phase, score, cards and the event log, together
with the JSON conversion used for persistence and match history.
"""
import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .event_log import EventLog
from .ledger import Cards, Score, Team


class MatchStatus(Enum):
    """Phase of the match. Exactly one value at a time."""
    PRE_MATCH = "pre-match"
    IN_PROGRESS = "in-progress"
    HALF_TIME = "half-time"
    EXTRA_TIME = "extra-time"
    FULL_TIME = "full-time"


@dataclass
class MatchData:
    """
    Represents the complete state of a match.

    Attributes:
        status: Current match phase
        kickoff_team: Team that kicked off, set once at match start
        current_half: Active half number (1-based, up to 4 with extended halves)
        score: Goals per team
        cards: Yellow/red cards per team
        event_log: Append-only log of match events
        extra_half_duration: Length of extended halves 3 and 4 once accepted
        final_score: Score at archive time (history entries only)
        completed_at: Archive time in epoch seconds (history entries only)
    """
    status: MatchStatus = MatchStatus.PRE_MATCH
    kickoff_team: Optional[Team] = None
    current_half: int = 1
    score: Score = field(default_factory=Score)
    cards: Cards = field(default_factory=Cards)
    event_log: EventLog = field(default_factory=EventLog)
    extra_half_duration: Optional[int] = None
    final_score: Optional[Score] = None
    completed_at: Optional[float] = None

    @property
    def is_archived(self) -> bool:
        return self.completed_at is not None

    def archived_copy(self, completed_at: float) -> "MatchData":
        """
        Return an independent copy marked as finished.

        Args:
            completed_at: Epoch seconds when the match was archived

        Returns:
            Deep copy with ``final_score`` and ``completed_at`` set
        """
        finished = copy.deepcopy(self)
        finished.final_score = copy.deepcopy(self.score)
        finished.completed_at = completed_at
        return finished

    def to_json(self) -> dict:
        """
        Convert MatchData to JSON-serializable dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data: Dict[str, Any] = {
            "status": self.status.value,
            "kickoff_team": self.kickoff_team.value if self.kickoff_team else None,
            "current_half": self.current_half,
            "score": self.score.to_json(),
            "cards": self.cards.to_json(),
            "event_log": self.event_log.to_json(),
        }
        if self.extra_half_duration is not None:
            data["extra_half_duration"] = self.extra_half_duration
        if self.final_score is not None:
            data["final_score"] = self.final_score.to_json()
        if self.completed_at is not None:
            data["completed_at"] = self.completed_at
        return data

    @staticmethod
    def from_json(data: dict) -> "MatchData":
        """
        Create MatchData from JSON dictionary.

        Args:
            data: Dictionary with match data

        Returns:
            New MatchData instance

        Raises:
            ValueError: If status, team or event values are not recognised
        """
        match = MatchData()
        match.status = MatchStatus(data.get("status", MatchStatus.PRE_MATCH.value))
        kickoff = data.get("kickoff_team")
        match.kickoff_team = Team(kickoff) if kickoff else None
        match.current_half = max(1, int(data.get("current_half", 1)))
        match.score = Score.from_json(data.get("score"))
        match.cards = Cards.from_json(data.get("cards"))
        match.event_log = EventLog.from_json(data.get("event_log"))
        if data.get("extra_half_duration") is not None:
            match.extra_half_duration = int(data["extra_half_duration"])
        if data.get("final_score") is not None:
            match.final_score = Score.from_json(data["final_score"])
        if data.get("completed_at") is not None:
            match.completed_at = float(data["completed_at"])
        return match

    def is_consistent(self) -> bool:
        """Check the pre-match invariant linking status, kickoff, half and log."""
        pre_match = self.status is MatchStatus.PRE_MATCH
        no_kickoff = self.kickoff_team is None
        untouched = self.current_half == 1 and len(self.event_log) == 0
        return pre_match == no_kickoff == untouched
