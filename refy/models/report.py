"""Dataclasses representing match reports for the sideline assistant."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ReportLine:
    """One event rendered for the match report."""

    event_id: int
    minute: str
    game_time_seconds: int
    half: int
    type: str
    team: Optional[str]
    details: Optional[str]
    text: str


@dataclass
class MatchReport:
    """Snapshot of a match for the report view and CSV export."""

    generated_ts: float
    status: str
    current_half: int
    kickoff_team: Optional[str]
    score: Dict[str, int]
    cards: Dict[str, Dict[str, int]]
    lines: List[ReportLine] = field(default_factory=list)
    card_events: Dict[str, Dict[str, List[ReportLine]]] = field(default_factory=dict)
    stoppage_by_half: Dict[int, int] = field(default_factory=dict)
    final_score: Optional[Dict[str, int]] = None
    completed_at: Optional[float] = None
