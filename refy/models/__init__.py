"""
Models package for the Referee Sideline Assistant.

This package contains the core data models used throughout the application.
"""
from .ledger import Team, CardKind, Score, TeamCards, Cards, ledger_from_events
from .event_log import Event, EventType, EventLog
from .match import MatchData, MatchStatus
from .settings import Settings
from .report import MatchReport, ReportLine
from .rules import Rule, RULES_CONTENT

__all__ = [
    "Team", "CardKind", "Score", "TeamCards", "Cards", "ledger_from_events",
    "Event", "EventType", "EventLog", "MatchData", "MatchStatus", "Settings",
    "MatchReport", "ReportLine", "Rule", "RULES_CONTENT"
]
