"""
REFY Sideline Assistant

A referee's timekeeping and match-event tool for soccer: match phases,
countdown clock with stoppage time, true elapsed game time, score, cards,
an event log and a quick rules reference.

The match engine is a plain library; a Flask web interface sits on top.
"""
from .models import MatchData, MatchStatus, Settings, Team, CardKind, EventType
from .services import MatchEngine, PersistenceService, ManualTickDriver, ServiceFactory
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "1.0.0"
__author__ = "REFY Development Team"

__all__ = [
    "MatchData", "MatchStatus", "Settings", "Team", "CardKind", "EventType",
    "MatchEngine", "PersistenceService", "ManualTickDriver", "ServiceFactory",
    "fmt_mmss", "now_ts", "APP_TITLE"
]
