"""
Services package for the Referee Sideline Assistant.

This package contains the match clock, elapsed-time accounting, the match
phase state machine and the collaborators around them.
Includes a factory for dependency injection.
"""
from .tick_driver import TickDriver, ManualTickDriver, IntervalTickDriver
from .clock import Clock
from .elapsed import ElapsedAccumulator
from .duration_input import DurationValidationError, parse_duration
from .haptics import Haptics, NullHaptics, RecordingHaptics
from .match_engine import MatchEngine, PendingDecision
from .persistence_service import (
    KeyValueStore, InMemoryStore, JsonFileStore, PersistenceService
)
from .report_service import ReportService, MatchReportExporter
from .rules_service import RulesAssistant
from .service_factory import ServiceFactory

__all__ = [
    "TickDriver", "ManualTickDriver", "IntervalTickDriver", "Clock",
    "ElapsedAccumulator", "DurationValidationError", "parse_duration",
    "Haptics", "NullHaptics", "RecordingHaptics", "MatchEngine",
    "PendingDecision", "KeyValueStore", "InMemoryStore", "JsonFileStore",
    "PersistenceService", "ReportService", "MatchReportExporter",
    "RulesAssistant", "ServiceFactory"
]
