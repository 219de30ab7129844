"""
Service Factory for dependency injection.

This module builds properly configured service instances with their
collaborators (store, tick driver, haptics, rules answerer) injected.
"""
from typing import Optional

from .haptics import Haptics
from .match_engine import MatchEngine
from .persistence_service import InMemoryStore, KeyValueStore, PersistenceService
from .report_service import MatchReportExporter, ReportService
from .rules_service import Answerer, RulesAssistant
from .tick_driver import TickDriver


class ServiceFactory:
    """
    Factory for creating service instances with dependency injection.

    The persistence service and report exporter are created once and shared.
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        """Initialize factory with the key-value store to persist into."""
        self.store = store if store is not None else InMemoryStore()
        self._persistence_service: Optional[PersistenceService] = None
        self._export_service: Optional[MatchReportExporter] = None
        self._remote_answerer: Optional[Answerer] = None

    def create_match_engine(
        self,
        driver: Optional[TickDriver] = None,
        haptics: Optional[Haptics] = None,
    ) -> MatchEngine:
        """
        Create a MatchEngine restored from the store.

        Args:
            driver: Tick driver feeding the clock (manual driver if omitted)
            haptics: Vibration collaborator (no-op if omitted)

        Returns:
            Engine holding the stored settings, current match and history
        """
        persistence = self.get_persistence_service()
        return MatchEngine(
            settings=persistence.load_settings(),
            match=persistence.load_match(),
            history=persistence.load_history(),
            driver=driver,
            haptics=haptics,
        )

    def create_report_service(self) -> ReportService:
        return ReportService(export_service=self._get_export_service())

    def create_rules_assistant(self) -> RulesAssistant:
        return RulesAssistant(remote=self._remote_answerer)

    def create_complete_service_suite(
        self,
        driver: Optional[TickDriver] = None,
        haptics: Optional[Haptics] = None,
    ) -> dict:
        """
        Create a complete suite of services with proper dependencies.

        Returns:
            Dictionary containing all configured services
        """
        return {
            "engine": self.create_match_engine(driver=driver, haptics=haptics),
            "report": self.create_report_service(),
            "rules": self.create_rules_assistant(),
            "persistence": self.get_persistence_service(),
        }

    def get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(self.store)
        return self._persistence_service

    def _get_export_service(self) -> MatchReportExporter:
        """Get singleton export service."""
        if self._export_service is None:
            self._export_service = MatchReportExporter()
        return self._export_service

    def configure_remote_answerer(self, answerer: Optional[Answerer]) -> None:
        """Plug in a remote rules answerer for assistants created afterwards."""
        self._remote_answerer = answerer

    def configure_custom_export_service(self, exporter: MatchReportExporter) -> None:
        self._export_service = exporter
