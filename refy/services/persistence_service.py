"""
Persistence service for the Referee Sideline Assistant.

This module stores the current match, the match history and the settings in
a key-value store. Two stores are provided: an in-memory one and a JSON file
holding every key in a single document.
"""
import json
import logging
import os
from typing import Any, Dict, List, Optional, Protocol

from ..models import MatchData, Settings
from ..utils.constants import CURRENT_MATCH_KEY, MATCH_HISTORY_KEY, SETTINGS_KEY

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Key to JSON-serializable value store."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class InMemoryStore:
    """Dictionary-backed store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        # Round-trip through JSON so stored values never alias live objects
        self._data[key] = json.loads(json.dumps(value))


class JsonFileStore:
    """
    Store every key in one JSON file.

    The file is re-read on each ``get`` and rewritten on each ``set``, so
    separate processes always see the latest saved values.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value

        # Ensure directory exists
        directory = os.path.dirname(self.file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        tmp_path = f"{self.file_path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.file_path)
        except (TypeError, ValueError, OSError):
            logger.error("Could not write key '%s' to store '%s'", key, self.file_path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            logger.warning(
                "Could not read store '%s'; starting from an empty document",
                self.file_path, exc_info=True,
            )
            return {}
        if not isinstance(data, dict):
            logger.warning("Store '%s' is not a JSON object; ignoring it", self.file_path)
            return {}
        return data


class PersistenceService:
    """
    Saves and loads the current match, history and settings.

    Loading never raises for bad stored data: unreadable payloads fall back to
    defaults and are logged as warnings.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load_match(self) -> MatchData:
        """
        Load the current match.

        Returns:
            Stored match, or a fresh pre-match instance if none/invalid
        """
        data = self.store.get(CURRENT_MATCH_KEY)
        if not data:
            return MatchData()
        try:
            match = MatchData.from_json(data)
        except (KeyError, TypeError, ValueError):
            logger.warning("Stored match is invalid; starting a new one", exc_info=True)
            return MatchData()
        if not match.is_consistent():
            logger.warning("Stored match breaks the pre-match invariant; starting a new one")
            return MatchData()
        return match

    def save_match(self, match: MatchData) -> None:
        self.store.set(CURRENT_MATCH_KEY, match.to_json())

    def load_history(self) -> List[MatchData]:
        """Load archived matches, most recent first, skipping unreadable entries."""
        history: List[MatchData] = []
        raw = self.store.get(MATCH_HISTORY_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Stored history is not a list; ignoring it")
            return history
        for item in raw:
            try:
                history.append(MatchData.from_json(item))
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping unreadable history entry", exc_info=True)
        return history

    def save_history(self, history: List[MatchData]) -> None:
        self.store.set(MATCH_HISTORY_KEY, [match.to_json() for match in history])

    def load_settings(self) -> Settings:
        """Load settings merged over the defaults."""
        raw = self.store.get(SETTINGS_KEY)
        if raw is not None and not isinstance(raw, dict):
            logger.warning("Stored settings are not an object; using defaults")
            return Settings()
        try:
            return Settings.from_json(raw)
        except (TypeError, ValueError):
            logger.warning("Stored settings are invalid; using defaults", exc_info=True)
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self.store.set(SETTINGS_KEY, settings.to_json())

    def save_all(self, match: MatchData, history: List[MatchData]) -> None:
        """Persist the current match and the history together."""
        self.save_match(match)
        self.save_history(history)
