"""Tests for stores and the persistence service."""

import json
import os
import tempfile
import unittest

from refy.models import MatchData, MatchStatus, Settings, Team
from refy.services import (
    InMemoryStore,
    JsonFileStore,
    ManualTickDriver,
    MatchEngine,
    PersistenceService,
    ServiceFactory,
)


def played_engine():
    driver = ManualTickDriver()
    engine = MatchEngine(settings=Settings(half_duration=600), driver=driver)
    engine.select_kickoff(Team.HOME)
    engine.play()
    driver.advance(90)
    engine.record_goal(Team.AWAY)
    return engine


class PersistenceServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryStore()
        self.service = PersistenceService(self.store)

    def test_empty_store_gives_defaults(self) -> None:
        self.assertIs(self.service.load_match().status, MatchStatus.PRE_MATCH)
        self.assertEqual(self.service.load_history(), [])
        self.assertEqual(self.service.load_settings(), Settings())

    def test_match_and_history_round_trip(self) -> None:
        engine = played_engine()
        engine.start_new_game(completed_at=10.0)
        engine.select_kickoff(Team.AWAY)
        self.service.save_all(engine.match, engine.history)

        match = self.service.load_match()
        self.assertEqual(match.kickoff_team, Team.AWAY)
        self.assertEqual(len(match.event_log), 1)

        history = self.service.load_history()
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].final_score.away, 1)
        self.assertEqual(history[0].completed_at, 10.0)
        self.assertEqual(history[0].event_log, engine.history[0].event_log)

    def test_stored_values_do_not_alias(self) -> None:
        match = MatchData()
        self.service.save_match(match)
        match.status = MatchStatus.FULL_TIME
        match.score.add_goal(Team.HOME)
        self.assertEqual(self.store.get("currentMatch")["status"], "pre-match")
        self.assertEqual(self.store.get("currentMatch")["score"], {"home": 0, "away": 0})

    def test_invalid_match_falls_back(self) -> None:
        self.store.set("currentMatch", {"status": "nonsense"})
        self.assertIs(self.service.load_match().status, MatchStatus.PRE_MATCH)

        # In progress without kickoff breaks the pre-match invariant
        self.store.set("currentMatch", {"status": "in-progress"})
        match = self.service.load_match()
        self.assertIs(match.status, MatchStatus.PRE_MATCH)
        self.assertTrue(match.is_consistent())

    def test_unreadable_history_entries_skipped(self) -> None:
        good = played_engine().match.archived_copy(5.0).to_json()
        self.store.set("matchHistory", [good, {"status": "bogus"}])
        history = self.service.load_history()
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0].completed_at, 5.0)

    def test_settings_merge_over_defaults(self) -> None:
        self.store.set("appSettings", {"half_duration": 1200, "obsolete": True})
        settings = self.service.load_settings()
        self.assertEqual(settings.half_duration, 1200)
        self.assertEqual(settings.extra_half_duration, 900)
        self.assertEqual(settings.quick_extra_time, (120, 180, 240))
        self.assertTrue(settings.vibration)

    def test_invalid_settings_fall_back(self) -> None:
        self.store.set("appSettings", {"theme": "neon"})
        self.assertEqual(self.service.load_settings(), Settings())
        self.store.set("appSettings", "dark")
        self.assertEqual(self.service.load_settings(), Settings())

    def test_save_settings(self) -> None:
        self.service.save_settings(Settings(theme="dark", quick_extra_time=(60, 90, 120)))
        self.assertEqual(self.store.get("appSettings")["quick_extra_time"], [60, 90, 120])
        self.assertEqual(self.service.load_settings().theme, "dark")


class JsonFileStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.temp_dir.name, "data", "refy.json")

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_values_survive_a_new_store(self) -> None:
        JsonFileStore(self.path).set("appSettings", {"half_duration": 300})
        JsonFileStore(self.path).set("matchHistory", [])

        store = JsonFileStore(self.path)
        self.assertEqual(store.get("appSettings"), {"half_duration": 300})
        self.assertEqual(store.get("matchHistory"), [])
        self.assertFalse(os.path.exists(self.path + ".tmp"))

    def test_failed_write_keeps_previous_document(self) -> None:
        store = JsonFileStore(self.path)
        store.set("appSettings", {"half_duration": 300})

        with self.assertRaises(TypeError):
            store.set("currentMatch", {"status": object()})

        self.assertFalse(os.path.exists(self.path + ".tmp"))
        self.assertEqual(JsonFileStore(self.path).get("appSettings"), {"half_duration": 300})
        self.assertIsNone(JsonFileStore(self.path).get("currentMatch"))

    def test_corrupt_file_reads_as_empty(self) -> None:
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        store = JsonFileStore(self.path)
        self.assertIsNone(store.get("currentMatch"))
        self.assertIs(PersistenceService(store).load_match().status, MatchStatus.PRE_MATCH)

    def test_engine_restored_through_factory(self) -> None:
        store = JsonFileStore(self.path)
        engine = played_engine()
        PersistenceService(store).save_all(engine.match, engine.history)

        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f)["currentMatch"]["status"], "in-progress")

        restored = ServiceFactory(JsonFileStore(self.path)).create_match_engine()
        self.assertEqual(restored.current_game_time(), 90)
        self.assertEqual(restored.match.score.away, 1)


if __name__ == "__main__":
    unittest.main()
