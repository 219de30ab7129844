"""Match report and CSV export tests."""

import csv
import io

import pytest

from refy.models import CardKind, EventType, Settings, Team
from refy.services import ManualTickDriver, MatchEngine, ReportService
from refy.services.report_service import added_seconds, describe_event


@pytest.fixture
def finished_half():
    driver = ManualTickDriver()
    engine = MatchEngine(settings=Settings(half_duration=2700), driver=driver)
    engine.select_kickoff(Team.HOME)
    engine.play()
    driver.advance(600)
    engine.record_goal(Team.HOME)
    driver.advance(300)
    engine.issue_card(Team.AWAY, CardKind.YELLOW, "Jones", "4")
    engine.issue_card(Team.AWAY, CardKind.RED, "Smith", "9")
    driver.advance(1800)
    engine.grant_extra_time(90)
    engine.grant_extra_time(30)
    driver.advance(120)
    engine.decline_extra_time()
    return engine


def test_report_lines_most_recent_first(finished_half):
    report = ReportService().generate_match_report(finished_half.match)

    assert report.status == "half-time"
    assert report.kickoff_team == "home"
    assert report.score == {"home": 1, "away": 0}
    assert report.lines[0].type == EventType.HALF_END.value
    assert report.lines[-1].type == EventType.KICKOFF.value
    ids = [line.event_id for line in report.lines]
    assert ids == sorted(ids, reverse=True)
    assert report.final_score is None


def test_report_groups_cards_and_stoppage(finished_half):
    report = ReportService().generate_match_report(finished_half.match)

    yellow = report.card_events["away"]["yellow"]
    red = report.card_events["away"]["red"]
    assert [line.details for line in yellow] == ["Player: Jones, Number: 4"]
    assert [line.details for line in red] == ["Player: Smith, Number: 9"]
    assert report.card_events["home"] == {"yellow": [], "red": []}
    assert report.stoppage_by_half == {1: 120}


def test_report_csv(finished_half):
    content = ReportService().generate_report_csv(finished_half.match)
    rows = list(csv.reader(io.StringIO(content)))

    assert rows[0] == ["REFY Sideline Assistant - Match Report"]
    assert ["Score:", "1-0"] in rows
    assert ["Half 1 Stoppage (seconds):", "120"] in rows
    header = rows.index(["Minute", "Game Seconds", "Half", "Event", "Team", "Details"])
    events = rows[header + 1:]
    assert len(events) == len(finished_half.match.event_log)
    assert events[-1][3] == "Kickoff"
    assert ["10'", "600", "1", "Goal", "home", ""] in events


def test_archived_report_has_final_score(finished_half):
    archived = finished_half.start_new_game(completed_at=1700000000.0)
    report = ReportService().generate_match_report(archived)
    assert report.final_score == {"home": 1, "away": 0}
    assert report.completed_at == 1700000000.0
    assert "Completed:" in ReportService().generate_report_csv(archived)


def test_describe_event_and_added_seconds(finished_half):
    log = finished_half.match.event_log
    goal = log.of_type(EventType.GOAL)[0]
    assert describe_event(goal) == "10' Goal (home)"

    extra = log.of_type(EventType.EXTRA_TIME)
    assert [added_seconds(event) for event in extra] == [90, 30]
    assert describe_event(extra[0]) == "45' Extra Time Added: 1m 30s added"
    assert added_seconds(goal) == 0
