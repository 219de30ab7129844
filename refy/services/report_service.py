"""Match report helpers for the Referee Sideline Assistant."""

from __future__ import annotations

import csv
import io
import re
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from ..models import CardKind, Event, EventType, MatchData, MatchReport, ReportLine, Team
from ..utils import format_minute, now_ts

_ADDED_PATTERN = re.compile(r"^(\d+)m (\d+)s added$")

CARD_TYPES = {
    EventType.YELLOW_CARD: CardKind.YELLOW,
    EventType.RED_CARD: CardKind.RED,
}


class ExportServiceInterface(Protocol):
    """Interface for report export."""

    def export_to_csv(self, report: MatchReport) -> str:
        ...


def describe_event(event: Event) -> str:
    """One-line description, e.g. ``"45' Goal (home)"``."""
    text = f"{format_minute(event.game_time_seconds)} {event.type.value}"
    if event.team is not None:
        text += f" ({event.team.value})"
    if event.details:
        text += f": {event.details}"
    return text


def added_seconds(event: Event) -> int:
    """Seconds granted by an Extra Time Added event (0 for other events)."""
    if event.type is not EventType.EXTRA_TIME or not event.details:
        return 0
    found = _ADDED_PATTERN.match(event.details)
    if not found:
        return 0
    return int(found.group(1)) * 60 + int(found.group(2))


class MatchReportExporter:
    """CSV export of a match report."""

    def export_to_csv(self, report: MatchReport) -> str:
        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["REFY Sideline Assistant - Match Report"])
        writer.writerow(["Generated:", datetime.fromtimestamp(report.generated_ts).strftime("%Y-%m-%d %H:%M:%S")])
        if report.completed_at is not None:
            writer.writerow(["Completed:", datetime.fromtimestamp(report.completed_at).strftime("%Y-%m-%d %H:%M:%S")])
        writer.writerow([])

        writer.writerow(["Match Summary"])
        writer.writerow(["Status:", report.status])
        writer.writerow(["Kickoff:", report.kickoff_team or ""])
        writer.writerow(["Halves Played:", report.current_half])
        writer.writerow(["Score:", f"{report.score['home']}-{report.score['away']}"])
        for team in ("home", "away"):
            team_cards = report.cards[team]
            writer.writerow([f"{team.title()} Cards:", f"{team_cards['yellow']} yellow", f"{team_cards['red']} red"])
        for half, seconds in sorted(report.stoppage_by_half.items()):
            writer.writerow([f"Half {half} Stoppage (seconds):", seconds])
        writer.writerow([])

        writer.writerow(["Event Log"])
        writer.writerow(["Minute", "Game Seconds", "Half", "Event", "Team", "Details"])
        for line in report.lines:
            writer.writerow([
                line.minute,
                line.game_time_seconds,
                line.half,
                line.type,
                line.team or "",
                line.details or "",
            ])

        csv_content = output.getvalue()
        output.close()
        return csv_content


class ReportService:
    """Build reports for the live match or any archived one."""

    def __init__(self, export_service: Optional[ExportServiceInterface] = None) -> None:
        self.export_service = export_service or MatchReportExporter()

    def generate_match_report(self, match: MatchData) -> MatchReport:
        """Build a :class:`MatchReport`; log lines are most recent first."""
        lines = [self._to_line(event) for event in match.event_log.chronological()]

        card_events: Dict[str, Dict[str, List[ReportLine]]] = {
            team.value: {kind.value: [] for kind in CardKind} for team in Team
        }
        stoppage_by_half: Dict[int, int] = {}
        for event in match.event_log:
            kind = CARD_TYPES.get(event.type)
            if kind is not None and event.team is not None:
                card_events[event.team.value][kind.value].append(self._to_line(event))
            seconds = added_seconds(event)
            if seconds:
                stoppage_by_half[event.half] = stoppage_by_half.get(event.half, 0) + seconds

        return MatchReport(
            generated_ts=now_ts(),
            status=match.status.value,
            current_half=match.current_half,
            kickoff_team=match.kickoff_team.value if match.kickoff_team else None,
            score=match.score.to_json(),
            cards=match.cards.to_json(),
            lines=lines,
            card_events=card_events,
            stoppage_by_half=stoppage_by_half,
            final_score=match.final_score.to_json() if match.final_score else None,
            completed_at=match.completed_at,
        )

    def generate_report_csv(self, match: MatchData) -> str:
        return self.export_service.export_to_csv(self.generate_match_report(match))

    @staticmethod
    def _to_line(event: Event) -> ReportLine:
        return ReportLine(
            event_id=event.id,
            minute=format_minute(event.game_time_seconds),
            game_time_seconds=event.game_time_seconds,
            half=event.half,
            type=event.type.value,
            team=event.team.value if event.team else None,
            details=event.details,
            text=describe_event(event),
        )
