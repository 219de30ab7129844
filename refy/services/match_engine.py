"""Match phase state machine for the Referee Sideline Assistant."""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from ..models import (
    CardKind,
    Event,
    EventType,
    MatchData,
    MatchStatus,
    Settings,
    Team,
)
from ..utils import VIBRATION_PATTERN, format_added, now_ts
from ..utils.constants import MAX_HALVES, REGULATION_HALVES
from .clock import Clock
from .duration_input import (
    DurationField,
    DurationValidationError,
    parse_duration,
    validate_total,
)
from .elapsed import ElapsedAccumulator
from .haptics import Haptics, NullHaptics
from .tick_driver import TickDriver

logger = logging.getLogger(__name__)

PLAYABLE = (MatchStatus.IN_PROGRESS, MatchStatus.EXTRA_TIME)


class PendingDecision(Enum):
    """Prompts the referee must answer before the match can move on."""
    EXTRA_TIME = "extra-time"
    EXTRA_HALF = "extra-half"


class MatchEngine:
    """
    Controller for one match: phase transitions, clock and event stamping.

    The engine owns the ``MatchData`` aggregate, the countdown ``Clock`` and
    the ``ElapsedAccumulator``. Every operation is a synchronous reaction to a
    referee action or a clock tick. Operations that are not legal in the
    current phase are no-ops and return ``None`` (or ``False``); invalid
    duration input raises ``DurationValidationError`` and leaves the state
    untouched.

    Settings are passed in explicitly and can be swapped with
    ``apply_settings``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        match: Optional[MatchData] = None,
        history: Optional[List[MatchData]] = None,
        driver: Optional[TickDriver] = None,
        haptics: Optional[Haptics] = None,
    ):
        self.settings = settings or Settings()
        self.match = match or MatchData()
        self.history: List[MatchData] = list(history or [])
        self.haptics = haptics or NullHaptics()
        self.accumulator = ElapsedAccumulator()
        self.clock = Clock(
            self.settings.half_duration,
            driver=driver,
            on_tick=self._on_tick,
            on_expired=self.timer_naturally_expires,
        )
        self.pending_decision: Optional[PendingDecision] = None
        self.stoppage_added_seconds = 0

        if self.match.status is not MatchStatus.PRE_MATCH:
            self._restore_session()

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    @property
    def status(self) -> MatchStatus:
        return self.match.status

    @property
    def current_half(self) -> int:
        return self.match.current_half

    def current_game_time(self) -> int:
        """True elapsed match time in whole seconds."""
        return self.accumulator.current_game_time()

    def duration_for_half(self, half: int) -> int:
        """Standard duration for halves 1-2, configured duration for 3-4."""
        if half <= REGULATION_HALVES:
            return self.settings.half_duration
        if half in self.accumulator.custom_half_durations:
            return self.accumulator.custom_half_durations[half]
        if self.match.extra_half_duration is not None:
            return self.match.extra_half_duration
        return self.settings.extra_half_duration

    def extra_half_prompt_default(self) -> Dict[str, int]:
        """Pre-filled minutes/seconds for the extended-half prompt."""
        minutes, seconds = divmod(self.settings.extra_half_duration, 60)
        return {"minutes": minutes, "seconds": seconds}

    def snapshot(self) -> Dict[str, Any]:
        """Everything a UI needs to render the current match."""
        return {
            "match": self.match.to_json(),
            "clock": self.clock.to_json(),
            "game_time_seconds": self.current_game_time(),
            "pending_decision": self.pending_decision.value if self.pending_decision else None,
            "stoppage_added_seconds": self.stoppage_added_seconds,
            "half_duration": self.duration_for_half(self.current_half),
            "quick_extra_time": list(self.settings.quick_extra_time),
        }

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def apply_settings(self, settings: Settings) -> None:
        """Use new settings; an idle pre-match clock picks up the new half length."""
        self.settings = settings
        if self.status is MatchStatus.PRE_MATCH:
            self.clock.reset(settings.half_duration)

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------
    def select_kickoff(self, team: Team) -> Optional[Event]:
        """Start the match with ``team`` kicking off."""
        if self.status is not MatchStatus.PRE_MATCH:
            logger.debug("Kickoff ignored: match already %s", self.status.value)
            return None

        self.match.kickoff_team = team
        self.match.status = MatchStatus.IN_PROGRESS
        self.match.current_half = 1
        self.clock.reset(self.duration_for_half(1))
        self.accumulator.snapshot_at_half_start()
        logger.info("Kickoff: %s", team.value)
        return self._add_event(
            EventType.KICKOFF, game_time=0, team=team, details=f"{team.label} has kickoff"
        )

    def play(self) -> bool:
        """Start or resume the clock, logging the half start the first time."""
        if self.status not in PLAYABLE or self.pending_decision is not None:
            logger.debug("Play ignored in %s", self.status.value)
            return False
        if self.clock.is_active or self.clock.remaining_seconds <= 0:
            return False

        half = self.current_half
        if not self.match.event_log.has_half_started(half):
            self.accumulator.snapshot_at_half_start()
            self._add_event(EventType.HALF_START, details=f"Half {half} Started")
        return self.clock.start()

    def pause(self) -> bool:
        """Pause the clock. Returns True if it was running."""
        was_active = self.clock.is_active
        self.clock.pause()
        return was_active

    def timer_naturally_expires(self) -> None:
        """Countdown reached zero: ask whether to add time instead of ending the half."""
        if self.status not in PLAYABLE:
            return
        self.pending_decision = PendingDecision.EXTRA_TIME
        logger.info(
            "Time up in half %d at %ds; awaiting extra time decision",
            self.current_half, self.current_game_time(),
        )
        if self.settings.vibration:
            self.haptics.vibrate(VIBRATION_PATTERN)

    def grant_extra_time(self, seconds: int) -> Optional[Event]:
        """
        Add stoppage time to the current half and resume the clock.

        Legal while the extra-time prompt is open or during a stoppage window.
        Each grant is logged separately. The extra-time baseline is captured
        only on the first grant of the window.

        Raises:
            DurationValidationError: If ``seconds`` is not a whole number in 1..6000
        """
        if not self._can_grant_extra_time():
            logger.debug("Extra time ignored in %s", self.status.value)
            return None
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise DurationValidationError("Extra time must be a whole number of seconds")
        validate_total(seconds)

        if self.status is not MatchStatus.EXTRA_TIME:
            self.accumulator.snapshot_at_extra_time_start()
        game_time = self.current_game_time()
        self.pending_decision = None
        self.match.status = MatchStatus.EXTRA_TIME
        self.stoppage_added_seconds += seconds
        self.clock.add_time(seconds)
        logger.info("Extra time granted: %ds (half %d)", seconds, self.current_half)
        return self._add_event(
            EventType.EXTRA_TIME, game_time=game_time, details=format_added(seconds)
        )

    def grant_extra_time_from_input(
        self, minutes: DurationField, seconds: DurationField
    ) -> Optional[Event]:
        """Validate a custom minutes/seconds entry and grant it."""
        if not self._can_grant_extra_time():
            return None
        return self.grant_extra_time(parse_duration(minutes, seconds))

    def grant_quick_extra_time(self, index: int) -> Optional[Event]:
        """Grant one of the configured quick presets (0, 1 or 2)."""
        if not self._can_grant_extra_time():
            return None
        presets = self.settings.quick_extra_time
        if not 0 <= index < len(presets):
            raise DurationValidationError(f"Unknown quick extra time option: {index}")
        return self.grant_extra_time(presets[index])

    def decline_extra_time(self) -> Optional[Event]:
        """Answer the extra-time prompt with 'no': the half ends."""
        if self.pending_decision is not PendingDecision.EXTRA_TIME:
            return None
        self.pending_decision = None
        return self._end_current_half()

    def finish_half_manually(self) -> Optional[Event]:
        """End the current half now, whatever the clock shows."""
        if self.status not in PLAYABLE:
            logger.debug("Finish half ignored in %s", self.status.value)
            return None
        self.clock.pause()
        self.pending_decision = None
        return self._end_current_half()

    def accept_extra_half(
        self, minutes: DurationField, seconds: DurationField
    ) -> Optional[int]:
        """
        Play a third half of the given length (half four follows automatically).

        Returns:
            The accepted duration in seconds, or None if no prompt is open

        Raises:
            DurationValidationError: If the entered duration is invalid
        """
        if self.pending_decision is not PendingDecision.EXTRA_HALF:
            return None
        duration = parse_duration(minutes, seconds)
        self.pending_decision = None
        self.accumulator.custom_half_durations[3] = duration
        self.match.extra_half_duration = duration
        self._begin_half(3, duration)
        return duration

    def decline_extra_half(self) -> bool:
        """No extended halves: the match is over."""
        if self.pending_decision is not PendingDecision.EXTRA_HALF:
            return False
        self.pending_decision = None
        self.match.status = MatchStatus.FULL_TIME
        logger.info("Full time after half %d", self.current_half)
        return True

    def start_next_half(self) -> bool:
        """Leave half-time and set up the next regulation half."""
        if self.status is not MatchStatus.HALF_TIME or self.pending_decision is not None:
            return False
        self._begin_half(self.current_half + 1, self.settings.half_duration)
        return True

    def reset_visible_timer(self) -> bool:
        """
        Put the countdown back to the full duration of the current half.

        Elapsed time is rewound to the start of the current stoppage window,
        or of the half's play, so events stay correctly stamped. No event is
        logged and the status does not change.
        """
        if self.status not in PLAYABLE:
            return False
        self.clock.reset(self.duration_for_half(self.current_half))
        if self.status is MatchStatus.EXTRA_TIME:
            self.accumulator.restore_to_extra_time_start()
        else:
            self.accumulator.restore_to_half_start()
        if self.pending_decision is PendingDecision.EXTRA_TIME:
            self.pending_decision = None
        logger.info("Visible timer reset for half %d", self.current_half)
        return True

    # ------------------------------------------------------------------
    # Score and cards
    # ------------------------------------------------------------------
    def record_goal(self, team: Team) -> Optional[Event]:
        if self.status is MatchStatus.PRE_MATCH:
            return None
        self.match.score.add_goal(team)
        return self._add_event(EventType.GOAL, team=team)

    def remove_goal(self, team: Team) -> Optional[Event]:
        """Take a goal off ``team``; the score never drops below zero."""
        if self.status is MatchStatus.PRE_MATCH:
            return None
        self.match.score.remove_goal(team)
        return self._add_event(EventType.GOAL_REMOVED, team=team)

    def issue_card(
        self,
        team: Team,
        kind: CardKind,
        player_name: str = "",
        player_number: str = "",
    ) -> Optional[Event]:
        if self.status is MatchStatus.PRE_MATCH:
            return None
        self.match.cards.for_team(team).add(kind)
        details = f"Player: {player_name or 'N/A'}, Number: {player_number or 'N/A'}"
        event_type = EventType.YELLOW_CARD if kind is CardKind.YELLOW else EventType.RED_CARD
        return self._add_event(event_type, team=team, details=details)

    # ------------------------------------------------------------------
    # Match lifecycle
    # ------------------------------------------------------------------
    def start_new_game(self, completed_at: Optional[float] = None) -> Optional[MatchData]:
        """
        Archive the current match (unless untouched) and start a fresh one.

        Returns:
            The archived history entry, or None if nothing was archived
        """
        archived = None
        if self.status is not MatchStatus.PRE_MATCH:
            archived = self.match.archived_copy(completed_at if completed_at is not None else now_ts())
            self.history.insert(0, archived)
            logger.info(
                "Archived match %d-%d", archived.score.home, archived.score.away
            )

        self.match = MatchData()
        self.clock.reset(self.settings.half_duration)
        self.accumulator.reset()
        self.pending_decision = None
        self.stoppage_added_seconds = 0
        return archived

    def clear_history(self) -> None:
        self.history.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_tick(self) -> None:
        self.accumulator.advance(1)

    def _can_grant_extra_time(self) -> bool:
        return (
            self.pending_decision is PendingDecision.EXTRA_TIME
            or self.status is MatchStatus.EXTRA_TIME
        )

    def _add_event(
        self,
        event_type: EventType,
        *,
        game_time: Optional[int] = None,
        team: Optional[Team] = None,
        details: Optional[str] = None,
    ) -> Event:
        stamp = self.current_game_time() if game_time is None else game_time
        event = self.match.event_log.append(
            event_type, stamp, half=self.current_half, team=team, details=details
        )
        logger.info("%s at %ds (half %d)", event_type.value, stamp, self.current_half)
        return event

    def _end_current_half(self) -> Optional[Event]:
        if self.status not in PLAYABLE:
            return None
        self.clock.pause()
        event = self._add_event(EventType.HALF_END, details=f"End of Half {self.current_half}")
        self.match.status = MatchStatus.IN_PROGRESS
        self.stoppage_added_seconds = 0
        self._resolve_next_phase()
        return event

    def _resolve_next_phase(self) -> None:
        half = self.current_half
        if half == 1:
            self.match.status = MatchStatus.HALF_TIME
        elif half == REGULATION_HALVES:
            self.match.status = MatchStatus.HALF_TIME
            self.pending_decision = PendingDecision.EXTRA_HALF
        elif half < MAX_HALVES:
            duration = self.duration_for_half(half)
            self.accumulator.custom_half_durations[half + 1] = duration
            self._begin_half(half + 1, duration)
        else:
            self.match.status = MatchStatus.FULL_TIME
        logger.info("Half %d ended; status now %s", half, self.status.value)

    def _begin_half(self, half: int, duration: int) -> None:
        self.match.current_half = half
        self.clock.reset(duration)
        self.accumulator.snapshot_at_half_start()
        self.stoppage_added_seconds = 0
        self.match.status = MatchStatus.IN_PROGRESS
        logger.info("Half %d ready (%ds)", half, duration)

    def _restore_session(self) -> None:
        """
        Rebuild clock and accumulator for a match loaded from storage.

        Live clock state is not stored. Elapsed time resumes from the latest
        event, the reset baselines come from the current half's ``Half
        Started`` and first ``Extra Time Added`` events, and an unfinished
        half resumes with the time it had left.
        """
        log = self.match.event_log
        half = self.current_half
        game_time = log.last_game_time()
        half_start = log.half_started_at(half)
        self.accumulator.seed(game_time, half_start)
        if self.match.extra_half_duration is not None:
            for extended in range(REGULATION_HALVES + 1, MAX_HALVES + 1):
                self.accumulator.custom_half_durations[extended] = self.match.extra_half_duration

        status = self.status
        if status is MatchStatus.EXTRA_TIME:
            grants = [e for e in log.of_type(EventType.EXTRA_TIME) if e.half == half]
            if grants:
                self.accumulator.extra_time_start_snapshot = float(grants[0].game_time_seconds)
            else:
                self.accumulator.snapshot_at_extra_time_start()
            self.clock.reset(0)
            self.pending_decision = PendingDecision.EXTRA_TIME
        elif status is MatchStatus.IN_PROGRESS:
            played = game_time - half_start if half_start is not None else 0
            remaining = max(0, self.duration_for_half(half) - played)
            self.clock.reset(remaining)
            if remaining == 0:
                self.pending_decision = PendingDecision.EXTRA_TIME
        else:
            self.clock.reset(0)
            if status is MatchStatus.HALF_TIME and self.current_half == REGULATION_HALVES:
                self.pending_decision = PendingDecision.EXTRA_HALF
        logger.info(
            "Restored %s match in half %d at %ds",
            status.value, self.current_half, self.current_game_time(),
        )
