"""
Web application module for the Referee Sideline Assistant.

This module contains the Flask web server that serves the HTML interface
and provides JSON API endpoints over the match engine. A background tick
driver runs the clock; requests and ticks are serialised through one lock.
"""
import logging
import os
import threading
from typing import Any, Callable, Dict, Optional

from flask import Flask, Response, jsonify, request, send_from_directory

from ..models import CardKind, Settings, Team
from ..services import (
    IntervalTickDriver,
    KeyValueStore,
    RecordingHaptics,
    ServiceFactory,
    TickDriver,
)
from ..utils import flip_coin, fmt_mmss

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Builds the engine and its collaborators through the service factory and
    owns the lock shared with the tick driver.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        driver: Optional[TickDriver] = None,
    ):
        self.lock = threading.RLock()
        self.driver = driver if driver is not None else IntervalTickDriver(lock=self.lock)
        self.haptics = RecordingHaptics()
        self.service_factory = ServiceFactory(store)

        services = self.service_factory.create_complete_service_suite(
            driver=self.driver, haptics=self.haptics
        )
        self.engine = services["engine"]
        self.report_service = services["report"]
        self.rules_assistant = services["rules"]
        self.persistence_service = services["persistence"]

    def save(self) -> None:
        """Persist the current match and history."""
        self.persistence_service.save_all(self.engine.match, self.engine.history)

    def build_state(self) -> Dict[str, Any]:
        state = self.engine.snapshot()
        state["clock"]["formatted"] = fmt_mmss(self.engine.clock.remaining_seconds)
        state["game_time_formatted"] = fmt_mmss(self.engine.current_game_time())
        state["vibrate"] = self.haptics.drain()
        state["settings"] = self.engine.settings.to_json()
        return state


def _parse_team(data: Dict[str, Any]) -> Team:
    try:
        return Team(str(data.get("team", "")).lower())
    except ValueError:
        raise ValueError("team must be 'home' or 'away'") from None


def _parse_card_kind(data: Dict[str, Any]) -> CardKind:
    try:
        return CardKind(str(data.get("kind", "")).lower())
    except ValueError:
        raise ValueError("kind must be 'yellow' or 'red'") from None


def create_app(
    static_folder: str = ".",
    store: Optional[KeyValueStore] = None,
    driver: Optional[TickDriver] = None,
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        static_folder: Directory to serve static files from
        store: Key-value store for match, history and settings (in-memory if omitted)
        driver: Tick driver for the clock (one-second background thread if omitted)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__, static_folder=static_folder, static_url_path="")
    app_state = WebAppState(store=store, driver=driver)
    app.extensions["refy"] = app_state

    def _json_body() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _mutate(action: Callable[[], Any], message: str):
        """Run an engine action under the lock, persist, and report the outcome."""
        try:
            with app_state.lock:
                result = action()
                if result is None or result is False:
                    return jsonify({
                        "success": False,
                        "error": f"Not allowed while match is {app_state.engine.status.value}",
                        "state": app_state.build_state(),
                    }), 409
                app_state.save()
                return jsonify({"success": True, "message": message, "state": app_state.build_state()})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except Exception as e:
            logger.error("Request failed: %s", e, exc_info=True)
            return jsonify({"success": False, "error": str(e)}), 500

    @app.route("/")
    def index():
        """Serve the main HTML interface."""
        response = send_from_directory(static_folder, "index.html")
        response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
        return response

    # ==================== Match API ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Current match, clock and pending prompt."""
        try:
            with app_state.lock:
                return jsonify({"success": True, "state": app_state.build_state()})
        except Exception as e:
            logger.error("State request failed: %s", e, exc_info=True)
            return jsonify({"success": False, "error": str(e)}), 500

    @app.route("/api/kickoff", methods=["POST"])
    def select_kickoff():
        data = _json_body()
        return _mutate(lambda: app_state.engine.select_kickoff(_parse_team(data)), "Kickoff selected")

    @app.route("/api/timer/play", methods=["POST"])
    def play_timer():
        return _mutate(app_state.engine.play, "Clock running")

    @app.route("/api/timer/pause", methods=["POST"])
    def pause_timer():
        """Pause the clock; pausing an idle clock still succeeds."""
        def _pause():
            app_state.engine.pause()
            return True
        return _mutate(_pause, "Clock paused")

    @app.route("/api/timer/reset", methods=["POST"])
    def reset_timer():
        return _mutate(app_state.engine.reset_visible_timer, "Clock reset")

    @app.route("/api/half/finish", methods=["POST"])
    def finish_half():
        return _mutate(app_state.engine.finish_half_manually, "Half ended")

    @app.route("/api/half/next", methods=["POST"])
    def start_next_half():
        return _mutate(app_state.engine.start_next_half, "Next half ready")

    @app.route("/api/extra-time", methods=["POST"])
    def add_extra_time():
        """
        Grant stoppage time.

        Body is one of ``{"preset": 0}``, ``{"minutes": "2", "seconds": "30"}``
        or ``{"total_seconds": 150}``.
        """
        data = _json_body()
        engine = app_state.engine

        def _grant():
            if "preset" in data:
                return engine.grant_quick_extra_time(int(data["preset"]))
            if "minutes" in data or "seconds" in data:
                return engine.grant_extra_time_from_input(data.get("minutes"), data.get("seconds"))
            if "total_seconds" in data:
                return engine.grant_extra_time(data["total_seconds"])
            raise ValueError("Provide preset, minutes/seconds or total_seconds")

        return _mutate(_grant, "Extra time added")

    @app.route("/api/extra-time/decline", methods=["POST"])
    def decline_extra_time():
        return _mutate(app_state.engine.decline_extra_time, "Half ended")

    @app.route("/api/extra-half", methods=["POST"])
    def accept_extra_half():
        data = _json_body()
        return _mutate(
            lambda: app_state.engine.accept_extra_half(data.get("minutes"), data.get("seconds")),
            "Extra half ready",
        )

    @app.route("/api/extra-half/decline", methods=["POST"])
    def decline_extra_half():
        return _mutate(app_state.engine.decline_extra_half, "Full time")

    @app.route("/api/goal", methods=["POST"])
    def record_goal():
        data = _json_body()
        return _mutate(lambda: app_state.engine.record_goal(_parse_team(data)), "Goal recorded")

    @app.route("/api/goal/remove", methods=["POST"])
    def remove_goal():
        data = _json_body()
        return _mutate(lambda: app_state.engine.remove_goal(_parse_team(data)), "Goal removed")

    @app.route("/api/card", methods=["POST"])
    def issue_card():
        data = _json_body()
        return _mutate(
            lambda: app_state.engine.issue_card(
                _parse_team(data),
                _parse_card_kind(data),
                player_name=str(data.get("name", "")).strip(),
                player_number=str(data.get("number", "")).strip(),
            ),
            "Card recorded",
        )

    @app.route("/api/new-game", methods=["POST"])
    def start_new_game():
        """Archive the current match (if started) and reset."""
        try:
            with app_state.lock:
                archived = app_state.engine.start_new_game()
                app_state.save()
                return jsonify({
                    "success": True,
                    "archived": archived.to_json() if archived else None,
                    "state": app_state.build_state(),
                })
        except Exception as e:
            logger.error("New game failed: %s", e, exc_info=True)
            return jsonify({"success": False, "error": str(e)}), 500

    # ==================== History & reports ==================== #

    @app.route("/api/history", methods=["GET"])
    def get_history():
        with app_state.lock:
            history = [match.to_json() for match in app_state.engine.history]
        return jsonify({"success": True, "history": history, "count": len(history)})

    @app.route("/api/history", methods=["DELETE"])
    def clear_history():
        with app_state.lock:
            app_state.engine.clear_history()
            app_state.save()
        return jsonify({"success": True, "message": "History cleared"})

    @app.route("/api/report", methods=["GET"])
    def get_report():
        with app_state.lock:
            report = app_state.report_service.generate_match_report(app_state.engine.match)
        return jsonify({"success": True, "report": _report_to_json(report)})

    @app.route("/api/history/<int:index>/report", methods=["GET"])
    def get_history_report(index: int):
        with app_state.lock:
            history = app_state.engine.history
            if not 0 <= index < len(history):
                return jsonify({"success": False, "error": "Match not found"}), 404
            report = app_state.report_service.generate_match_report(history[index])
        return jsonify({"success": True, "report": _report_to_json(report)})

    @app.route("/api/report/export", methods=["GET"])
    def export_report():
        """Download the current match report as CSV."""
        try:
            with app_state.lock:
                csv_text = app_state.report_service.generate_report_csv(app_state.engine.match)
            return Response(
                csv_text,
                mimetype="text/csv",
                headers={"Content-Disposition": "attachment; filename=match_report.csv"},
            )
        except Exception as e:
            logger.error("Report export failed: %s", e, exc_info=True)
            return jsonify({"success": False, "error": str(e)}), 500

    # ==================== Settings ==================== #

    @app.route("/api/settings", methods=["GET"])
    def get_settings():
        with app_state.lock:
            return jsonify({"success": True, "settings": app_state.engine.settings.to_json()})

    @app.route("/api/settings", methods=["PUT"])
    def update_settings():
        """Merge the given fields over the current settings."""
        data = _json_body()
        try:
            with app_state.lock:
                merged = app_state.engine.settings.to_json()
                merged.update({k: v for k, v in data.items() if k in merged})
                settings = Settings.from_json(merged)
                app_state.engine.apply_settings(settings)
                app_state.persistence_service.save_settings(settings)
                return jsonify({"success": True, "settings": settings.to_json()})
        except (TypeError, ValueError) as e:
            return jsonify({"success": False, "error": str(e)}), 400

    # ==================== Assistant & tools ==================== #

    @app.route("/api/rules/ask", methods=["POST"])
    def ask_rules():
        question = str(_json_body().get("question", "")).strip()
        if not question:
            return jsonify({"success": False, "error": "Question is required"}), 400
        answer = app_state.rules_assistant.answer_question(question)
        return jsonify({"success": True, "answer": answer})

    @app.route("/api/coin-flip", methods=["POST"])
    def coin_flip():
        return jsonify({"success": True, "result": flip_coin()})

    return app


def _report_to_json(report) -> Dict[str, Any]:
    def _line(line):
        return {
            "id": line.event_id,
            "minute": line.minute,
            "game_time_seconds": line.game_time_seconds,
            "half": line.half,
            "type": line.type,
            "team": line.team,
            "details": line.details,
            "text": line.text,
        }

    return {
        "status": report.status,
        "current_half": report.current_half,
        "kickoff_team": report.kickoff_team,
        "score": report.score,
        "cards": report.cards,
        "final_score": report.final_score,
        "completed_at": report.completed_at,
        "stoppage_by_half": {str(k): v for k, v in report.stoppage_by_half.items()},
        "events": [_line(line) for line in report.lines],
        "card_events": {
            team: {kind: [_line(line) for line in lines] for kind, lines in kinds.items()}
            for team, kinds in report.card_events.items()
        },
    }


def run_web_app(
    host: str = "127.0.0.1",
    port: int = 7122,
    static_folder: str = ".",
    store: Optional[KeyValueStore] = None,
) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        static_folder: Directory containing static files (HTML, CSS, JS)
        store: Key-value store to persist into
    """
    app = create_app(static_folder, store=store)
    logger.info("Serving on http://%s:%d", host, port)
    app.run(host=host, port=port, debug=False)


if __name__ == "__main__":
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    run_web_app(static_folder=project_root)
