from unittest.mock import MagicMock

from refy.models import RULES_CONTENT
from refy.services import RulesAssistant
from refy.services.rules_service import find_relevant_rules, local_answer, normalize_response


def test_find_relevant_rules_ranks_best_match_first():
    scored = find_relevant_rules("offside position")
    assert scored[0].rule.title == "Offside"
    assert scored[0].score == 2


def test_local_answer_without_match_lists_topics():
    answer = local_answer("xyzzy")
    assert answer.startswith("I couldn't find a close match")
    for rule in RULES_CONTENT:
        assert f"- {rule.title}" in answer


def test_local_answer_summarises_top_rules():
    answer = local_answer("penalty mark goalkeeper")
    assert answer.startswith("Short rules-based answer")
    assert "Penalty Kicks:" in answer
    assert "See also:" in answer


def test_normalize_response():
    text = "Ask REFY\n* one\n* two\n\n\n\nend"
    assert normalize_response(text) == "- one\n- two\n\nend"
    assert normalize_response("- [x] done") == "- done"
    assert normalize_response("") == ""


def test_assistant_without_remote_uses_quick_reference():
    assistant = RulesAssistant()
    assert "Offside" in assistant.answer_question("When is a player offside?")
    assert assistant.answer_question("   ") == ""


def test_short_remote_answer_gets_relevant_rules():
    remote = MagicMock(return_value="Yes, that is offside.")
    answer = RulesAssistant(remote=remote).answer_question("is this offside")
    remote.assert_called_once_with("is this offside")
    assert answer.startswith("Yes, that is offside.")
    assert "Relevant rules:" in answer


def test_useless_remote_answer_falls_back():
    answer = RulesAssistant(remote=lambda q: "ok").answer_question("advantage")
    assert answer.startswith("Short rules-based answer")


def test_failing_remote_falls_back_with_notice():
    remote = MagicMock(side_effect=RuntimeError("timeout"))
    answer = RulesAssistant(remote=remote).answer_question("free kick distance")
    assert answer.startswith("AI service unavailable or returned an error.")
    assert "Free Kicks" in answer
