"""
Rules assistant for the Referee Sideline Assistant.

Answers questions from the built-in quick reference by keyword scoring. An
optional remote answerer (any ``question -> text`` callable) can be plugged
in; its replies are used when they look useful, with the local reference as
fallback. The match engine does not depend on this module.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..models.rules import RULES_CONTENT, Rule

logger = logging.getLogger(__name__)

Answerer = Callable[[str], str]

_TOKEN_SPLIT = re.compile(r"\W+")
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
_ASK_HEADING = re.compile(r"^ask\s+(ai assistant|refy)\b", re.IGNORECASE)
_CHECKBOX = re.compile(r"\[\s*[xX ]?\s*\]\s*")
_LIST_MARKER = re.compile(r"^\s*(?:[•*+\-]|\d+[.)])\s+(.*)$")


@dataclass
class ScoredRule:
    rule: Rule
    score: int


def find_relevant_rules(query: str, rules: Sequence[Rule] = RULES_CONTENT) -> List[ScoredRule]:
    """Score rules by how many query words appear in them, best first."""
    tokens = [token for token in _TOKEN_SPLIT.split(query.lower()) if token]
    scored = []
    for rule in rules:
        text = f"{rule.title} {rule.content}".lower()
        score = sum(1 for token in tokens if token in text)
        if score > 0:
            scored.append(ScoredRule(rule=rule, score=score))
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def first_sentences(text: str, count: int = 2) -> str:
    flat = re.sub(r"\n+", " ", text)
    sentences = [s.strip() for s in _SENTENCE_SPLIT.split(flat) if s.strip()]
    return " ".join(sentences[:count])


def local_answer(query: str, rules: Sequence[Rule] = RULES_CONTENT) -> str:
    """Short answer composed from the best matching quick-reference rules."""
    scored = find_relevant_rules(query, rules)
    if not scored:
        titles = "\n".join(f"- {rule.title}" for rule in rules)
        return (
            "I couldn't find a close match in the quick rules reference. "
            f"Topics you can ask about:\n{titles}"
        )

    summary = "\n\n".join(
        f"{item.rule.title}: {first_sentences(item.rule.content, 2)}" for item in scored[:2]
    )
    titles = "\n".join(f"- {item.rule.title}" for item in scored[:4])
    return f"Short rules-based answer (from quick reference):\n\n{summary}\n\nSee also:\n{titles}"


def normalize_response(text: str) -> str:
    """
    Tidy an answer for display.

    Drops "Ask REFY"-style headings and checkbox markers, turns any list
    marker into a markdown bullet and collapses runs of blank lines.
    """
    if not text:
        return ""
    out: List[str] = []
    in_list = False
    for raw in text.splitlines():
        line = raw.rstrip()
        trimmed = line.strip()
        if not trimmed:
            out.append("")
            in_list = False
            continue
        if _ASK_HEADING.match(trimmed):
            continue

        cleaned = _CHECKBOX.sub("", line)
        marker = _LIST_MARKER.match(cleaned)
        if marker:
            if not in_list:
                out.append("")
                in_list = True
            cleaned = "- " + marker.group(1).strip()
        else:
            if in_list:
                out.append("")
                in_list = False
            cleaned = cleaned.lstrip()
        out.append(cleaned)

    return re.sub(r"\n{3,}", "\n\n", "\n".join(out)).strip()


class RulesAssistant:
    """Answer referee questions, preferring a remote answerer when configured."""

    MIN_USEFUL_LENGTH = 10
    SHORT_ANSWER_LENGTH = 80

    def __init__(self, remote: Optional[Answerer] = None, rules: Sequence[Rule] = RULES_CONTENT):
        self.remote = remote
        self.rules = tuple(rules)

    def answer_question(self, question: str) -> str:
        question = (question or "").strip()
        if not question:
            return ""
        if self.remote is None:
            return normalize_response(local_answer(question, self.rules))

        scored = find_relevant_rules(question, self.rules)
        try:
            reply = (self.remote(question) or "").strip()
        except Exception:
            logger.warning("Remote rules answerer failed; using quick reference", exc_info=True)
            return normalize_response(
                "AI service unavailable or returned an error. " + local_answer(question, self.rules)
            )

        if len(reply) <= self.MIN_USEFUL_LENGTH:
            return normalize_response(local_answer(question, self.rules))
        if len(reply) < self.SHORT_ANSWER_LENGTH and scored:
            reply = f"{reply}\n\nRelevant rules:\n\n{first_sentences(scored[0].rule.content, 2)}"
        return normalize_response(reply)
