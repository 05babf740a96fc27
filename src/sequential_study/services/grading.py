"""Answer grading and quiz scoring.

Multiple-choice answers must match the correct answer exactly, ignoring
case and surrounding whitespace.  Short answers use symmetric containment:
the candidate is correct when either string contains the other.  The
containment rule is lenient: a one-letter answer is contained in most
correct answers.
"""

from __future__ import annotations

import math

from sequential_study.domain.enums import QuestionKind
from sequential_study.domain.values import QuizQuestion, QuizResult

_MESSAGES: tuple[tuple[int, str], ...] = (
    (100, "Perfect Score! You're a master."),
    (70, "Great job! You have a solid grasp."),
    (50, "Good start, review the concepts again."),
    (0, "Keep practicing, you'll get there!"),
)


def _normalize(text: str) -> str:
    return text.strip().lower()


def grade_answer(question: QuizQuestion, candidate: str) -> bool:
    """Return whether *candidate* answers *question* correctly."""
    given = _normalize(candidate)
    expected = _normalize(question.correct_answer)
    if question.kind is QuestionKind.MULTIPLE_CHOICE:
        return given == expected
    return given in expected or expected in given


def percentage(score: int, total: int) -> int:
    """``round(100 * score / total)`` with halves rounded up."""
    if total < 1:
        raise ValueError(f"total must be >= 1, got {total}")
    return int(math.floor(100 * score / total + 0.5))


def performance_message(pct: int) -> str:
    """Encouragement line shown with the quiz results."""
    for threshold, message in _MESSAGES:
        if pct >= threshold:
            return message
    return _MESSAGES[-1][1]


def tally(score: int, total: int) -> QuizResult:
    """Build the final ``QuizResult`` for *score* out of *total*."""
    pct = percentage(score, total)
    return QuizResult(
        score=score,
        total=total,
        percentage=pct,
        message=performance_message(pct),
    )
