"""Domain enumerations for the sequential study flow.

These enums capture the fixed vocabularies used across the domain layer:
section kinds, question kinds, quiz sub-states, and the signals returned
by navigation and quiz operations.
"""

from enum import Enum


class SectionKind(Enum):
    """Stage of the study flow a section represents."""

    EXPLANATION = "explanation"
    EXAMPLE = "example"
    QUIZ = "quiz"


class QuestionKind(Enum):
    """How a quiz question is answered and graded."""

    MULTIPLE_CHOICE = "multiple_choice"
    SHORT_ANSWER = "short_answer"


class QuizPhase(Enum):
    """Sub-state of a Quiz section."""

    ANSWERING = "answering"
    SHOWING_FEEDBACK = "showing_feedback"
    FINISHED = "finished"


class NavigationSignal(Enum):
    """Outcome of a forward or backward navigation request."""

    ADVANCED = "advanced"
    COMPLETED = "completed"
    RETREATED = "retreated"
    NO_OP = "no_op"
    BLOCKED = "blocked"  # forward action not permitted yet


class QuizSignal(Enum):
    """Outcome of moving past the current quiz question."""

    NEXT_QUESTION = "next_question"
    QUIZ_FINISHED = "quiz_finished"


class TransitionPhase(Enum):
    """Visual phase of a section transition on a rendering surface."""

    EXIT = "exit"
    ENTRY = "entry"
