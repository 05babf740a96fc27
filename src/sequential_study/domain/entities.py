"""Domain entities for the sequential study flow.

Entities carry a mutable lifecycle.  ``Section`` is built once per
controller and only its ``nav_enabled`` flag may change afterwards.
``QuizProgress`` is the runtime sub-state embedded in the Quiz section.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .enums import QuizPhase, SectionKind
from .values import AnswerFeedback, ExampleContent, ExplanationContent, QuizQuestion, QuizResult

# ---------------------------------------------------------------------------
# Quiz runtime state
# ---------------------------------------------------------------------------

@dataclass
class QuizProgress:
    """Mutable quiz sub-state: AnsweringQuestion -> ShowingFeedback -> ...

    ``score`` only grows and never exceeds the number of questions; it is
    incremented at most once per question because a question accepts a
    single submission.
    """

    total: int
    current_question_index: int = 0
    score: int = 0
    phase: QuizPhase = QuizPhase.ANSWERING
    feedback: AnswerFeedback | None = None
    result: QuizResult | None = None

    def __post_init__(self) -> None:
        if self.total < 1:
            raise ValueError(f"total must be >= 1, got {self.total}")

    @property
    def is_last_question(self) -> bool:
        return self.current_question_index >= self.total - 1

    @property
    def is_finished(self) -> bool:
        return self.phase is QuizPhase.FINISHED

    def record_answer(self, feedback: AnswerFeedback) -> None:
        """Move AnsweringQuestion(q) -> ShowingFeedback(q)."""
        if feedback.correct:
            self.score = min(self.score + 1, self.total)
        self.feedback = feedback
        self.phase = QuizPhase.SHOWING_FEEDBACK

    def next_question(self) -> None:
        """Move ShowingFeedback(q) -> AnsweringQuestion(q + 1)."""
        self.current_question_index += 1
        self.feedback = None
        self.phase = QuizPhase.ANSWERING

    def finish(self, result: QuizResult) -> None:
        """Move ShowingFeedback(last) -> Finished."""
        self.result = result
        self.phase = QuizPhase.FINISHED


@dataclass
class QuizContent:
    """Content of the Quiz section: at most three questions plus progress."""

    questions: tuple[QuizQuestion, ...]
    progress: QuizProgress = field(init=False)

    def __post_init__(self) -> None:
        self.progress = QuizProgress(total=len(self.questions))

    @property
    def current_question(self) -> QuizQuestion:
        return self.questions[self.progress.current_question_index]


SectionContent = Union[ExplanationContent, ExampleContent, QuizContent]


# ---------------------------------------------------------------------------
# Section entity
# ---------------------------------------------------------------------------

@dataclass
class Section:
    """One stage of the study flow.

    ``nav_enabled`` says whether the forward action is currently permitted.
    For a Quiz section it starts ``False`` and flips to ``True`` once the
    quiz finishes; it never flips back.
    """

    title: str
    kind: SectionKind
    content: SectionContent
    next_label: str
    nav_enabled: bool = True

    @property
    def quiz(self) -> QuizContent:
        """The quiz content; raises ``TypeError`` on non-quiz sections."""
        if not isinstance(self.content, QuizContent):
            raise TypeError(f"Section {self.title!r} is not a quiz section")
        return self.content

    def enable_navigation(self) -> None:
        self.nav_enabled = True
