"""The study-flow state machine.

``StudyFlowController`` owns the ordered sections built from a study plan,
the current position, and the quiz sub-state.  It is a pure, synchronous
core: it renders nothing and never sleeps.  Visual transitions belong to
the presentation layer (see ``sequential_study.presentation.session``).

States::

    Viewing(i) --advance, i < last--> Viewing(i + 1)
    Viewing(i) --advance, i = last--> Completed (completion handler fired)
    Viewing(i) --retreat, i > 0-----> Viewing(i - 1)
    Viewing(0) --retreat------------> Viewing(0)

    AnsweringQuestion(q) --submit--> ShowingFeedback(q)
    ShowingFeedback(q), q < last --next--> AnsweringQuestion(q + 1)
    ShowingFeedback(last) --next--> Finished (navigation enabled)

Preconditions are checked here rather than trusted to the UI: forward
navigation from a section whose ``nav_enabled`` is false returns
``NavigationSignal.BLOCKED``, and a question accepts exactly one answer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from sequential_study.domain.entities import QuizContent, Section
from sequential_study.domain.enums import NavigationSignal, QuizPhase, QuizSignal, SectionKind
from sequential_study.domain.events import (
    AnswerGraded,
    DomainEvent,
    NavigationBlocked,
    QuizCompleted,
    SectionEntered,
    StudyCompleted,
)
from sequential_study.domain.exceptions import (
    AnswerAlreadySubmittedError,
    InvalidNavigationError,
)
from sequential_study.domain.values import AnswerFeedback, GradeResult, QuizStep, StudyPlanDocument
from sequential_study.services.grading import grade_answer, tally
from sequential_study.services.sections import build_sections

if TYPE_CHECKING:
    from sequential_study.infrastructure.event_bus import EventBus

logger = logging.getLogger(__name__)

CompletionHandler = Callable[[], None]


class StudyFlowController:
    """Sequential step-through of Explanation, Example and Quiz sections.

    Parameters
    ----------
    document:
        The study plan.  It is not copied; it must not change while the
        controller is alive.
    event_bus:
        Optional bus receiving ``SectionEntered``, ``NavigationBlocked``,
        ``AnswerGraded``, ``QuizCompleted`` and ``StudyCompleted`` events.
    source_id:
        Identifier stamped on every emitted event.
    """

    def __init__(
        self,
        document: StudyPlanDocument,
        event_bus: EventBus | None = None,
        source_id: str = "study-flow",
    ) -> None:
        self._document = document
        self._sections: list[Section] = build_sections(document)
        self._index = 0
        self._event_bus = event_bus
        self._source_id = source_id
        self._on_complete: CompletionHandler | None = None

    @classmethod
    def create(
        cls,
        document: StudyPlanDocument,
        event_bus: EventBus | None = None,
    ) -> StudyFlowController:
        """Build a controller positioned on the Explanation section."""
        controller = cls(document, event_bus=event_bus)
        logger.info(
            "Study flow created with sections: %s",
            ", ".join(s.kind.value for s in controller.sections),
        )
        return controller

    # -- queries --------------------------------------------------------------

    @property
    def document(self) -> StudyPlanDocument:
        return self._document

    @property
    def sections(self) -> Sequence[Section]:
        """The section list; its order never changes."""
        return tuple(self._sections)

    @property
    def current_section_index(self) -> int:
        return self._index

    @property
    def current_section(self) -> Section:
        return self._sections[self._index]

    def get_current_section(self) -> Section:
        """Return the section at the current index (always in bounds)."""
        return self.current_section

    @property
    def is_first_section(self) -> bool:
        return self._index == 0

    @property
    def is_last_section(self) -> bool:
        return self._index == len(self._sections) - 1

    @property
    def quiz_section(self) -> Section | None:
        """The Quiz section, if the document produced one."""
        for section in self._sections:
            if section.kind is SectionKind.QUIZ:
                return section
        return None

    # -- navigation -----------------------------------------------------------

    def set_completion_handler(self, handler: CompletionHandler | None) -> None:
        """Register the callback fired by ``advance()`` on the last section."""
        self._on_complete = handler

    def advance(self) -> NavigationSignal:
        """Move forward one section, or complete the study on the last one.

        Every call from the last section fires the completion handler again;
        completion is not deduplicated.
        """
        section = self.current_section
        if not section.nav_enabled:
            logger.warning(
                "Forward navigation blocked on section %d (%s)",
                self._index,
                section.kind.value,
            )
            self._emit(NavigationBlocked(
                source_id=self._source_id,
                section_index=self._index,
                kind=section.kind,
            ))
            return NavigationSignal.BLOCKED

        if self.is_last_section:
            logger.info("Study flow completed")
            self._emit(StudyCompleted(
                source_id=self._source_id,
                section_count=len(self._sections),
            ))
            if self._on_complete is not None:
                self._on_complete()
            return NavigationSignal.COMPLETED

        self._move_to(self._index + 1)
        return NavigationSignal.ADVANCED

    def retreat(self) -> NavigationSignal:
        """Move back one section; a no-op on the first section."""
        if self.is_first_section:
            return NavigationSignal.NO_OP
        self._move_to(self._index - 1)
        return NavigationSignal.RETREATED

    # -- quiz -----------------------------------------------------------------

    def submit_quiz_answer(self, candidate: str) -> GradeResult:
        """Grade *candidate* against the current question.

        Raises
        ------
        InvalidNavigationError
            If the current section is not the Quiz or the quiz has finished.
        AnswerAlreadySubmittedError
            If the current question was already answered.
        """
        quiz = self._require_quiz("submit_quiz_answer")
        progress = quiz.progress
        q_index = progress.current_question_index

        if progress.phase is QuizPhase.FINISHED:
            raise InvalidNavigationError(
                "Quiz already finished",
                action="submit_quiz_answer",
                section_index=self._index,
            )
        if progress.phase is QuizPhase.SHOWING_FEEDBACK:
            logger.warning("Rejected second answer for question %d", q_index)
            raise AnswerAlreadySubmittedError(
                f"Question {q_index + 1} was already answered",
                question_index=q_index,
                section_index=self._index,
            )

        question = quiz.current_question
        correct = grade_answer(question, candidate)
        progress.record_answer(AnswerFeedback(
            question_index=q_index,
            candidate=candidate,
            correct=correct,
            correct_answer=question.correct_answer,
        ))
        logger.debug(
            "Question %d graded %s (score %d/%d)",
            q_index,
            "correct" if correct else "incorrect",
            progress.score,
            progress.total,
        )
        self._emit(AnswerGraded(
            source_id=self._source_id,
            question_index=q_index,
            correct=correct,
            score=progress.score,
        ))
        return GradeResult(correct=correct, updated_score=progress.score)

    def advance_quiz_question(self) -> QuizStep:
        """Leave the feedback view: next question, or finish the quiz.

        Finishing computes the tally and permanently enables forward
        navigation on the Quiz section.
        """
        quiz = self._require_quiz("advance_quiz_question")
        progress = quiz.progress

        if progress.phase is QuizPhase.ANSWERING:
            raise InvalidNavigationError(
                "Current question has not been answered",
                action="advance_quiz_question",
                section_index=self._index,
            )
        if progress.phase is QuizPhase.FINISHED:
            raise InvalidNavigationError(
                "Quiz already finished",
                action="advance_quiz_question",
                section_index=self._index,
            )

        if not progress.is_last_question:
            progress.next_question()
            return QuizStep(signal=QuizSignal.NEXT_QUESTION)

        result = tally(progress.score, progress.total)
        progress.finish(result)
        self.current_section.enable_navigation()
        logger.info(
            "Quiz finished: %d/%d (%d%%)", result.score, result.total, result.percentage
        )
        self._emit(QuizCompleted(source_id=self._source_id, result=result))
        return QuizStep(signal=QuizSignal.QUIZ_FINISHED, result=result)

    # -- internal helpers -----------------------------------------------------

    def _require_quiz(self, action: str) -> QuizContent:
        section = self.current_section
        if section.kind is not SectionKind.QUIZ:
            logger.warning("%s rejected on %s section", action, section.kind.value)
            raise InvalidNavigationError(
                f"{action} is only valid on the quiz section",
                action=action,
                section_index=self._index,
            )
        return section.quiz

    def _move_to(self, index: int) -> None:
        previous = self._index
        self._index = index
        section = self._sections[index]
        logger.info("Entered section %d/%d: %s", index + 1, len(self._sections), section.title)
        self._emit(SectionEntered(
            source_id=self._source_id,
            section_index=index,
            previous_index=previous,
            kind=section.kind,
            title=section.title,
        ))

    def _emit(self, event: DomainEvent) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    def __repr__(self) -> str:
        return (
            f"StudyFlowController(section={self._index + 1}/{len(self._sections)}, "
            f"kind={self.current_section.kind.value})"
        )
