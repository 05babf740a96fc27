"""Domain exceptions for the sequential study flow.

All domain-specific exceptions inherit from ``StudyFlowError`` so callers
can catch the full family with a single ``except`` clause when needed.
"""

from __future__ import annotations

from typing import Any


class StudyFlowError(Exception):
    """Base exception for all study-flow errors."""

    def __init__(self, message: str = "", details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class MalformedDocumentError(StudyFlowError):
    """Raised when a study plan lacks fields a section needs.

    Parsing rejects documents that cannot be graded at all.  A multiple-choice
    question without options is only detected when its quiz view is rendered;
    callers should treat either case as fatal for the session.
    """

    def __init__(
        self,
        message: str = "Malformed study plan document",
        field_name: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field_name = field_name


class InvalidNavigationError(StudyFlowError):
    """Raised when an action is attempted outside its permitted state.

    Examples: submitting an answer while not on the Quiz section, or asking
    for the next question before the current one was answered.
    """

    def __init__(
        self,
        message: str = "Action not permitted in the current state",
        action: str = "",
        section_index: int = -1,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.action = action
        self.section_index = section_index


class AnswerAlreadySubmittedError(InvalidNavigationError):
    """Raised when the same quiz question receives a second answer."""

    def __init__(
        self,
        message: str = "Question already answered",
        question_index: int = -1,
        section_index: int = -1,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, "submit_quiz_answer", section_index, details)
        self.question_index = question_index


class TransitionInProgressError(StudyFlowError):
    """Raised when input arrives while a section transition is running."""

    def __init__(
        self,
        message: str = "A section transition is already in progress",
        action: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.action = action
