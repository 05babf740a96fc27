"""Tests for domain events and exceptions."""

from __future__ import annotations

import dataclasses

import pytest

from sequential_study.domain.enums import SectionKind
from sequential_study.domain.events import DomainEvent, SectionEntered, StudyCompleted
from sequential_study.domain.exceptions import (
    AnswerAlreadySubmittedError,
    InvalidNavigationError,
    MalformedDocumentError,
    StudyFlowError,
    TransitionInProgressError,
)


class TestEvents:
    """Test event construction."""

    def test_timestamp_defaults(self) -> None:
        event = StudyCompleted(source_id="s", section_count=3)
        assert event.timestamp > 0
        assert isinstance(event, DomainEvent)

    def test_frozen(self) -> None:
        event = SectionEntered(source_id="s", section_index=1, kind=SectionKind.EXAMPLE)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.section_index = 2  # type: ignore[misc]


class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc",
        [
            MalformedDocumentError("m"),
            InvalidNavigationError("m"),
            AnswerAlreadySubmittedError("m"),
            TransitionInProgressError("m"),
        ],
    )
    def test_all_derive_from_base(self, exc: Exception) -> None:
        assert isinstance(exc, StudyFlowError)

    def test_already_submitted_is_invalid_navigation(self) -> None:
        exc = AnswerAlreadySubmittedError("dup", question_index=1, section_index=2)
        assert isinstance(exc, InvalidNavigationError)
        assert exc.action == "submit_quiz_answer"
        assert exc.question_index == 1
        assert exc.section_index == 2

    def test_details_default_empty(self) -> None:
        assert StudyFlowError("x").details == {}

    def test_malformed_field_name(self) -> None:
        exc = MalformedDocumentError("bad", field_name="options", details={"question_index": 0})
        assert exc.field_name == "options"
        assert exc.details["question_index"] == 0
