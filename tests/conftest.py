"""Shared fixtures for the sequential study test suite."""

from __future__ import annotations

from typing import Any

import pytest

from sequential_study.domain.enums import QuestionKind
from sequential_study.domain.values import (
    ConceptMap,
    QuizQuestion,
    StudyPlanDocument,
    WorkedExample,
)
from sequential_study.infrastructure.event_bus import EventBus, EventStore
from sequential_study.services.controller import StudyFlowController

# ---------------------------------------------------------------------------
# Value-object fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mc_question() -> QuizQuestion:
    """Multiple-choice question whose answer is "Paris"."""
    return QuizQuestion(
        text="Capital of France?",
        kind=QuestionKind.MULTIPLE_CHOICE,
        correct_answer="Paris",
        options=("London", "Paris", "Rome"),
        difficulty_rating=2,
    )


@pytest.fixture
def short_question() -> QuizQuestion:
    """Short-answer question whose answer is "photosynthesis"."""
    return QuizQuestion(
        text="How do plants make food?",
        kind=QuestionKind.SHORT_ANSWER,
        correct_answer="photosynthesis",
    )


@pytest.fixture
def worked_example() -> WorkedExample:
    return WorkedExample(
        title="Adding fractions",
        problem_text="1/2 + 1/4",
        steps=("Common denominator 4", "2/4 + 1/4"),
        final_result="3/4",
    )


@pytest.fixture
def full_document(
    mc_question: QuizQuestion,
    short_question: QuizQuestion,
    worked_example: WorkedExample,
) -> StudyPlanDocument:
    """Document with examples and four questions (only three are used)."""
    return StudyPlanDocument(
        summary="Plants use **light** to make sugar.",
        concept_map=ConceptMap(main_topic="Biology", subtopics=("Cells", "Energy")),
        learning_objectives=("Explain photosynthesis",),
        worked_examples=(worked_example,),
        quiz_questions=(
            mc_question,
            short_question,
            QuizQuestion("2 + 2?", QuestionKind.SHORT_ANSWER, "4"),
            QuizQuestion("Unused?", QuestionKind.SHORT_ANSWER, "never shown"),
        ),
    )


@pytest.fixture
def explanation_only() -> StudyPlanDocument:
    return StudyPlanDocument(summary="Just the summary.")


@pytest.fixture
def raw_document() -> dict[str, Any]:
    """A study plan as the generator emits it."""
    return {
        "summary": "Summary text",
        "concept_map": {"main_topic": "Algebra", "subtopics": ["Variables", "Equations"]},
        "learning_objectives": ["Solve linear equations"],
        "worked_examples": [
            {
                "title": "Solve for x",
                "problem_statement": "2x = 4",
                "step_by_step_solution": [{"step": "Divide by 2"}, "x = 2"],
                "final_result": "x = 2",
            }
        ],
        "active_recall": [
            {
                "question": "What is x if 3x = 9?",
                "type": "multiple_choice",
                "options": ["1", "3", "9"],
                "answer": "3",
                "difficulty_rating": 4,
            },
            {"question": "Name the unknown.", "type": "short_answer", "answer": "variable"},
        ],
    }


# ---------------------------------------------------------------------------
# Infrastructure / service fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def event_store(event_bus: EventBus) -> EventStore:
    """Store subscribed to every event on ``event_bus``."""
    store = EventStore()
    event_bus.subscribe_all(store.append)
    return store


@pytest.fixture
def controller(full_document: StudyPlanDocument, event_bus: EventBus) -> StudyFlowController:
    return StudyFlowController.create(full_document, event_bus=event_bus)


@pytest.fixture
def quiz_controller(controller: StudyFlowController) -> StudyFlowController:
    """Controller positioned on the Quiz section."""
    controller.advance()
    controller.advance()
    return controller
