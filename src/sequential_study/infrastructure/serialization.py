"""Serialization utilities for study plans and section state.

Study plans arrive as JSON or YAML mappings produced by different
generators, so ``document_from_dict`` accepts several spellings for each
field (``worked_examples`` / ``workedExamples``, ``answer`` /
``correct_answer`` ...) and normalises them into frozen domain values.
``sections_to_json`` goes the other way and dumps the live section list,
including quiz progress, for debugging and export.

``from_dict`` reconstructors accept permissive input and raise
``MalformedDocumentError`` only for data that cannot be graded or
displayed at all.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from sequential_study.domain.entities import QuizContent, Section
from sequential_study.domain.enums import QuestionKind
from sequential_study.domain.exceptions import MalformedDocumentError
from sequential_study.domain.values import (
    ConceptMap,
    ExampleContent,
    ExplanationContent,
    QuizQuestion,
    StudyPlanDocument,
    WorkedExample,
)

logger = logging.getLogger(__name__)

DEFAULT_MAIN_CONCEPT = "Main Concept"

# =========================================================================== #
#  Generic helpers                                                             #
# =========================================================================== #

def _first(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present with a non-empty value."""
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return value
    return default


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _strings(seq: Any) -> tuple[str, ...]:
    if not seq:
        return ()
    if isinstance(seq, str):
        return (seq,)
    return tuple(_text(x) for x in seq)


def _parse_kind(raw: Any) -> QuestionKind:
    norm = _text(raw).strip().lower().replace("-", "_").replace(" ", "_")
    if norm in ("multiple_choice", "multiplechoice"):
        return QuestionKind.MULTIPLE_CHOICE
    return QuestionKind.SHORT_ANSWER


# =========================================================================== #
#  Document parsing                                                            #
# =========================================================================== #

def concept_map_from_data(data: Any) -> ConceptMap | None:
    """Accept ``{main_topic, subtopics}`` or a list of ``{concept}`` entries."""
    if not data:
        return None
    if isinstance(data, Mapping):
        main = _first(data, "main_topic", "mainTopic")
        if main is None:
            return None
        return ConceptMap(
            main_topic=_text(main),
            subtopics=_strings(data.get("subtopics")),
            hierarchical=True,
        )
    if isinstance(data, Sequence) and not isinstance(data, str):
        concepts = [
            _text(item.get("concept")) if isinstance(item, Mapping) else _text(item)
            for item in data
        ]
        return ConceptMap(
            main_topic=concepts[0] or DEFAULT_MAIN_CONCEPT,
            subtopics=tuple(concepts[1:]),
            hierarchical=False,
        )
    raise MalformedDocumentError(
        f"concept_map must be a mapping or a list, got {type(data).__name__}",
        field_name="concept_map",
    )


def _step_text(step: Any) -> str:
    if isinstance(step, Mapping):
        return _text(_first(step, "step", "stepText", "step_text", default=""))
    return _text(step)


def worked_example_from_dict(data: Mapping[str, Any]) -> WorkedExample:
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(
            "worked example must be a mapping", field_name="worked_examples"
        )
    steps_raw = _first(data, "step_by_step_solution", "steps")
    steps = (
        tuple(_step_text(s) for s in steps_raw)
        if isinstance(steps_raw, Sequence) and not isinstance(steps_raw, str)
        else ()
    )
    return WorkedExample(
        title=_text(data.get("title")),
        problem_text=_text(
            _first(data, "problem_statement", "problem", "content", "problemText", default="")
        ),
        steps=steps,
        solution_text=_text(_first(data, "solution", "solutionText", default="")),
        final_result=_text(_first(data, "final_result", "finalResult", default="")),
    )


def quiz_question_from_dict(data: Mapping[str, Any], index: int = 0) -> QuizQuestion:
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(
            f"quiz question {index} must be a mapping", field_name="quiz_questions"
        )
    answer = _first(data, "answer", "correct_answer", "correctAnswer")
    if answer is None:
        raise MalformedDocumentError(
            f"quiz question {index} has no correct answer",
            field_name="correct_answer",
            details={"question_index": index},
        )
    options = data.get("options")
    rating = _first(data, "difficulty_rating", "difficultyRating")
    try:
        return QuizQuestion(
            text=_text(_first(data, "question", "text", default="")),
            kind=_parse_kind(_first(data, "type", "kind", default="")),
            correct_answer=_text(answer),
            options=_strings(options) if options else None,
            difficulty_rating=int(rating) if rating is not None else None,
        )
    except (TypeError, ValueError) as exc:
        raise MalformedDocumentError(
            f"quiz question {index}: {exc}",
            field_name="difficulty_rating",
            details={"question_index": index},
        ) from exc


def document_from_dict(data: Mapping[str, Any]) -> StudyPlanDocument:
    """Normalise a raw study-plan mapping into a ``StudyPlanDocument``."""
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(
            f"study plan must be a mapping, got {type(data).__name__}"
        )
    examples = _first(data, "worked_examples", "workedExamples", default=[])
    questions = _first(data, "active_recall", "quiz_questions", "quizQuestions", default=[])
    document = StudyPlanDocument(
        summary=_text(data.get("summary")),
        concept_map=concept_map_from_data(_first(data, "concept_map", "conceptMap")),
        learning_objectives=_strings(
            _first(data, "learning_objectives", "learningObjectives", default=[])
        ),
        worked_examples=tuple(worked_example_from_dict(e) for e in examples),
        quiz_questions=tuple(
            quiz_question_from_dict(q, i) for i, q in enumerate(questions)
        ),
    )
    logger.debug(
        "Parsed study plan: %d examples, %d questions",
        len(document.worked_examples),
        len(document.quiz_questions),
    )
    return document


def document_from_json(json_str: str) -> StudyPlanDocument:
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise MalformedDocumentError(f"invalid JSON: {exc}") from exc
    return document_from_dict(data)


def document_from_yaml(yaml_str: str) -> StudyPlanDocument:
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(f"invalid YAML: {exc}") from exc
    return document_from_dict(data)


def load_document(path: str | Path) -> StudyPlanDocument:
    """Read a study plan from a ``.json``, ``.yaml`` or ``.yml`` file."""
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in (".yaml", ".yml"):
        return document_from_yaml(text)
    return document_from_json(text)


# =========================================================================== #
#  Outbound                                                                    #
# =========================================================================== #

def concept_map_to_data(cm: ConceptMap) -> dict[str, Any] | list[dict[str, str]]:
    """Emit the form *cm* was read from: a mapping, or the flat concept list."""
    if not cm.hierarchical:
        return [{"concept": c} for c in (cm.main_topic, *cm.subtopics)]
    return {"main_topic": cm.main_topic, "subtopics": list(cm.subtopics)}


def worked_example_to_dict(ex: WorkedExample) -> dict[str, Any]:
    return {
        "title": ex.title,
        "problem_statement": ex.problem_text,
        "step_by_step_solution": [{"step": s} for s in ex.steps],
        "solution": ex.solution_text,
        "final_result": ex.final_result,
    }


def quiz_question_to_dict(q: QuizQuestion) -> dict[str, Any]:
    return {
        "question": q.text,
        "type": q.kind.value,
        "options": list(q.options) if q.options is not None else None,
        "answer": q.correct_answer,
        "difficulty_rating": q.difficulty_rating,
    }


def document_to_dict(doc: StudyPlanDocument) -> dict[str, Any]:
    return {
        "summary": doc.summary,
        "concept_map": concept_map_to_data(doc.concept_map) if doc.concept_map else None,
        "learning_objectives": list(doc.learning_objectives),
        "worked_examples": [worked_example_to_dict(e) for e in doc.worked_examples],
        "quiz_questions": [quiz_question_to_dict(q) for q in doc.quiz_questions],
    }


def section_to_dict(section: Section) -> dict[str, Any]:
    """Dump a section, including live quiz progress."""
    content = section.content
    if isinstance(content, ExplanationContent):
        body: dict[str, Any] = {
            "summary": content.summary,
            "concept_map": (
                concept_map_to_data(content.concept_map) if content.concept_map else None
            ),
            "objectives": list(content.objectives),
        }
    elif isinstance(content, ExampleContent):
        body = {"examples": [worked_example_to_dict(e) for e in content.examples]}
    elif isinstance(content, QuizContent):
        progress = content.progress
        body = {
            "questions": [quiz_question_to_dict(q) for q in content.questions],
            "current_question": progress.current_question_index,
            "score": progress.score,
            "phase": progress.phase.value,
        }
    else:
        raise TypeError(f"Unknown section content {type(content).__name__}")
    return {
        "title": section.title,
        "type": section.kind.value,
        "content": body,
        "next_button": {"text": section.next_label, "enabled": section.nav_enabled},
    }


def sections_to_json(sections: Sequence[Section], *, indent: int | None = 2) -> str:
    """Serialize the full section list to a JSON string."""
    return json.dumps([section_to_dict(s) for s in sections], indent=indent)
