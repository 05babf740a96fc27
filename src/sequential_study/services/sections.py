"""Section construction: Explanation -> [Example] -> [Quiz].

The Explanation section is always present and always first.  The Example
section exists only when the document has worked examples; the Quiz
section exists only when it has quiz questions, and keeps at most the first
three of them in their original order.
"""

from __future__ import annotations

from sequential_study.domain.entities import QuizContent, Section
from sequential_study.domain.enums import SectionKind
from sequential_study.domain.values import ExampleContent, ExplanationContent, StudyPlanDocument

MAX_QUIZ_QUESTIONS = 3

TITLES: dict[SectionKind, str] = {
    SectionKind.EXPLANATION: "Understanding the Concept",
    SectionKind.EXAMPLE: "See It in Action",
    SectionKind.QUIZ: "Test Your Understanding",
}

# Forward-button label, keyed by the kind of the *following* section.
_CONTINUE_LABELS: dict[SectionKind, str] = {
    SectionKind.EXAMPLE: "Continue to Examples",
    SectionKind.QUIZ: "Continue to Quiz",
}
FINISH_LABEL = "Finish Section"


def build_sections(document: StudyPlanDocument) -> list[Section]:
    """Derive the ordered section list for *document*."""
    kinds = [SectionKind.EXPLANATION]
    if document.worked_examples:
        kinds.append(SectionKind.EXAMPLE)
    if document.quiz_questions:
        kinds.append(SectionKind.QUIZ)

    sections: list[Section] = []
    for idx, kind in enumerate(kinds):
        following = kinds[idx + 1] if idx + 1 < len(kinds) else None
        label = _CONTINUE_LABELS[following] if following is not None else FINISH_LABEL
        if kind is SectionKind.EXPLANATION:
            content = ExplanationContent(
                summary=document.summary,
                concept_map=document.concept_map,
                objectives=document.learning_objectives,
            )
            sections.append(Section(TITLES[kind], kind, content, label))
        elif kind is SectionKind.EXAMPLE:
            content = ExampleContent(examples=document.worked_examples)
            sections.append(Section(TITLES[kind], kind, content, label))
        else:
            quiz = QuizContent(questions=document.quiz_questions[:MAX_QUIZ_QUESTIONS])
            sections.append(Section(TITLES[kind], kind, quiz, label, nav_enabled=False))
    return sections
