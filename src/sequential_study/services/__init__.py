"""Service layer: section construction, grading, and the flow controller."""

from sequential_study.services.controller import StudyFlowController
from sequential_study.services.grading import grade_answer, percentage, performance_message, tally
from sequential_study.services.sections import MAX_QUIZ_QUESTIONS, build_sections

__all__ = [
    "StudyFlowController",
    "build_sections",
    "MAX_QUIZ_QUESTIONS",
    "grade_answer",
    "percentage",
    "performance_message",
    "tally",
]
