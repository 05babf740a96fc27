"""Sequential study flow.

Turns a study plan (summary, concept map, worked examples, quiz questions)
into an ordered Explanation -> Example -> Quiz walkthrough with gated
navigation and a graded quiz.
"""

__version__ = "0.1.0"

from sequential_study.domain import StudyPlanDocument
from sequential_study.infrastructure.serialization import document_from_dict, load_document
from sequential_study.services.controller import StudyFlowController

__all__ = [
    "StudyFlowController",
    "StudyPlanDocument",
    "document_from_dict",
    "load_document",
]
