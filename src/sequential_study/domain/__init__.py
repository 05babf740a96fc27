"""Domain layer for the sequential study flow.

Re-exports all public domain types so that consumers can write::

    from sequential_study.domain import Section, SectionKind, StudyPlanDocument
"""

# -- Enumerations -------------------------------------------------------------
from .enums import (
    NavigationSignal,
    QuestionKind,
    QuizPhase,
    QuizSignal,
    SectionKind,
    TransitionPhase,
)

# -- Value Objects ------------------------------------------------------------
from .values import (
    AnswerFeedback,
    ConceptMap,
    ExampleContent,
    ExplanationContent,
    GradeResult,
    QuizQuestion,
    QuizResult,
    QuizStep,
    StudyPlanDocument,
    WorkedExample,
)

# -- Entities -----------------------------------------------------------------
from .entities import QuizContent, QuizProgress, Section, SectionContent

# -- Domain Events ------------------------------------------------------------
from .events import (
    AnswerGraded,
    DomainEvent,
    NavigationBlocked,
    QuizCompleted,
    SectionEntered,
    StudyCompleted,
)

# -- Exceptions ---------------------------------------------------------------
from .exceptions import (
    AnswerAlreadySubmittedError,
    InvalidNavigationError,
    MalformedDocumentError,
    StudyFlowError,
    TransitionInProgressError,
)

__all__ = [
    # enums
    "NavigationSignal",
    "QuestionKind",
    "QuizPhase",
    "QuizSignal",
    "SectionKind",
    "TransitionPhase",
    # values
    "AnswerFeedback",
    "ConceptMap",
    "ExampleContent",
    "ExplanationContent",
    "GradeResult",
    "QuizQuestion",
    "QuizResult",
    "QuizStep",
    "StudyPlanDocument",
    "WorkedExample",
    # entities
    "QuizContent",
    "QuizProgress",
    "Section",
    "SectionContent",
    # events
    "AnswerGraded",
    "DomainEvent",
    "NavigationBlocked",
    "QuizCompleted",
    "SectionEntered",
    "StudyCompleted",
    # exceptions
    "AnswerAlreadySubmittedError",
    "InvalidNavigationError",
    "MalformedDocumentError",
    "StudyFlowError",
    "TransitionInProgressError",
]
