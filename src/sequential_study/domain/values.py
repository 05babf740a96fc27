"""Value objects for the sequential study flow.

All types here are frozen dataclasses -- immutable, compared by value.
They represent the externally supplied study plan document and the
results produced by grading and quiz completion.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import QuestionKind, QuizSignal

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_DIFFICULTY = 3

# ---------------------------------------------------------------------------
# Study plan document
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConceptMap:
    """A main topic with its ordered subtopics.

    ``hierarchical`` records whether the map arrived as a
    ``{main_topic, subtopics}`` mapping or as the flat fallback list of
    concepts; the two forms render slightly differently.
    """

    main_topic: str
    subtopics: tuple[str, ...] = ()
    hierarchical: bool = True


@dataclass(frozen=True)
class WorkedExample:
    """A worked example: a problem followed by steps or a prose solution."""

    problem_text: str
    title: str = ""
    steps: tuple[str, ...] = ()
    solution_text: str = ""
    final_result: str = ""

    @property
    def has_steps(self) -> bool:
        return len(self.steps) > 0


@dataclass(frozen=True)
class QuizQuestion:
    """A single quiz question.

    ``options`` is required for multiple-choice questions; its absence is
    only reported when the question is rendered.
    """

    text: str
    kind: QuestionKind
    correct_answer: str
    options: tuple[str, ...] | None = None
    difficulty_rating: int | None = None

    def __post_init__(self) -> None:
        if self.difficulty_rating is not None and not (
            MIN_DIFFICULTY <= self.difficulty_rating <= MAX_DIFFICULTY
        ):
            raise ValueError(
                f"difficulty_rating must be in [{MIN_DIFFICULTY}, {MAX_DIFFICULTY}], "
                f"got {self.difficulty_rating}"
            )

    @property
    def is_multiple_choice(self) -> bool:
        return self.kind is QuestionKind.MULTIPLE_CHOICE

    @property
    def stars(self) -> int:
        """Difficulty rating used for display (defaults to 3)."""
        return self.difficulty_rating or DEFAULT_DIFFICULTY


@dataclass(frozen=True)
class StudyPlanDocument:
    """The content payload driving section construction.

    Immutable for the lifetime of any controller built from it.
    """

    summary: str = ""
    concept_map: ConceptMap | None = None
    learning_objectives: tuple[str, ...] = ()
    worked_examples: tuple[WorkedExample, ...] = ()
    quiz_questions: tuple[QuizQuestion, ...] = ()


# ---------------------------------------------------------------------------
# Section content (immutable variants)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExplanationContent:
    """Content of the Explanation section."""

    summary: str = ""
    concept_map: ConceptMap | None = None
    objectives: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExampleContent:
    """Content of the Example section."""

    examples: tuple[WorkedExample, ...] = ()


# ---------------------------------------------------------------------------
# Grading and quiz results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GradeResult:
    """Result of submitting one quiz answer."""

    correct: bool
    updated_score: int


@dataclass(frozen=True)
class AnswerFeedback:
    """What the learner submitted for the current question and how it graded."""

    question_index: int
    candidate: str
    correct: bool
    correct_answer: str


@dataclass(frozen=True)
class QuizResult:
    """Final tally of a finished quiz."""

    score: int
    total: int
    percentage: int
    message: str = ""

    def __post_init__(self) -> None:
        if self.total < 1:
            raise ValueError(f"total must be >= 1, got {self.total}")
        if not 0 <= self.score <= self.total:
            raise ValueError(
                f"score must be in [0, {self.total}], got {self.score}"
            )


@dataclass(frozen=True)
class QuizStep:
    """Outcome of ``advance_quiz_question``; ``result`` is set on finish."""

    signal: QuizSignal
    result: QuizResult | None = None

