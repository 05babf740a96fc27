"""Domain events for the sequential study flow.

Every event is a frozen dataclass inheriting from ``DomainEvent``.  The
controller emits events; listeners (logging, progress tracking,
presentation) react.  All events carry a ``timestamp`` and a
``source_id`` identifying the emitting controller.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .enums import SectionKind
from .values import QuizResult

# ---------------------------------------------------------------------------
# Base event
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    timestamp: float = field(default_factory=time.time)
    source_id: str = ""


# ---------------------------------------------------------------------------
# Navigation events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SectionEntered(DomainEvent):
    """The controller moved onto a section."""

    section_index: int = 0
    previous_index: int = 0
    kind: SectionKind | None = None
    title: str = ""


@dataclass(frozen=True)
class NavigationBlocked(DomainEvent):
    """A forward request was rejected because navigation is not enabled."""

    section_index: int = 0
    kind: SectionKind | None = None


@dataclass(frozen=True)
class StudyCompleted(DomainEvent):
    """Forward navigation was requested from the last section."""

    section_count: int = 0


# ---------------------------------------------------------------------------
# Quiz events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnswerGraded(DomainEvent):
    """A quiz answer was graded."""

    question_index: int = 0
    correct: bool = False
    score: int = 0


@dataclass(frozen=True)
class QuizCompleted(DomainEvent):
    """All quiz questions were answered and the tally was computed."""

    result: QuizResult | None = None
