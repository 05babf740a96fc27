"""Rich-based console output for the study flow.

:class:`StudyConsole` prints the section outline, the current section and
quiz results.  :func:`run_walkthrough` steps a controller through a whole
document in the terminal, reading answers through an ``ask`` callable so
it can be driven from tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sequential_study.domain.entities import QuizContent, Section
from sequential_study.domain.enums import NavigationSignal, QuizSignal
from sequential_study.domain.exceptions import MalformedDocumentError, StudyFlowError
from sequential_study.domain.values import (
    ExampleContent,
    ExplanationContent,
    QuizQuestion,
    QuizResult,
)
from sequential_study.presentation.html import option_letter
from sequential_study.services.controller import StudyFlowController

logger = logging.getLogger(__name__)

AskFn = Callable[[str], str]


class StudyConsole:
    """Console presentation of sections and quiz state.

    Parameters
    ----------
    console:
        A ``rich`` console.  Defaults to one writing to stdout.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def console(self) -> Console:
        return self._console

    def print_outline(self, controller: StudyFlowController) -> None:
        """Print one row per section with its forward label and state."""
        table = Table(title="Study Plan", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right")
        table.add_column("Section", style="bold")
        table.add_column("Kind")
        table.add_column("Next")
        table.add_column("Nav", justify="center")
        for idx, section in enumerate(controller.sections):
            marker = "[green]>[/green] " if idx == controller.current_section_index else ""
            nav = "[green]on[/green]" if section.nav_enabled else "[red]off[/red]"
            table.add_row(
                f"{marker}{idx + 1}",
                escape(section.title),
                section.kind.value,
                escape(section.next_label),
                nav,
            )
        self._console.print(table)

    def print_section(self, controller: StudyFlowController) -> None:
        section = controller.current_section
        self._console.print()
        self._console.print(
            f"[dim]Step {controller.current_section_index + 1} of "
            f"{len(controller.sections)}[/dim]"
        )
        self._console.print(Panel(self._section_body(section), title=escape(section.title)))

    def print_question(self, question: QuizQuestion, index: int, total: int) -> None:
        if question.is_multiple_choice and not question.options:
            raise MalformedDocumentError(
                f"Question {index + 1} is multiple choice but has no options",
                field_name="options",
                details={"question_index": index},
            )
        stars = "*" * question.stars
        self._console.print(f"[bold]Q{index + 1}[/bold] of {total} Questions  [yellow]{stars}[/yellow]")
        self._console.print(question.text, markup=False)
        for idx, option in enumerate(question.options or ()):
            self._console.print(f"  {option_letter(idx)}. {escape(option)}")

    def print_feedback(self, correct: bool, correct_answer: str) -> None:
        if correct:
            self._console.print("[green]Correct Answer![/green]")
            self._console.print("Excellent work! You nailed it.")
        else:
            self._console.print("[red]Incorrect[/red]")
            self._console.print(f"The correct answer is: [bold]{escape(correct_answer)}[/bold]")

    def print_results(self, result: QuizResult) -> None:
        table = Table(title="Quiz Complete!", show_header=False)
        table.add_column("Field", style="dim")
        table.add_column("Value", justify="right")
        table.add_row("Score", f"{result.score}/{result.total}")
        table.add_row("Percentage", f"{result.percentage}%")
        self._console.print(table)
        self._console.print(f"[bold]{escape(result.message)}[/bold]")

    def _section_body(self, section: Section) -> Any:
        content = section.content
        if isinstance(content, ExplanationContent):
            lines = []
            if content.objectives:
                lines.append("**Learning Objectives**\n")
                lines.extend(f"- {obj}" for obj in content.objectives)
                lines.append("")
            if content.concept_map is not None:
                cm = content.concept_map
                lines.append(f"**Concept Map:** {cm.main_topic}")
                lines.extend(f"  - {topic}" for topic in cm.subtopics)
                lines.append("")
            lines.append(content.summary)
            return Markdown("\n".join(lines))
        if isinstance(content, ExampleContent):
            lines = []
            for n, ex in enumerate(content.examples, start=1):
                lines.append(f"### {ex.title or f'Example {n}'}")
                lines.append(ex.problem_text or "Problem statement not available.")
                if ex.has_steps:
                    lines.extend(f"{i}. {step}" for i, step in enumerate(ex.steps, start=1))
                else:
                    lines.append(ex.solution_text or "Solution not available.")
                if ex.final_result:
                    lines.append(f"\n**Result:** {ex.final_result}")
                lines.append("")
            return Markdown("\n".join(lines))
        if isinstance(content, QuizContent):
            return f"{len(content.questions)} question(s)"
        return ""


def _resolve_option(question: QuizQuestion, raw: str) -> str:
    """Map a letter answer (``a``, ``B``) onto the option text."""
    options = question.options or ()
    key = raw.strip().upper()
    if len(key) == 1 and key.isalpha():
        idx = ord(key) - ord("A")
        if 0 <= idx < len(options):
            return options[idx]
    return raw


def run_walkthrough(
    controller: StudyFlowController,
    study_console: StudyConsole,
    ask: AskFn,
) -> QuizResult | None:
    """Step through every section until the study completes.

    Returns the quiz result, or ``None`` for a document without a quiz.
    Blank answers are asked again.
    """
    result: QuizResult | None = None
    while True:
        study_console.print_section(controller)
        section = controller.current_section
        if isinstance(section.content, QuizContent) and not section.quiz.progress.is_finished:
            quiz = section.quiz
            while True:
                q_index = quiz.progress.current_question_index
                question = quiz.current_question
                study_console.print_question(question, q_index, len(quiz.questions))
                answer = ask("Your answer: ")
                if not answer.strip():
                    continue
                if question.is_multiple_choice:
                    answer = _resolve_option(question, answer)
                grade = controller.submit_quiz_answer(answer)
                study_console.print_feedback(grade.correct, question.correct_answer)
                step = controller.advance_quiz_question()
                if step.signal is QuizSignal.QUIZ_FINISHED:
                    result = step.result
                    if result is None:
                        raise StudyFlowError("Quiz finished without a result")
                    study_console.print_results(result)
                    break
        signal = controller.advance()
        if signal is NavigationSignal.COMPLETED:
            logger.info("Walkthrough finished")
            return result
