"""HTML rendering of the study flow.

:class:`HtmlRenderer` turns the controller's current state into a markup
fragment.  Rendering is a pure function of the state: the renderer holds no
state of its own, so the same controller always produces the same markup.

Interactive elements carry a ``data-action`` attribute (``prev``, ``next``,
``answer``, ``submit``, ``next-question``) that a host page wires to the
matching :class:`~sequential_study.presentation.session.StudySession`
method.
"""

from __future__ import annotations

import io
import logging
import re

from sequential_study.domain.entities import QuizContent, Section
from sequential_study.domain.enums import QuizPhase
from sequential_study.domain.exceptions import MalformedDocumentError, StudyFlowError
from sequential_study.domain.values import (
    MAX_DIFFICULTY,
    AnswerFeedback,
    ConceptMap,
    ExampleContent,
    ExplanationContent,
    QuizQuestion,
    QuizResult,
    WorkedExample,
)
from sequential_study.services.controller import StudyFlowController

logger = logging.getLogger(__name__)

NO_SUBTOPICS = "No subtopics available"
NO_EXAMPLES = "No examples generated specifically for this topic."
NO_PROBLEM = "Problem statement not available."
NO_SOLUTION = "Solution not available."

_BOLD_RE = re.compile(r"\*\*(.+?)\*\*")


def html_escape(text: str) -> str:
    """Minimal HTML escaping."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def format_summary(text: str) -> str:
    """Escape *text*, then turn ``**bold**`` into ``<strong>`` and newlines into ``<br>``."""
    escaped = html_escape(text)
    escaped = _BOLD_RE.sub(r"<strong>\1</strong>", escaped)
    return escaped.replace("\n", "<br>")


def option_letter(index: int) -> str:
    return chr(ord("A") + index)


class HtmlRenderer:
    """Render sections, quiz views and results as HTML fragments."""

    # -- full view ------------------------------------------------------------

    def render(self, controller: StudyFlowController) -> str:
        """Render the current section with progress bar and navigation."""
        return self.render_section(
            controller.current_section,
            controller.current_section_index,
            len(controller.sections),
        )

    def render_section(self, section: Section, index: int, total: int) -> str:
        buf = io.StringIO()
        buf.write(f'<div class="sequential-section" data-section="{section.kind.value}">\n')
        buf.write(self.render_progress(index, total))
        buf.write(
            '  <div class="mb-10">\n'
            f'    <h2 class="text-3xl font-bold text-gray-900 mb-2 tracking-tight">'
            f"{html_escape(section.title)}</h2>\n"
            "  </div>\n"
        )
        buf.write('  <div class="section-content mb-10">\n')
        buf.write(self.render_content(section))
        buf.write("  </div>\n")
        buf.write(self.render_navigation(section, index))
        buf.write("</div>\n")
        return buf.getvalue()

    def render_progress(self, index: int, total: int) -> str:
        buf = io.StringIO()
        buf.write('  <div class="flex items-center justify-between mb-8">\n')
        buf.write('    <div class="flex items-center gap-2">')
        for i in range(total):
            if i == index:
                css = "w-12 bg-blue-600"
            elif i < index:
                css = "w-8 bg-blue-400"
            else:
                css = "w-8 bg-gray-200"
            buf.write(f'<div class="h-1.5 rounded-full {css}"></div>')
        buf.write("</div>\n")
        buf.write(
            '    <span class="text-xs font-bold text-gray-400 uppercase tracking-wide">'
            f"Step {index + 1} of {total}</span>\n"
        )
        buf.write("  </div>\n")
        return buf.getvalue()

    def render_navigation(self, section: Section, index: int) -> str:
        buf = io.StringIO()
        buf.write('  <div class="flex items-center justify-between mt-12 pt-8 border-t border-gray-100">\n')
        buf.write("    <div>")
        if index > 0:
            buf.write(
                '<button id="back-btn" data-action="prev" '
                'class="px-6 py-3 rounded-xl text-gray-500 font-bold">Back</button>'
            )
        buf.write("</div>\n")
        disabled = "" if section.nav_enabled else " disabled"
        extra = "" if section.nav_enabled else " opacity-50 cursor-not-allowed"
        buf.write(
            f'    <button id="continue-btn" data-action="next" '
            f'class="px-8 py-4 rounded-2xl bg-primary text-white font-bold{extra}"{disabled}>'
            f"{html_escape(section.next_label)}</button>\n"
        )
        buf.write("  </div>\n")
        return buf.getvalue()

    def render_content(self, section: Section) -> str:
        content = section.content
        if isinstance(content, ExplanationContent):
            return self.render_explanation(content)
        if isinstance(content, ExampleContent):
            return self.render_examples(content)
        if isinstance(content, QuizContent):
            return self.render_quiz(content)
        raise TypeError(f"Unknown section content {type(content).__name__}")

    # -- explanation ----------------------------------------------------------

    def render_explanation(self, content: ExplanationContent) -> str:
        buf = io.StringIO()
        if content.objectives:
            buf.write('<div class="learning-objectives">\n')
            buf.write('  <h4 class="text-xs font-bold uppercase">Learning Objectives</h4>\n  <ul>\n')
            for obj in content.objectives:
                buf.write(f"    <li>{html_escape(obj)}</li>\n")
            buf.write("  </ul>\n</div>\n")
        if content.concept_map is not None:
            buf.write(self.render_concept_map(content.concept_map))
        buf.write('<div class="key-concepts">\n')
        buf.write('  <h3 class="text-lg font-bold text-gray-900">Key Concepts</h3>\n')
        buf.write(f'  <div class="prose">{format_summary(content.summary)}</div>\n')
        buf.write("</div>\n")
        return buf.getvalue()

    def render_concept_map(self, concept_map: ConceptMap) -> str:
        buf = io.StringIO()
        buf.write('<div class="concept-tree">\n')
        buf.write(
            f'  <div class="concept-node main">{html_escape(concept_map.main_topic)}</div>\n'
        )
        if concept_map.subtopics:
            buf.write('  <div class="concept-branches">\n')
            for topic in concept_map.subtopics:
                buf.write(f'    <div class="concept-node">{html_escape(topic)}</div>\n')
            buf.write("  </div>\n")
        elif concept_map.hierarchical:
            buf.write(f'  <p class="text-gray-400 text-sm italic">{NO_SUBTOPICS}</p>\n')
        buf.write("</div>\n")
        return buf.getvalue()

    # -- examples -------------------------------------------------------------

    def render_examples(self, content: ExampleContent) -> str:
        if not content.examples:
            return f'<div class="text-center py-12"><p class="text-gray-500">{NO_EXAMPLES}</p></div>\n'
        return "".join(
            self.render_example(ex, n) for n, ex in enumerate(content.examples, start=1)
        )

    def render_example(self, example: WorkedExample, number: int) -> str:
        title = example.title or f"Example {number}"
        problem = example.problem_text or NO_PROBLEM
        buf = io.StringIO()
        buf.write('<div class="worked-example">\n')
        buf.write(f'  <h4 class="text-xl font-bold">{html_escape(title)}</h4>\n')
        buf.write(f'  <div class="problem font-mono">{html_escape(problem)}</div>\n')
        buf.write('  <div class="solution">\n')
        if example.has_steps:
            for s_idx, step in enumerate(example.steps, start=1):
                buf.write(
                    f'    <div class="step"><strong>Step {s_idx}</strong> '
                    f"{html_escape(step)}</div>\n"
                )
        else:
            solution = example.solution_text or NO_SOLUTION
            buf.write(f"    <p>{html_escape(solution)}</p>\n")
        buf.write("  </div>\n")
        if example.final_result:
            buf.write(
                f'  <div class="final-result">Result: {html_escape(example.final_result)}</div>\n'
            )
        buf.write("</div>\n")
        return buf.getvalue()

    # -- quiz -----------------------------------------------------------------

    def render_quiz(self, quiz: QuizContent) -> str:
        """Render the quiz according to its phase."""
        progress = quiz.progress
        if progress.phase is QuizPhase.FINISHED:
            if progress.result is None:
                raise StudyFlowError("Quiz finished without a result")
            return self.render_results(progress.result)

        total = len(quiz.questions)
        q_index = progress.current_question_index
        feedback = None
        if progress.phase is QuizPhase.SHOWING_FEEDBACK:
            if progress.feedback is None:
                raise StudyFlowError(
                    "Quiz is showing feedback without a graded answer",
                    details={"question_index": q_index},
                )
            feedback = progress.feedback
        markup = self.render_question(quiz.current_question, q_index, total, feedback)
        if feedback is not None:
            markup += self.render_feedback(feedback, progress.is_last_question)
        return markup

    def render_question(
        self,
        question: QuizQuestion,
        index: int,
        total: int,
        feedback: AnswerFeedback | None = None,
    ) -> str:
        """Render a question; with *feedback* the inputs are locked."""
        options = question.options
        if question.is_multiple_choice and not options:
            logger.warning("Multiple-choice question %d has no options", index)
            raise MalformedDocumentError(
                f"Question {index + 1} is multiple choice but has no options",
                field_name="options",
                details={"question_index": index},
            )
        buf = io.StringIO()
        buf.write('<div id="quiz-container">\n')
        buf.write(
            f'  <div class="quiz-header"><span class="question-number">Q{index + 1}</span> '
            f"<span>of {total} Questions</span> "
            f"{self.render_stars(question.stars)}</div>\n"
        )
        buf.write(f'  <h4 class="text-2xl font-bold">{html_escape(question.text)}</h4>\n')
        buf.write('  <div id="quiz-options">\n')
        if question.is_multiple_choice:
            for idx, option in enumerate(options or ()):
                buf.write(
                    f'    <button class="{self._option_class(option, feedback)}" '
                    f'data-action="answer" data-answer="{html_escape(option)}"'
                    f'{" disabled" if feedback else ""}>'
                    f'<span class="option-letter">{option_letter(idx)}</span> '
                    f"{html_escape(option)}</button>\n"
                )
        elif feedback is None:
            buf.write(
                '    <textarea id="short-answer" placeholder="Type your answer here..."></textarea>\n'
                '    <button id="submit-answer" data-action="submit">Submit Answer</button>\n'
            )
        else:
            buf.write(
                '    <textarea id="short-answer" class="opacity-75" disabled>'
                f"{html_escape(feedback.candidate)}</textarea>\n"
            )
        buf.write("  </div>\n</div>\n")
        return buf.getvalue()

    def render_stars(self, rating: int) -> str:
        stars = "".join(
            f'<span class="star {"text-yellow-400" if i < rating else "text-gray-200"}">star</span>'
            for i in range(MAX_DIFFICULTY)
        )
        return f'<div class="difficulty" data-rating="{rating}">{stars}</div>'

    @staticmethod
    def _option_class(option: str, feedback: AnswerFeedback | None) -> str:
        if feedback is None:
            return "quiz-option"
        if option == feedback.candidate:
            border = "border-green-500" if feedback.correct else "border-red-500"
            return f"quiz-option selected {border} pointer-events-none"
        return "quiz-option opacity-50 pointer-events-none"

    def render_feedback(self, feedback: AnswerFeedback, is_last: bool) -> str:
        css = "correct" if feedback.correct else "incorrect"
        heading = "Correct Answer!" if feedback.correct else "Incorrect"
        if feedback.correct:
            detail = "Excellent work! You nailed it."
        else:
            detail = f"The correct answer is: <strong>{html_escape(feedback.correct_answer)}</strong>"
        button = "View Results" if is_last else "Next Question"
        return (
            f'<div id="quiz-feedback" class="feedback {css}">\n'
            f'  <h5 class="font-bold">{heading}</h5>\n'
            f"  <p>{detail}</p>\n"
            f'  <button id="next-question-btn" data-action="next-question">{button}</button>\n'
            "</div>\n"
        )

    def render_results(self, result: QuizResult) -> str:
        return (
            '<div id="quiz-results" class="text-center">\n'
            '  <h3 class="text-3xl font-bold">Quiz Complete!</h3>\n'
            f'  <p class="score">{result.score}/{result.total}</p>\n'
            f'  <p class="percentage">{result.percentage}%</p>\n'
            f'  <p class="message">{html_escape(result.message)}</p>\n'
            "</div>\n"
        )
