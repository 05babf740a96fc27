"""Tests for HtmlRenderer markup."""

from __future__ import annotations

import pytest

from sequential_study.domain.entities import QuizContent
from sequential_study.domain.enums import QuestionKind, QuizPhase
from sequential_study.domain.exceptions import MalformedDocumentError, StudyFlowError
from sequential_study.domain.values import (
    AnswerFeedback,
    ConceptMap,
    ExampleContent,
    QuizQuestion,
    QuizResult,
    StudyPlanDocument,
    WorkedExample,
)
from sequential_study.presentation.html import HtmlRenderer, format_summary
from sequential_study.services.controller import StudyFlowController


@pytest.fixture
def renderer() -> HtmlRenderer:
    return HtmlRenderer()


class TestSectionView:
    """Test progress, header and navigation buttons."""

    def test_first_section(self, renderer: HtmlRenderer, controller: StudyFlowController) -> None:
        html = renderer.render(controller)
        assert "Step 1 of 3" in html
        assert "Understanding the Concept" in html
        assert 'data-action="prev"' not in html
        assert "Continue to Examples" in html
        assert " disabled" not in html

    def test_back_button_after_advance(
        self, renderer: HtmlRenderer, controller: StudyFlowController
    ) -> None:
        controller.advance()
        html = renderer.render(controller)
        assert "Step 2 of 3" in html
        assert 'data-action="prev"' in html

    def test_quiz_forward_disabled(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        html = renderer.render(quiz_controller)
        assert "Finish Section</button>" in html
        assert "cursor-not-allowed" in html
        assert " disabled>" in html

    def test_pure_function_of_state(
        self, renderer: HtmlRenderer, controller: StudyFlowController
    ) -> None:
        assert renderer.render(controller) == renderer.render(controller)


class TestExplanation:
    """Test summary formatting, objectives and concept maps."""

    def test_summary_bold_and_breaks(self) -> None:
        assert format_summary("a **b**\nc") == "a <strong>b</strong><br>c"

    def test_summary_escaped(self) -> None:
        assert format_summary("<script>") == "&lt;script&gt;"

    def test_objectives_and_map(
        self, renderer: HtmlRenderer, controller: StudyFlowController
    ) -> None:
        html = renderer.render(controller)
        assert "Explain photosynthesis" in html
        assert "Biology" in html
        assert "Cells" in html
        assert "<strong>light</strong>" in html

    def test_hierarchical_without_subtopics(self, renderer: HtmlRenderer) -> None:
        html = renderer.render_concept_map(ConceptMap(main_topic="Solo"))
        assert "No subtopics available" in html

    def test_flat_without_subtopics(self, renderer: HtmlRenderer) -> None:
        html = renderer.render_concept_map(ConceptMap(main_topic="Solo", hierarchical=False))
        assert "No subtopics available" not in html


class TestExamples:
    """Test worked example fallbacks."""

    def test_steps_and_result(self, renderer: HtmlRenderer, worked_example: WorkedExample) -> None:
        html = renderer.render_examples(ExampleContent((worked_example,)))
        assert "Adding fractions" in html
        assert "Step 1" in html and "Step 2" in html
        assert "Result: 3/4" in html

    def test_fallbacks(self, renderer: HtmlRenderer) -> None:
        html = renderer.render_examples(ExampleContent((WorkedExample(problem_text=""),)))
        assert "Example 1" in html
        assert "Problem statement not available." in html
        assert "Solution not available." in html
        assert "Result:" not in html

    def test_prose_solution(self, renderer: HtmlRenderer) -> None:
        html = renderer.render_example(WorkedExample("p", solution_text="Because."), 2)
        assert "Example 2" in html
        assert "Because." in html

    def test_no_examples(self, renderer: HtmlRenderer) -> None:
        assert "No examples generated" in renderer.render_examples(ExampleContent(()))


class TestQuizView:
    """Test question, feedback and results rendering."""

    def test_multiple_choice_question(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        html = renderer.render(quiz_controller)
        assert "Q1</span>" in html
        assert "of 3 Questions" in html
        assert 'data-rating="2"' in html
        assert html.count("text-yellow-400") == 2
        assert html.count("text-gray-200") == 3
        for letter in "ABC":
            assert f'option-letter">{letter}<' in html
        assert 'data-answer="Paris"' in html

    def test_short_answer_question(self, renderer: HtmlRenderer, short_question: QuizQuestion) -> None:
        html = renderer.render_question(short_question, 1, 3)
        assert "<textarea" in html
        assert 'data-action="submit"' in html
        assert 'data-rating="3"' in html

    def test_mc_without_options_raises(self, renderer: HtmlRenderer) -> None:
        q = QuizQuestion("q", QuestionKind.MULTIPLE_CHOICE, "a")
        with pytest.raises(MalformedDocumentError, match="no options"):
            renderer.render_question(q, 0, 1)

    def test_mc_without_options_raises_at_render_not_build(self, renderer: HtmlRenderer) -> None:
        doc = StudyPlanDocument(quiz_questions=(QuizQuestion("q", QuestionKind.MULTIPLE_CHOICE, "a"),))
        controller = StudyFlowController.create(doc)
        controller.advance()
        with pytest.raises(MalformedDocumentError):
            renderer.render(controller)

    def test_feedback_correct(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        quiz_controller.submit_quiz_answer("Paris")
        html = renderer.render(quiz_controller)
        assert "Correct Answer!" in html
        assert "Excellent work! You nailed it." in html
        assert "The correct answer is:" not in html
        assert "Next Question" in html

    def test_feedback_incorrect_shows_answer(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        quiz_controller.submit_quiz_answer("Rome")
        html = renderer.render(quiz_controller)
        assert "The correct answer is: <strong>Paris</strong>" in html
        assert "nailed it" not in html

    def test_feedback_locks_options(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        quiz_controller.submit_quiz_answer("Rome")
        html = renderer.render(quiz_controller)
        option_lines = [line for line in html.splitlines() if 'class="quiz-option' in line]
        assert len(option_lines) == 3
        assert all(" disabled>" in line for line in option_lines)
        (selected,) = [line for line in option_lines if " selected " in line]
        assert 'data-answer="Rome"' in selected
        assert "border-red-500" in selected
        assert sum("opacity-50" in line for line in option_lines) == 2

    def test_feedback_marks_correct_choice_green(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        quiz_controller.submit_quiz_answer("Paris")
        html = renderer.render(quiz_controller)
        assert 'quiz-option selected border-green-500 pointer-events-none" data-action="answer" data-answer="Paris" disabled>' in html

    def test_answering_options_are_live(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        html = renderer.render(quiz_controller)
        assert '<button class="quiz-option" data-action="answer" data-answer="Paris">' in html
        assert "disabled>" not in html.split('id="quiz-options"')[1].split("</div>")[0]

    def test_feedback_locks_short_answer(self, renderer: HtmlRenderer, short_question: QuizQuestion) -> None:
        feedback = AnswerFeedback(
            question_index=1, candidate="by <light>", correct=False, correct_answer="photosynthesis"
        )
        html = renderer.render_question(short_question, 1, 3, feedback)
        assert 'data-action="submit"' not in html
        assert "Submit Answer" not in html
        assert "<textarea" in html and " disabled>" in html
        assert "by &lt;light&gt;</textarea>" in html

    def test_feedback_incorrect_on_last(
        self, renderer: HtmlRenderer, quiz_controller: StudyFlowController
    ) -> None:
        for answer in ["Paris", "photosynthesis"]:
            quiz_controller.submit_quiz_answer(answer)
            quiz_controller.advance_quiz_question()
        quiz_controller.submit_quiz_answer("5")
        html = renderer.render(quiz_controller)
        assert "Incorrect" in html
        assert "View Results" in html

    def test_results(self, renderer: HtmlRenderer) -> None:
        html = renderer.render_results(
            QuizResult(score=2, total=3, percentage=67, message="Good start, review the concepts again.")
        )
        assert "Quiz Complete!" in html
        assert "2/3" in html
        assert "67%" in html
        assert "Good start" in html

    def test_escapes_question_text(self, renderer: HtmlRenderer) -> None:
        q = QuizQuestion("<b>?</b>", QuestionKind.SHORT_ANSWER, "a")
        assert "&lt;b&gt;?&lt;/b&gt;" in renderer.render_question(q, 0, 1)

    def test_inconsistent_quiz_state_raises(self, renderer: HtmlRenderer, short_question: QuizQuestion) -> None:
        quiz = QuizContent((short_question,))
        quiz.progress.phase = QuizPhase.SHOWING_FEEDBACK
        with pytest.raises(StudyFlowError, match="without a graded answer"):
            renderer.render_quiz(quiz)
        quiz.progress.phase = QuizPhase.FINISHED
        with pytest.raises(StudyFlowError, match="without a result"):
            renderer.render_quiz(quiz)
