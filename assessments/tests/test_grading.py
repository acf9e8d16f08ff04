"""
Correctness and scoring rules, exercised on unsaved model instances.
"""
from types import SimpleNamespace

from django.test import SimpleTestCase

from assessments.grading import compute_score, evaluate_answer
from exams.models import Question


def mcq(correct_option=None, correct_options_csv=None, **kwargs):
    return Question(question_type=Question.QuestionType.MCQ, text="Q",
                    correct_option=correct_option, correct_options_csv=correct_options_csv, **kwargs)


def maq(correct_options_csv, **kwargs):
    return Question(question_type=Question.QuestionType.MAQ, text="Q",
                    correct_options_csv=correct_options_csv, **kwargs)


def fill_blank(correct_answer, **kwargs):
    return Question(question_type=Question.QuestionType.FILL_BLANK, text="Q",
                    correct_answer=correct_answer, **kwargs)


class FillBlankEvaluationTestCase(SimpleTestCase):
    def test_dashes_spaces_and_case_are_ignored(self):
        question = fill_blank("New-York")
        self.assertTrue(evaluate_answer(question, "new york"))
        self.assertTrue(evaluate_answer(question, "  NEW   york "))
        self.assertTrue(evaluate_answer(question, "new_york"))
        self.assertTrue(evaluate_answer(question, "newyork"))

    def test_hello_world_variants(self):
        question = fill_blank("Hello-World")
        self.assertTrue(evaluate_answer(question, "helloworld"))

    def test_different_letters_are_wrong(self):
        question = fill_blank("New-York")
        self.assertFalse(evaluate_answer(question, "New Jersey"))


class MultipleChoiceEvaluationTestCase(SimpleTestCase):
    def test_order_and_duplicates_do_not_matter(self):
        question = maq("A,B")
        self.assertTrue(evaluate_answer(question, "A,B"))
        self.assertTrue(evaluate_answer(question, "B,A"))
        self.assertTrue(evaluate_answer(question, "a, b, a"))

    def test_subset_or_superset_is_wrong(self):
        question = maq("A,B")
        self.assertFalse(evaluate_answer(question, "A"))
        self.assertFalse(evaluate_answer(question, "A,B,C"))

    def test_empty_key_never_matches(self):
        self.assertFalse(evaluate_answer(maq(""), "A"))

    def test_legacy_mcq_with_correct_set(self):
        question = mcq(correct_options_csv="c, a")
        self.assertTrue(evaluate_answer(question, "A,C"))
        self.assertFalse(evaluate_answer(question, "A"))


class SingleChoiceEvaluationTestCase(SimpleTestCase):
    def test_case_and_whitespace_tolerant(self):
        question = mcq(correct_option="A")
        self.assertTrue(evaluate_answer(question, "a"))
        self.assertTrue(evaluate_answer(question, "  A "))
        self.assertFalse(evaluate_answer(question, "B"))

    def test_no_answer_key_is_wrong(self):
        self.assertFalse(evaluate_answer(mcq(), "A"))


class BlankSubmissionTestCase(SimpleTestCase):
    def test_blank_and_missing_answers_are_wrong(self):
        for question in (mcq(correct_option="A"), maq("A,B"), fill_blank("x")):
            self.assertFalse(evaluate_answer(question, None))
            self.assertFalse(evaluate_answer(question, ""))
            self.assertFalse(evaluate_answer(question, "   "))

    def test_unknown_type_is_wrong(self):
        question = Question(question_type="ESSAY", text="Q", correct_answer="x")
        self.assertFalse(evaluate_answer(question, "x"))


def graded(is_correct, marks=1, negative_marks=0):
    return SimpleNamespace(is_correct=is_correct,
                           question=SimpleNamespace(marks=marks, negative_marks=negative_marks))


class ComputeScoreTestCase(SimpleTestCase):
    def test_marks_minus_negative_marks(self):
        answers = [graded(True, marks=2), graded(True, marks=3), graded(False, negative_marks=1)]
        self.assertEqual(compute_score(answers), 4)

    def test_floored_at_zero(self):
        answers = [graded(True, marks=1), graded(False, negative_marks=5)]
        self.assertEqual(compute_score(answers), 0)

    def test_defaults_for_unset_marks(self):
        answers = [
            graded(True, marks=None),
            graded(True, marks=0),
            graded(True, marks=-4),
            graded(False, negative_marks=None),
            graded(False, negative_marks=-3),
        ]
        self.assertEqual(compute_score(answers), 3)

    def test_never_negative(self):
        for marks in (None, -1, 0, 1, 5):
            for negative in (None, -1, 0, 2, 10):
                answers = [graded(False, marks=marks, negative_marks=negative) for _ in range(3)]
                answers.append(graded(True, marks=marks, negative_marks=negative))
                self.assertGreaterEqual(compute_score(answers), 0)

    def test_no_answers(self):
        self.assertEqual(compute_score([]), 0)
