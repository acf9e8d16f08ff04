"""Pure correctness and scoring rules. Nothing in here touches the database."""
from exams.policy import effective_marks, effective_negative_marks
from exams.question_types import QUESTION_KINDS


def evaluate_answer(question, answer_text):
    """
    True when ``answer_text`` is a correct response to ``question``.

    Blank or missing answers are always wrong. Unknown question types are
    treated as wrong rather than raising, so grading never fails mid-submit.
    """
    if answer_text is None or not str(answer_text).strip():
        return False
    kind = QUESTION_KINDS.get(question.question_type)
    if kind is None:
        return False
    return kind.is_correct(question, str(answer_text))


def compute_score(answers):
    """
    Sum marks for correct answers minus negative marks for incorrect ones,
    floored at zero. ``answers`` is any iterable of objects exposing
    ``is_correct`` and ``question``.
    """
    total = 0
    for answer in answers:
        question = answer.question
        if answer.is_correct:
            total += effective_marks(question.marks)
        else:
            total -= effective_negative_marks(question.negative_marks)
    return max(total, 0)
