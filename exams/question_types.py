"""
Per-type behaviour for questions.

Each question type knows how to validate its answer key at write time and
how to judge a submitted answer. Callers look the handler up by
``Question.question_type`` through ``for_type``.
"""
import re

from cores.exceptions import BadRequest


def _is_blank(value):
    return value is None or not str(value).strip()


def parse_label_set(raw):
    """'a, B ,a' -> {'A', 'B'}"""
    if raw is None:
        return set()
    return {token.strip().upper() for token in str(raw).split(',') if token.strip()}


def normalize_fill_blank(raw):
    if raw is None:
        return ''
    text = re.sub(r'[-_]', ' ', str(raw))
    text = re.sub(r'\s+', ' ', text.strip())
    return text.replace(' ', '').lower()


class QuestionKind:
    code = None

    def validate(self, correct_option=None, correct_options_csv=None, correct_answer=None):
        raise NotImplementedError

    def is_correct(self, question, answer_text):
        raise NotImplementedError


class SingleChoice(QuestionKind):
    """MCQ. Older tests stored a correct-set on MCQ questions, which is still honoured."""
    code = 'MCQ'

    def validate(self, correct_option=None, correct_options_csv=None, correct_answer=None):
        if _is_blank(correct_option) and _is_blank(correct_options_csv):
            raise BadRequest("Provide correct_option or correct_options_csv for MCQ")

    def is_correct(self, question, answer_text):
        if not _is_blank(question.correct_options_csv):
            return parse_label_set(question.correct_options_csv) == parse_label_set(answer_text)
        if not _is_blank(question.correct_option):
            return answer_text.strip().upper() == question.correct_option.strip().upper()
        return False


class MultipleChoice(QuestionKind):
    code = 'MAQ'

    def validate(self, correct_option=None, correct_options_csv=None, correct_answer=None):
        if _is_blank(correct_options_csv):
            raise BadRequest("correct_options_csv is required for MAQ")
        if not _is_blank(correct_option):
            raise BadRequest("Do not set correct_option for MAQ; use correct_options_csv")

    def is_correct(self, question, answer_text):
        expected = parse_label_set(question.correct_options_csv)
        if not expected:
            return False
        return expected == parse_label_set(answer_text)


class FillBlank(QuestionKind):
    code = 'FILL_BLANK'

    def validate(self, correct_option=None, correct_options_csv=None, correct_answer=None):
        if _is_blank(correct_answer):
            raise BadRequest("correct_answer is required for fill-in-the-blank")

    def is_correct(self, question, answer_text):
        return normalize_fill_blank(question.correct_answer) == normalize_fill_blank(answer_text)


QUESTION_KINDS = {kind.code: kind for kind in (SingleChoice(), MultipleChoice(), FillBlank())}


def for_type(question_type):
    try:
        return QUESTION_KINDS[question_type]
    except KeyError:
        raise BadRequest(f"Unsupported question_type: {question_type}")
