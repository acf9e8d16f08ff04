"""
Attempt lifecycle: start, answer, submit, and the read models used to resume.

Every mutating call runs in its own transaction and locks the attempt row
it changes, so concurrent requests for the same learner and test serialise
on the database rather than on anything held in process.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from cores.exceptions import BadRequest, Conflict
from cores.models import AuditLog
from exams.models import Exam, Question
from exams.policy import check_window, ensure_same_tenant, effective_max_attempts, can_manage_exam
from .grading import compute_score, evaluate_answer
from .models import Attempt, Answer, SessionReport

logger = logging.getLogger(__name__)

START_RETRIES = 2


def _get_exam(exam_id):
    try:
        return Exam.objects.get(pk=exam_id)
    except Exam.DoesNotExist:
        raise NotFound("Test not found")


def _get_attempt(attempt_id, for_update=False):
    queryset = Attempt.objects.select_related('exam')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))
    try:
        return queryset.get(pk=attempt_id)
    except Attempt.DoesNotExist:
        raise NotFound("Attempt not found")


def _locked_attempt(exam, user):
    return (Attempt.objects.select_for_update()
            .filter(exam=exam, student=user).first())


def _require_owner(attempt, user):
    if attempt.student_id != user.id:
        raise PermissionDenied("Not your attempt")


def _require_visible(attempt, user):
    # Learners only see their own attempts; every other role may look at any
    if user.is_learner and attempt.student_id != user.id:
        raise PermissionDenied("Not your attempt")


# --- Lifecycle ---

def start_attempt(user, exam_id):
    """
    Open the first attempt for (test, user), or move an existing one on to
    its next attempt number. Answers and score from the previous cycle stay
    on the row until they are overwritten or the attempt is submitted again.
    """
    exam = _get_exam(exam_id)
    check_window(exam, user)
    max_attempts = effective_max_attempts(exam.max_attempts)

    for _ in range(START_RETRIES):
        try:
            with transaction.atomic():
                attempt = _locked_attempt(exam, user)
                now = timezone.now()

                if attempt is None:
                    attempt = Attempt.objects.create(
                        exam=exam, student=user, attempt_number=1,
                        started_at=now, completed=False, score=0,
                    )
                    logger.info("Started attempt %s (#1) for user %s on test %s", attempt.pk, user.pk, exam.pk)
                    return attempt

                if attempt.attempt_number >= max_attempts:
                    raise BadRequest("Max attempts reached")

                attempt.attempt_number += 1
                attempt.started_at = now
                attempt.completed = False
                attempt.submitted_at = None
                attempt.save(update_fields=['attempt_number', 'started_at', 'completed', 'submitted_at', 'updated_at'])
                logger.info("Advanced attempt %s to #%s for user %s", attempt.pk, attempt.attempt_number, user.pk)
                return attempt
        except IntegrityError:
            # Another request created the row between our read and insert
            logger.info("Concurrent start for user %s on test %s, retrying", user.pk, exam.pk)

    raise Conflict("Attempt is being started by another request, please retry")


def submit_or_update_answer(user, attempt_id, question_id, answer_text):
    with transaction.atomic():
        attempt = _get_attempt(attempt_id, for_update=True)
        _require_owner(attempt, user)
        if attempt.completed:
            raise BadRequest("Attempt already completed")
        check_window(attempt.exam, user)

        try:
            question = Question.objects.get(pk=question_id)
        except Question.DoesNotExist:
            raise NotFound("Question not found")
        if question.exam_id != attempt.exam_id:
            raise BadRequest("Question not part of this test")

        is_correct = evaluate_answer(question, answer_text)
        answer, created = Answer.objects.update_or_create(
            attempt=attempt, question=question,
            defaults={'answer_text': answer_text, 'is_correct': is_correct},
        )
    logger.info("Saved answer for Q:%s Attempt:%s Correct:%s", question_id, attempt_id, is_correct)
    return answer


def submit_attempt(user, attempt_id):
    with transaction.atomic():
        attempt = _get_attempt(attempt_id, for_update=True)
        _require_owner(attempt, user)
        if attempt.completed:
            logger.info("Attempt %s already completed. Skipping update.", attempt_id)
            return attempt

        answers = attempt.answers.select_related('question')
        attempt.score = compute_score(answers)
        attempt.submitted_at = timezone.now()
        attempt.completed = True
        attempt.save(update_fields=['score', 'submitted_at', 'completed', 'updated_at'])
        AuditLog.record(user, 'SUBMIT', attempt,
                        details=f"Attempt #{attempt.attempt_number} on test {attempt.exam_id} scored {attempt.score}")

    logger.info("Submitted attempt %s Score: %s", attempt_id, attempt.score)
    return attempt


# --- Queries ---

def get_attempt(user, attempt_id):
    attempt = _get_attempt(attempt_id)
    _require_visible(attempt, user)
    return attempt


def build_attempt_state(attempt):
    """Attempt metadata, the test's questions and the saved answer text per question."""
    questions = list(attempt.exam.questions.order_by('id'))
    answers = {
        question_id: text
        for question_id, text in attempt.answers.values_list('question_id', 'answer_text')
    }
    return {'attempt': attempt, 'questions': questions, 'answers': answers}


def get_attempt_state(user, attempt_id):
    attempt = get_attempt(user, attempt_id)
    return build_attempt_state(attempt)


def _latest_attempt(exam, user):
    return (Attempt.objects.select_related('exam')
            .filter(exam=exam, student=user)
            .order_by('-attempt_number').first())


def get_attempt_state_by_test(user, exam_id):
    exam = _get_exam(exam_id)
    ensure_same_tenant(exam, user)
    attempt = _latest_attempt(exam, user)
    if attempt is None:
        raise NotFound("Attempt not found")
    return build_attempt_state(attempt)


def get_latest_attempt(user, exam_id, only_incomplete=True):
    exam = _get_exam(exam_id)
    ensure_same_tenant(exam, user)
    attempt = _latest_attempt(exam, user)
    if attempt is not None and only_incomplete and attempt.completed:
        return None
    return attempt


# --- Results ---

def my_results(user):
    return (Attempt.objects.select_related('exam', 'student', 'session_report')
            .filter(student=user).order_by('-started_at'))


def exam_results(user, exam_id):
    exam = _get_exam(exam_id)
    if exam.created_by_id != user.id and not user.is_platform_admin:
        raise PermissionDenied("Not allowed")
    return (Attempt.objects.select_related('exam', 'student', 'session_report')
            .filter(exam=exam).order_by('-started_at'))


def all_results(user):
    """
    Results across every test the caller oversees: platform admins see all,
    admins their tenant's tests, faculty the tests they created.
    """
    queryset = Attempt.objects.select_related('exam', 'student', 'session_report').order_by('-started_at')
    if user.is_platform_admin:
        return queryset
    if user.role == user.Role.ADMIN:
        return queryset.filter(Q(exam__created_by=user) | Q(exam__created_by__created_by=user))
    if user.role == user.Role.FACULTY:
        return queryset.filter(exam__created_by=user)
    raise PermissionDenied("Only admin/faculty/superadmin can view results")


def delete_result(user, attempt_id):
    try:
        attempt = Attempt.objects.select_related('exam').get(pk=attempt_id)
    except Attempt.DoesNotExist:
        raise NotFound("Result not found")

    allowed = user.is_platform_admin or (
        user.role == user.Role.ADMIN and attempt.exam.created_by_id == user.id
    )
    if not allowed:
        raise PermissionDenied("Not allowed to delete this result")

    with transaction.atomic():
        AuditLog.record(user, 'DELETE', attempt,
                        details=f"Deleted attempt of {attempt.student_id} on test {attempt.exam_id}")
        attempt.delete()
    logger.info("User %s deleted attempt %s", user.pk, attempt_id)


# --- Proctoring reports ---

def _require_report_access(user, attempt_id):
    attempt = _get_attempt(attempt_id)
    if user.is_learner:
        _require_owner(attempt, user)
    elif not can_manage_exam(attempt.exam, user):
        raise PermissionDenied("Not your student's attempt")
    return attempt


def upsert_session_report(user, attempt_id, counters):
    attempt = _require_report_access(user, attempt_id)
    with transaction.atomic():
        report, _ = SessionReport.objects.select_for_update().get_or_create(attempt=attempt)
        for field in SessionReport.COUNTER_FIELDS:
            if counters.get(field) is not None:
                setattr(report, field, counters[field])
        report.save()
    return report


def finalize_session_report(user, attempt_id, is_valid_test, invalid_reason=None):
    attempt = _require_report_access(user, attempt_id)
    with transaction.atomic():
        report, _ = SessionReport.objects.select_for_update().get_or_create(attempt=attempt)
        report.is_valid_test = is_valid_test
        report.invalid_reason = invalid_reason
        report.save()
    logger.info("Finalized session report for attempt %s valid=%s", attempt_id, is_valid_test)
    return report


def get_session_report(user, attempt_id):
    attempt = _require_report_access(user, attempt_id)
    try:
        return attempt.session_report
    except SessionReport.DoesNotExist:
        raise NotFound("Session report not found")
