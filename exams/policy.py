"""
Access policy for tests: the publication/time window gate, tenant scoping,
and the single place where per-test and per-question defaults are resolved.
"""
import logging

from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

logger = logging.getLogger(__name__)


# --- Defaults ---

def effective_max_attempts(value):
    return value if value and value > 0 else 1


def effective_marks(value):
    return value if value and value > 0 else 1


def effective_negative_marks(value):
    return value if value and value > 0 else 0


def _platform():
    from cores.models import PlatformSetting
    return PlatformSetting.load()


def effective_max_violations(value):
    if value is not None:
        return value
    return _platform().default_max_violations


def effective_duration_minutes(value):
    if value is not None:
        return value
    return _platform().default_duration_minutes


def effective_proctored(exam):
    return exam.proctored or _platform().strict_proctoring


# --- Gates ---

def check_window(exam, requester, now=None):
    """
    Learners may only interact with a published test inside its window,
    and not at all while the platform is in maintenance mode.
    Every other role passes through (authoring / preview).
    """
    if not requester.is_learner:
        return

    if _platform().maintenance_mode:
        raise PermissionDenied("Platform is under maintenance")

    now = now or timezone.now()
    if not exam.is_published:
        raise PermissionDenied("Test not published")
    if exam.start_time is not None and now < exam.start_time:
        raise PermissionDenied("Test not started yet")
    if exam.end_time is not None and now > exam.end_time:
        raise PermissionDenied("Test has ended")


def is_same_tenant(exam, requester):
    if requester.is_platform_admin:
        return True
    creator_id = exam.created_by_id
    if requester.is_learner:
        return requester.created_by_id is not None and requester.created_by_id == creator_id
    return requester.id == creator_id or (
        requester.created_by_id is not None and requester.created_by_id == creator_id
    )


def ensure_same_tenant(exam, requester):
    if not is_same_tenant(exam, requester):
        logger.info("Tenant check failed: user=%s exam=%s creator=%s",
                    requester.pk, exam.pk, exam.created_by_id)
        raise PermissionDenied("Test not assigned to you")


def can_manage_exam(exam, requester):
    """Owners, staff of the owner's tenant, and platform admins may edit a test's question bank."""
    if requester.is_learner:
        return False
    return is_same_tenant(exam, requester)
