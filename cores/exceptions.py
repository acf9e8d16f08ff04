import logging

from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'bad_request'


class Conflict(APIException):
    """Raised when a concurrent request won the race for the same attempt row."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflicting update, please retry.'
    default_code = 'conflict'


def first_error(detail, prefix=''):
    # Flatten DRF's nested error structure into "field: message"
    if isinstance(detail, dict):
        for field, value in detail.items():
            label = field if field != 'non_field_errors' else ''
            return first_error(value, prefix=f"{label}: " if label else prefix)
    if isinstance(detail, list):
        if not detail:
            return prefix + 'invalid'
        return first_error(detail[0], prefix=prefix)
    return prefix + str(detail)


def api_exception_handler(exc, context):
    """
    Renders every API error as {"error": "<message>"}.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else 'unknown view')
        return Response({"error": "An unexpected error occurred"},
                        status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ValidationError):
        message = first_error(exc.detail) or 'Validation failed'
    else:
        message = str(exc.detail) if hasattr(exc, 'detail') else str(exc)

    response.data = {"error": message}
    return response
