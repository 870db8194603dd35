import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import DomainError

logger = logging.getLogger(__name__)


def domain_exception_handler(exc, context):
    """
    DRF exception handler that understands domain errors.

    Domain errors become ``{'error': message, 'code': code, **details}`` with
    the status code carried by the exception class. Everything else goes
    through the stock DRF handler, so unexpected errors still surface as 500.
    """
    if isinstance(exc, DomainError):
        view = context.get('view')
        logger.info(
            "Domain error in %s: %s (%s)",
            view.__class__.__name__ if view else 'unknown view',
            exc.message,
            exc.code,
        )
        payload = {'error': exc.message, 'code': exc.code}
        payload.update(exc.details)
        return Response(payload, status=exc.status_code)

    return exception_handler(exc, context)
