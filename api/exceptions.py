# api/exceptions.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from algorithms.blood_compatibility import InvalidBloodTypeError

logger = logging.getLogger(__name__)


def blood_bank_exception_handler(exc, context):
    """
    DRF exception handler: an InvalidBloodTypeError that escapes a view is a
    client error (400), everything else goes to DRF's default handling.
    """
    if isinstance(exc, InvalidBloodTypeError):
        view = context.get('view')
        logger.warning(f"Rejected invalid blood type {exc.value!r} in {view.__class__.__name__}")
        return Response(
            {'error': str(exc), 'value': exc.value if isinstance(exc.value, str) else None},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return exception_handler(exc, context)
