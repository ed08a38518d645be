"""
DRF exception handler for domain errors.

Services raise subclasses of core.exceptions.BaseApplicationError and never
build HTTP responses themselves. This handler turns those errors into JSON
responses using the status code each class declares; anything else falls
through to DRF's default handler.

Configuration:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handlers.api_exception_handler",
    }

Response body:
    {
        "error": "OTP has expired.",
        "error_code": "OTP_EXPIRED",
        "details": {...}        # only when present
    }
"""

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Render BaseApplicationError subclasses, defer everything else to DRF."""
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"{exc.__class__.__name__} raised in {view.__class__.__name__}: {exc.message}",
            extra={"error_code": exc.error_code, "status_code": exc.status_code},
        )
        return Response(exc.to_dict(), status=exc.status_code)

    return exception_handler(exc, context)
