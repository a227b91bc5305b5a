# core/exceptions.py
"""
Error taxonomy of the API.

Services raise DRF exceptions directly; this module adds the two kinds DRF
lacks and renders every error as ``{"kind": ..., "detail": ...}``.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StateConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "The resource is in a state that does not allow this operation."
    default_code = "state_conflict"


class InternalError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Unexpected persistence failure."
    default_code = "internal"


ERROR_KINDS = {
    status.HTTP_400_BAD_REQUEST: "invalid_input",
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "state_conflict",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "internal",
}


def api_exception_handler(exc, context):
    if isinstance(exc, DatabaseError):
        # Raw driver text stays in the logs
        view = context.get("view")
        logger.error(
            "Persistence failure in %s",
            view.__class__.__name__ if view else "unknown view",
            exc_info=exc,
        )
        exc = InternalError()

    response = exception_handler(exc, context)
    if response is None:
        return None

    kind = ERROR_KINDS.get(response.status_code, "error")

    if isinstance(response.data, dict) and "detail" in response.data:
        detail = response.data["detail"]
    else:
        detail = response.data

    return Response(
        {"kind": kind, "detail": detail},
        status=response.status_code,
        headers=dict(response.items()),
    )
