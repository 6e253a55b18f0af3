"""
Core views providing infrastructure endpoints.

This module contains views that are not part of the business domain but are
essential for application infrastructure:
- health_check: database and cache check
- api_exception_handler: DRF exception handler for application errors
- service_error_response: Renders a failed ServiceResult
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError, StorageError

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Health check endpoint for monitoring and orchestration.

    Returns:
        JsonResponse with status and component health:
        - status: "healthy" or "unhealthy"
        - database: "connected" or "disconnected"
        - cache: "connected" or "disconnected"

    HTTP Status Codes:
        200: Database reachable
        503: Database unreachable
    """
    health_status = {
        "status": "healthy",
        "database": "unknown",
        "cache": "unknown",
    }
    is_healthy = True

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        health_status["database"] = "connected"
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
        is_healthy = False

    # Cache failure degrades but does not fail the check
    try:
        cache.set("health_check", "ok", timeout=1)
        if cache.get("health_check") == "ok":
            health_status["cache"] = "connected"
        else:
            health_status["cache"] = "disconnected"
    except Exception:
        logger.warning("Health check: cache unreachable", exc_info=True)
        health_status["cache"] = "disconnected"

    status_code = 200 if is_healthy else 503

    return JsonResponse(health_status, status=status_code)


def api_exception_handler(exc, context):
    """
    Render application errors raised out of API views.

    BaseApplicationError subclasses use their own status and payload.
    Database errors that escaped a service become a 503 STORAGE_ERROR.
    Everything else (including authentication failures) goes through DRF's
    default handler.
    """
    if isinstance(exc, BaseApplicationError):
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            f"Unhandled database error in {view.__class__.__name__ if view else 'view'}",
            exc_info=exc,
        )
        error = StorageError("Storage is temporarily unavailable")
        return Response(error.to_dict(), status=error.status_code)

    return exception_handler(exc, context)


def service_error_response(result):
    """
    Render a failed ServiceResult as a DRF response.

    Body: {"error", "error_code"[, "errors"]}; status from result.http_status.
    """
    payload = {"error": result.error, "error_code": result.error_code}
    if result.errors:
        payload["errors"] = result.errors
    return Response(payload, status=result.http_status)
