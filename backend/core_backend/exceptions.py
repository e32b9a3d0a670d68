"""
Service-layer exceptions and their translation into API responses.

Services raise these instead of returning error values. The DRF exception
handler below maps them to HTTP responses so views stay thin.
"""
import logging

from django.db import DatabaseError
from rest_framework import exceptions as drf_exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for order, inventory and payment service errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self):
        payload = {"error": self.message}
        payload.update(self.details)
        return payload


class ValidationError(ServiceError):
    """Malformed or missing order lines, unknown items or unsupported status targets."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(ServiceError):
    """
    The request is well formed but conflicts with current state, e.g. not
    enough stock left at commit time or an illegal status transition.
    """

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message, item=None, details=None):
        details = dict(details or {})
        if item is not None:
            details.setdefault("item_id", item.pk)
            details.setdefault("item_name", item.name)
        super().__init__(message, details)
        self.item = item


class InsufficientStockError(ConflictError):
    """Raised when an item does not have enough remaining quantity."""

    def __init__(self, item, requested, available=None, message=None):
        self.requested = requested
        self.available = available
        if message is None:
            message = f"{item.name} is no longer available in requested quantity"
        super().__init__(message, item=item, details={"requested": requested})


class NotFoundError(ServiceError):
    """Unknown order code or id."""

    status_code = status.HTTP_404_NOT_FOUND


class TransientStoreError(ServiceError):
    """The database was unavailable or the transaction was aborted."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def service_exception_handler(exc, context):
    """
    DRF exception handler that understands ServiceError subclasses.
    Everything else falls through to DRF's default handling.
    """
    request = context.get("request")
    path = request.path if request is not None else "-"

    if isinstance(exc, ServiceError):
        if exc.status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {path}: {exc.message}")
        else:
            logger.info(f"{exc.__class__.__name__} on {path}: {exc.message}")
        return Response(exc.to_payload(), status=exc.status_code)

    if isinstance(exc, drf_exceptions.ValidationError):
        logger.info(f"Invalid request on {path}: {exc.detail}")
        return Response(
            {"error": "Invalid request", "fields": exc.detail},
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        logger.error(f"Database error on {path}: {exc}", exc_info=True)
        return Response(
            {"error": "Service temporarily unavailable"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.error(f"Unexpected error on {path}: {exc}", exc_info=True)
    return Response(
        {"error": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
