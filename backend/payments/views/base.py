"""
Base classes and utilities for payment views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class BasePaymentView(APIView):
    """
    Base class for all payment views with common functionality.
    """

    def handle_exception(self, exc):
        """
        Logs payment failures that end in a server error. Client errors are
        already logged by the service exception handler.
        """
        response = super().handle_exception(exc)
        if response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"Payment view error in {self.__class__.__name__}: {exc}")
        return response

    def create_success_response(self, data, status_code=status.HTTP_200_OK):
        """
        Creates a standardized success response.
        """
        return Response(data, status=status_code)
