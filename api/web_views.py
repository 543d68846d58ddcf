"""
Views outside the versioned API: health check, the JSON catch-all for
unmatched routes and the JSON server error handler.
"""

import logging
import sys

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import server_error_body

logger = logging.getLogger(__name__)


class HealthView(APIView):
    """GET /health"""
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return Response({'status': 'OK'}, status=status.HTTP_200_OK)


@csrf_exempt
def route_not_found(request, *args, **kwargs):
    """Answers every unmatched path, whatever the method."""
    logger.info("No route for %s %s.", request.method, request.path)
    return JsonResponse(
        {'message': 'Route not found', 'path': request.path},
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error(request, *args, **kwargs):
    """``handler500`` for failures raised outside the API views."""
    exc = sys.exc_info()[1] or Exception('Internal server error')
    return JsonResponse(server_error_body(exc), status=status.HTTP_500_INTERNAL_SERVER_ERROR)
