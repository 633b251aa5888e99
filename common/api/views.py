import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class HealthView(APIView):
    """
    GET /health

    Liveness plus a storage connectivity check:
    - 200 {"status": "healthy", "database": "connected", "timestamp": ...}
    - 500 {"status": "unhealthy", "database": "disconnected", ...} if the
      database cannot answer a trivial query.

    Authentication: none
    Permissions: AllowAny
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        timestamp = timezone.now().isoformat()
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as exc:
            logger.error("Health check failed: %s", exc)
            return Response(
                {
                    "status": "unhealthy",
                    "database": "disconnected",
                    "timestamp": timestamp,
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(
            {"status": "healthy", "database": "connected", "timestamp": timestamp},
            status=status.HTTP_200_OK,
        )
