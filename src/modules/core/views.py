import os
import time
from pathlib import Path
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger(__name__)


def _check_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "vendor": conn.vendor,
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def _check_uploads() -> Dict[str, Any]:
    # Informational: FileSystemStorage creates the directory on first upload.
    location = Path(settings.MEDIA_ROOT)
    if location.is_dir():
        writable = os.access(location, os.W_OK)
        return {"status": "up" if writable else "read_only"}
    return {"status": "not_created"}


def health_check(request: HttpRequest) -> JsonResponse:
    """Liveness plus database reachability; only the database is fatal."""
    services: Dict[str, Dict[str, Any]] = {}
    healthy = True

    try:
        services["database"] = _check_database()
    except DatabaseError as exc:
        services["database"] = {"status": "down"}
        healthy = False
        logger.error("health_check.db_failure", error=str(exc))

    services["uploads"] = _check_uploads()

    logger.info("health_check.completed", status="healthy" if healthy else "unhealthy")

    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
