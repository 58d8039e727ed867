"""Operational endpoints."""

import time
from typing import Any, Callable, Dict

import structlog
from django.conf import settings
from django.core.cache import cache
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def _ping_database() -> None:
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def _ping_cache() -> None:
    cache.set("_health_check", "ok", 10)
    if cache.get("_health_check") != "ok":
        raise ConnectionError("Cache read failed")


CHECKS: Dict[str, Callable[[], None]] = {
    "database": _ping_database,
    "cache": _ping_cache,
}


def _probe(name: str, check: Callable[[], None]) -> Dict[str, Any]:
    start = time.monotonic()
    try:
        check()
    except Exception:
        logger.error("health_check.dependency_down", dependency=name, exc_info=True)
        return {"status": "down"}
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """GET /health

    Probes the database and the cache; answers 503 if either is down.
    Public, so load balancers can call it without a token.
    """
    services = {name: _probe(name, check) for name, check in CHECKS.items()}
    healthy = all(result["status"] == "up" for result in services.values())
    overall = "healthy" if healthy else "unhealthy"

    logger.info("health_check.completed", status=overall)

    return JsonResponse(
        {
            "status": overall,
            "version": settings.SPECTACULAR_SETTINGS["VERSION"],
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
