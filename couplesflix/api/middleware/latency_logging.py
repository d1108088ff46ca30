"""Request latency logging middleware."""

import logging
import time
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger(__name__)

HEALTH_PATHS = ("/health", "/health/ready")

# Catalog routes wait on TMDB, everything else only on Supabase
CATALOG_PREFIX = "/api/v1/catalog"
WATCHLIST_PREFIX = "/api/v1/watchlist/"

# (slow, very slow) thresholds in milliseconds
DEFAULT_THRESHOLDS_MS = (1000, 3000)
CATALOG_THRESHOLDS_MS = (2000, 5000)


def _thresholds_for(path: str, method: str) -> tuple[int, int]:
    if path.startswith(CATALOG_PREFIX):
        return CATALOG_THRESHOLDS_MS
    # Adding a new title to the watchlist may fetch its movie detail
    if method == "PUT" and path.startswith(WATCHLIST_PREFIX):
        return CATALOG_THRESHOLDS_MS
    return DEFAULT_THRESHOLDS_MS


async def latency_logging_middleware(request: Request, call_next: Callable) -> Response:
    """Log method, path, status and latency of every request.

    Health probes are logged at debug level. Requests that include a TMDB
    round trip get more headroom before being flagged as slow.

    Args:
        request: The incoming request.
        call_next: The next middleware/handler in the chain.

    Returns:
        Response: The response from the handler.
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        latency_ms = (time.perf_counter() - start_time) * 1000
        slow_ms, very_slow_ms = _thresholds_for(path, method)
        log_data = {
            "method": method,
            "path": path,
            "status_code": status_code,
            "latency_ms": round(latency_ms, 2),
        }
        log_msg = f"{method} {path} - {status_code} - {latency_ms:.2f}ms"

        if path in HEALTH_PATHS:
            logger.debug(log_msg, extra=log_data)
        elif status_code >= 500:
            logger.error(log_msg, extra=log_data)
        elif latency_ms > very_slow_ms:
            logger.error(f"VERY SLOW REQUEST: {log_msg}", extra=log_data)
        elif latency_ms > slow_ms:
            logger.warning(f"SLOW REQUEST: {log_msg}", extra=log_data)
        elif status_code >= 400:
            logger.warning(log_msg, extra=log_data)
        else:
            logger.info(log_msg, extra=log_data)
