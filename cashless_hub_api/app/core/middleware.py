"""
HTTP request logging.

One log line per request: method, path, status code and duration,
at the level ``level_for_status`` picks; redirects are skipped.
Headers are never logged, so bearer tokens cannot leak into log
files.
"""

import logging
import time

from fastapi import FastAPI, Request

from .logging_config import REQUEST_LOGGER, level_for_status

logger = logging.getLogger(REQUEST_LOGGER)


def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error("%s %s 500 %.1fms", request.method, request.url.path, duration_ms)
            raise
        duration_ms = (time.perf_counter() - started) * 1000
        level = level_for_status(response.status_code)
        if level is not None:
            logger.log(level, "%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
        return response
