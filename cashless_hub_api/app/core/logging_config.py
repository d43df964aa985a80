"""
Logging setup for the Cashless Hub API.

All output goes through the root logger, tagged with the service name
so that lines from several services can share one collector.  The
uvicorn loggers are routed to the same handlers, and uvicorn's own
access log is silenced: ``core.middleware`` writes one line per
request on the ``REQUEST_LOGGER`` logger instead.

``level_for_status`` decides at which level a response of a given
status is reported; both the request log and the error handlers use
it.
"""

import logging
from pathlib import Path
from typing import Optional

REQUEST_LOGGER = "cashless_hub_api.http"

LOG_FORMAT = "%(asctime)s [%(levelname)s] {service} %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for_status(status_code: int) -> Optional[int]:
    """Map a response status to a log level; ``None`` for redirects."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    if status_code >= 300:
        return None
    return logging.INFO


def _route_uvicorn_logs(numeric_level: int) -> None:
    for name in ("uvicorn", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
    access = logging.getLogger("uvicorn.access")
    access.handlers.clear()
    access.propagate = True
    access.setLevel(max(numeric_level, logging.WARNING))


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    service_name: str = "cashless-hub-api",
) -> None:
    """Configure the root, request and uvicorn loggers.

    Handlers are attached to the root logger only when it has none
    yet, so calling this again (a second ``create_app`` in tests)
    does not duplicate output.  Logger levels are always applied.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives a copy of every line.
    service_name : str
        Tag written on every line.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(REQUEST_LOGGER).setLevel(numeric_level)
    _route_uvicorn_logs(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT.format(service=service_name), datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
