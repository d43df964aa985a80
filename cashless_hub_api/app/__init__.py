"""
Application package initializer.

The project is organised by layer: ``core`` (configuration, database,
security, errors), ``schemas`` (API payloads), ``repositories``
(persistence), ``services`` (business rules) and ``api`` (versioned
HTTP routers).
"""

from .main import app  # noqa: F401
