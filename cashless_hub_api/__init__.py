"""
Top-level package for the Smart Cashless Hub API.

All functionality lives in submodules under ``app``.
"""

__all__ = []
