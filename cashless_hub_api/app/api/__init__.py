"""
API package containing versioned routes and shared dependencies.

A version subpackage (e.g. ``v1``) exposes a top-level ``router``
which includes all of its domain-specific endpoints.
"""
