"""Persistence layer: SQLite-backed repositories."""
