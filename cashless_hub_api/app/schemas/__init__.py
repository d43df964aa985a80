"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage rows so the JSON representation
(camelCase) is decoupled from the database columns (snake_case).
"""
