"""
Service layer.

Each service encapsulates the business rules of a domain and works on
repositories handed in by the API layer, so it can be exercised with
any ``EventRepository`` implementation.
"""
