"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure imports only types and errors from core/, never domain logic
    - All external calls wrapped with timeout and error mapping
"""
