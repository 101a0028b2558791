"""Core Layer — pure order lifecycle and financial-state logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - All functions are pure and deterministic ("today" is always passed in)

Design Decisions:
    - Functional core separated from imperative shell (OrderStore, REST binding, routes)
"""
