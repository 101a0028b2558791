"""Services Layer — OrderStore, the stateful shell around the pure core.

Invariants:
    - Services own mutable session state; core/ stays pure
    - Persistence reached only through the OrderRepository protocol
"""
