"""PrintDesk — print-shop work order tracking: intake, production status, partial payments.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
