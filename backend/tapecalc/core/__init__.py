"""Core Layer - pure calculator logic, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Numeric failures are the "Not a number" sentinel, never exceptions
    - Exceptions raised here signal malformed actions only
"""
