"""Services Layer - session registry wrapping the pure calculator core.

Invariants:
    - Every mutation of a CalculatorState happens while holding its session lock
    - Services never render; they return views built by core/
"""
