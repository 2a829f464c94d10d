"""Tapecalc Application Package - tape calculator engine and HTTP dispatcher.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
