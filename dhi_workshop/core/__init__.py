"""Core Layer — pure domain logic, no IO, no async.

Invariants:
    - No module in core/ imports from api/, scanner/ or infrastructure/
    - Functions receive the clock and configuration as arguments
"""
