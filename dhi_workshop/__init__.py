"""DHI Workshop — locale demo server and container image scanner.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
