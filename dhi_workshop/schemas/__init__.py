"""Pydantic Schemas — response shapes for the demo API.

Invariants:
    - Schemas describe the JSON wire format (camelCase where the clients expect it)
    - Domain values come from core/ and are converted at the route boundary
"""
