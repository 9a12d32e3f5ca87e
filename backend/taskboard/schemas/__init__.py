"""Pydantic Schemas — parameter contracts for every route and verb.

Invariants:
    - Schemas validate at system boundary (query, path, body)
    - Unknown fields are ignored, never rejected
"""
