"""API Layer — FastAPI routes, request mediator, auth middleware, error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the success/error envelope
"""
