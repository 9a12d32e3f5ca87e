"""Core Layer — domain types, errors, credentials and input validation.

Invariants:
    - Core never imports from api/ or infrastructure/
    - No IO: everything here is pure and synchronous
"""
