"""Service Functions — one async function per stored procedure call.

Invariants:
    - Services trust their input (already validated and authorized)
    - Services never catch gateway errors
"""
