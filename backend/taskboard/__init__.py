"""Taskboard Application Package — task/category REST backend over SQL Server procedures.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
