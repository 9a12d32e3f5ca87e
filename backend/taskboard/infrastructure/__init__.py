"""Infrastructure Layer — connection pool, stored procedure gateway, logging.

Invariants:
    - Infrastructure never imports from api/
    - Every database call goes through procedure_gateway.db_request
"""
