"""Credential Middleware — resolves the caller's Credential from a bearer token.

Invariants:
    - request.state.credential is always set: a Credential or None
    - The middleware never rejects a request; CrudController fails closed on None
    - Token claims: idAccount, idUser, permissions ["TASK:READ", ...]
"""

import logging

import jwt
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from taskboard.config import get_settings
from taskboard.core.credentials import Credential

logger = logging.getLogger(__name__)


def resolve_credential(authorization: str | None, secret: str, algorithm: str) -> Credential | None:
    """Credential from an 'Authorization: Bearer <jwt>' header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    try:
        claims = jwt.decode(token.strip(), secret, algorithms=[algorithm])
        return Credential.from_claims(claims)
    except jwt.PyJWTError as e:
        logger.info(f"Token rejected: {e}")
    except (KeyError, TypeError, ValueError) as e:
        logger.info(f"Token claims malformed: {e}")
    return None


class CredentialMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        settings = get_settings()
        request.state.credential = resolve_credential(
            request.headers.get("authorization"),
            settings.jwt_secret,
            settings.jwt_algorithm,
        )
        return await call_next(request)
