"""Request Mediator — authorization check plus schema validation, one gate per HTTP verb.

Invariants:
    - Authorization runs before validation; no credential or a missing permission fails closed
    - create reads the body; read merges path + query; update/delete merge path + body
    - Path parameters win over query/body keys of the same name
    - Returns (ValidatedRequest, None) or (None, TaskboardError). Never raises for
      authorization or validation failures; callers check the first element
    - No side effects beyond reading request.state.credential and the body

Design Decisions:
    - Error-as-value tuple: handlers decide whether to raise, nothing is caught by accident
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Union

from starlette.requests import Request

from taskboard.core.credentials import Capability, Credential
from taskboard.core.errors import (
    AuthenticationError, AuthorizationError, TaskboardError, ValidationFailedError,
)
from taskboard.core.validation import ModelT, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedRequest(Generic[ModelT]):
    credential: Credential
    params: ModelT


MediatorResult = Union[
    tuple[ValidatedRequest[ModelT], None], tuple[None, TaskboardError],
]


class _MalformedBody(Exception):
    pass


async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise _MalformedBody(str(e)) from e


class CrudController:
    """Gate for one route: required capabilities checked, then the verb's input validated."""

    def __init__(self, permissions: list[Capability]):
        self.permissions = permissions

    async def create(
        self, request: Request, schema: type[ModelT],
    ) -> MediatorResult[ModelT]:
        return await self._gate(
            request, schema, use_path=False, use_query=False, use_body=True,
        )

    async def read(
        self, request: Request, schema: type[ModelT],
    ) -> MediatorResult[ModelT]:
        return await self._gate(
            request, schema, use_path=True, use_query=True, use_body=False,
        )

    async def update(
        self, request: Request, schema: type[ModelT],
    ) -> MediatorResult[ModelT]:
        return await self._gate(
            request, schema, use_path=True, use_query=False, use_body=True,
        )

    async def delete(
        self, request: Request, schema: type[ModelT],
    ) -> MediatorResult[ModelT]:
        return await self._gate(
            request, schema, use_path=True, use_query=False, use_body=True,
        )

    def _authorize(
        self, request: Request,
    ) -> tuple[Credential, None] | tuple[None, TaskboardError]:
        credential: Credential | None = getattr(request.state, "credential", None)
        if credential is None:
            return None, AuthenticationError()
        missing = credential.missing(self.permissions)
        if missing:
            logger.warning(
                f"Permission denied on {request.url.path}: missing {missing}",
                extra={"path": request.url.path, "securable": missing},
            )
            return None, AuthorizationError(missing)
        return credential, None

    async def _gate(
        self,
        request: Request,
        schema: type[ModelT],
        use_path: bool,
        use_query: bool,
        use_body: bool,
    ) -> MediatorResult[ModelT]:
        credential, error = self._authorize(request)
        if credential is None:
            return None, error

        path = dict(request.path_params) if use_path else {}
        if use_body:
            try:
                body = await _read_body(request)
            except _MalformedBody as e:
                return None, ValidationFailedError([{
                    "field": "body", "reason": "wrong_format", "message": str(e),
                }])
            # Non-object bodies go to validate() as-is and are rejected there
            raw = {**body, **path} if isinstance(body, Mapping) else body
        else:
            raw = dict(request.query_params) if use_query else {}
            raw.update(path)

        params, error = validate(schema, raw)
        if params is None:
            return None, error
        return ValidatedRequest(credential, params), None
