"""Remote Procedure Gateway — executes a named stored procedure and shapes its record sets.

Invariants:
    - Every parameter is bound as a named input (EXEC routine @name = ?), never interpolated
    - Routine and parameter names must match _ROUTINE / _PARAMETER before a statement is built
    - Record sets are collected in emission order; sets without columns are skipped
    - ExpectedReturn.NONE → None, SINGLE → first row or None, MULTI → list of sets,
      MULTI + result_set_names → {name: sets[i] or []} by declared position
    - Failures are logged with routine and parameter names, then re-raised unchanged

Design Decisions:
    - _execute() is the only function touching a connection; tests replace it
    - Driver cursor (aioodbc) via get_raw_connection(): SQLAlchemy results expose one record set,
      and its adapted async cursors do not report whether another set follows
    - Driver errors (pyodbc) propagate unwrapped; DatabasePool.begin() classifies them
    - Parameter values logged only when log_procedure_parameters is on
"""

import logging
import re
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncConnection

import taskboard.infrastructure.database as database
from taskboard.config import get_settings
from taskboard.core.errors import sql_error_number

logger = logging.getLogger(__name__)

Row = dict[str, Any]
RecordSet = list[Row]

_ROUTINE = re.compile(r"^(\[\w+\]|\w+)(\.(\[\w+\]|\w+))?$")
_PARAMETER = re.compile(r"^\w+$")


class ExpectedReturn(str, Enum):
    """Result shape a call site expects from its procedure."""
    NONE = "None"
    SINGLE = "Single"
    MULTI = "Multi"


def build_exec_statement(routine: str, names: list[str]) -> str:
    """EXEC [schema].[proc] @a = ?, @b = ?"""
    if not _ROUTINE.match(routine):
        raise ValueError(f"Invalid routine name: {routine!r}")
    for name in names:
        if not _PARAMETER.match(name):
            raise ValueError(f"Invalid parameter name: {name!r}")
    bindings = ", ".join(f"@{name} = ?" for name in names)
    return f"EXEC {routine} {bindings}".rstrip()


async def _call_procedure(
    driver_conn: Any, routine: str, parameters: dict[str, Any],
) -> list[RecordSet]:
    """Run the procedure on an aioodbc connection; nextset() reports whether a set follows."""
    statement = build_exec_statement(routine, list(parameters))
    cursor = await driver_conn.cursor()
    try:
        await cursor.execute(statement, *parameters.values())
        recordsets: list[RecordSet] = []
        while True:
            if cursor.description:
                columns = [col[0] for col in cursor.description]
                rows = await cursor.fetchall()
                recordsets.append([dict(zip(columns, row)) for row in rows])
            if not await cursor.nextset():
                break
        return recordsets
    finally:
        await cursor.close()


async def _execute(
    conn: AsyncConnection, routine: str, parameters: dict[str, Any],
) -> list[RecordSet]:
    raw = await conn.get_raw_connection()
    return await _call_procedure(raw.driver_connection, routine, parameters)


def _shape(
    routine: str,
    recordsets: list[RecordSet],
    expected_return: ExpectedReturn,
    result_set_names: list[str] | None,
) -> Any:
    if expected_return is ExpectedReturn.NONE:
        return None
    if expected_return is ExpectedReturn.SINGLE:
        first = recordsets[0] if recordsets else []
        return first[0] if first else None
    if not result_set_names:
        return recordsets
    if len(recordsets) > len(result_set_names):
        logger.warning(
            f"{routine} returned {len(recordsets)} record sets, "
            f"{len(result_set_names)} declared",
            extra={"routine": routine},
        )
    return {
        name: recordsets[index] if index < len(recordsets) else []
        for index, name in enumerate(result_set_names)
    }


async def db_request(
    routine: str,
    parameters: dict[str, Any],
    expected_return: ExpectedReturn,
    transaction: AsyncConnection | None = None,
    result_set_names: list[str] | None = None,
) -> Any:
    """Execute a stored procedure and return its result in the expected shape."""
    try:
        if transaction is not None:
            recordsets = await _execute(transaction, routine, parameters)
        else:
            async with database.db_pool.begin() as conn:
                recordsets = await _execute(conn, routine, parameters)
    except Exception as e:
        logged = (
            parameters if get_settings().log_procedure_parameters
            else sorted(parameters)
        )
        logger.error(
            f"Database request error: {routine}: {e}",
            extra={
                "routine": routine,
                "parameters": logged,
                "error_code": sql_error_number(e),
            },
        )
        raise
    return _shape(routine, recordsets, expected_return, result_set_names)


@asynccontextmanager
async def db_transaction() -> AsyncGenerator[AsyncConnection, None]:
    """Connection for several db_request calls that commit or roll back together."""
    async with database.db_pool.begin() as conn:
        yield conn
