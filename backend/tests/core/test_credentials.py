"""Credential — claims parsing and permission checks.

Tests:
    - parse_capability() accepts 'SECURABLE:PERMISSION' case-insensitively, else None
    - from_claims() drops unrecognized permissions
    - missing() lists ungranted capabilities as tokens
"""

import pytest

from taskboard.core.credentials import Credential, parse_capability
from taskboard.core.domain_types import Securable, Permission


def test_parse_capability():
    assert parse_capability("TASK:READ") == (Securable.TASK, Permission.READ)
    assert parse_capability(" category:delete ") == (
        Securable.CATEGORY, Permission.DELETE,
    )


@pytest.mark.parametrize("token", ["TASK", "TASK:ARCHIVE", "PROJECT:READ", ""])
def test_parse_capability_rejects_unknown(token):
    assert parse_capability(token) is None


def test_from_claims():
    credential = Credential.from_claims({
        "idAccount": "7",
        "idUser": 3,
        "permissions": ["TASK:READ", "TASK:FLY", 12],
    })
    assert credential.id_account == 7
    assert credential.id_user == 3
    assert credential.permissions == frozenset({(Securable.TASK, Permission.READ)})


def test_from_claims_requires_identity():
    with pytest.raises(KeyError):
        Credential.from_claims({"idUser": 1})


def test_grants_and_missing():
    credential = Credential(1, 1, frozenset({(Securable.TASK, Permission.READ)}))
    assert credential.grants(Securable.TASK, Permission.READ)
    assert not credential.grants(Securable.TASK, Permission.CREATE)
    assert credential.missing([
        (Securable.TASK, Permission.READ),
        (Securable.CATEGORY, Permission.UPDATE),
    ]) == ["CATEGORY:UPDATE"]
