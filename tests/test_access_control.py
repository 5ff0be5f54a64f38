"""
Tests for token extraction precedence and the access control dependencies
"""

import json

import pytest
from starlette.requests import Request

from app.api.deps import Identity, ensure_owner, extract_token, resolve_target_user_id
from app.core.errors import Forbidden, ValidationError


def _request(method="POST", headers=None, body=None, query=""):
    raw_body = json.dumps(body).encode() if body is not None else b""
    scope = {
        "type": "http",
        "method": method,
        "path": "/api/users/get-user-info",
        "query_string": query.encode(),
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }

    async def receive():
        return {"type": "http.request", "body": raw_body, "more_body": False}

    return Request(scope, receive)


@pytest.mark.asyncio
async def test_bearer_header_wins_over_every_other_channel():
    request = _request(
        headers={"Authorization": "Bearer from-bearer", "token": "from-header"},
        body={"token": "from-body"},
        query="token=from-query",
    )
    assert await extract_token(request) == "from-bearer"


@pytest.mark.asyncio
async def test_custom_header_wins_over_body_and_query():
    request = _request(headers={"token": "from-header"}, body={"token": "from-body"}, query="token=from-query")
    assert await extract_token(request) == "from-header"


@pytest.mark.asyncio
async def test_body_wins_over_query():
    request = _request(body={"token": "from-body"}, query="token=from-query")
    assert await extract_token(request) == "from-body"


@pytest.mark.asyncio
async def test_query_is_last_resort():
    assert await extract_token(_request(query="token=from-query")) == "from-query"
    assert await extract_token(_request(method="GET", query="token=from-query")) == "from-query"


@pytest.mark.asyncio
async def test_no_token_anywhere():
    assert await extract_token(_request(body={"user_id": 1})) is None


@pytest.mark.asyncio
async def test_non_bearer_authorization_is_ignored():
    request = _request(headers={"Authorization": "Basic abc"}, body={"token": "from-body"})
    assert await extract_token(request) == "from-body"


def _identity(subject_id=1, audience="users", role="user"):
    return Identity(subject_id=subject_id, email="x@example.com", name="X", role=role, audience=audience)


def test_identity_is_immutable():
    identity = _identity()
    with pytest.raises(Exception):
        identity.subject_id = 2


def test_user_can_only_act_on_itself():
    identity = _identity(subject_id=1)
    assert resolve_target_user_id(identity, None) == 1
    assert resolve_target_user_id(identity, 1) == 1
    with pytest.raises(Forbidden):
        resolve_target_user_id(identity, 2)


def test_admin_may_act_on_any_user_but_must_name_one():
    admin = _identity(subject_id=1, audience="admins", role="admin")
    assert resolve_target_user_id(admin, 5) == 5
    ensure_owner(admin, 99)
    with pytest.raises(ValidationError):
        resolve_target_user_id(admin, None)
