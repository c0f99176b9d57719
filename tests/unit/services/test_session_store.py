from datetime import UTC, datetime, timedelta

import pytest

from src.app.services.session_store import SessionStore
from src.domain.entities import EntityRecord


def session_record(**data) -> EntityRecord:
    return EntityRecord(id="sess-1", entity_name="Session", data=data)


@pytest.mark.asyncio
async def test_issue_writes_session_entity(mock_uow):
    """
    Given a user
    When a session is issued with a 7 day TTL
    Then a Session entity holds the token and identity fields
    And expires_at is seven days out
    """
    issued = await SessionStore(mock_uow).issue(
        "user-1", "alice", "alice@example.com", timedelta(days=7)
    )

    entity_name, data = mock_uow.entities.create.call_args.args
    assert entity_name == "Session"
    assert data["token"] == issued.token
    assert data["user_id"] == "user-1"
    assert data["username"] == "alice"
    assert data["email"] == "alice@example.com"
    assert len(issued.token) >= 32

    expires_at = datetime.fromisoformat(issued.expires_at)
    remaining = expires_at - datetime.now(UTC)
    assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)


@pytest.mark.asyncio
async def test_tokens_are_unique(mock_uow):
    store = SessionStore(mock_uow)
    tokens = {
        (await store.issue("user-1", "alice", "", timedelta(days=1))).token
        for _ in range(20)
    }
    assert len(tokens) == 20


@pytest.mark.asyncio
async def test_validate_live_session(mock_uow):
    expires_at = (datetime.now(UTC) + timedelta(hours=1)).isoformat()
    mock_uow.entities.find_one.return_value = session_record(
        token="tok", user_id="user-1", username="alice", email="a@x.com", expires_at=expires_at
    )

    result = await SessionStore(mock_uow).validate("tok")

    assert result.is_ok()
    assert result.value.id == "user-1"
    assert result.value.username == "alice"
    assert result.value.email == "a@x.com"
    mock_uow.entities.find_one.assert_awaited_once_with("Session", "token", "tok")


@pytest.mark.asyncio
async def test_validate_expired_session(mock_uow):
    """Tokens past expires_at are Expired, never valid"""
    expires_at = (datetime.now(UTC) - timedelta(seconds=1)).isoformat()
    mock_uow.entities.find_one.return_value = session_record(
        token="tok", user_id="user-1", username="alice", expires_at=expires_at
    )

    result = await SessionStore(mock_uow).validate("tok")

    assert result.is_err()
    assert result.error.code == "SESSION_EXPIRED"


@pytest.mark.asyncio
async def test_validate_unknown_token(mock_uow):
    result = await SessionStore(mock_uow).validate("nope")

    assert result.is_err()
    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_validate_empty_token_skips_lookup(mock_uow):
    result = await SessionStore(mock_uow).validate("")

    assert result.error.code == "INVALID_TOKEN"
    mock_uow.entities.find_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_validate_unreadable_expiry(mock_uow):
    mock_uow.entities.find_one.return_value = session_record(
        token="tok", user_id="user-1", expires_at="next tuesday"
    )

    result = await SessionStore(mock_uow).validate("tok")

    assert result.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_revoke_deletes_session_record(mock_uow):
    mock_uow.entities.find_one.return_value = session_record(token="tok")

    assert await SessionStore(mock_uow).revoke("tok") is True
    mock_uow.entities.delete.assert_awaited_once_with("Session", "sess-1")


@pytest.mark.asyncio
async def test_revoke_unknown_token(mock_uow):
    assert await SessionStore(mock_uow).revoke("tok") is False
    mock_uow.entities.delete.assert_not_awaited()
