import pytest

from src.app.services.password_hasher import verify_password
from src.app.use_cases.auth import SignupCommand, SignupUseCase
from src.domain.entities import EntityRecord


def fake_create(entity_name, data):
    return EntityRecord(id=f"{entity_name.lower()}-1", entity_name=entity_name, data=data)


@pytest.mark.asyncio
async def test_successful_signup(mock_uow):
    """
    Given no user named alice
    When alice signs up
    Then a User entity is stored with a bcrypt hash and role=user
    And a Session is issued and committed
    """
    mock_uow.entities.create.side_effect = fake_create

    result = await SignupUseCase(mock_uow).execute(
        SignupCommand(username="alice", email="a@x.com", password="pw123456")
    )

    assert result.is_ok()
    response = result.value
    assert response.user.id == "user-1"
    assert response.user.username == "alice"
    assert response.user.email == "a@x.com"
    assert response.token

    (user_call, session_call) = mock_uow.entities.create.await_args_list
    entity_name, user_data = user_call.args
    assert entity_name == "User"
    assert user_data["role"] == "user"
    assert "password" not in user_data
    assert verify_password("pw123456", user_data["password_hash"])

    assert session_call.args[0] == "Session"
    assert session_call.args[1]["user_id"] == "user-1"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("taken_field", ["username", "email"])
async def test_duplicate_username_or_email(mock_uow, taken_field):
    """Duplicate username and duplicate email fail with the same error"""

    async def find_one(entity_name, field, value):
        if field == taken_field:
            return EntityRecord(id="user-0", entity_name="User", data={field: value})
        return None

    mock_uow.entities.find_one.side_effect = find_one

    result = await SignupUseCase(mock_uow).execute(
        SignupCommand(username="alice", email="a@x.com", password="pw123456")
    )

    assert result.is_err()
    assert result.error.code == "ACCOUNT_EXISTS"
    assert result.error.message == "Username or email already registered"
    mock_uow.entities.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()
