import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_successful_signup(client: AsyncClient, test_data):
    """
    Given no user named alice
    When alice signs up
    Then the account is created and logged in
    And the password hash is never returned
    """
    user = test_data.get_copy("users")["alice"]

    response = await client.post("/api/auth/signup", json=user)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Account created successfully"
    assert data["user"]["username"] == "alice"
    assert data["user"]["email"] == "a@x.com"
    assert "id" in data["user"]
    assert isinstance(data["token"], str) and len(data["token"]) > 0
    assert data["expires_at"]
    assert "password_hash" not in response.text


@pytest.mark.asyncio
async def test_duplicate_username_and_email_look_the_same(client: AsyncClient, test_data):
    """
    Given alice is registered
    When someone signs up with her username, or with her email
    Then both attempts fail with 409 and the same error body
    """
    alice = test_data.get_copy("users")["alice"]
    await client.post("/api/auth/signup", json=alice)

    same_username = await client.post(
        "/api/auth/signup",
        json={"username": "alice", "email": "other@x.com", "password": "pw123456"},
    )
    same_email = await client.post(
        "/api/auth/signup",
        json={"username": "alice2", "email": "a@x.com", "password": "pw123456"},
    )

    assert same_username.status_code == 409
    assert same_email.status_code == 409
    assert same_username.json() == same_email.json()
    assert same_username.json()["error"]["code"] == "ACCOUNT_EXISTS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com", "password": "pw123456"},
        {"username": "alice", "email": "not-an-email", "password": "pw123456"},
        {"username": "alice", "email": "a@x.com", "password": "short"},
    ],
)
async def test_signup_invalid_input(client: AsyncClient, payload):
    response = await client.post("/api/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_get_on_public_route_is_method_not_allowed(client: AsyncClient):
    response = await client.get("/api/auth/signup")

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"
