import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_bare_options_returns_cors_headers(client: AsyncClient):
    response = await client.options("/api/entities/Section")

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "PUT" in response.headers["access-control-allow-methods"]
    assert "Authorization" in response.headers["access-control-allow-headers"]


@pytest.mark.asyncio
async def test_preflight_request(client: AsyncClient):
    response = await client.options(
        "/api/entities/Section",
        headers={
            "Origin": "http://builder.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_simple_request_gets_allow_origin(client: AsyncClient):
    response = await client.post(
        "/api/auth/login",
        json={"username": "nobody", "password": "whatever1"},
        headers={"Origin": "http://builder.example.com"},
    )

    assert response.status_code == 401
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_unknown_path_is_not_found(client: AsyncClient):
    response = await client.get("/api/nothing/here")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_unsupported_verb_is_method_not_allowed(client: AsyncClient, register):
    headers = await register("alice")

    patch = await client.patch("/api/entities/Section?id=abc", headers=headers, json={})
    put_without_id = await client.put("/api/entities/Section", headers=headers, json={})
    delete_without_id = await client.delete("/api/entities/Section", headers=headers)

    for response in (patch, put_without_id, delete_without_id):
        assert response.status_code == 405
        assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_preflight_with_unlisted_header_and_method(client: AsyncClient):
    response = await client.options(
        "/api/entities/Section",
        headers={
            "Origin": "http://builder.example.com",
            "Access-Control-Request-Method": "PATCH",
            "Access-Control-Request-Headers": "content-type,authorization,x-requested-with",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "Authorization" in response.headers["access-control-allow-headers"]


@pytest.mark.asyncio
async def test_options_on_unknown_path(client: AsyncClient):
    response = await client.options("/api/nothing/here")

    assert response.status_code == 200
