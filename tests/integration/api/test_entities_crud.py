import pytest
from httpx import AsyncClient

from tests.utils.json_compare import exclude_keys

TIMESTAMPS = {"created_at", "updated_at"}


@pytest.mark.asyncio
async def test_create_read_update_delete(client: AsyncClient, register, test_data):
    """
    Given alice is logged in
    When she creates, reads, replaces and deletes a PDFTemplate
    Then every step returns the document in the public shape
    And the record is gone afterwards
    """
    headers = await register("alice")
    template = test_data.get_copy("pdf_template")

    created = await client.post("/api/entities/PDFTemplate", headers=headers, json=template)
    assert created.status_code == 201
    document = created.json()
    record_id = document["id"]
    assert exclude_keys(document, TIMESTAMPS | {"id", "created_by"}) == template
    assert document["created_at"] == document["updated_at"]

    read = await client.get(f"/api/entities/PDFTemplate?id={record_id}", headers=headers)
    assert read.status_code == 200
    assert read.json() == document

    replacement = {"name": "Receipt", "page_size": "Letter"}
    updated = await client.put(
        f"/api/entities/PDFTemplate?id={record_id}", headers=headers, json=replacement
    )
    assert updated.status_code == 200
    body = updated.json()
    assert body["id"] == record_id
    assert body["name"] == "Receipt"
    assert "section_count" not in body
    assert body["created_at"] == document["created_at"]
    assert body["updated_at"] >= body["created_at"]

    deleted = await client.delete(f"/api/entities/PDFTemplate?id={record_id}", headers=headers)
    assert deleted.status_code == 204

    gone = await client.get(f"/api/entities/PDFTemplate?id={record_id}", headers=headers)
    assert gone.status_code == 404
    assert gone.json()["error"]["code"] == "ENTITY_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_is_idempotent_at_data_level(client: AsyncClient, register):
    headers = await register("alice")
    created = await client.post("/api/entities/Section", headers=headers, json={"name": "Intro"})
    record_id = created.json()["id"]

    body = {"name": "Intro v2", "order": 3}
    first = await client.put(f"/api/entities/Section?id={record_id}", headers=headers, json=body)
    second = await client.put(f"/api/entities/Section?id={record_id}", headers=headers, json=body)

    assert exclude_keys(first.json(), TIMESTAMPS) == exclude_keys(second.json(), TIMESTAMPS)


@pytest.mark.asyncio
async def test_reserved_fields_in_body_are_ignored(client: AsyncClient, register):
    headers = await register("alice")

    created = await client.post(
        "/api/entities/Section",
        headers=headers,
        json={"id": "chosen-id", "created_at": "1999-01-01", "name": "Intro"},
    )

    assert created.status_code == 201
    assert created.json()["id"] != "chosen-id"
    assert not created.json()["created_at"].startswith("1999")


@pytest.mark.asyncio
async def test_update_and_delete_missing_record(client: AsyncClient, register):
    headers = await register("alice")

    updated = await client.put("/api/entities/Section?id=missing", headers=headers, json={"name": "x"})
    deleted = await client.delete("/api/entities/Section?id=missing", headers=headers)

    assert updated.status_code == 404
    assert deleted.status_code == 404


@pytest.mark.asyncio
async def test_personal_records_are_private(client: AsyncClient, register):
    """
    Given alice created a Section without an organization
    When bob reads, updates or deletes it
    Then each attempt is forbidden and the record is unchanged
    """
    alice = await register("alice")
    bob = await register("bob")
    created = await client.post("/api/entities/Section", headers=alice, json={"name": "Intro"})
    url = f"/api/entities/Section?id={created.json()['id']}"

    read = await client.get(url, headers=bob)
    updated = await client.put(url, headers=bob, json={"name": "Hijacked"})
    deleted = await client.delete(url, headers=bob)

    for response in (read, updated, deleted):
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    still_there = await client.get(url, headers=alice)
    assert still_there.json()["name"] == "Intro"

    listing = await client.get("/api/entities/Section", headers=bob)
    assert listing.json() == []


@pytest.mark.asyncio
async def test_auth_entities_are_not_exposed(client: AsyncClient, register):
    headers = await register("alice")

    users = await client.get("/api/entities/User", headers=headers)
    sessions = await client.get("/api/entities/Session", headers=headers)
    forged = await client.post(
        "/api/entities/User", headers=headers, json={"username": "root", "role": "admin"}
    )

    for response in (users, sessions, forged):
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ENTITY_NOT_EXPOSED"


@pytest.mark.asyncio
async def test_airtable_key_is_masked(client: AsyncClient, register, test_data):
    headers = await register("alice")
    connection = test_data.get_copy("airtable_connection")

    created = await client.post("/api/entities/AirtableConnection", headers=headers, json=connection)
    assert created.json()["api_key"] == "***5678"

    record_id = created.json()["id"]
    renamed = dict(created.json(), name="Renamed")
    await client.put(f"/api/entities/AirtableConnection?id={record_id}", headers=headers, json=renamed)

    rotated = await client.put(
        f"/api/entities/AirtableConnection?id={record_id}",
        headers=headers,
        json=dict(renamed, api_key="patNEWKEY00009999"),
    )
    assert rotated.json()["api_key"] == "***9999"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [b"{not json", b"[1, 2, 3]", b"\"just a string\"", b""],
)
async def test_body_must_be_a_json_object(client: AsyncClient, register, content):
    headers = await register("alice")

    response = await client.post(
        "/api/entities/Section",
        headers={**headers, "Content-Type": "application/json"},
        content=content,
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_BODY"


@pytest.mark.asyncio
async def test_unregistered_entity_names_work_as_personal(client: AsyncClient, register):
    alice = await register("alice")
    bob = await register("bob")

    created = await client.post("/api/entities/Widget", headers=alice, json={"color": "red"})
    assert created.status_code == 201

    forbidden = await client.get(f"/api/entities/Widget?id={created.json()['id']}", headers=bob)
    assert forbidden.status_code == 403
