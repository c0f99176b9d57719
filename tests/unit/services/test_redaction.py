from src.app.services.redaction import mask_secret, redact, restore_masked


def test_mask_keeps_last_four():
    assert mask_secret("patABCDEFGH12345678") == "***5678"
    assert mask_secret("abc") == "***"


def test_redact_only_touches_secret_fields():
    document = {"id": "1", "name": "Sales base", "api_key": "patABCDEFGH12345678"}

    redacted = redact("AirtableConnection", document)

    assert redacted == {"id": "1", "name": "Sales base", "api_key": "***5678"}
    assert document["api_key"] == "patABCDEFGH12345678"


def test_other_entities_pass_through():
    document = {"id": "1", "api_key": "visible"}
    assert redact("Section", document) == document


def test_masked_value_restores_stored_secret():
    body = {"name": "Renamed", "api_key": "***5678"}
    restored = restore_masked(
        "AirtableConnection", body, {"api_key": "patABCDEFGH12345678"}
    )
    assert restored["api_key"] == "patABCDEFGH12345678"


def test_new_secret_replaces_stored_one():
    body = {"api_key": "patNEWKEY00009999"}
    restored = restore_masked("AirtableConnection", body, {"api_key": "old"})
    assert restored["api_key"] == "patNEWKEY00009999"
