import json


def test_settings_defaults(client):
    res = client.get("/api/v1/farms/farm-1/tagging-settings")
    assert res.status_code == 200
    body = res.get_json()
    assert body["farm_id"] == "farm-1"
    assert body["tag_prefix"] == "COW"
    assert body["custom_format"] == "{PREFIX}-{NUMBER:3}"


def test_settings_update_and_reject(client):
    res = client.put("/api/v1/farms/farm-1/tagging-settings", json={"tag_prefix": "HF"})
    assert res.status_code == 200
    assert res.get_json()["tag_prefix"] == "HF"

    res = client.put("/api/v1/farms/farm-1/tagging-settings",
                     json={"numbering_system": "custom", "custom_format": "{PREFIX}"})
    assert res.status_code == 400
    assert res.get_json()["errors"]

    res = client.put("/api/v1/farms/farm-1/tagging-settings", data="nope",
                     content_type="text/plain")
    assert res.status_code == 400


def test_generate_consumes_numbers(client):
    first = client.post("/api/v1/farms/farm-1/tags", json={})
    second = client.post("/api/v1/farms/farm-1/tags")
    assert first.status_code == 201
    assert first.get_json()["tag_number"] == "COW-001"
    assert second.get_json()["tag_number"] == "COW-002"


def test_generate_with_context(client):
    client.put("/api/v1/farms/farm-1/tagging-settings", json={
        "numbering_system": "custom", "custom_format": "{PREFIX}-{BREED:2}-{NUMBER:4}",
    })
    res = client.post("/api/v1/farms/farm-1/tags",
                      json={"context": {"animal_data": {"breed": "holstein"}}})
    assert res.get_json()["tag_number"] == "COW-HO-0001"


def test_preview_does_not_consume(client):
    res = client.post("/api/v1/farms/farm-1/tags/preview", json={"count": 2})
    assert res.get_json()["tags"] == ["COW-001", "COW-002"]
    res = client.post("/api/v1/farms/farm-1/tags")
    assert res.get_json()["tag_number"] == "COW-001"


def test_preview_with_unsaved_settings_and_cap(client):
    res = client.post("/api/v1/farms/farm-1/tags/preview", json={
        "settings": {"tag_prefix": "HF", "sequence_padding": 4},
        "starting_number": 9,
        "count": 500,
    })
    tags = res.get_json()["tags"]
    assert tags[0] == "HF-0009"
    assert len(tags) == 50


def test_preview_rejects_bad_count(client):
    res = client.post("/api/v1/farms/farm-1/tags/preview", json={"count": "many"})
    assert res.status_code == 400


def test_validate_tag(client):
    assert client.post("/api/v1/tags/validate", json={"tag_number": "COW-001"}).get_json()["is_valid"]
    body = client.post("/api/v1/tags/validate", json={"tag_number": "COW--1"}).get_json()
    assert not body["is_valid"]


def test_validate_formats(client):
    body = client.post("/api/v1/tags/formats/validate",
                       json={"custom_format": "{PREFIX}-{NUMBER:3}"}).get_json()
    assert body["is_valid"]
    body = client.post("/api/v1/tags/formats/validate",
                       json={"barcode_type": "ean13", "barcode_length": 12}).get_json()
    assert not body["is_valid"]
    assert client.post("/api/v1/tags/formats/validate", json={}).status_code == 400


def test_create_and_list_animals(client):
    res = client.post("/api/v1/farms/farm-1/animals", json={"gender": "female", "breed": "jersey"})
    assert res.status_code == 201
    body = res.get_json()
    assert body["tag_number"] == "COW-001"
    assert body["tag_generation"]["outcome"] == "generated"

    res = client.post("/api/v1/farms/farm-1/animals", json={"gender": "male", "tag_number": "BULL-1"})
    assert res.status_code == 201
    assert "tag_generation" not in res.get_json()

    listing = client.get("/api/v1/farms/farm-1/animals").get_json()
    assert listing["total"] == 2
    assert {a["tag_number"] for a in listing["animals"]} == {"COW-001", "BULL-1"}


def test_create_animal_errors(client):
    client.post("/api/v1/farms/farm-1/animals", json={"gender": "male", "tag_number": "BULL-1"})
    dup = client.post("/api/v1/farms/farm-1/animals", json={"gender": "male", "tag_number": "BULL-1"})
    assert dup.status_code == 409
    assert dup.get_json()["suggestions"][:2] == ["BULL-002", "BULL-003"]
    bad = client.post("/api/v1/farms/farm-1/animals", json={"gender": "x"})
    assert bad.status_code == 400


def test_auto_generate_overrides_manual_tag(client):
    res = client.post("/api/v1/farms/farm-1/animals",
                      json={"gender": "female", "tag_number": "MINE-1", "auto_generate_tag": True})
    assert res.get_json()["tag_number"] == "COW-001"


def test_payload_round_trip(client):
    animal = client.post("/api/v1/farms/farm-1/animals", json={"gender": "female"}).get_json()
    res = client.get(f"/api/v1/farms/farm-1/animals/{animal['id']}/payload")
    payload = res.get_json()["payload"]
    assert json.loads(payload)["tagNumber"] == "COW-001"

    parsed = client.post("/api/v1/payloads/parse", json={"payload": payload}).get_json()
    assert parsed["is_valid"]
    assert parsed["data"]["animalId"] == animal["id"]


def test_payload_unknown_animal(client):
    assert client.get("/api/v1/farms/farm-1/animals/nope/payload").status_code == 404


def test_parse_payload_requires_string(client):
    assert client.post("/api/v1/payloads/parse", json={}).status_code == 400


def test_unknown_route_is_json_404(client):
    res = client.get("/api/v1/nothing-here")
    assert res.status_code == 404
    assert res.get_json()["error"] == "not found"


def test_malformed_context_is_rejected(client):
    res = client.post("/api/v1/farms/farm-1/tags", json={"context": "holstein"})
    assert res.status_code == 400
    res = client.post("/api/v1/farms/farm-1/tags",
                      json={"context": {"custom_attributes": "Pen=North"}})
    assert res.status_code == 400
    # nothing was drawn from the counter
    assert client.post("/api/v1/farms/farm-1/tags").get_json()["tag_number"] == "COW-001"


def test_preview_with_badly_typed_settings_is_rejected(client):
    res = client.post("/api/v1/farms/farm-1/tags/preview",
                      json={"settings": {"barcode_length": "abc"}})
    assert res.status_code == 400
    res = client.post("/api/v1/farms/farm-1/tags/preview", json={"settings": "HF"})
    assert res.status_code == 400


def test_settings_with_non_object_attribute_is_rejected(client):
    res = client.put("/api/v1/farms/farm-1/tagging-settings",
                     json={"custom_attributes": ["Pen"]})
    assert res.status_code == 400
    assert "Each custom attribute must be an object" in res.get_json()["errors"]

    res = client.put("/api/v1/farms/farm-1/tagging-settings", json={"tag_prefix": 7})
    assert res.status_code == 400


def test_animal_with_non_list_attributes_is_rejected(client):
    res = client.post("/api/v1/farms/farm-1/animals",
                      json={"gender": "female", "custom_attributes": "Pen"})
    assert res.status_code == 400


def test_convert_tag(client):
    res = client.post("/api/v1/tags/convert",
                      json={"tag_number": "COW-7", "numbering_system": "sequential"})
    assert res.status_code == 200
    assert res.get_json()["converted"] == "COW-007"

    assert client.post("/api/v1/tags/convert",
                       json={"numbering_system": "barcode"}).status_code == 400
    assert client.post("/api/v1/tags/convert",
                       json={"tag_number": "COW-7", "numbering_system": "qr"}).status_code == 400
