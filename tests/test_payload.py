import json
from datetime import datetime, timedelta, timezone

from tagging.payload import build_payload, parse_payload

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_build_payload_fields():
    data = json.loads(build_payload("a-1", "COW-001", "farm-1", now=NOW))
    assert data == {
        "animalId": "a-1",
        "tagNumber": "COW-001",
        "farmId": "farm-1",
        "timestamp": NOW.isoformat(),
        "version": "1.0",
    }


def test_parse_fresh_payload():
    check = parse_payload(build_payload("a-1", "COW-001", "farm-1", now=NOW), now=NOW)
    assert check.is_valid
    assert check.data["tagNumber"] == "COW-001"


def test_parse_rejects_garbage():
    assert parse_payload("not json").error == "Invalid payload format"
    assert parse_payload("[1, 2]").error == "Invalid payload format"


def test_parse_rejects_missing_fields():
    raw = json.dumps({"animalId": "a-1", "timestamp": NOW.isoformat()})
    assert parse_payload(raw, now=NOW).error == "Missing required fields in payload"


def test_parse_rejects_bad_timestamp():
    raw = json.dumps({"animalId": "a", "tagNumber": "t", "farmId": "f", "timestamp": "yesterday"})
    assert parse_payload(raw, now=NOW).error == "Payload timestamp is missing or malformed"


def test_parse_rejects_old_payload():
    old = build_payload("a-1", "COW-001", "farm-1", now=NOW - timedelta(days=400))
    check = parse_payload(old, now=NOW)
    assert not check.is_valid
    assert check.error == "Payload is too old"


def test_naive_timestamps_are_treated_as_utc():
    raw = json.dumps({"animalId": "a", "tagNumber": "t", "farmId": "f",
                      "timestamp": "2024-03-01T08:00:00"})
    assert parse_payload(raw, now=NOW).is_valid


def test_leap_day_reference():
    leap = datetime(2024, 2, 29, tzinfo=timezone.utc)
    raw = build_payload("a", "t", "f", now=datetime(2023, 3, 1, tzinfo=timezone.utc))
    assert parse_payload(raw, now=leap).is_valid
