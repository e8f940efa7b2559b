"""
tagging.payload - Data embedded in scannable animal codes.

    {"animalId": ..., "tagNumber": ..., "farmId": ...,
     "timestamp": "<ISO-8601 UTC>", "version": "1.0"}

Rendering the code itself (QR image, PDF) belongs to another component.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

PAYLOAD_VERSION = "1.0"
REQUIRED_FIELDS = ("animalId", "tagNumber", "farmId")


@dataclass
class PayloadCheck:
    is_valid: bool
    data: Optional[dict] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "data": self.data, "error": self.error}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _one_year_before(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:                      # 29 Feb
        return moment.replace(year=moment.year - 1, day=28)


def _parse_timestamp(raw) -> Optional[datetime]:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def build_payload(animal_id: str, tag_number: str, farm_id: str,
                  now: Optional[datetime] = None) -> str:
    return json.dumps({
        "animalId": animal_id,
        "tagNumber": tag_number,
        "farmId": farm_id,
        "timestamp": (now or _utcnow()).isoformat(),
        "version": PAYLOAD_VERSION,
    })


def parse_payload(raw: str, now: Optional[datetime] = None) -> PayloadCheck:
    """Decode and vet a scanned payload.  Never raises."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return PayloadCheck(False, error="Invalid payload format")
    if not isinstance(data, dict):
        return PayloadCheck(False, error="Invalid payload format")

    if not all(data.get(k) for k in REQUIRED_FIELDS):
        return PayloadCheck(False, data, "Missing required fields in payload")

    ts = _parse_timestamp(data.get("timestamp"))
    if ts is None:
        return PayloadCheck(False, data, "Payload timestamp is missing or malformed")

    now = now or _utcnow()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if ts < _one_year_before(now):
        return PayloadCheck(False, data, "Payload is too old")

    return PayloadCheck(True, data)
