"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header normalisation ("Tag Number " → "tag_number")
  • Returns a csv.DictReader ready for iteration
"""

from __future__ import annotations

import csv
import io
import re
from typing import Optional

_SEP_RE = re.compile(r"[\s\-]+")


def normalise_header(name: str) -> str:
    return _SEP_RE.sub("_", (name or "").strip().lower())


def prepare_reader(raw: str | bytes) -> Optional[csv.DictReader]:
    """
    Accept raw file content (bytes or str), clean it,
    and return a DictReader.  Returns None if content is empty.
    """
    text = _decode(raw)
    if not text or not text.strip():
        return None

    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None:
        return None

    reader.fieldnames = [normalise_header(h) for h in reader.fieldnames]
    return reader


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
