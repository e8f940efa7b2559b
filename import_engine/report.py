"""
import_engine.report - Structured result of an animal CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    skipped: int = 0
    errors: list[dict] = field(default_factory=list)   # [{row, reason}]
    generated: list[dict] = field(default_factory=list)  # [{row, tag_number, outcome}]

    def add_error(self, row: int, reason: str):
        self.errors.append({"row": row, "reason": reason})
        self.skipped += 1

    def add_generated(self, row: int, tag_number: str, outcome: str):
        self.generated.append({"row": row, "tag_number": tag_number, "outcome": outcome})

    @property
    def fallback_count(self) -> int:
        return sum(1 for g in self.generated if g["outcome"] in ("fallback", "retry_exhausted"))

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": self.errors,
            "generated": self.generated,
            "fallback_tags": self.fallback_count,
        }
