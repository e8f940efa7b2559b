"""
tagging.errors - Exception taxonomy for tag generation.

None of these reach the end caller of TagGenerator.generate_tag_number;
they steer the orchestrator between retry and fallback.
"""

from __future__ import annotations


class TaggingError(Exception):
    """Base class for every tag-engine error."""
    pass


class ValidationError(TaggingError):
    """A candidate failed structural or symbology rules."""

    def __init__(self, tag_number: str, errors: list[str]):
        self.tag_number = tag_number
        self.errors = list(errors)
        super().__init__(f"Generated tag validation failed: {', '.join(self.errors)}")


class UniquenessConflict(TaggingError):
    """A candidate already exists among the farm's active animals."""

    def __init__(self, tag_number: str):
        self.tag_number = tag_number
        super().__init__(f"Tag {tag_number!r} already in use")


class GenerationFailure(TaggingError):
    """Anything else: settings missing, store unreachable, bad template."""
    pass
