"""
tagging - Animal tag-number generation engine.

Public API:
    generator.TagGenerator          generate_tag / generate_tag_number
    preview.preview_tag_numbers     pure previews, no store access
    template.resolve / validate_custom_format
    barcode.format_barcode / validate_barcode_settings
    validator.validate_generated_tag / validate_tag_number
    numbering.format_sequential_tag / parse_tag_number / …
    payload.build_payload / parse_payload
"""

from tagging.models import (                                   # noqa: F401
    AttributeValue,
    CustomAttribute,
    GeneratedTag,
    GenerationContext,
    TaggingSettings,
)
from tagging.errors import (                                   # noqa: F401
    GenerationFailure,
    TaggingError,
    UniquenessConflict,
    ValidationError,
)
from tagging.generator import TagGenerator, TagStore          # noqa: F401
from tagging.preview import preview_tag_number, preview_tag_numbers   # noqa: F401
from tagging.template import resolve, validate_custom_format          # noqa: F401
from tagging.barcode import format_barcode, validate_barcode_settings  # noqa: F401
from tagging.validator import validate_generated_tag, validate_tag_number  # noqa: F401
from tagging.numbering import (                                # noqa: F401
    convert_tag_format,
    format_sequential_tag,
    parse_tag_number,
    suggest_alternative_tags,
)
from tagging.payload import build_payload, parse_payload      # noqa: F401
