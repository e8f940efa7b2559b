"""
api.routes_tags - Tag generation, preview and validation endpoints.

Generation consumes a sequence number; preview and the validators
never touch the counter.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.settings_service import SettingsService
from services.tag_store import SqlTagStore
from tagging.barcode import validate_barcode_settings
from tagging.generator import TagGenerator
from tagging.models import NUMBERING_SYSTEMS, GenerationContext, TaggingSettings
from tagging.numbering import convert_tag_format
from tagging.preview import preview_tag_numbers
from tagging.template import validate_custom_format
from tagging.validator import validate_tag_number
import config


def tag_generator() -> TagGenerator:
    return TagGenerator(SqlTagStore(), max_attempts=config.MAX_ALTERNATIVE_ATTEMPTS)


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@api_bp.route("/farms/<farm_id>/tags", methods=["POST"])
def generate_tag(farm_id: str):
    """
    POST /api/v1/farms/{farm_id}/tags

    JSON body (optional): {"context": {animal_source, animal_data, custom_attributes}}
    Always answers 201 with a tag; fallback tags carry outcome/reason.
    """
    try:
        context = GenerationContext.from_dict(_body().get("context"))
    except (TypeError, ValueError, AttributeError) as exc:
        return jsonify({"error": f"invalid context: {exc}"}), 400
    generated = tag_generator().generate_tag(farm_id, context)
    return jsonify(generated.to_dict()), 201


@api_bp.route("/farms/<farm_id>/tags/preview", methods=["POST"])
def preview_tags(farm_id: str):
    """
    POST /api/v1/farms/{farm_id}/tags/preview

    JSON body (all optional):
      settings         - unsaved settings to preview instead of the stored ones
      context          - generation context
      starting_number  - defaults to the farm's next_number
      count            - defaults to 3, capped at PREVIEW_MAX_COUNT
    """
    data = _body()
    try:
        count = int(data.get("count", config.PREVIEW_DEFAULT_COUNT))
        start = data.get("starting_number")
        start = int(start) if start is not None else None
    except (TypeError, ValueError):
        return jsonify({"error": "count and starting_number must be integers"}), 400
    count = max(0, min(count, config.PREVIEW_MAX_COUNT))

    try:
        raw_settings = data.get("settings")
        settings = TaggingSettings.from_dict(raw_settings) if raw_settings is not None else None
        context = GenerationContext.from_dict(data.get("context"))
    except (TypeError, ValueError, AttributeError) as exc:
        return jsonify({"error": str(exc)}), 400

    if settings is None:
        session = get_session()
        try:
            settings = SettingsService.get(session, farm_id)
        finally:
            session.close()

    tags = preview_tag_numbers(settings, context, start, count)
    return jsonify({"farm_id": farm_id, "numbering_system": settings.numbering_system,
                    "tags": tags})


@api_bp.route("/tags/validate", methods=["POST"])
def validate_tag():
    """POST /api/v1/tags/validate  {"tag_number": "..."}"""
    tag = str(_body().get("tag_number") or "")
    return jsonify(validate_tag_number(tag).to_dict())


@api_bp.route("/tags/convert", methods=["POST"])
def convert_tag():
    """
    POST /api/v1/tags/convert  {"tag_number": "COW-7", "numbering_system": "barcode"}

    Re-expresses an existing tag in another system's default shape.
    """
    data = _body()
    tag = data.get("tag_number")
    system = data.get("numbering_system")
    if not isinstance(tag, str) or not tag.strip():
        return jsonify({"error": "tag_number required"}), 400
    if system not in NUMBERING_SYSTEMS:
        return jsonify({"error": f"numbering_system must be one of {', '.join(NUMBERING_SYSTEMS)}"}), 400
    return jsonify({"tag_number": tag, "numbering_system": system,
                    "converted": convert_tag_format(tag.strip(), system)})


@api_bp.route("/tags/formats/validate", methods=["POST"])
def validate_format():
    """
    POST /api/v1/tags/formats/validate

    {"custom_format": "...", "attribute_names": [...]}  or
    {"barcode_type": "...", "barcode_length": 8, "tag_prefix": "..."}
    """
    data = _body()
    if "custom_format" in data:
        check = validate_custom_format(str(data.get("custom_format") or ""),
                                       data.get("attribute_names") or [])
        return jsonify(check.to_dict())
    if "barcode_type" in data:
        try:
            length = int(data.get("barcode_length", 8))
        except (TypeError, ValueError):
            return jsonify({"error": "barcode_length must be an integer"}), 400
        check = validate_barcode_settings(str(data["barcode_type"]), length,
                                          str(data.get("tag_prefix") or ""))
        return jsonify(check.to_dict())
    return jsonify({"error": "custom_format or barcode_type required"}), 400
