"""
api.routes_animals - /api/v1/farms/<farm_id>/animals endpoints and
scannable payloads.
"""

from flask import request, jsonify

from api import api_bp
from api.routes_tags import tag_generator
from db import get_session
from services.animal_service import AnimalError, AnimalService, DuplicateTagError
from tagging.payload import build_payload, parse_payload
import config


@api_bp.route("/farms/<farm_id>/animals")
def list_animals(farm_id: str):
    """GET /api/v1/farms/{farm_id}/animals?status=&limit=100&offset=0"""
    status = request.args.get("status", "").strip()
    try:
        limit = min(int(request.args.get("limit", config.API_DEFAULT_LIMIT)),
                    config.API_MAX_LIMIT)
        offset = int(request.args.get("offset", 0))
    except ValueError:
        return jsonify({"error": "limit and offset must be integers"}), 400

    session = get_session()
    try:
        animals, total = AnimalService.search(session, farm_id, status=status,
                                              limit=limit, offset=offset)
        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "animals": [a.to_dict() for a in animals],
        })
    finally:
        session.close()


@api_bp.route("/farms/<farm_id>/animals", methods=["POST"])
def create_animal(farm_id: str):
    """
    POST /api/v1/farms/{farm_id}/animals

    JSON body: {gender, tag_number?, auto_generate_tag?, breed, ...,
                custom_attributes: [{name, value}]}
    Without a tag_number (or with auto_generate_tag) a tag is generated.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    session = get_session()
    try:
        animal, generated = AnimalService.create(session, farm_id, data, tag_generator())
        session.commit()
        body = animal.to_dict()
        if generated is not None:
            body["tag_generation"] = generated.to_dict()
        return jsonify(body), 201
    except DuplicateTagError as exc:
        session.rollback()
        return jsonify({"error": str(exc), "suggestions": exc.suggestions}), 409
    except AnimalError as exc:
        session.rollback()
        return jsonify({"error": str(exc), "errors": exc.errors}), 400
    finally:
        session.close()


@api_bp.route("/farms/<farm_id>/animals/<animal_id>/payload")
def animal_payload(farm_id: str, animal_id: str):
    """GET /api/v1/farms/{farm_id}/animals/{id}/payload"""
    session = get_session()
    try:
        animal = AnimalService.get(session, farm_id, animal_id)
        if not animal:
            return jsonify({"error": "not found"}), 404
        payload = build_payload(animal.id, animal.tag_number, farm_id)
        return jsonify({"payload": payload})
    finally:
        session.close()


@api_bp.route("/payloads/parse", methods=["POST"])
def parse_scanned_payload():
    """POST /api/v1/payloads/parse  {"payload": "<scanned JSON text>"}"""
    data = request.get_json(silent=True)
    raw = data.get("payload") if isinstance(data, dict) else None
    if not isinstance(raw, str):
        return jsonify({"error": "payload string required"}), 400
    return jsonify(parse_payload(raw).to_dict())
