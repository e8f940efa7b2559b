"""
api.routes_settings - /api/v1/farms/<farm_id>/tagging-settings endpoints.
"""

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.settings_service import SettingsError, SettingsService


@api_bp.route("/farms/<farm_id>/tagging-settings")
def get_tagging_settings(farm_id: str):
    """GET /api/v1/farms/{farm_id}/tagging-settings  (defaults if never saved)"""
    session = get_session()
    try:
        settings = SettingsService.get(session, farm_id)
        return jsonify({"farm_id": farm_id, **settings.to_dict()})
    finally:
        session.close()


@api_bp.route("/farms/<farm_id>/tagging-settings", methods=["PUT"])
def update_tagging_settings(farm_id: str):
    """
    PUT /api/v1/farms/{farm_id}/tagging-settings

    JSON body: any subset of the settings fields.  custom_attributes,
    when present, replaces the whole list.  next_number is ignored.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    session = get_session()
    try:
        settings = SettingsService.update(session, farm_id, data)
        session.commit()
        return jsonify({"farm_id": farm_id, **settings.to_dict()})
    except SettingsError as exc:
        session.rollback()
        return jsonify({"error": "invalid settings", "errors": exc.errors}), 400
    finally:
        session.close()
