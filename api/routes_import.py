"""
api.routes_import - /api/v1/farms/<farm_id>/animals/import endpoint.

Accepts CSV via multipart file upload or raw request body.
"""

from flask import request, jsonify

from api import api_bp
from api.routes_tags import tag_generator
from import_engine import run_import


@api_bp.route("/farms/<farm_id>/animals/import", methods=["POST"])
def import_animals_csv(farm_id: str):
    """
    POST /api/v1/farms/{farm_id}/animals/import

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    Rows without a tag number are tagged automatically.
    """
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    report = run_import(farm_id, content, generator=tag_generator())
    return jsonify(report.to_dict())
