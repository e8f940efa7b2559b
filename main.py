#!/usr/bin/env python3
"""
HerdTag - Animal tag-number service
====================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify

import config
from db import init_db
from api import api_bp


def create_app(db_url: Optional[str] = None) -> Flask:
    """Flask application factory.  db_url overrides config.DB_URL."""

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    app = Flask(__name__)
    app.secret_key = config.SECRET

    # ── Initialise database ─────────────────────────────────────────
    url = db_url or config.DB_URL
    init_db(url)
    logging.getLogger(__name__).info(f"Database: {url}")

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def main():
    print("=" * 56)
    print("  HerdTag - Animal tag numbers")
    print("=" * 56)

    app = create_app()

    print(f"\n  http://{config.HOST}:{config.PORT}/api/v1")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
