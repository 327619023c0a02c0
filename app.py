"""
Wing Planner - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env, config.Config)
2. Loads the sauce/package catalog (fail-fast)
3. Registers route blueprints
4. Sets up JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Catalog load (read-only, shared by all requests)
    └── Flask request handling

    Each request
    └── DraftStore over the session cookie, DraftService on top

Nothing but the catalog is shared between requests; every draft lives in its
customer's session.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from logging_config import setup_logging, get_logger
from core.exceptions import CatalogLoadError, WingPlannerError
from services.catalog_service import CatalogService
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In PyInstaller bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(
    config_object: str = "config.Config",
    overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: If the catalog cannot be loaded, app will not start.

    Args:
        config_object: Import path of the config class
        overrides: Config values applied after the config class (tests)

    Returns:
        Configured Flask application

    Raises:
        CatalogLoadError: If the catalog file is missing or malformed
    """
    # Use override=True so .env file always takes precedence over shell environment
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)  # Default behavior

    # Create Flask app
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        app_name="wing_planner",
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting Wing Planner in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # CATALOG (FAIL-FAST)
    # =========================================================================

    try:
        catalog = CatalogService(app.config["CATALOG_PATH"])
    except CatalogLoadError as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    # Store in app config for access by routes
    app.config["CATALOG_SERVICE"] = catalog

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(WingPlannerError)
    def handle_planner_error(e: WingPlannerError):
        logger.info(f"Rejected request: {e}")
        return jsonify({"error": e.message, "details": e.details}), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "Not found", "details": {}}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "details": {}}), 405

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred", "details": {}}), 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
