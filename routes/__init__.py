"""
Flask route blueprints for Wing Planner.

This module contains all route handlers organized by functionality:
- main: Health check
- api: Catalog, draft and event details
- distribution: Wing distribution (preference or manual)
- sauces: Sauce selection, presets and the wing type editor

All routes speak JSON. Each blueprint is registered with the Flask app in
create_app().
"""

from .main import main_bp
from .api import api_bp
from .distribution import distribution_bp
from .sauces import sauces_bp

__all__ = [
    "main_bp",
    "api_bp",
    "distribution_bp",
    "sauces_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(distribution_bp)
    app.register_blueprint(sauces_bp)
