"""
Configuration for Wing Planner.

All tunables can be overridden through environment variables or a .env file.
The allocation modules read their defaults from here but accept explicit
values, so they stay usable without a Flask app.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "wing_planner_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # Sauce and package catalog (read-only JSON export of the menu store)
    CATALOG_PATH = os.environ.get(
        "WING_CATALOG_PATH",
        str(BASE_DIR / "data" / "catalog.json")
    )

    # ==========================================================================
    # Draft persistence
    # ==========================================================================
    # DRAFT_STORAGE_KEY: key the draft envelope is stored under
    # DRAFT_EXPIRY_HOURS: drafts older than this are discarded on load
    # ==========================================================================
    DRAFT_STORAGE_KEY = os.environ.get("DRAFT_STORAGE_KEY", "wing-planner-draft")
    DRAFT_EXPIRY_HOURS = float(os.environ.get("DRAFT_EXPIRY_HOURS", "24"))

    # ==========================================================================
    # Wing distribution rules
    # ==========================================================================
    # MIN_WINGS_PER_TYPE: smallest non-zero quantity the kitchen prepares
    #   for one wing type (half a dozen)
    # BONELESS_SHARE_PERCENT: share of traditional wings that go boneless
    #   when a preference is translated; the rest are bone-in
    # ==========================================================================
    MIN_WINGS_PER_TYPE = int(os.environ.get("MIN_WINGS_PER_TYPE", "6"))
    BONELESS_SHARE_PERCENT = float(os.environ.get("BONELESS_SHARE_PERCENT", "60"))

    # Guest count bounds for the event details form
    MIN_GUEST_COUNT = int(os.environ.get("MIN_GUEST_COUNT", "10"))
    MAX_GUEST_COUNT = int(os.environ.get("MAX_GUEST_COUNT", "1000"))


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 24 * 3600  # matches draft expiry


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
