"""
Request helpers shared by the blueprints.

The draft lives in the Flask session: each request builds a DraftStore over
the session, restores the saved draft (if any, and not expired) and wraps it
in a DraftService. Edits save back into the session automatically.
"""

from typing import Any, Dict, List, Optional

import bleach
from flask import current_app, g, request, session

from core.exceptions import WingPlannerError
from services.catalog_service import CatalogService
from services.draft_service import DraftService
from services.draft_storage import SessionDraftStorage
from services.draft_store import DraftStore


MAX_TEXT_LENGTH = 1000


def get_catalog() -> CatalogService:
    return current_app.config["CATALOG_SERVICE"]


def get_draft_service() -> DraftService:
    """DraftService for the current request's draft (created once per request)."""
    if "draft_service" not in g:
        store = DraftStore(
            SessionDraftStorage(session),
            storage_key=current_app.config.get("DRAFT_STORAGE_KEY"),
            expiry_hours=current_app.config.get("DRAFT_EXPIRY_HOURS"),
        )
        store.load_draft()
        g.draft_service = DraftService(store)
    return g.draft_service


def json_body() -> Dict[str, Any]:
    """Request JSON object, or {} when the body is missing or not an object."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return {}
    return body


def require_int(body: Dict[str, Any], key: str, minimum: Optional[int] = None) -> int:
    """Integer field from a request body, raising WingPlannerError if absent or invalid."""
    value = body.get(key)
    if isinstance(value, bool):
        value = None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise WingPlannerError(f"{key} must be an integer", {"field": key, "value": value}) from None
    if minimum is not None and number < minimum:
        raise WingPlannerError(f"{key} must be at least {minimum}", {"field": key, "value": number})
    return number


def require_str(body: Dict[str, Any], key: str) -> str:
    value = body.get(key)
    if not isinstance(value, str) or not value:
        raise WingPlannerError(f"{key} is required", {"field": key})
    return value


def sanitize_text(text: Any, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Sanitize user input text."""
    if not text or not isinstance(text, str):
        return ""
    text = text.strip()
    text = bleach.clean(text, tags=[], strip=True)
    if max_length and len(text) > max_length:
        text = text[:max_length]
    return text


def sanitize_list(values: Any, max_length: int = 100) -> List[str]:
    if not isinstance(values, list):
        return []
    cleaned = (sanitize_text(v, max_length) for v in values)
    return [v for v in cleaned if v]
