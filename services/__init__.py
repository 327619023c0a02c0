"""
Services layer for Wing Planner.

This module contains the stateful services:
- CatalogService: Read-only sauces and packages, loaded at startup
- DraftStore: The customer's draft, with subscriptions and persistence
- DraftService: Planner edits applied to a DraftStore

Request Model:
    Flask request
    └── DraftStore(SessionDraftStorage(session))
        └── DraftService (one per request, no state of its own)

The catalog is shared by all requests and never modified.
"""

from .catalog_service import CatalogService
from .draft_service import DraftService
from .draft_storage import DraftStorage, MemoryDraftStorage, SessionDraftStorage
from .draft_store import DraftStore

__all__ = [
    "CatalogService",
    "DraftService",
    "DraftStorage",
    "DraftStore",
    "MemoryDraftStorage",
    "SessionDraftStorage",
]
