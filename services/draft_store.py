"""
Reactive store for the in-progress catering draft.

Each DraftStore owns one DraftState. Reads return deep copies; every change
goes through ``update_state`` / ``batch_update``, which merge the change into
a named section, recompute the derived sauce summary, notify subscribers
synchronously and then persist the draft.

Sections and merge semantics:
    update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        -> dataclasses.replace on EventDetails (other fields kept)
    update_state(DraftSection.WING_DISTRIBUTION, WingDistribution(...))
        -> the section is replaced outright

Persistence envelope (JSON, stored under ``storage_key``):
    {"version": 2, "savedAt": iso, "expiresAt": iso, "state": {...}}

Drafts older than the expiry window are discarded on load. Drafts written by
the old flat sauce shape (version < 2) are upgraded by the legacy migrator.

Thread Safety:
    Flask can call one store from several request threads, so the
    read-merge-notify-persist sequence runs under an RLock. Subscribers run
    inside that lock and may call back into the store from the same thread.
"""

from __future__ import annotations

import json
import threading
from copy import deepcopy
from dataclasses import fields, replace, is_dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from config import Config
from core.exceptions import InvalidDraftSectionError
from logging_config import get_draft_logger, get_logger
from models.draft import DraftSection, DraftState
from modules.legacy_migrator import is_legacy_draft, upgrade_draft
from modules.summary_aggregator import calculate_sauce_assignment_summary
from services.draft_storage import DraftStorage, MemoryDraftStorage


logger = get_logger(__name__)

DRAFT_VERSION = 2

Subscriber = Callable[[Optional[DraftSection], DraftState], None]
SectionKey = Union[DraftSection, str]

# Sections whose change invalidates the derived summary
_SUMMARY_INPUTS = (
    DraftSection.WING_DISTRIBUTION,
    DraftSection.CURRENT_CONFIG,
    DraftSection.SAUCE_ASSIGNMENTS,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sections_overlap(a: DraftSection, b: DraftSection) -> bool:
    """True if one section path contains the other (currentConfig vs currentConfig.sauceAssignments)."""
    return (
        a is b
        or a.value.startswith(b.value + ".")
        or b.value.startswith(a.value + ".")
    )


class DraftStore:
    """
    Holds one draft and persists it through an injected storage backend.

    Args:
        storage: Persistence backend (default: in-memory)
        storage_key: Key for the draft envelope (default: Config.DRAFT_STORAGE_KEY)
        expiry_hours: Validity window for saved drafts (default: Config.DRAFT_EXPIRY_HOURS)
        clock: Callable returning an aware "now" (injectable for tests)
    """

    def __init__(
        self,
        storage: Optional[DraftStorage] = None,
        storage_key: Optional[str] = None,
        expiry_hours: Optional[float] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._storage = storage if storage is not None else MemoryDraftStorage()
        self._storage_key = storage_key or Config.DRAFT_STORAGE_KEY
        if expiry_hours is None:
            expiry_hours = Config.DRAFT_EXPIRY_HOURS
        self._expiry = timedelta(hours=expiry_hours)
        self._clock = clock or _utc_now

        self._lock = threading.RLock()
        self._subscribers: List[Tuple[Optional[DraftSection], Subscriber]] = []
        self._state = DraftState()
        self._logger = get_draft_logger(self._state.draft_id)

    # ======================================================================
    # READS
    # ======================================================================

    def get_state(self) -> DraftState:
        """Deep copy of the current draft; mutating it does not affect the store."""
        with self._lock:
            return deepcopy(self._state)

    @property
    def draft_id(self) -> str:
        with self._lock:
            return self._state.draft_id

    # ======================================================================
    # UPDATES
    # ======================================================================

    def update_state(self, section: SectionKey, value: Any, silent: bool = False) -> None:
        """
        Merge ``value`` into a section, notify subscribers, persist.

        Args:
            section: DraftSection (or its wire name, e.g. "eventDetails")
            value: Instance of the section's dataclass (replaces it), or a
                mapping of field names to new values (merged into it)
            silent: Skip subscriber notification (the draft is still saved)

        The value is merged into a copy of the draft that replaces it only
        once the merge succeeds, so a rejected update leaves the draft as it was.

        Raises:
            InvalidDraftSectionError: Unknown section, unknown field, or a
                value of the wrong type
        """
        section = self._resolve_section(section)
        with self._lock:
            staged = deepcopy(self._state)
            self._apply(section, value, state=staged)
            self._state = staged
            self._touch()
            if not silent:
                self._publish(section)
            self.save_draft()

    def batch_update(self, updates: Mapping[SectionKey, Any]) -> None:
        """
        Apply several section updates, then notify once per section and save once.

        All sections are validated before any is applied, so a bad entry
        leaves the draft unchanged.
        """
        resolved = [(self._resolve_section(section), value) for section, value in updates.items()]
        with self._lock:
            staged = deepcopy(self._state)
            for section, value in resolved:
                self._apply(section, value, state=staged)
            self._state = staged
            self._touch()
            for section, _ in resolved:
                self._publish(section)
            self.save_draft()

    def reset(self, clear_draft: bool = True) -> None:
        """Start over with a fresh draft (and forget the saved one)."""
        with self._lock:
            self._state = DraftState()
            self._logger = get_draft_logger(self._state.draft_id)
            self._touch()
            if clear_draft:
                self.clear_draft()
            self._logger.info("Draft reset")
            self._publish(None)

    # ======================================================================
    # SUBSCRIPTIONS
    # ======================================================================

    def subscribe(
        self, callback: Subscriber, section: Optional[SectionKey] = None
    ) -> Callable[[], None]:
        """
        Register ``callback(section, state)`` for changes.

        Args:
            callback: Called synchronously after each matching change with the
                changed section (None for a whole-draft change such as reset
                or load) and a copy of the new state
            section: Only notify for this section and sections nested in or
                containing it; None means every change

        Returns:
            Function that removes the subscription
        """
        resolved = None if section is None else self._resolve_section(section)
        entry = (resolved, callback)
        with self._lock:
            self._subscribers.append(entry)

        def unsubscribe() -> None:
            with self._lock:
                if entry in self._subscribers:
                    self._subscribers.remove(entry)

        return unsubscribe

    # ======================================================================
    # PERSISTENCE
    # ======================================================================

    def save_draft(self) -> bool:
        """
        Write the draft envelope to storage.

        Returns:
            True if saved; failures are logged and reported as False
        """
        with self._lock:
            now = self._clock()
            self._state.saved_at = now.isoformat()
            envelope = {
                "version": DRAFT_VERSION,
                "savedAt": self._state.saved_at,
                "expiresAt": (now + self._expiry).isoformat(),
                "state": self._state.to_dict(),
            }
            try:
                self._storage.set(self._storage_key, json.dumps(envelope))
            except Exception as e:
                self._logger.warning(f"Failed to save draft: {e}")
                return False
            self._logger.debug("Draft saved")
            return True

    def load_draft(self) -> bool:
        """
        Restore the saved draft if there is a valid, unexpired one.

        Returns:
            True if a draft was restored; False means the store keeps its
            current (fresh) state
        """
        envelope = self._read_envelope()
        if envelope is None:
            return False

        try:
            saved_at = _parse_timestamp(envelope["savedAt"])
            if self._clock() - saved_at > self._expiry:
                logger.info(f"Draft saved at {envelope['savedAt']} expired, discarding")
                self.clear_draft()
                return False

            state_data = envelope.get("state") or {}
            if envelope.get("version", 0) < DRAFT_VERSION or is_legacy_draft(state_data):
                logger.info(f"Upgrading draft from version {envelope.get('version', 0)}")
                state_data = upgrade_draft(state_data)

            state = DraftState.from_dict(state_data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable draft: {e}")
            return False

        with self._lock:
            self._state = state
            self._logger = get_draft_logger(state.draft_id)
            self._refresh_summary(self._state)
            self._logger.debug(f"Draft loaded (saved {state.saved_at})")
            self._publish(None)
        return True

    def draft_info(self) -> Optional[Dict[str, Any]]:
        """Saved-draft metadata for a "continue where you left off" prompt."""
        envelope = self._read_envelope()
        if envelope is None:
            return None
        try:
            if self._clock() - _parse_timestamp(envelope["savedAt"]) > self._expiry:
                return None
            event_details = (envelope.get("state") or {}).get("eventDetails") or {}
            return {
                "savedAt": envelope["savedAt"],
                "expiresAt": envelope.get("expiresAt"),
                "guestCount": event_details.get("guestCount"),
            }
        except (KeyError, TypeError, ValueError, AttributeError):
            return None

    def clear_draft(self) -> None:
        """Remove the saved draft from storage (in-memory state is untouched)."""
        try:
            self._storage.remove(self._storage_key)
        except Exception as e:
            self._logger.warning(f"Failed to clear draft: {e}")

    # ======================================================================
    # INTERNALS
    # ======================================================================

    @staticmethod
    def _resolve_section(section: SectionKey) -> DraftSection:
        if isinstance(section, DraftSection):
            return section
        try:
            return DraftSection(section)
        except ValueError:
            raise InvalidDraftSectionError(section) from None

    @staticmethod
    def _get_section(state: DraftState, section: DraftSection) -> Any:
        if section is DraftSection.EVENT_DETAILS:
            return state.event_details
        if section is DraftSection.WING_DISTRIBUTION:
            return state.wing_distribution
        if section is DraftSection.CURRENT_CONFIG:
            return state.current_config
        return state.current_config.sauce_assignments

    @staticmethod
    def _set_section(state: DraftState, section: DraftSection, value: Any) -> None:
        if section is DraftSection.EVENT_DETAILS:
            state.event_details = value
        elif section is DraftSection.WING_DISTRIBUTION:
            state.wing_distribution = value
        elif section is DraftSection.CURRENT_CONFIG:
            state.current_config = value
        else:
            state.current_config.sauce_assignments = value

    def _apply(self, section: DraftSection, value: Any, state: DraftState) -> None:
        current = self._get_section(state, section)

        if is_dataclass(value) and isinstance(value, type(current)):
            merged = deepcopy(value)
        elif isinstance(value, Mapping):
            known = {f.name for f in fields(current)}
            for name, new_value in value.items():
                if name not in known:
                    raise InvalidDraftSectionError(section.value, name)
                old_value = getattr(current, name)
                # Unset (None) fields accept any value
                if old_value is not None and new_value is not None \
                        and not isinstance(new_value, type(old_value)):
                    raise InvalidDraftSectionError(
                        section.value, name,
                        f"expected {type(old_value).__name__}, got {type(new_value).__name__}",
                    )
            merged = replace(current, **deepcopy(dict(value)))
        else:
            raise InvalidDraftSectionError(section.value)

        self._set_section(state, section, merged)
        if section in _SUMMARY_INPUTS:
            try:
                self._refresh_summary(state)
            except (TypeError, ValueError, AttributeError) as e:
                raise InvalidDraftSectionError(section.value, reason=str(e)) from e

    @staticmethod
    def _refresh_summary(state: DraftState) -> None:
        sauce_state = state.current_config.sauce_assignments
        sauce_state.summary = calculate_sauce_assignment_summary(
            sauce_state.assignments, state.wing_distribution
        )

    def _touch(self) -> None:
        self._state.last_updated = self._clock().isoformat()

    def _publish(self, section: Optional[DraftSection]) -> None:
        if not self._subscribers:
            return
        for subscribed, callback in list(self._subscribers):
            if section is not None and subscribed is not None:
                if not _sections_overlap(subscribed, section):
                    continue
            try:
                callback(section, deepcopy(self._state))
            except Exception as e:
                self._logger.error(f"Draft subscriber failed: {e}", exc_info=True)

    def _read_envelope(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self._storage.get(self._storage_key)
        except Exception as e:
            logger.warning(f"Failed to read draft: {e}")
            return None
        if not raw:
            return None
        try:
            envelope = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Saved draft is not valid JSON: {e}")
            return None
        if not isinstance(envelope, dict):
            return None
        return envelope
