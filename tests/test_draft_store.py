"""
Unit tests for DraftStore: section updates, subscriptions and persistence.
"""

import json
from unittest.mock import Mock

import pytest

from core.exceptions import InvalidDraftSectionError
from models.draft import DraftSection, EventDetails
from models.sauce import SauceAssignment, empty_assignments
from models.wings import WingDistribution
from services.draft_storage import DraftStorage, MemoryDraftStorage
from services.draft_store import DRAFT_VERSION, DraftStore


STORAGE_KEY = "test-draft"


@pytest.fixture
def storage():
    return MemoryDraftStorage()


@pytest.fixture
def store(storage, clock):
    return DraftStore(storage, storage_key=STORAGE_KEY, expiry_hours=24, clock=clock)


def reopen(storage, clock):
    """A second store over the same storage, as on the next page load."""
    return DraftStore(storage, storage_key=STORAGE_KEY, expiry_hours=24, clock=clock)


class TestReadsAndUpdates:

    def test_initial_state(self, store):
        state = store.get_state()
        assert state.event_details.guest_count == 10
        assert state.wing_distribution.total == 0
        assert state.sauce_assignments.applied_preset is None

    def test_get_state_returns_copy(self, store):
        state = store.get_state()
        state.event_details.guest_count = 500
        state.sauce_assignments.selected_sauces.append("junk")

        fresh = store.get_state()
        assert fresh.event_details.guest_count == 10
        assert fresh.sauce_assignments.selected_sauces == []

    def test_mapping_update_merges(self, store):
        store.update_state(DraftSection.EVENT_DETAILS, {"event_type": "sports"})
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        details = store.get_state().event_details
        assert details.guest_count == 40
        assert details.event_type == "sports"

    def test_instance_update_replaces(self, store):
        store.update_state(DraftSection.EVENT_DETAILS, {"event_type": "sports"})
        store.update_state(DraftSection.EVENT_DETAILS, EventDetails(guest_count=25))

        details = store.get_state().event_details
        assert details.guest_count == 25
        assert details.event_type == ""

    def test_section_by_wire_name(self, store):
        store.update_state("eventDetails", {"guest_count": 30})
        assert store.get_state().event_details.guest_count == 30

    def test_updates_touch_last_updated(self, store, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 30})
        assert store.get_state().last_updated == clock.now.isoformat()

    def test_unknown_section(self, store):
        with pytest.raises(InvalidDraftSectionError):
            store.update_state("currentConfig.dips", {})

    def test_unknown_field(self, store):
        with pytest.raises(InvalidDraftSectionError) as exc_info:
            store.update_state(DraftSection.EVENT_DETAILS, {"guests": 30})
        assert exc_info.value.field_name == "guests"

    def test_wrong_value_type(self, store):
        with pytest.raises(InvalidDraftSectionError):
            store.update_state(DraftSection.EVENT_DETAILS, WingDistribution(boneless=10))

    def test_wrong_field_type_leaves_state_unchanged(self, store, storage):
        store.update_state(DraftSection.WING_DISTRIBUTION, {"boneless": 6})
        saved = storage.get(STORAGE_KEY)

        with pytest.raises(InvalidDraftSectionError) as exc_info:
            store.update_state(DraftSection.WING_DISTRIBUTION, {"boneless": "12"})

        assert exc_info.value.field_name == "boneless"
        assert store.get_state().wing_distribution.boneless == 6
        assert storage.get(STORAGE_KEY) == saved

    def test_failed_summary_leaves_state_unchanged(self, store):
        callback = Mock()
        store.subscribe(callback)

        with pytest.raises(InvalidDraftSectionError):
            store.update_state(DraftSection.SAUCE_ASSIGNMENTS, {"assignments": {"boneless": [None]}})

        assert store.get_state().sauce_assignments.assignments["boneless"] == []
        callback.assert_not_called()

    def test_unset_field_accepts_value(self, store):
        store.update_state(DraftSection.EVENT_DETAILS, {"distribution_preference": "few-vegetarian"})
        assert store.get_state().event_details.distribution_preference == "few-vegetarian"

    def test_summary_follows_distribution(self, store, buffalo):
        assignments = empty_assignments()
        assignments["boneless"] = [SauceAssignment.for_sauce(buffalo, 50)]
        store.update_state(DraftSection.SAUCE_ASSIGNMENTS, {"assignments": assignments})
        store.update_state(DraftSection.WING_DISTRIBUTION, WingDistribution(boneless=60))

        summary = store.get_state().sauce_assignments.summary
        assert summary.total_wings_assigned == 50
        assert summary.validations["boneless"].errors == ["Assign 10 more wings"]
        assert summary.validations["overall"].valid is False

    def test_batch_update_is_all_or_nothing(self, store):
        with pytest.raises(InvalidDraftSectionError):
            store.batch_update({
                DraftSection.EVENT_DETAILS: {"guest_count": 99},
                DraftSection.WING_DISTRIBUTION: {"wings": 10},
            })
        assert store.get_state().event_details.guest_count == 10


class TestSubscriptions:

    def test_subscriber_called_with_section_and_state(self, store):
        callback = Mock()
        store.subscribe(callback)
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        callback.assert_called_once()
        section, state = callback.call_args[0]
        assert section is DraftSection.EVENT_DETAILS
        assert state.event_details.guest_count == 40

    def test_section_filter(self, store):
        callback = Mock()
        store.subscribe(callback, DraftSection.WING_DISTRIBUTION)

        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        callback.assert_not_called()

        store.update_state(DraftSection.WING_DISTRIBUTION, {"boneless": 12})
        callback.assert_called_once()

    def test_parent_section_sees_nested_change(self, store):
        callback = Mock()
        store.subscribe(callback, DraftSection.CURRENT_CONFIG)
        store.update_state(DraftSection.SAUCE_ASSIGNMENTS, {"applied_preset": "custom"})
        callback.assert_called_once()

    def test_unsubscribe(self, store):
        callback = Mock()
        unsubscribe = store.subscribe(callback)
        unsubscribe()
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        callback.assert_not_called()

    def test_silent_update_skips_subscribers_but_saves(self, store, storage):
        callback = Mock()
        store.subscribe(callback)
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40}, silent=True)

        callback.assert_not_called()
        assert storage.get(STORAGE_KEY) is not None

    def test_failing_subscriber_does_not_block_others(self, store):
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        store.subscribe(failing)
        store.subscribe(healthy)

        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        failing.assert_called_once()
        healthy.assert_called_once()
        assert store.get_state().event_details.guest_count == 40

    def test_subscriber_state_is_a_copy(self, store):
        received = []
        store.subscribe(lambda section, state: received.append(state))
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        received[0].event_details.guest_count = 1
        assert store.get_state().event_details.guest_count == 40

    def test_each_subscriber_gets_its_own_copy(self, store):
        seen = []

        def meddling(section, state):
            state.event_details.guest_count = 1
            state.sauce_assignments.selected_sauces.append("junk")

        store.subscribe(meddling)
        store.subscribe(lambda section, state: seen.append(state))
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        assert seen[0].event_details.guest_count == 40
        assert seen[0].sauce_assignments.selected_sauces == []


class TestPersistence:

    def test_envelope_written_on_update(self, store, storage, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        envelope = json.loads(storage.get(STORAGE_KEY))
        assert envelope["version"] == DRAFT_VERSION
        assert envelope["savedAt"] == clock.now.isoformat()
        assert envelope["state"]["eventDetails"]["guestCount"] == 40

    def test_reload_within_window(self, store, storage, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        clock.advance(23)

        reopened = reopen(storage, clock)
        assert reopened.load_draft() is True
        assert reopened.get_state().event_details.guest_count == 40
        assert reopened.draft_id == store.draft_id

    def test_expired_draft_discarded(self, store, storage, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        clock.advance(25)

        reopened = reopen(storage, clock)
        assert reopened.load_draft() is False
        assert reopened.get_state().event_details.guest_count == 10
        assert storage.get(STORAGE_KEY) is None

    def test_nothing_saved(self, store):
        assert store.load_draft() is False
        assert store.draft_info() is None

    def test_unreadable_draft_ignored(self, store, storage):
        storage.set(STORAGE_KEY, "{not json")
        assert store.load_draft() is False

    def test_load_notifies_subscribers(self, store, storage, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        reopened = reopen(storage, clock)
        callback = Mock()
        reopened.subscribe(callback, DraftSection.EVENT_DETAILS)

        reopened.load_draft()

        callback.assert_called_once()
        assert callback.call_args[0][0] is None

    def test_draft_info(self, store, clock):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        info = store.draft_info()
        assert info["guestCount"] == 40
        assert info["savedAt"] == clock.now.isoformat()

    def test_storage_failure_is_not_raised(self, clock):
        storage = Mock(spec=DraftStorage)
        storage.set.side_effect = OSError("quota exceeded")
        store = DraftStore(storage, storage_key=STORAGE_KEY, clock=clock)

        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})

        assert store.get_state().event_details.guest_count == 40
        assert store.save_draft() is False

    def test_read_failure_means_no_draft(self, clock):
        storage = Mock(spec=DraftStorage)
        storage.get.side_effect = OSError("denied")
        store = DraftStore(storage, storage_key=STORAGE_KEY, clock=clock)
        assert store.load_draft() is False

    def test_legacy_draft_upgraded_on_load(self, store, storage, clock):
        storage.set(STORAGE_KEY, json.dumps({
            "version": 1,
            "savedAt": clock.now.isoformat().replace("+00:00", "Z"),
            "state": {
                "eventDetails": {"guestCount": 20},
                "currentConfig": {
                    "wingDistribution": {"boneless": 50, "boneIn": 30, "cauliflower": 0},
                    "sauces": [
                        {"id": "buffalo", "name": "Buffalo", "wingCount": 50},
                        {"id": "bbq", "name": "BBQ", "wingCount": 30},
                    ],
                },
            },
        }))

        assert store.load_draft() is True
        sauce_state = store.get_state().sauce_assignments
        assert sauce_state.applied_preset == "one-per-type"
        assert sauce_state.summary.total_wings_assigned == 80
        assert sauce_state.summary.validations["overall"].valid is True

    def test_reset_clears_saved_draft(self, store, storage):
        store.update_state(DraftSection.EVENT_DETAILS, {"guest_count": 40})
        old_id = store.draft_id
        callback = Mock()
        store.subscribe(callback)

        store.reset()

        assert storage.get(STORAGE_KEY) is None
        assert store.draft_id != old_id
        assert store.get_state().event_details.guest_count == 10
        callback.assert_called_once()
        assert callback.call_args[0][0] is None
