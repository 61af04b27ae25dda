"""Tests for the single-slot pending action store."""

import pytest

from gitbrand.actions.base import ActionStatus, CreateRepo, DeleteRepo, UpdateBio
from gitbrand.actions.pending import PendingActionStore


@pytest.fixture
def store():
    return PendingActionStore()


class TestStaging:

    def test_stage_sets_awaiting(self, store):
        dropped = store.stage(UpdateBio(text="QA"), 'ACTION:UPDATE_BIO "QA"', turn_index=2)

        assert dropped is None
        assert store.current.command == UpdateBio(text="QA")
        assert store.current.status == ActionStatus.AWAITING
        assert store.current.turn_index == 2

    def test_last_write_wins(self, store):
        store.stage(DeleteRepo(repo_name="a"), "a", turn_index=1)
        dropped = store.stage(CreateRepo(name="b"), "b", turn_index=3)

        assert dropped.command == DeleteRepo(repo_name="a")
        assert store.current.command == CreateRepo(name="b")
        assert store.current.raw_text == "b"

    def test_stage_replaces_confirmed_action(self, store):
        store.stage(DeleteRepo(repo_name="a"), "a", turn_index=1)
        store.confirm()
        store.stage(UpdateBio(text="b"), "b", turn_index=3)

        assert store.current.command == UpdateBio(text="b")
        assert store.current.status == ActionStatus.AWAITING


class TestConfirmAndCancel:

    def test_confirm_without_pending_is_noop(self, store):
        assert store.confirm() is None
        assert store.current is None

    def test_confirm_transitions_once(self, store):
        store.stage(UpdateBio(text="QA"), "raw", turn_index=1)

        first = store.confirm()
        second = store.confirm()

        assert first.status == ActionStatus.CONFIRMED
        assert second is None

    def test_cancel_clears_from_any_state(self, store):
        store.stage(UpdateBio(text="QA"), "raw", turn_index=1)
        store.confirm()
        store.mark(ActionStatus.EXECUTING)

        cancelled = store.cancel()

        assert cancelled.command == UpdateBio(text="QA")
        assert store.current is None

    def test_cancel_empty_store(self, store):
        assert store.cancel() is None

    def test_to_dict(self, store):
        store.stage(CreateRepo(name="demo", description="d"), "raw", turn_index=4)

        data = store.current.to_dict()

        assert data["command"] == {
            "verb": "CREATE_REPO",
            "args": {"name": "demo", "description": "d", "private": False},
        }
        assert data["status"] == "awaiting"
        assert data["turn_index"] == 4
