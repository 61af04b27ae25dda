"""
Tests for the HTTP routes.

The shared orchestrator and settings are swapped for instances backed by a
temporary directory, a mocked GitHub client and scripted replies.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from gitbrand.api import orchestrator_store
from gitbrand.engine.orchestrator import BrandingOrchestrator, TurnState
from gitbrand.github.client import GitHubClient, Repository
from gitbrand.main import app
from gitbrand.portfolio.state import Portfolio
from gitbrand.storage.settings import GH_ACCOUNT, GH_TOKEN, LLM_API_KEY, SettingsStore


@pytest.fixture
def store(tmp_path):
    store = SettingsStore(data_dir=tmp_path)
    store.update({GH_TOKEN: "t0k", GH_ACCOUNT: "https://github.com/me", LLM_API_KEY: "k3y"})
    return store


@pytest.fixture
def github():
    return MagicMock(spec=GitHubClient)


@pytest.fixture
def replies():
    return []


@pytest.fixture
def orch(store, github, replies):
    context = store.to_context()
    portfolio = Portfolio(github, settings=store, avatar_url=context.default_avatar_url)
    generate = AsyncMock(side_effect=lambda context, history: replies.pop(0))
    return BrandingOrchestrator(context, github=github, portfolio=portfolio, generate=generate)


@pytest.fixture
def client(store, orch, monkeypatch):
    monkeypatch.setattr(orchestrator_store, "settings", store)
    monkeypatch.setattr(orchestrator_store, "orchestrator", orch)
    return TestClient(app)


class TestChatRoutes:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_chat_stages_then_confirm_executes(self, client, github, replies):
        replies.append('Done soon.\nACTION:UPDATE_BIO "Senior QA Engineer"')
        github.patch_profile = AsyncMock(return_value={})

        response = client.post("/api/chat", json={"message": "update my bio"})

        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "Done soon."
        assert body["pending_action"]["command"] == {
            "verb": "UPDATE_BIO",
            "args": {"text": "Senior QA Engineer"},
        }
        github.patch_profile.assert_not_awaited()

        confirmed = client.post("/api/chat/confirm").json()

        assert confirmed["executed"] is True
        assert confirmed["result"]["success"] is True
        github.patch_profile.assert_awaited_once_with("t0k", {"bio": "Senior QA Engineer"})

    def test_confirm_without_pending(self, client):
        assert client.post("/api/chat/confirm").json() == {"executed": False, "result": None}

    def test_second_directive_reports_dropped(self, client, replies):
        replies.extend(['ACTION:DELETE_REPO "a"', 'ACTION:DELETE_REPO "b"'])

        client.post("/api/chat", json={"message": "delete a"})
        body = client.post("/api/chat", json={"message": "no, delete b"}).json()

        assert body["dropped_action"]["command"]["args"] == {"repo_name": "a"}
        assert body["pending_action"]["command"]["args"] == {"repo_name": "b"}

    def test_blank_message_rejected(self, client):
        assert client.post("/api/chat", json={"message": "  "}).status_code == 422

    def test_busy_conversation_conflicts(self, client, orch):
        orch.state = TurnState.EXECUTING

        assert client.post("/api/chat", json={"message": "hi"}).status_code == 409
        assert client.post("/api/chat/confirm").status_code == 409

    def test_cancel_and_history(self, client, replies):
        replies.append('Sure.\nACTION:DELETE_REPO "old"')
        client.post("/api/chat", json={"message": "delete old"})

        history = client.get("/api/chat/history").json()
        assert history["pending_action"]["command"]["verb"] == "DELETE_REPO"
        assert [t["role"] for t in history["turns"]] == ["assistant", "user", "assistant"]

        assert client.post("/api/chat/cancel").json()["success"] is True
        assert client.get("/api/chat/history").json()["pending_action"] is None

    def test_clear(self, client, replies):
        replies.append("hello")
        client.post("/api/chat", json={"message": "hi"})

        assert client.post("/api/chat/clear").json() == {"status": "ok"}
        assert len(client.get("/api/chat/history").json()["turns"]) == 1


class TestSettingsRoutes:

    def test_secrets_masked(self, client):
        body = client.get("/api/settings").json()

        assert body[GH_TOKEN] == "********"
        assert body[LLM_API_KEY] == "********"
        assert body[GH_ACCOUNT] == "https://github.com/me"

    def test_update_refreshes_context(self, client, orch):
        response = client.put("/api/settings", json={"llm_provider": "gemini", "gh_account": "other"})

        assert response.status_code == 200
        assert orch.context.llm_provider.value == "gemini"
        assert orch.context.account == "other"

    def test_reset_drops_credential(self, client, orch):
        client.delete("/api/settings")

        assert orch.context.has_credential is False
        assert orch.context.account == "me"


class TestRepoRoutes:

    def test_scan_persists_cache(self, client, github, store):
        github.list_repositories = AsyncMock(return_value=[Repository(name="demo", stars=3)])

        body = client.post("/api/repos/scan").json()

        assert [r["name"] for r in body] == ["demo"]
        assert SettingsStore(data_dir=store.data_dir).get("gma_repos")[0]["name"] == "demo"

    def test_unknown_repository(self, client):
        assert client.get("/api/repos/missing/score").status_code == 404
