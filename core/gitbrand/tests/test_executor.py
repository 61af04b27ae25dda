"""
Tests for the action executor.

Each command must cause exactly one external mutation, a proceeding line
before it and a success or failure line after it.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from gitbrand.actions.base import (
    ActionStatus,
    CommitReadme,
    CreateRepo,
    DeleteRepo,
    UpdateAvatar,
    UpdateBio,
    UpdateProfile,
)
from gitbrand.actions.executor import ActionExecutor
from gitbrand.actions.pending import PendingActionStore
from gitbrand.context.assistant import AssistantContext
from gitbrand.context.conversation import ConversationLog, Role
from gitbrand.errors import AuthError, DeleteError, NetworkError
from gitbrand.github.client import GitHubClient

CONTEXT = AssistantContext(github_token="t0k", account="me")


@pytest.fixture
def log():
    return ConversationLog(seed="hi")


@pytest.fixture
def github():
    return MagicMock(spec=GitHubClient)


def make_executor(github, log, **kwargs):
    return ActionExecutor(github, CONTEXT, log, PendingActionStore(), **kwargs)


def assistant_lines(log):
    return [t.content for t in log.turns[1:] if t.role == Role.ASSISTANT]


class TestDispatch:

    @pytest.mark.asyncio
    async def test_update_bio_patches_profile(self, github, log):
        github.patch_profile = AsyncMock(return_value={})

        result = await make_executor(github, log).execute(UpdateBio(text="Senior QA Engineer"))

        github.patch_profile.assert_awaited_once_with("t0k", {"bio": "Senior QA Engineer"})
        assert result.success
        assert assistant_lines(log) == [
            "⚙️ Proceeding to update your profile bio...",
            "✅ Bio updated successfully on GitHub!",
        ]

    @pytest.mark.asyncio
    async def test_update_profile_patches_fields(self, github, log):
        github.patch_profile = AsyncMock(return_value={})

        await make_executor(github, log).execute(UpdateProfile(fields={"name": "Ada", "location": "London"}))

        github.patch_profile.assert_awaited_once_with("t0k", {"name": "Ada", "location": "London"})

    @pytest.mark.asyncio
    async def test_commit_readme_writes_readme(self, github, log):
        github.write_file = AsyncMock(return_value={})

        await make_executor(github, log).execute(CommitReadme(repo_name="r", content="# Hi"))

        github.write_file.assert_awaited_once_with("t0k", "me", "r", "README.md", "# Hi")

    @pytest.mark.asyncio
    async def test_create_repo_then_refresh(self, github, log):
        github.create_repository = AsyncMock(return_value={"name": "demo"})
        refresh = AsyncMock()

        result = await make_executor(github, log, refresh_repositories=refresh).execute(
            CreateRepo(name="demo", description="d", private=False)
        )

        github.create_repository.assert_awaited_once_with(
            "t0k", {"name": "demo", "description": "d", "private": False}
        )
        refresh.assert_awaited_once()
        assert result.refreshed_repositories is True
        assert assistant_lines(log)[-1] == '✅ Repository "demo" created! Refreshing list.'

    @pytest.mark.asyncio
    async def test_delete_repo_then_refresh(self, github, log):
        github.delete_repository = AsyncMock(return_value=True)
        refresh = AsyncMock()

        await make_executor(github, log, refresh_repositories=refresh).execute(DeleteRepo(repo_name="old"))

        github.delete_repository.assert_awaited_once_with("t0k", "me", "old")
        refresh.assert_awaited_once()
        assert assistant_lines(log)[0].startswith('🛡️ Repository "old" deletion confirmed')

    @pytest.mark.asyncio
    async def test_update_avatar_is_local(self, github, log):
        set_avatar = MagicMock()

        result = await make_executor(github, log, set_avatar=set_avatar).execute(
            UpdateAvatar(image_url="https://example.com/a.png")
        )

        set_avatar.assert_called_once_with("https://example.com/a.png")
        assert github.method_calls == []
        assert result.success


class TestFailures:

    @pytest.mark.asyncio
    async def test_delete_not_found_surfaces_failure_without_retry(self, github, log):
        github.delete_repository = AsyncMock(side_effect=DeleteError("Not Found"))
        refresh = AsyncMock()

        result = await make_executor(github, log, refresh_repositories=refresh).execute(
            DeleteRepo(repo_name="ghost")
        )

        assert github.delete_repository.await_count == 1
        refresh.assert_not_awaited()
        assert not result.success
        assert result.error == "Not Found"
        assert assistant_lines(log)[-1] == "❌ Action failed: Not Found"

    @pytest.mark.asyncio
    async def test_network_error_is_reported(self, github, log):
        github.patch_profile = AsyncMock(side_effect=NetworkError("timed out"))

        result = await make_executor(github, log).execute(UpdateBio(text="x"))

        assert result.status == "error"
        assert assistant_lines(log)[-1] == "❌ Action failed: timed out"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported(self, github, log):
        github.create_repository = AsyncMock(side_effect=RuntimeError("kaboom"))

        result = await make_executor(github, log).execute(CreateRepo(name="demo"))

        assert result.error == "kaboom"

    @pytest.mark.asyncio
    async def test_refresh_failure_does_not_fail_action(self, github, log):
        github.delete_repository = AsyncMock(return_value=True)
        refresh = AsyncMock(side_effect=AuthError("Bad credentials"))

        result = await make_executor(github, log, refresh_repositories=refresh).execute(
            DeleteRepo(repo_name="old")
        )

        assert result.success
        assert result.refreshed_repositories is False

    @pytest.mark.asyncio
    async def test_refresh_storage_error_does_not_fail_action(self, github, log):
        github.delete_repository = AsyncMock(return_value=True)
        refresh = AsyncMock(side_effect=OSError("disk full"))

        result = await make_executor(github, log, refresh_repositories=refresh).execute(
            DeleteRepo(repo_name="old")
        )

        assert result.success
        assert result.refreshed_repositories is False
        assert assistant_lines(log)[-1].startswith('✅ Successfully deleted "old"')


class TestRun:

    @pytest.mark.asyncio
    async def test_run_clears_pending_on_success(self, github, log):
        github.patch_profile = AsyncMock(return_value={})
        store = PendingActionStore()
        store.stage(UpdateBio(text="x"), "raw", turn_index=0)
        action = store.confirm()
        executor = ActionExecutor(github, CONTEXT, log, store)

        await executor.run(action)

        assert action.status == ActionStatus.DONE
        assert store.current is None

    @pytest.mark.asyncio
    async def test_run_clears_pending_on_failure(self, github, log):
        github.patch_profile = AsyncMock(side_effect=NetworkError("down"))
        store = PendingActionStore()
        store.stage(UpdateBio(text="x"), "raw", turn_index=0)
        action = store.confirm()
        executor = ActionExecutor(github, CONTEXT, log, store)

        await executor.run(action)

        assert action.status == ActionStatus.FAILED
        assert store.current is None


class TestAgainstMockRemote:

    @pytest.mark.asyncio
    async def test_commit_readme_reads_revision_once_then_writes_once(self, log):
        calls = []

        def handler(request):
            calls.append(request.method)
            if request.method == "GET":
                return httpx.Response(200, json={"sha": "abc"})
            assert json.loads(request.content)["sha"] == "abc"
            return httpx.Response(200, json={"content": {"sha": "def"}})

        github = GitHubClient(transport=httpx.MockTransport(handler))

        result = await make_executor(github, log).execute(CommitReadme(repo_name="r", content="# Hi"))

        assert calls == ["GET", "PUT"]
        assert result.success

    @pytest.mark.asyncio
    async def test_delete_not_found_remote(self, log):
        calls = []

        def handler(request):
            calls.append(request.method)
            return httpx.Response(404, json={"message": "Not Found"})

        github = GitHubClient(transport=httpx.MockTransport(handler))

        result = await make_executor(github, log).execute(DeleteRepo(repo_name="ghost"))

        assert calls == ["DELETE"]
        assert assistant_lines(log)[-1] == "❌ Action failed: Not Found"
        assert not result.success

    @pytest.mark.asyncio
    async def test_delete_stays_inside_the_account(self, log):
        paths = []

        def handler(request):
            paths.append(request.url.raw_path)
            return httpx.Response(204)

        github = GitHubClient(transport=httpx.MockTransport(handler))

        await make_executor(github, log).execute(DeleteRepo(repo_name="../../orgs/acme/prod"))

        assert len(paths) == 1
        assert paths[0].startswith(b"/repos/me/")
        assert paths[0].count(b"/") == 3

    @pytest.mark.asyncio
    async def test_dot_segment_name_never_reaches_remote(self, log):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(204)

        github = GitHubClient(transport=httpx.MockTransport(handler))

        result = await make_executor(github, log).execute(DeleteRepo(repo_name=".."))

        assert calls == []
        assert not result.success
