"""
Action executor for GitBrand.
Runs one confirmed command as exactly one external mutation and reports the
outcome into the conversation log.
"""

from typing import Awaitable, Callable, Optional

from gitbrand.actions.base import (
    ActionResult,
    ActionStatus,
    Command,
    CommitReadme,
    CreateRepo,
    DeleteRepo,
    UpdateAvatar,
    UpdateBio,
    UpdateProfile,
)
from gitbrand.actions.pending import PendingAction, PendingActionStore
from gitbrand.config import README_PATH
from gitbrand.context.assistant import AssistantContext
from gitbrand.context.conversation import ConversationLog
from gitbrand.github.client import GitHubClient
from gitbrand.utils.logging import logger
from gitbrand.utils.response_formatter import ResponseFormatter


class ActionExecutor:
    """
    Maps each command variant onto one GitHub call.

    Errors raised by the capability are caught and reported as a failure
    line; they never reach the caller.
    """

    def __init__(
        self,
        github: GitHubClient,
        context: AssistantContext,
        log: ConversationLog,
        pending: PendingActionStore,
        refresh_repositories: Optional[Callable[[], Awaitable[object]]] = None,
        set_avatar: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the executor.

        Args:
            github: GitHub capability.
            context: Credential and account to act on.
            log: Transcript that receives the status lines.
            pending: Store cleared once execution finishes.
            refresh_repositories: Called after a repository is created or deleted.
            set_avatar: Local setter for the displayed avatar.
        """
        self.github = github
        self.context = context
        self.log = log
        self.pending = pending
        self.refresh_repositories = refresh_repositories
        self.set_avatar = set_avatar

        self._handlers: dict[type, Callable[[Command], Awaitable[None]]] = {
            UpdateBio: self._update_bio,
            UpdateProfile: self._update_profile,
            CommitReadme: self._commit_readme,
            CreateRepo: self._create_repo,
            DeleteRepo: self._delete_repo,
            UpdateAvatar: self._update_avatar,
        }

    async def run(self, action: PendingAction) -> ActionResult:
        """Execute a confirmed pending action and clear the slot afterwards."""
        self.pending.mark(ActionStatus.EXECUTING)
        try:
            result = await self.execute(action.command)
            self.pending.mark(ActionStatus.DONE if result.success else ActionStatus.FAILED)
            return result
        finally:
            self.pending.clear()

    async def execute(self, command: Command) -> ActionResult:
        """
        Execute a command.

        Returns:
            ActionResult whose message is the line appended after the call.
        """
        self.log.add_assistant(ResponseFormatter.format_proceeding(command))

        handler = self._handlers[type(command)]
        try:
            logger.info(f"Executing {command.verb.value}")
            await handler(command)
        except Exception as e:
            reason = getattr(e, "reason", None) or str(e) or type(e).__name__
            logger.error(f"{command.verb.value} failed: {reason}")
            message = ResponseFormatter.format_failure(reason)
            self.log.add_assistant(message)
            return ActionResult(status="error", command=command, message=message, error=reason)

        refreshed = False
        if isinstance(command, (CreateRepo, DeleteRepo)):
            refreshed = await self._refresh()

        message = ResponseFormatter.format_success(command)
        self.log.add_assistant(message)
        logger.info(f"{command.verb.value} completed")
        return ActionResult(
            status="success",
            command=command,
            message=message,
            refreshed_repositories=refreshed,
        )

    async def _refresh(self) -> bool:
        if not self.refresh_repositories:
            return False
        try:
            await self.refresh_repositories()
            return True
        except Exception as e:
            logger.warning(f"Repository refresh failed: {e}")
            return False

    # ─────────────────────────────────────────────────────────
    # Handlers
    # ─────────────────────────────────────────────────────────

    async def _update_bio(self, command: UpdateBio) -> None:
        await self.github.patch_profile(self.context.github_token, {"bio": command.text})

    async def _update_profile(self, command: UpdateProfile) -> None:
        await self.github.patch_profile(self.context.github_token, dict(command.fields))

    async def _commit_readme(self, command: CommitReadme) -> None:
        await self.github.write_file(
            self.context.github_token,
            self.context.account,
            command.repo_name,
            README_PATH,
            command.content,
        )

    async def _create_repo(self, command: CreateRepo) -> None:
        await self.github.create_repository(self.context.github_token, command.to_payload())

    async def _delete_repo(self, command: DeleteRepo) -> None:
        await self.github.delete_repository(
            self.context.github_token, self.context.account, command.repo_name
        )

    async def _update_avatar(self, command: UpdateAvatar) -> None:
        if self.set_avatar:
            self.set_avatar(command.image_url)
