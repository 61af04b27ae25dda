"""
Assistant turn controller.

Per user message:
    idle -> awaiting_reply -> (reply received) -> parsed -> idle

The controller appends the user turn, asks the text-generation backend for a
reply over the full history, strips any directive from the reply, appends the
clean text and stages the parsed command. It never executes anything on its
own; execution only happens through confirm().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from gitbrand.actions.base import ActionResult
from gitbrand.actions.executor import ActionExecutor
from gitbrand.actions.parser import CommandParser
from gitbrand.actions.pending import PendingAction, PendingActionStore
from gitbrand.config import CLEARED_GREETING
from gitbrand.context.assistant import AssistantContext
from gitbrand.context.conversation import ConversationLog
from gitbrand.engine.providers import generate_text
from gitbrand.errors import ConversationBusyError
from gitbrand.github.client import GitHubClient
from gitbrand.portfolio.state import Portfolio
from gitbrand.utils.logging import logger

TextGenerationFn = Callable[[AssistantContext, list[dict]], Awaitable[str]]


class TurnState(str, Enum):
    """What the conversation is waiting on."""
    IDLE = "idle"
    AWAITING_REPLY = "awaiting_reply"
    EXECUTING = "executing"


@dataclass
class TurnOutcome:
    """What one user message produced."""
    turn_index: int
    content: str
    pending: Optional[PendingAction] = None
    dropped: Optional[PendingAction] = None


async def _generate_with_context(context: AssistantContext, history: list[dict]) -> str:
    return await generate_text(
        context.llm_api_key,
        context.llm_provider,
        history,
        account=context.account,
    )


class BrandingOrchestrator:
    """
    Owns one conversation: the transcript, the pending-action slot and the
    executor that acts on the managed account.
    """

    def __init__(
        self,
        context: AssistantContext,
        github: Optional[GitHubClient] = None,
        portfolio: Optional[Portfolio] = None,
        generate: Optional[TextGenerationFn] = None,
        log: Optional[ConversationLog] = None,
        parser: Optional[CommandParser] = None,
    ):
        self.context = context
        self.github = github or GitHubClient()
        self.portfolio = portfolio or Portfolio(
            self.github, avatar_url=context.default_avatar_url
        )
        self.log = log or ConversationLog()
        self.parser = parser or CommandParser()
        self.pending = PendingActionStore()
        self.state = TurnState.IDLE

        self._generate = generate or _generate_with_context
        self.executor = self._build_executor()

    def _build_executor(self) -> ActionExecutor:
        return ActionExecutor(
            github=self.github,
            context=self.context,
            log=self.log,
            pending=self.pending,
            refresh_repositories=self._refresh_repositories,
            set_avatar=self.portfolio.set_avatar,
        )

    async def _refresh_repositories(self):
        return await self.portfolio.refresh_repositories(self.context)

    def update_context(self, context: AssistantContext) -> None:
        """Swap in new settings for subsequent turns and actions."""
        if context.account != self.context.account and (
            not self.portfolio.avatar_url
            or self.portfolio.avatar_url == self.context.default_avatar_url
        ):
            self.portfolio.avatar_url = context.default_avatar_url
        self.context = context
        self.executor = self._build_executor()

    def _ensure_idle(self) -> None:
        if self.state != TurnState.IDLE:
            raise ConversationBusyError(f"Conversation is {self.state.value}")

    # ─────────────────────────────────────────────────────────
    # Turns
    # ─────────────────────────────────────────────────────────

    async def chat(self, message: str) -> Optional[TurnOutcome]:
        """
        Handle one user message.

        Returns:
            TurnOutcome, or None for a blank message.

        Raises:
            ConversationBusyError: a reply or an action is already in flight.
        """
        if not message.strip():
            return None
        self._ensure_idle()

        self.log.add_user(message)
        self.state = TurnState.AWAITING_REPLY
        try:
            reply = await self._generate(self.context, self.log.to_messages())
            parsed = self.parser.parse(reply)
            turn_index = self.log.add_assistant(parsed.clean_text)
        finally:
            self.state = TurnState.IDLE

        outcome = TurnOutcome(turn_index=turn_index, content=parsed.clean_text)
        if parsed.command is not None:
            outcome.dropped = self.pending.stage(parsed.command, parsed.directive, turn_index)
            outcome.pending = self.pending.current
        return outcome

    @property
    def actionable_pending(self) -> Optional[PendingAction]:
        """The pending action, only while it is attached to the latest turn."""
        pending = self.pending.current
        if pending is None or pending.turn_index != self.log.last_index:
            return None
        return pending

    async def confirm(self) -> Optional[ActionResult]:
        """
        Execute the pending action.

        Returns:
            The ActionResult, or None when there was nothing to confirm.
        """
        self._ensure_idle()

        pending = self.pending.current
        if pending is None:
            return None
        if pending is not self.actionable_pending:
            logger.warning(
                f"Discarding stale {pending.command.verb.value}: "
                "conversation moved on before it was confirmed"
            )
            self.pending.clear()
            return None
        if self.pending.confirm() is None:
            return None

        self.state = TurnState.EXECUTING
        try:
            return await self.executor.run(pending)
        finally:
            self.state = TurnState.IDLE

    def cancel(self) -> Optional[PendingAction]:
        return self.pending.cancel()

    def clear_conversation(self) -> None:
        self._ensure_idle()
        self.log.clear(CLEARED_GREETING)
        self.pending.clear()
        logger.info("Conversation cleared")

    def get_status(self) -> dict:
        pending = self.actionable_pending
        return {
            "state": self.state.value,
            "turns": len(self.log),
            "pending_action": pending.to_dict() if pending else None,
            "provider": self.context.llm_provider.value,
            "has_credential": self.context.has_credential,
        }
