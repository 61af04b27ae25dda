"""
Single-slot store for the action awaiting user confirmation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from gitbrand.actions.base import ActionStatus, Command, command_to_dict
from gitbrand.utils.logging import logger


@dataclass
class PendingAction:
    """An action waiting for user confirmation."""
    command: Command
    raw_text: str
    turn_index: int  # index of the assistant turn the action is attached to
    status: ActionStatus = ActionStatus.AWAITING
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "command": command_to_dict(self.command),
            "raw_text": self.raw_text,
            "turn_index": self.turn_index,
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }


class PendingActionStore:
    """
    Holds at most one pending action. Staging always replaces the slot;
    there is no queue and no merge.
    """

    def __init__(self):
        self._pending: Optional[PendingAction] = None

    @property
    def current(self) -> Optional[PendingAction]:
        return self._pending

    def stage(
        self,
        command: Command,
        raw_text: str,
        turn_index: int,
    ) -> Optional[PendingAction]:
        """
        Stage a command, replacing whatever is pending.

        Returns:
            The action that was dropped, if any.
        """
        dropped = self._pending
        self._pending = PendingAction(
            command=command,
            raw_text=raw_text,
            turn_index=turn_index,
        )
        if dropped is not None:
            logger.warning(
                f"Dropped unconfirmed {dropped.command.verb.value} in favour of "
                f"{command.verb.value}"
            )
        else:
            logger.info(f"Staged {command.verb.value} awaiting confirmation")
        return dropped

    def confirm(self) -> Optional[PendingAction]:
        """Mark the pending action confirmed. No-op unless one is awaiting."""
        pending = self._pending
        if pending is None or pending.status != ActionStatus.AWAITING:
            return None
        pending.status = ActionStatus.CONFIRMED
        return pending

    def mark(self, status: ActionStatus) -> None:
        if self._pending is not None:
            self._pending.status = status

    def cancel(self) -> Optional[PendingAction]:
        """Clear the slot from any state and return what was there."""
        pending = self.clear()
        if pending is not None:
            logger.info(f"Cancelled pending {pending.command.verb.value}")
        return pending

    def clear(self) -> Optional[PendingAction]:
        """Clear and return the pending action."""
        pending = self._pending
        self._pending = None
        return pending
