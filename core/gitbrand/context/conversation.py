"""
Conversation log for the branding assistant.

An ordered transcript of user and assistant turns. Turns are immutable once
appended; the only other mutation is a full reset to a single seed turn.
"""

from dataclasses import dataclass
from enum import Enum

from gitbrand.config import GREETING


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One message in the transcript."""
    role: Role
    content: str

    def to_message(self) -> dict:
        return {"role": self.role.value, "content": self.content}


class ConversationLog:
    """Append-only transcript, except for an explicit clear."""

    def __init__(self, seed: str = GREETING):
        self._turns: list[ConversationTurn] = [
            ConversationTurn(role=Role.ASSISTANT, content=seed)
        ]

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    @property
    def last_index(self) -> int:
        return len(self._turns) - 1

    @property
    def last_turn(self) -> ConversationTurn:
        return self._turns[-1]

    def append(self, role: Role, content: str) -> int:
        """Append a turn and return its index."""
        self._turns.append(ConversationTurn(role=role, content=content))
        return self.last_index

    def add_user(self, content: str) -> int:
        return self.append(Role.USER, content)

    def add_assistant(self, content: str) -> int:
        return self.append(Role.ASSISTANT, content)

    def clear(self, seed: str) -> None:
        """Replace the whole transcript with a single assistant seed turn."""
        self._turns = [ConversationTurn(role=Role.ASSISTANT, content=seed)]

    def to_messages(self) -> list[dict]:
        """Full ordered history in chat-completion message form."""
        return [turn.to_message() for turn in self._turns]
