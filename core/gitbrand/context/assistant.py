"""
Explicit assistant context.

Credential, managed account and text-generation selection are passed into
the orchestrator, executor and routes as one immutable object.
"""

from dataclasses import dataclass, replace
from enum import Enum

from gitbrand.config import GITHUB_WEB_URL


class LLMProvider(str, Enum):
    """Selectable text-generation backends."""
    GROQ = "groq"
    GEMINI = "gemini"


def account_from_url(value: str) -> str:
    """
    Extract the account login from a profile URL or bare login.

    "https://github.com/octocat/" -> "octocat"
    """
    return value.strip().rstrip("/").split("/")[-1] if value else ""


@dataclass(frozen=True)
class AssistantContext:
    """Settings snapshot handed to every component that talks to the outside."""

    github_token: str = ""
    account: str = ""
    llm_provider: LLMProvider = LLMProvider.GROQ
    llm_api_key: str = ""

    @property
    def has_credential(self) -> bool:
        return bool(self.github_token)

    @property
    def profile_url(self) -> str:
        return f"{GITHUB_WEB_URL}/{self.account}" if self.account else ""

    @property
    def default_avatar_url(self) -> str:
        return f"{self.profile_url}.png" if self.account else ""

    def with_updates(self, **changes) -> "AssistantContext":
        return replace(self, **changes)
