"""
Text-generation providers.

Two backends with different wire formats sit behind one TextGenerator
interface; the provider is picked from the assistant context, never by
branching at call sites.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from gitbrand.config import (
    GEMINI_API_URL,
    GEMINI_MODEL,
    GROQ_API_URL,
    GROQ_MODEL,
    LLM_TEMPERATURE,
    LLM_TIMEOUT,
)
from gitbrand.context.assistant import LLMProvider
from gitbrand.engine.prompts import NARRATIVE_SYSTEM_PROMPT, build_chat_system_prompt
from gitbrand.utils.logging import logger

MISSING_KEY_MESSAGE = "API Key missing. Please check Settings."


class ProviderError(Exception):
    """The backend answered with an error object or an unusable body."""


class TextGenerator(ABC):
    """Produces one assistant reply from an ordered message history."""

    def __init__(
        self,
        api_key: str,
        timeout: float = LLM_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    @abstractmethod
    async def complete(self, messages: list[dict], temperature: float = LLM_TEMPERATURE) -> str:
        """Return the reply text, raising on any failure."""
        pass

    @staticmethod
    def _raise_for_error(data: dict) -> None:
        error = data.get("error") if isinstance(data, dict) else None
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise ProviderError(message or "Unknown provider error")


class GroqGenerator(TextGenerator):
    """OpenAI-compatible chat completions on Groq."""

    def __init__(self, api_key: str, model: str = GROQ_MODEL, **kwargs):
        super().__init__(api_key, **kwargs)
        self.model = model

    async def complete(self, messages: list[dict], temperature: float = LLM_TEMPERATURE) -> str:
        async with self._client() as client:
            response = await client.post(
                GROQ_API_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"model": self.model, "messages": messages, "temperature": temperature},
            )
        data = response.json()
        self._raise_for_error(data)
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected Groq response: {e}") from e


class GeminiGenerator(TextGenerator):
    """Gemini generateContent; the history is folded into a single prompt."""

    def __init__(self, api_key: str, model: str = GEMINI_MODEL, **kwargs):
        super().__init__(api_key, **kwargs)
        self.model = model

    @staticmethod
    def fold_messages(messages: list[dict]) -> str:
        return "\n\n".join(f"{m['role'].upper()}: {m['content']}" for m in messages)

    async def complete(self, messages: list[dict], temperature: float = LLM_TEMPERATURE) -> str:
        async with self._client() as client:
            response = await client.post(
                f"{GEMINI_API_URL}/{self.model}:generateContent",
                params={"key": self.api_key},
                json={
                    "contents": [{"parts": [{"text": self.fold_messages(messages)}]}],
                    "generationConfig": {"temperature": temperature},
                },
            )
        data = response.json()
        self._raise_for_error(data)
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected Gemini response: {e}") from e


_GENERATORS: dict[LLMProvider, type[TextGenerator]] = {
    LLMProvider.GROQ: GroqGenerator,
    LLMProvider.GEMINI: GeminiGenerator,
}


def get_generator(
    provider: LLMProvider,
    api_key: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TextGenerator:
    """Instantiate the generator configured for `provider`."""
    return _GENERATORS[LLMProvider(provider)](api_key, transport=transport)


async def generate_text(
    api_key: str,
    provider: LLMProvider,
    history: list[dict],
    account: str = "",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Produce the assistant reply for a chat history.

    Never raises: failures come back as a user-visible apology string.
    """
    if not api_key:
        return MISSING_KEY_MESSAGE

    messages = [{"role": "system", "content": build_chat_system_prompt(account)}, *history]
    try:
        return await get_generator(provider, api_key, transport=transport).complete(messages)
    except Exception as e:
        logger.error(f"Chat generation failed ({provider}): {e}")
        return f"Chat error: {e}"


async def generate_narrative(
    api_key: str,
    prompt: str,
    provider: LLMProvider = LLMProvider.GROQ,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """One-shot generation with the narrative persona. Never raises."""
    if not api_key:
        return MISSING_KEY_MESSAGE

    messages = [
        {"role": "system", "content": NARRATIVE_SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
    try:
        return await get_generator(provider, api_key, transport=transport).complete(messages)
    except Exception as e:
        logger.error(f"Narrative generation failed ({provider}): {e}")
        return f"Error: {e}"
