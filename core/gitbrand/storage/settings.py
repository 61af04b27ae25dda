"""
Persistent key-value settings.
"""

import json
from pathlib import Path
from typing import Any, Optional

from gitbrand.config import DATA_DIR, SETTINGS_FILE
from gitbrand.context.assistant import AssistantContext, LLMProvider, account_from_url
from gitbrand.utils.logging import logger

GH_TOKEN = "gh_token"
GH_ACCOUNT = "gh_account"
LLM_PROVIDER = "llm_provider"
LLM_API_KEY = "llm_api_key"
REPO_CACHE = "gma_repos"

SECRET_KEYS = (GH_TOKEN, LLM_API_KEY)


class SettingsStore:
    """
    Persistent settings keyed by string name.

    Stores:
    - GitHub credential and managed account
    - Text-generation provider and API key
    - Cached repository list
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize settings.

        Args:
            data_dir: Directory for settings file (default: ~/.gitbrand)
        """
        self.data_dir = data_dir or DATA_DIR
        self._settings_path = self.data_dir / SETTINGS_FILE
        self._values: dict[str, Any] = {}

        self._load()

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self.save()

    def update(self, values: dict[str, Any]) -> None:
        """Set several keys with a single write."""
        self._values.update(values)
        self.save()

    def remove(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        self.save()
        return True

    def reset(self) -> None:
        """Forget the credential, provider and API key."""
        for key in (GH_TOKEN, LLM_API_KEY, LLM_PROVIDER):
            self._values.pop(key, None)
        self.save()
        logger.info("Settings reset")

    def to_context(self) -> AssistantContext:
        """Build the explicit context object from the stored values."""
        raw_provider = self.get(LLM_PROVIDER) or LLMProvider.GROQ.value
        try:
            provider = LLMProvider(raw_provider)
        except ValueError:
            logger.warning(f"Unknown provider {raw_provider!r}, falling back to groq")
            provider = LLMProvider.GROQ

        return AssistantContext(
            github_token=self.get(GH_TOKEN) or "",
            account=account_from_url(self.get(GH_ACCOUNT) or ""),
            llm_provider=provider,
            llm_api_key=self.get(LLM_API_KEY) or "",
        )

    def to_dict(self, mask_secrets: bool = True) -> dict:
        """Convert settings to dictionary."""
        data = {k: v for k, v in self._values.items() if k != REPO_CACHE}
        if mask_secrets:
            for key in SECRET_KEYS:
                if data.get(key):
                    data[key] = "********"
        return data

    def save(self) -> None:
        """Save settings to disk."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

        data = {"values": self._values, "version": 1}

        with open(self._settings_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.debug(f"Saved settings to {self._settings_path}")

    def _load(self) -> None:
        """Load settings from disk."""
        if not self._settings_path.exists():
            logger.info("No existing settings found, using defaults")
            return

        try:
            with open(self._settings_path, "r") as f:
                data = json.load(f)

            values = data.get("values", {})
            if not isinstance(values, dict):
                raise ValueError("settings values must be an object")
            self._values = values
            logger.info(f"Loaded settings: {len(self._values)} keys")

        except Exception as e:
            logger.error(f"Failed to load settings: {e}")
