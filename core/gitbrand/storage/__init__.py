"""Storage module - persisted settings and repository cache."""

from gitbrand.storage.settings import SettingsStore

__all__ = ["SettingsStore"]
