"""Shared orchestrator and settings instances for API routes."""

from typing import Optional

from gitbrand.engine.orchestrator import BrandingOrchestrator
from gitbrand.github.client import GitHubClient
from gitbrand.portfolio.state import Portfolio
from gitbrand.storage.settings import SettingsStore

settings: Optional[SettingsStore] = None
orchestrator: Optional[BrandingOrchestrator] = None


async def get_settings() -> SettingsStore:
    """Get or create the settings store."""
    global settings
    if settings is None:
        settings = SettingsStore()
    return settings


async def get_orchestrator() -> BrandingOrchestrator:
    """Get or create the orchestrator instance."""
    global orchestrator
    if orchestrator is None:
        store = await get_settings()
        context = store.to_context()
        github = GitHubClient()
        portfolio = Portfolio(github, settings=store, avatar_url=context.default_avatar_url)
        orchestrator = BrandingOrchestrator(context, github=github, portfolio=portfolio)
    return orchestrator
