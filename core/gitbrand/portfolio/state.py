"""
Local portfolio state: cached repositories, displayed avatar and profile.
"""

from typing import Optional

from gitbrand.context.assistant import AssistantContext
from gitbrand.github.client import GitHubClient, Profile, Repository
from gitbrand.storage.settings import REPO_CACHE, SettingsStore
from gitbrand.utils.logging import logger


class Portfolio:
    """What the page shows about the managed account."""

    def __init__(
        self,
        github: GitHubClient,
        settings: Optional[SettingsStore] = None,
        avatar_url: str = "",
    ):
        self.github = github
        self.settings = settings
        self.avatar_url = avatar_url
        self.profile: Optional[Profile] = None
        self.repositories: list[Repository] = self._load_cached()

    def _load_cached(self) -> list[Repository]:
        if not self.settings:
            return []
        cached = self.settings.get(REPO_CACHE) or []
        try:
            return [Repository.from_dict(item) for item in cached]
        except TypeError as e:
            logger.warning(f"Ignoring unreadable repository cache: {e}")
            return []

    def get_repository(self, name: str) -> Optional[Repository]:
        for repo in self.repositories:
            if repo.name == name:
                return repo
        return None

    async def refresh_repositories(self, context: AssistantContext) -> list[Repository]:
        """
        Re-list repositories. A non-empty result replaces and persists the
        cache; an empty one leaves it untouched.

        Raises:
            AuthError: credential missing or rejected.
        """
        repos = await self.github.list_repositories(context.github_token, context.account)
        if repos:
            self.repositories = repos
            if self.settings:
                self.settings.set(REPO_CACHE, [r.to_dict() for r in repos])
            logger.info(f"Repository list refreshed: {len(repos)} repositories")
        return self.repositories

    async def refresh_profile(self, context: AssistantContext) -> Optional[Profile]:
        profile = await self.github.get_profile(context.github_token)
        if profile:
            self.profile = profile
        return self.profile

    def set_avatar(self, image_url: str) -> None:
        self.avatar_url = image_url
        logger.info("Avatar reference updated")
