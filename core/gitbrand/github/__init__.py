"""GitHub module - REST capability interface."""

from gitbrand.github.client import GitHubClient, Profile, Repository

__all__ = ["GitHubClient", "Profile", "Repository"]
