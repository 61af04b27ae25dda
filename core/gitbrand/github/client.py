"""
GitHub REST client.

Capability interface used by the executor and the routes: list/create/delete
repositories, read/write files and read/patch the authenticated profile.

Reads fail soft (None or an empty list, logged). Mutations raise the
error type that matches the operation.
"""

import base64
from dataclasses import asdict, dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from gitbrand.config import DEFAULT_COMMIT_MESSAGE, GITHUB_API_URL, GITHUB_TIMEOUT
from gitbrand.errors import (
    AuthError,
    CommitError,
    CreateError,
    DeleteError,
    NetworkError,
    ProfileUpdateError,
    RemoteMutationError,
)
from gitbrand.utils.logging import logger

JSON_ACCEPT = "application/vnd.github.v3+json"
RAW_ACCEPT = "application/vnd.github.v3.raw"


@dataclass
class Repository:
    """Repository summary as shown in the portfolio."""

    name: str
    description: Optional[str] = None
    stars: int = 0
    forks: int = 0
    language: Optional[str] = None
    url: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "Repository":
        return cls(
            name=data["name"],
            description=data.get("description"),
            stars=data.get("stargazers_count", 0) or 0,
            forks=data.get("forks_count", 0) or 0,
            language=data.get("language"),
            url=data.get("html_url"),
            id=data.get("id"),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Repository":
        return cls(**data)


@dataclass
class Profile:
    """The authenticated user's public profile."""

    login: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "Profile":
        return cls(
            login=data.get("login", ""),
            display_name=data.get("name"),
            bio=data.get("bio"),
            location=data.get("location"),
            avatar_url=data.get("avatar_url"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def _error_message(response: httpx.Response) -> Optional[str]:
    """Pull GitHub's `message` field out of an error response."""
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("message")
    return None


class GitHubClient:
    """
    Thin async wrapper around the GitHub REST API.

    Every call takes the credential explicitly; the client holds no
    account state of its own.
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        timeout: float = GITHUB_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self, token: str, accept: str = JSON_ACCEPT) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"token {token}", "Accept": accept},
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _repo_path(account: str, repo_name: str) -> str:
        if repo_name in ("", ".", ".."):
            raise ValueError(f"Invalid repository name: {repo_name!r}")
        return f"/repos/{quote(account, safe='')}/{quote(repo_name, safe='')}"

    async def _mutate(
        self,
        token: str,
        method: str,
        url: str,
        error_cls: type[RemoteMutationError],
        json: Any = None,
    ) -> httpx.Response:
        """Send a mutating request and map failures onto `error_cls`."""
        if not token:
            raise AuthError("GitHub Token missing")

        try:
            async with self._client(token) as client:
                response = await client.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"GitHub {method} {url} failed: {e}")
            raise NetworkError(str(e) or type(e).__name__) from e

        if response.status_code == 401:
            raise AuthError(_error_message(response) or "Bad credentials")
        if not response.is_success:
            reason = _error_message(response)
            logger.error(f"GitHub {method} {url} rejected ({response.status_code}): {reason}")
            raise error_cls(reason)
        return response

    # ─────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────

    async def list_repositories(self, token: str, account: str) -> list[Repository]:
        """
        List the account's repositories, most recently updated first.

        Raises:
            AuthError: credential missing or rejected. Any other failure
                returns an empty list.
        """
        if not token:
            raise AuthError("GitHub Token missing")

        try:
            async with self._client(token) as client:
                response = await client.get(
                    f"/users/{quote(account, safe='')}/repos",
                    params={"sort": "updated", "per_page": 100},
                )
        except httpx.HTTPError as e:
            logger.error(f"GitHub API Error: {e}")
            return []

        if response.status_code == 401:
            raise AuthError(_error_message(response) or "Bad credentials")
        if not response.is_success:
            logger.error(f"GitHub API Error: failed to fetch repositories ({response.status_code})")
            return []

        try:
            return [Repository.from_api(item) for item in response.json()]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"GitHub API Error: unexpected repository payload: {e}")
            return []

    async def get_file_tree(
        self, token: str, account: str, repo_name: str
    ) -> Optional[list[dict]]:
        """Resolve the default branch, then fetch its recursive tree."""
        if not token:
            return None

        repo_path = self._repo_path(account, repo_name)
        try:
            async with self._client(token) as client:
                info = await client.get(repo_path)
                branch = "main"
                if info.is_success:
                    branch = info.json().get("default_branch") or "main"

                response = await client.get(
                    f"{repo_path}/git/trees/{quote(branch)}",
                    params={"recursive": 1},
                )
                if not response.is_success:
                    return None
                return response.json().get("tree", [])
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Tree Fetch Error: {e}")
            return None

    async def read_file(
        self, token: str, account: str, repo_name: str, path: str
    ) -> Optional[str]:
        """Read a file's raw text, or None when it cannot be fetched."""
        if not token:
            return None

        url = f"{self._repo_path(account, repo_name)}/contents/{quote(path)}"
        try:
            async with self._client(token, accept=RAW_ACCEPT) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Content Fetch Error: {e}")
            return None

        if not response.is_success:
            return None
        return response.text

    async def read_readme(self, token: str, account: str, repo_name: str) -> Optional[str]:
        """Read the repository README wherever GitHub finds it."""
        if not token:
            return None

        try:
            async with self._client(token, accept=RAW_ACCEPT) as client:
                response = await client.get(f"{self._repo_path(account, repo_name)}/readme")
        except httpx.HTTPError as e:
            logger.error(f"README Fetch Error: {e}")
            return None

        if not response.is_success:
            return None
        return response.text

    async def get_revision(
        self, token: str, account: str, repo_name: str, path: str
    ) -> Optional[str]:
        """Return the blob SHA of an existing file, or None if it does not exist."""
        url = f"{self._repo_path(account, repo_name)}/contents/{quote(path)}"
        try:
            async with self._client(token) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or type(e).__name__) from e

        if not response.is_success:
            return None
        try:
            return response.json().get("sha")
        except ValueError:
            return None

    async def get_profile(self, token: str) -> Optional[Profile]:
        if not token:
            return None

        try:
            async with self._client(token) as client:
                response = await client.get("/user")
            if not response.is_success:
                raise ValueError(f"Failed to fetch profile data ({response.status_code})")
            return Profile.from_api(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Profile Fetch Error: {e}")
            return None

    # ─────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────

    async def write_file(
        self,
        token: str,
        account: str,
        repo_name: str,
        path: str,
        content: str,
        message: str = DEFAULT_COMMIT_MESSAGE,
    ) -> dict:
        """
        Create or update a file.

        The current blob SHA is always fetched first; GitHub requires it to
        update an existing file.

        Raises:
            CommitError: the remote rejected the write.
        """
        if not token:
            raise AuthError("GitHub Token missing")

        sha = await self.get_revision(token, account, repo_name, path)

        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if sha:
            body["sha"] = sha

        url = f"{self._repo_path(account, repo_name)}/contents/{quote(path)}"
        response = await self._mutate(token, "PUT", url, CommitError, json=body)
        logger.info(f"Committed {path} to {account}/{repo_name}")
        return response.json()

    async def patch_profile(self, token: str, fields: dict[str, str]) -> dict:
        response = await self._mutate(token, "PATCH", "/user", ProfileUpdateError, json=fields)
        logger.info(f"Updated profile fields: {', '.join(sorted(fields))}")
        return response.json()

    async def create_repository(self, token: str, payload: dict) -> dict:
        response = await self._mutate(token, "POST", "/user/repos", CreateError, json=payload)
        logger.info(f"Created repository {payload.get('name')}")
        return response.json()

    async def delete_repository(self, token: str, account: str, repo_name: str) -> bool:
        await self._mutate(
            token, "DELETE", self._repo_path(account, repo_name), DeleteError
        )
        logger.info(f"Deleted repository {account}/{repo_name}")
        return True
