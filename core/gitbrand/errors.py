"""
Error taxonomy for GitBrand.

Nothing here is fatal to the process: every error degrades to a visible
message and a return to the idle state.
"""


class GitBrandError(Exception):
    """Base class for all GitBrand errors."""


class AuthError(GitBrandError):
    """Missing or invalid GitHub credential."""


class ParseError(GitBrandError):
    """A directive is present but its payload is malformed."""


class NetworkError(GitBrandError):
    """An external call failed before the remote could answer."""


class RemoteMutationError(GitBrandError):
    """The remote rejected a mutation."""

    default_reason = "Remote rejected the request"

    def __init__(self, reason: str | None = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class CommitError(RemoteMutationError):
    default_reason = "Failed to commit README"


class CreateError(RemoteMutationError):
    default_reason = "Failed to create repository"


class DeleteError(RemoteMutationError):
    default_reason = "Failed to delete repository"


class ProfileUpdateError(RemoteMutationError):
    default_reason = "Failed to update profile"


class ConversationBusyError(GitBrandError):
    """A reply or an action is already in flight for this conversation."""
