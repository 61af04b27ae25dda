"""
Response formatter for action status lines.

Every executed action produces a "proceeding" line before the remote call and
a success or failure line after it. The text is what the user reads in the
transcript, so it stays short and free of technical artifacts.
"""

from gitbrand.actions.base import (
    Command,
    CommitReadme,
    CreateRepo,
    DeleteRepo,
    UpdateAvatar,
    UpdateBio,
    UpdateProfile,
)

FAILURE_MARKER = "❌"


class ResponseFormatter:
    """Converts commands and outcomes into transcript lines."""

    @staticmethod
    def format_proceeding(command: Command) -> str:
        if isinstance(command, DeleteRepo):
            return (
                f'🛡️ Repository "{command.repo_name}" deletion confirmed. '
                "Proceeding with deletion..."
            )
        if isinstance(command, UpdateBio):
            return "⚙️ Proceeding to update your profile bio..."
        if isinstance(command, CreateRepo):
            return f'🚀 Initializing creation of "{command.name}"...'
        if isinstance(command, CommitReadme):
            return f'📝 Committing README.md to "{command.repo_name}"...'
        if isinstance(command, UpdateProfile):
            return f"⚙️ Updating profile fields: {', '.join(sorted(command.fields))}..."
        return "⚙️ Assistant is executing the requested action..."

    @staticmethod
    def format_success(command: Command) -> str:
        if isinstance(command, DeleteRepo):
            return (
                f'✅ Successfully deleted "{command.repo_name}". I am now refreshing '
                "your repository pipeline. Status: Updated."
            )
        if isinstance(command, UpdateBio):
            return "✅ Bio updated successfully on GitHub!"
        if isinstance(command, CreateRepo):
            return f'✅ Repository "{command.name}" created! Refreshing list.'
        if isinstance(command, CommitReadme):
            return f'✅ Successfully committed README to "{command.repo_name}"! 🚀'
        if isinstance(command, UpdateProfile):
            return "✅ Profile updated successfully on GitHub!"
        if isinstance(command, UpdateAvatar):
            return "✅ Avatar updated."
        return "✅ Action completed successfully!"

    @staticmethod
    def format_failure(reason: str) -> str:
        return f"{FAILURE_MARKER} Action failed: {reason}"

    @staticmethod
    def format_cancelled() -> str:
        return "Action cancelled."
