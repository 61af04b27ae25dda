"""
Base types for assistant actions.
Defines the Command variants and the ActionResult contract shared by the
parser, the pending store and the executor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Union


class Verb(str, Enum):
    """Directive verbs understood by the parser."""
    UPDATE_BIO = "UPDATE_BIO"
    COMMIT_README = "COMMIT_README"
    UPDATE_PROFILE = "UPDATE_PROFILE"
    CREATE_REPO = "CREATE_REPO"
    DELETE_REPO = "DELETE_REPO"
    UPDATE_AVATAR = "UPDATE_AVATAR"


class PayloadShape(str, Enum):
    """Argument shapes a verb can take."""
    ONE_STRING = "one_string"
    TWO_STRINGS = "two_strings"
    OBJECT = "object"


VERB_SHAPES: dict[Verb, PayloadShape] = {
    Verb.UPDATE_BIO: PayloadShape.ONE_STRING,
    Verb.COMMIT_README: PayloadShape.TWO_STRINGS,
    Verb.UPDATE_PROFILE: PayloadShape.OBJECT,
    Verb.CREATE_REPO: PayloadShape.OBJECT,
    Verb.DELETE_REPO: PayloadShape.ONE_STRING,
    Verb.UPDATE_AVATAR: PayloadShape.ONE_STRING,
}


@dataclass(frozen=True)
class UpdateBio:
    text: str

    verb = Verb.UPDATE_BIO


@dataclass(frozen=True)
class CommitReadme:
    repo_name: str
    content: str

    verb = Verb.COMMIT_README


@dataclass(frozen=True)
class UpdateProfile:
    fields: dict[str, str]

    verb = Verb.UPDATE_PROFILE


@dataclass(frozen=True)
class CreateRepo:
    name: str
    description: str = ""
    private: bool = False

    verb = Verb.CREATE_REPO

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "private": self.private,
        }


@dataclass(frozen=True)
class DeleteRepo:
    repo_name: str

    verb = Verb.DELETE_REPO


@dataclass(frozen=True)
class UpdateAvatar:
    image_url: str

    verb = Verb.UPDATE_AVATAR


Command = Union[UpdateBio, CommitReadme, UpdateProfile, CreateRepo, DeleteRepo, UpdateAvatar]


def command_to_dict(command: Command) -> dict:
    """Serialize a command for API responses."""
    if isinstance(command, UpdateBio):
        args = {"text": command.text}
    elif isinstance(command, CommitReadme):
        args = {"repo_name": command.repo_name, "content": command.content}
    elif isinstance(command, UpdateProfile):
        args = {"fields": dict(command.fields)}
    elif isinstance(command, CreateRepo):
        args = command.to_payload()
    elif isinstance(command, DeleteRepo):
        args = {"repo_name": command.repo_name}
    else:
        args = {"image_url": command.image_url}
    return {"verb": command.verb.value, "args": args}


class ActionStatus(str, Enum):
    """Lifecycle of a pending action."""
    AWAITING = "awaiting"
    CONFIRMED = "confirmed"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ActionResult:
    """
    Result of executing a command.

    status: "success" | "error"
    message: the status line appended to the transcript
    error: the failure reason, verbatim from the capability
    """

    status: Literal["success", "error"]
    command: Command
    message: str
    error: Optional[str] = None
    refreshed_repositories: bool = False
    details: dict = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "success": self.success,
            "command": command_to_dict(self.command),
            "message": self.message,
            "error": self.error,
            "refreshed_repositories": self.refreshed_repositories,
        }
