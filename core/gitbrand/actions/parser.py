"""
Command grammar parser.

Extracts the first `ACTION:VERB <payload>` directive from an assistant reply.
Everything before the marker is the clean reply shown to the user; the
directive and anything after it are kept only for parsing.

Payload shapes:
    UPDATE_BIO "text"
    COMMIT_README "repo" "markdown, may span lines"
    UPDATE_PROFILE {"name": "...", "location": "..."}
    CREATE_REPO {"name": "...", "description": "...", "private": false}
    DELETE_REPO "repo"
    UPDATE_AVATAR "image_url"
"""

import json
import re
from dataclasses import dataclass
from typing import Optional

from gitbrand.actions.base import (
    VERB_SHAPES,
    Command,
    CommitReadme,
    CreateRepo,
    DeleteRepo,
    PayloadShape,
    UpdateAvatar,
    UpdateBio,
    UpdateProfile,
    Verb,
)
from gitbrand.errors import ParseError
from gitbrand.utils.logging import logger

ACTION_MARKER = "ACTION:"

_VERB_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_REPO_NAME = re.compile(r"[A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ParsedReply:
    """Outcome of parsing one assistant reply."""

    clean_text: str
    command: Optional[Command] = None
    directive: Optional[str] = None  # raw text from the marker onward

    @property
    def has_directive(self) -> bool:
        return self.directive is not None


class _DirectiveScanner:
    """Cursor over the directive text, one token at a time."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def expect_marker(self) -> None:
        if not self.text.startswith(ACTION_MARKER, self.pos):
            raise ParseError("missing ACTION: marker")
        self.pos += len(ACTION_MARKER)

    def read_verb(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _VERB_CHARS:
            self.pos += 1
        if self.pos == start:
            raise ParseError("missing verb after ACTION:")
        return self.text[start:self.pos]

    def skip_whitespace(self) -> int:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1
        return self.pos - start

    def read_string(self) -> str:
        """Read a double-quoted string; `\\"` and `\\\\` are escapes."""
        if self.pos >= len(self.text) or self.text[self.pos] != '"':
            raise ParseError(f"expected '\"' at offset {self.pos}")
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch == "\\" and self.pos + 1 < len(self.text) and self.text[self.pos + 1] in '"\\':
                chars.append(self.text[self.pos + 1])
                self.pos += 2
                continue
            if ch == '"':
                self.pos += 1
                return "".join(chars)
            chars.append(ch)
            self.pos += 1
        raise ParseError("unterminated string")

    def read_object(self) -> dict:
        if self.pos >= len(self.text) or self.text[self.pos] != "{":
            raise ParseError(f"expected '{{' at offset {self.pos}")
        try:
            value, end = json.JSONDecoder().raw_decode(self.text, self.pos)
        except json.JSONDecodeError as e:
            raise ParseError(f"invalid JSON object: {e.msg}") from e
        if not isinstance(value, dict):
            raise ParseError("payload is not an object")
        self.pos = end
        return value


def _repo_name(verb: Verb, value: str) -> str:
    """A bare GitHub repository name; no path separators or dot segments."""
    name = value.strip()
    if not _REPO_NAME.fullmatch(name) or name in (".", ".."):
        raise ParseError(f"{verb.value} requires a valid repository name, got {name!r}")
    return name


class CommandParser:
    """Turns raw assistant text into a ParsedReply."""

    def parse(self, text: str) -> ParsedReply:
        index = text.find(ACTION_MARKER)
        if index < 0:
            return ParsedReply(clean_text=text)

        clean_text = text[:index].strip()
        directive = text[index:]

        try:
            command = self.parse_directive(directive)
        except ParseError as e:
            logger.debug(f"Ignoring malformed directive: {e}")
            return ParsedReply(clean_text=clean_text, directive=directive)

        logger.info(f"Parsed directive: {command.verb.value}")
        return ParsedReply(clean_text=clean_text, command=command, directive=directive)

    def parse_directive(self, directive: str) -> Command:
        """
        Parse a directive that starts at the ACTION: marker.

        Raises:
            ParseError: unknown verb or payload not matching the verb's shape.
        """
        scanner = _DirectiveScanner(directive)
        scanner.expect_marker()
        raw_verb = scanner.read_verb()
        try:
            verb = Verb(raw_verb)
        except ValueError:
            raise ParseError(f"unknown verb: {raw_verb}")

        if scanner.skip_whitespace() == 0:
            raise ParseError(f"expected whitespace after {raw_verb}")
        shape = VERB_SHAPES[verb]

        if shape == PayloadShape.ONE_STRING:
            return self._build_from_string(verb, scanner.read_string())

        if shape == PayloadShape.TWO_STRINGS:
            first = scanner.read_string()
            if scanner.skip_whitespace() == 0:
                raise ParseError("expected whitespace between arguments")
            second = scanner.read_string()
            return self._build_commit_readme(first, second)

        obj = scanner.read_object()
        if verb == Verb.CREATE_REPO:
            return self._build_create_repo(obj)
        return self._build_update_profile(obj)

    # ─────────────────────────────────────────────────────────
    # Payload validation
    # ─────────────────────────────────────────────────────────

    @staticmethod
    def _build_from_string(verb: Verb, value: str) -> Command:
        if verb == Verb.UPDATE_BIO:
            return UpdateBio(text=value)
        if not value.strip():
            raise ParseError(f"{verb.value} requires a non-empty argument")
        if verb == Verb.DELETE_REPO:
            return DeleteRepo(repo_name=_repo_name(verb, value))
        return UpdateAvatar(image_url=value.strip())

    @staticmethod
    def _build_commit_readme(repo_name: str, content: str) -> CommitReadme:
        return CommitReadme(repo_name=_repo_name(Verb.COMMIT_README, repo_name), content=content)

    @staticmethod
    def _build_create_repo(obj: dict) -> CreateRepo:
        name = obj.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ParseError("CREATE_REPO requires a name")
        description = obj.get("description", "")
        if description is None:
            description = ""
        if not isinstance(description, str):
            raise ParseError("CREATE_REPO description must be a string")
        private = obj.get("private", False)
        if not isinstance(private, bool):
            raise ParseError("CREATE_REPO private must be a boolean")
        return CreateRepo(
            name=_repo_name(Verb.CREATE_REPO, name),
            description=description,
            private=private,
        )

    @staticmethod
    def _build_update_profile(obj: dict) -> UpdateProfile:
        if not obj:
            raise ParseError("UPDATE_PROFILE requires at least one field")
        for key, value in obj.items():
            if not isinstance(value, str):
                raise ParseError(f"UPDATE_PROFILE field {key!r} must be a string")
        return UpdateProfile(fields=dict(obj))


_default_parser = CommandParser()


def parse_reply(text: str) -> ParsedReply:
    """Convenience function to parse an assistant reply."""
    return _default_parser.parse(text)
