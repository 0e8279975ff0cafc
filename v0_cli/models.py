"""Data models for the v0 CLI."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class User:
    """The account that owns the API key."""

    id: str
    email: str = ""
    name: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class Chat:
    """Represents a remote v0 chat."""

    id: str
    name: str = ""
    privacy: str = ""
    favorite: bool = False
    created_at: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def is_private(self) -> bool:
        return self.privacy == "private"


@dataclass
class ChatStream:
    """A streamed chat response, which the CLI does not consume."""

    content_type: str


@dataclass
class Project:
    """Represents a remote v0 project."""

    id: str
    name: str = ""
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProjectLink:
    """Associates the current directory with a v0 project."""

    project_id: str


@dataclass
class FileContent:
    """A local file sent to v0 when initializing a chat."""

    name: str
    content: str
