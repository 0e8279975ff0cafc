"""Shared fixtures: in-memory stores, a mock backend and a CLI runner."""

from typing import Any, Callable, Iterator
from unittest.mock import MagicMock

import pytest

from v0_cli.backend import ChatBackend
from v0_cli.cli import app, configure_logging
from v0_cli.config import KeyValueStore, ProjectLinkStore
from v0_cli.errors import NotFoundError
from v0_cli.models import Chat, FileContent, Project, ProjectLink, User
from v0_cli.runtime import Runtime, set_runtime


class MemoryConfig(KeyValueStore):
    """In-memory config store."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self.values: dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value

    def unset(self, key: str) -> None:
        self.values.pop(key, None)

    def list(self) -> dict[str, Any]:
        return dict(self.values)


class MemoryLinks(ProjectLinkStore):
    """In-memory project link store."""

    def __init__(self, project_id: str | None = None) -> None:
        self.project_id = project_id

    def read(self) -> ProjectLink | None:
        return ProjectLink(self.project_id) if self.project_id else None

    def write(self, project_id: str) -> None:
        self.project_id = project_id

    def remove(self) -> None:
        self.project_id = None


class MockBackend(ChatBackend):
    """Mock backend for testing."""

    def __init__(self) -> None:
        """Initialize mock backend."""
        self.user = User(id="user_1", email="dev@example.com", name="Dev", raw={"id": "user_1"})
        self.chats: dict[str, Chat] = {}
        self.projects: dict[str, Project] = {}
        self.messages: list[tuple[str, str]] = []
        self.created: list[dict[str, Any]] = []
        self.initialized: list[dict[str, Any]] = []
        self._next_id = 1
        self.close_count = 0

    def _new_chat(self, name: str) -> Chat:
        chat_id = f"chat_{self._next_id}"
        self._next_id += 1
        chat = Chat(id=chat_id, name=name, created_at="2025-01-15T10:00:00.000Z", raw={"id": chat_id, "name": name})
        self.chats[chat_id] = chat
        return chat

    def close(self) -> None:
        self.close_count += 1

    def get_user(self) -> User:
        return self.user

    def create_chat(
        self,
        message: str,
        system: str | None = None,
        model: str | None = None,
        image_generation: bool = False,
        thinking: bool = False,
        private: bool = False,
        project_id: str | None = None,
    ) -> Chat:
        self.created.append(
            {
                "message": message,
                "system": system,
                "model": model,
                "image_generation": image_generation,
                "thinking": thinking,
                "private": private,
                "project_id": project_id,
            }
        )
        return self._new_chat(message)

    def list_chats(self, limit: int | None = None, favorites: bool = False) -> list[Chat]:
        # Ignores the filters, like an API that does not support them
        return list(self.chats.values())

    def delete_chat(self, chat_id: str) -> None:
        if chat_id not in self.chats:
            raise NotFoundError(f"Chat {chat_id} does not exist", status_code=404)
        del self.chats[chat_id]

    def init_chat(self, files: list[FileContent], project_id: str | None = None) -> Chat:
        self.initialized.append({"files": files, "project_id": project_id})
        return self._new_chat("Initialized chat")

    def send_message(self, chat_id: str, message: str) -> Chat:
        self.messages.append((chat_id, message))
        return self.chats[chat_id]

    def get_project(self, project_id: str) -> Project:
        if project_id not in self.projects:
            raise NotFoundError(f"Project {project_id} does not exist", status_code=404)
        return self.projects[project_id]


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep structured logs out of captured command output."""
    configure_logging("critical")


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def backend_factory(backend: MockBackend) -> MagicMock:
    """Factory standing in for V0Backend, returning the mock backend."""
    return MagicMock(return_value=backend)


@pytest.fixture
def runtime(backend_factory: MagicMock) -> Iterator[Runtime]:
    """Install an in-memory runtime for CLI commands."""
    runtime = Runtime(
        config=MemoryConfig({"apiKey": "stored_key"}),
        links=MemoryLinks(),
        environ={},
        prompt=MagicMock(return_value="typed_key"),
        open_browser=MagicMock(),
        backend_factory=backend_factory,
    )
    set_runtime(runtime)
    yield runtime
    set_runtime(None)


@pytest.fixture
def run_cli() -> Callable[..., int]:
    """Run the CLI app and return its exit code."""

    def run(*argv: str) -> int:
        try:
            app(list(argv))
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        return 0

    return run
