"""Backend interface for the remote chat service."""

from abc import ABC, abstractmethod

from v0_cli.models import Chat, FileContent, Project, User


class ChatBackend(ABC):
    """Abstract base class for the chat and project API consumed by the CLI.

    Backends are context managers; leaving the block releases any
    connection the backend holds.
    """

    def __enter__(self) -> "ChatBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release resources held by the backend."""
        pass

    @abstractmethod
    def get_user(self) -> User:
        """Get the user the API key belongs to."""
        pass

    @abstractmethod
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
        """Create a new chat from an initial message."""
        pass

    @abstractmethod
    def list_chats(self, limit: int | None = None, favorites: bool = False) -> list[Chat]:
        """List chats, optionally limited and restricted to favorites."""
        pass

    @abstractmethod
    def delete_chat(self, chat_id: str) -> None:
        """Delete a chat."""
        pass

    @abstractmethod
    def init_chat(self, files: list[FileContent], project_id: str | None = None) -> Chat:
        """Create a chat seeded with file contents."""
        pass

    @abstractmethod
    def send_message(self, chat_id: str, message: str) -> Chat:
        """Send a message to an existing chat."""
        pass

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        """Get a project by ID."""
        pass
