"""v0 Platform API backend implementation using httpx."""

from typing import Any

import httpx
import structlog

from v0_cli.backend import ChatBackend
from v0_cli.errors import ValidationError, translate_response
from v0_cli.models import Chat, ChatStream, FileContent, Project, User

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://api.v0.dev/v1"


class V0Backend(ChatBackend):
    """Chat backend talking to the v0 Platform REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize v0 backend.

        Args:
            api_key: v0 API key sent as a bearer token
            base_url: API root, without a trailing slash
            timeout: Request timeout in seconds
            transport: Custom httpx transport, used by tests
        """
        if not api_key:
            raise ValueError("v0 API key required")

        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
                "User-Agent": "v0-cli",
            },
            timeout=timeout,
            transport=transport,
        )
        logger.debug("v0 backend initialized", base_url=self.base_url)

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.client.close()
        logger.debug("v0 backend closed")

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("Sending API request", method=method, path=path)
        response = self.client.request(method, path, **kwargs)
        logger.debug("Received API response", method=method, path=path, status_code=response.status_code)
        if response.is_error:
            raise translate_response(response)
        return response

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        if not response.content:
            return {}
        data = response.json()
        if not isinstance(data, dict):
            raise ValidationError("Unexpected response from v0 API")
        return data

    def _chat_result(self, response: httpx.Response) -> Chat | ChatStream:
        """Return either a chat or the streaming variant of a chat response."""
        content_type = response.headers.get("content-type", "")
        if content_type.startswith("text/event-stream"):
            return ChatStream(content_type=content_type)
        return self._to_chat(self._json(response))

    def _expect_chat(self, result: Chat | ChatStream) -> Chat:
        if isinstance(result, ChatStream):
            logger.warning("Received streaming response", content_type=result.content_type)
            raise ValidationError("Unexpected stream response")
        return result

    def _to_chat(self, data: dict[str, Any]) -> Chat:
        if "id" not in data:
            raise ValidationError("Unexpected response from v0 API: chat has no id")
        return Chat(
            id=str(data["id"]),
            name=data.get("name") or data.get("title") or "",
            privacy=data.get("privacy") or "",
            favorite=bool(data.get("favorite", False)),
            created_at=data.get("createdAt"),
            raw=data,
        )

    def get_user(self) -> User:
        """Get the current user."""
        logger.info("Fetching current user")
        data = self._json(self._request("GET", "/user"))
        return User(
            id=str(data.get("id", "")),
            email=data.get("email") or "",
            name=data.get("name"),
            raw=data,
        )

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
        """Create a chat with POST /chats."""
        logger.info("Creating chat", project_id=project_id, model=model, private=private)

        payload: dict[str, Any] = {"message": message}
        if system:
            payload["system"] = system
        if project_id:
            payload["projectId"] = project_id
        if private:
            payload["chatPrivacy"] = "private"

        # modelConfiguration is only sent when a model flag was given
        if model or image_generation or thinking:
            model_config: dict[str, Any] = {}
            if model:
                model_config["modelId"] = model
            if image_generation:
                model_config["imageGenerations"] = True
            if thinking:
                model_config["thinking"] = True
            payload["modelConfiguration"] = model_config

        chat = self._expect_chat(self._chat_result(self._request("POST", "/chats", json=payload)))
        logger.info("Chat created", chat_id=chat.id)
        return chat

    def list_chats(self, limit: int | None = None, favorites: bool = False) -> list[Chat]:
        """List chats with GET /chats."""
        logger.info("Listing chats", limit=limit, favorites=favorites)

        params: dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        if favorites:
            params["isFavorite"] = "true"

        data = self._json(self._request("GET", "/chats", params=params))
        chats = [self._to_chat(item) for item in data.get("data") or []]
        logger.info("Listed chats", count=len(chats))
        return chats

    def delete_chat(self, chat_id: str) -> None:
        logger.info("Deleting chat", chat_id=chat_id)
        self._request("DELETE", f"/chats/{chat_id}")
        logger.info("Chat deleted", chat_id=chat_id)

    def init_chat(self, files: list[FileContent], project_id: str | None = None) -> Chat:
        """Initialize a chat from files with POST /chats/init."""
        logger.info("Initializing chat from files", file_count=len(files), project_id=project_id)

        payload: dict[str, Any] = {
            "type": "files",
            "files": [{"name": f.name, "content": f.content} for f in files],
        }
        if project_id:
            payload["projectId"] = project_id

        chat = self._expect_chat(self._chat_result(self._request("POST", "/chats/init", json=payload)))
        logger.info("Chat initialized", chat_id=chat.id)
        return chat

    def send_message(self, chat_id: str, message: str) -> Chat:
        logger.info("Sending message", chat_id=chat_id)
        response = self._request("POST", f"/chats/{chat_id}/messages", json={"message": message})
        return self._expect_chat(self._chat_result(response))

    def get_project(self, project_id: str) -> Project:
        """Get a project with GET /projects/{id}."""
        logger.info("Fetching project", project_id=project_id)
        data = self._json(self._request("GET", f"/projects/{project_id}"))
        return Project(id=str(data.get("id", project_id)), name=data.get("name") or "", raw=data)
