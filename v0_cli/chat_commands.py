"""Chat commands for the v0 CLI."""

from typing import Annotated

import structlog
from cyclopts import App, Parameter

from v0_cli.errors import ValidationError, handle_errors
from v0_cli.files import collect_files
from v0_cli.output import chat_url, format_chat_line, print_json
from v0_cli.runtime import Runtime, get_runtime

logger = structlog.get_logger()

chat_app = App(name="chat", help="Manage v0 chats")


def _linked_project_id(runtime: Runtime, project: bool) -> str | None:
    """Return the linked project ID, unless attaching it was disabled."""
    if not project:
        return None
    link = runtime.links.read()
    if link is None:
        return None
    logger.debug("Attaching linked project", project_id=link.project_id)
    return link.project_id


@chat_app.command
@handle_errors
def create(
    message: str,
    *,
    system: Annotated[str | None, Parameter(name=["--system", "-s"])] = None,
    model: Annotated[str | None, Parameter(name=["--model", "-M"])] = None,
    image_gen: bool = False,
    thinking: bool = False,
    private: bool = False,
    project: bool = True,
    json_: bool = False,
) -> None:
    """Create a new chat.

    Args:
        message: Initial message of the chat
        system: System prompt
        model: Model to use
        image_gen: Enable image generation
        thinking: Enable thinking mode
        private: Create as private chat
        project: Attach the linked project ID
        json_: Output as JSON
    """
    if not message.strip():
        raise ValidationError("Message cannot be empty")

    runtime = get_runtime()
    with runtime.client() as client:
        chat = client.create_chat(
            message,
            system=system,
            model=model,
            image_generation=image_gen,
            thinking=thinking,
            private=private,
            project_id=_linked_project_id(runtime, project),
        )
    url = chat_url(chat.id)

    if json_:
        print_json({**chat.raw, "url": url})
    else:
        print(f"Chat created: {chat.id}")
        print(url)


@chat_app.command(name="list")
@handle_errors
def list_chats(
    *,
    favorites: bool = False,
    limit: Annotated[int | None, Parameter(name=["--limit", "-n"])] = None,
    json_: bool = False,
) -> None:
    """List chats.

    Args:
        favorites: Show only favorited chats
        limit: Maximum results to return
        json_: Output as JSON
    """
    if limit is not None and limit < 1:
        raise ValidationError("Limit must be a positive number")

    with get_runtime().client() as client:
        chats = client.list_chats(limit=limit, favorites=favorites)

    # The API may ignore the filters, apply them again locally
    if favorites:
        chats = [chat for chat in chats if chat.favorite]
    if limit:
        chats = chats[:limit]

    if json_:
        print_json([chat.raw for chat in chats])
        return

    if not chats:
        print("No chats found")
        return

    for chat in chats:
        print(format_chat_line(chat))


@chat_app.command(name="open")
@handle_errors
def open_chat(chat_id: str, *, browser: bool = True) -> None:
    """Open a chat in the browser.

    Args:
        chat_id: ID of the chat
        browser: Open the URL in the default browser, otherwise only print it
    """
    url = chat_url(chat_id)
    print(url)

    if browser:
        get_runtime().open_browser(url)


@chat_app.command
@handle_errors
def delete(chat_id: str) -> None:
    """Delete a chat. This cannot be undone.

    Args:
        chat_id: ID of the chat
    """
    with get_runtime().client() as client:
        client.delete_chat(chat_id)
    print(f"Chat {chat_id} deleted")


@chat_app.command
@handle_errors
def init(
    *patterns: str,
    message: Annotated[str | None, Parameter(name=["--message", "-m"])] = None,
    project: bool = True,
    json_: bool = False,
) -> None:
    """Initialize a chat with local files.

    Args:
        patterns: Glob patterns of files to attach
        message: Initial message to send after init
        project: Attach the linked project ID
        json_: Output as JSON
    """
    if not patterns:
        raise ValidationError("No file patterns provided")

    files = collect_files(list(patterns))
    if not files:
        raise ValidationError("No files found matching patterns")

    runtime = get_runtime()
    with runtime.client() as client:
        chat = client.init_chat(files, project_id=_linked_project_id(runtime, project))

        # Not rolled back: if this fails the initialized chat still exists
        if message:
            client.send_message(chat.id, message)

    url = chat_url(chat.id)

    if json_:
        print_json({**chat.raw, "url": url, "files": len(files)})
    else:
        print(f"Chat initialized: {chat.id}")
        print(f"Files attached: {len(files)}")
        print(url)
