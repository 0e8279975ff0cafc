"""Terminal formatting for command results."""

import json
from datetime import datetime
from typing import Any

from v0_cli.models import Chat

CHAT_URL = "https://v0.dev/chat/{chat_id}"


def chat_url(chat_id: str) -> str:
    return CHAT_URL.format(chat_id=chat_id)


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def format_date(value: str | None) -> str:
    """Format an ISO timestamp from the API as a date, or pass it through if unparseable."""
    if not value:
        return "unknown date"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def format_chat_line(chat: Chat) -> str:
    favorite = " ⭐" if chat.favorite else ""
    privacy = " 🔒" if chat.is_private else ""
    return f"{chat.id} - {chat.name}{favorite}{privacy} ({format_date(chat.created_at)})"
