"""Personal CLI for managing v0.dev chats and projects."""

__version__ = "1.0.0"
