"""Backend implementations."""

from v0_cli.backends.v0 import DEFAULT_BASE_URL, V0Backend

__all__ = ["V0Backend", "DEFAULT_BASE_URL"]
