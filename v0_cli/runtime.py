"""API key resolution and the collaborators injected into CLI commands."""

import getpass
import os
import webbrowser
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import structlog

from v0_cli.backend import ChatBackend
from v0_cli.backends import DEFAULT_BASE_URL, V0Backend
from v0_cli.config import API_KEY, Config, KeyValueStore, ProjectLinkFile, ProjectLinkStore
from v0_cli.errors import AuthenticationError

logger = structlog.get_logger()

API_KEY_ENV = "V0_API_KEY"
BASE_URL_ENV = "V0_API_URL"
NO_API_KEY_MESSAGE = "No API key found. Run 'v0 login' or set V0_API_KEY."

BackendFactory = Callable[..., ChatBackend]


def resolve_api_key(config: KeyValueStore, environ: Mapping[str, str] | None = None) -> str:
    """Resolve the API key for this invocation.

    The environment variable always wins over the stored key, so a shell
    session can override a saved login without changing it.

    Args:
        config: Store holding the key saved by ``v0 login``
        environ: Environment to read, defaults to ``os.environ``

    Returns:
        The API key

    Raises:
        AuthenticationError: If neither source has a key
    """
    environ = os.environ if environ is None else environ

    env_key = environ.get(API_KEY_ENV)
    if env_key:
        logger.debug("Using API key from environment", variable=API_KEY_ENV)
        return env_key

    stored_key = config.get(API_KEY)
    if stored_key:
        logger.debug("Using API key from config")
        return stored_key

    raise AuthenticationError(NO_API_KEY_MESSAGE)


def get_client(
    config: KeyValueStore,
    environ: Mapping[str, str] | None = None,
    factory: BackendFactory = V0Backend,
) -> ChatBackend:
    """Resolve the API key and construct an authenticated backend."""
    environ = os.environ if environ is None else environ
    api_key = resolve_api_key(config, environ)
    base_url = environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
    return factory(api_key, base_url=base_url)


@dataclass
class Runtime:
    """Everything a command needs from outside the process."""

    config: KeyValueStore = field(default_factory=Config)
    links: ProjectLinkStore = field(default_factory=ProjectLinkFile)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    prompt: Callable[[str], str] = getpass.getpass
    open_browser: Callable[[str], Any] = webbrowser.open
    backend_factory: BackendFactory = V0Backend

    def client(self) -> ChatBackend:
        """Get an authenticated backend for the resolved API key."""
        return get_client(self.config, self.environ, self.backend_factory)

    def client_for_key(self, api_key: str) -> ChatBackend:
        """Get a backend for an explicit API key, bypassing resolution."""
        base_url = self.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        return self.backend_factory(api_key, base_url=base_url)


_runtime: Runtime | None = None


def get_runtime() -> Runtime:
    """Get the runtime used by CLI commands, creating the default one lazily."""
    global _runtime
    if _runtime is None:
        _runtime = Runtime()
    return _runtime


def set_runtime(runtime: Runtime | None) -> None:
    """Install a runtime, or reset to the default with None."""
    global _runtime
    _runtime = runtime
