"""Configuration and project-link storage for the v0 CLI using JSON files."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import structlog

from v0_cli.errors import ParseError
from v0_cli.models import ProjectLink

logger = structlog.get_logger()

PROJECT_FILE = ".v0"
API_KEY = "apiKey"


def config_path() -> Path:
    """Return the per-user config file, ``~/.config/v0/config.json``."""
    return Path.home() / ".config" / "v0" / "config.json"


def project_link_path() -> Path:
    """Return the project marker file in the current directory."""
    return Path.cwd() / PROJECT_FILE


def _load_json(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Failed to parse JSON file", path=str(path), error=str(e))
        raise ParseError(f"Failed to parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Failed to parse {path}: expected a JSON object")
    return data


def _dump_json(path: Path, data: dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def read_config(path: Path | None = None) -> dict[str, Any]:
    """Read the stored configuration.

    Args:
        path: Config file location, defaults to ``config_path()``

    Returns:
        The stored configuration, or an empty dict if the file does not exist

    Raises:
        ParseError: If the file exists but is not a JSON object
    """
    path = path or config_path()
    config = _load_json(path)
    if config is None:
        logger.debug("Config file does not exist, using empty config", path=str(path))
        return {}
    logger.debug("Config loaded successfully", path=str(path), keys=list(config.keys()))
    return config


def write_config(config: dict[str, Any], path: Path | None = None) -> None:
    """Overwrite the stored configuration, creating its directory if needed."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    _dump_json(path, config)
    logger.debug("Config saved successfully", path=str(path))


def read_project_link(path: Path | None = None) -> ProjectLink | None:
    """Read the project link of the current directory, or None if unlinked."""
    path = path or project_link_path()
    data = _load_json(path)
    if data is None:
        return None

    project_id = data.get("projectId")
    if not isinstance(project_id, str) or not project_id:
        raise ParseError(f"Failed to parse {path}: missing projectId")
    return ProjectLink(project_id=project_id)


def write_project_link(project_id: str, path: Path | None = None) -> None:
    path = path or project_link_path()
    _dump_json(path, {"projectId": project_id})
    logger.debug("Project link written", path=str(path), project_id=project_id)


def remove_project_link(path: Path | None = None) -> None:
    path = path or project_link_path()
    if path.exists():
        path.unlink()
        logger.debug("Project link removed", path=str(path))


class KeyValueStore(ABC):
    """Abstract key-value store holding persisted settings such as the API key."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a value, or default if the key is not set."""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set a value."""
        pass

    @abstractmethod
    def unset(self, key: str) -> None:
        """Remove a value. Does nothing if the key is not set."""
        pass

    @abstractmethod
    def list(self) -> dict[str, Any]:
        """Return all stored settings."""
        pass


class Config(KeyValueStore):
    """Configuration manager using JSON file storage.

    The file is read on every access and rewritten on every change, so a
    single invocation always sees what is on disk. There is no locking;
    concurrent invocations writing the same file may lose updates.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            path: Custom config file location (overrides ``~/.config/v0/config.json``)
        """
        self.config_file = Path(path) if path is not None else config_path()
        logger.debug("Config initialized", config_file=str(self.config_file))

    def get(self, key: str, default: Any = None) -> Any:
        config = read_config(self.config_file)
        if key in config:
            logger.debug("Getting config value", key=key)
            return config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: Any) -> None:
        logger.debug("Setting config value", key=key)
        config = read_config(self.config_file)
        config[key] = value
        write_config(config, self.config_file)

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        config = read_config(self.config_file)
        if key in config:
            del config[key]
            write_config(config, self.config_file)

    def list(self) -> dict[str, Any]:
        return read_config(self.config_file)


class ProjectLinkStore(ABC):
    """Abstract storage for the project link of the current directory."""

    @abstractmethod
    def read(self) -> ProjectLink | None:
        pass

    @abstractmethod
    def write(self, project_id: str) -> None:
        pass

    @abstractmethod
    def remove(self) -> None:
        pass


class ProjectLinkFile(ProjectLinkStore):
    """Project link stored as a ``.v0`` JSON file in the working directory."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else project_link_path()

    def read(self) -> ProjectLink | None:
        return read_project_link(self.path)

    def write(self, project_id: str) -> None:
        write_project_link(project_id, self.path)

    def remove(self) -> None:
        remove_project_link(self.path)
