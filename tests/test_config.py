"""Tests for config and project link storage."""

import json
from pathlib import Path

import pytest

from v0_cli.config import (
    Config,
    ProjectLinkFile,
    config_path,
    read_config,
    read_project_link,
    remove_project_link,
    write_config,
    write_project_link,
)
from v0_cli.errors import ParseError
from v0_cli.models import ProjectLink


def test_read_missing_config(tmp_path: Path) -> None:
    """Test that a missing config file reads as empty."""
    assert read_config(tmp_path / "config.json") == {}


def test_write_then_read_config(tmp_path: Path) -> None:
    """Test that the API key round-trips through the file."""
    path = tmp_path / "nested" / "v0" / "config.json"

    write_config({"apiKey": "v0_key_abc123"}, path)

    assert read_config(path) == {"apiKey": "v0_key_abc123"}
    assert json.loads(path.read_text()) == {"apiKey": "v0_key_abc123"}


def test_read_invalid_config(tmp_path: Path) -> None:
    """Test that a corrupt config file raises ParseError."""
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ParseError, match="Failed to parse"):
        read_config(path)


def test_read_non_object_config(tmp_path: Path) -> None:
    """Test that valid JSON that is not an object raises ParseError."""
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")

    with pytest.raises(ParseError):
        read_config(path)


def test_config_path_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that the default config lives under ~/.config/v0."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    assert config_path() == tmp_path / ".config" / "v0" / "config.json"


def test_config_set_get_unset(tmp_path: Path) -> None:
    """Test the key-value interface of the file config."""
    config = Config(tmp_path / "config.json")

    assert config.get("apiKey") is None
    config.set("apiKey", "secret")
    assert config.get("apiKey") == "secret"
    assert Config(tmp_path / "config.json").get("apiKey") == "secret"

    config.unset("apiKey")
    assert config.get("apiKey") is None
    assert config.list() == {}


def test_config_unset_missing_key_does_not_create_file(tmp_path: Path) -> None:
    """Test that unsetting an absent key leaves the disk untouched."""
    path = tmp_path / "config.json"
    Config(path).unset("apiKey")
    assert not path.exists()


def test_config_keeps_other_keys(tmp_path: Path) -> None:
    """Test that logout-style unset keeps unrelated settings."""
    path = tmp_path / "config.json"
    write_config({"apiKey": "secret", "other": "value"}, path)

    Config(path).unset("apiKey")

    assert read_config(path) == {"other": "value"}


def test_project_link_round_trip(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test link, read and unlink in the current directory."""
    monkeypatch.chdir(tmp_path)

    write_project_link("proj_123")
    assert read_project_link() == ProjectLink(project_id="proj_123")
    assert json.loads((tmp_path / ".v0").read_text()) == {"projectId": "proj_123"}

    remove_project_link()
    assert read_project_link() is None
    assert not (tmp_path / ".v0").exists()


def test_remove_missing_project_link(tmp_path: Path) -> None:
    """Test that removing a missing link is a no-op."""
    remove_project_link(tmp_path / ".v0")


def test_project_link_overwrite(tmp_path: Path) -> None:
    """Test that linking again replaces the previous project."""
    links = ProjectLinkFile(tmp_path / ".v0")

    links.write("proj_1")
    links.write("proj_2")

    assert links.read() == ProjectLink(project_id="proj_2")


def test_project_link_without_project_id(tmp_path: Path) -> None:
    """Test that a link file without projectId raises ParseError."""
    path = tmp_path / ".v0"
    path.write_text("{}")

    with pytest.raises(ParseError, match="missing projectId"):
        read_project_link(path)


def test_read_non_utf8_config(tmp_path: Path) -> None:
    """Test that a config file with undecodable bytes raises ParseError."""
    path = tmp_path / "config.json"
    path.write_bytes(b"\xff\xfe{")

    with pytest.raises(ParseError, match="Failed to parse"):
        read_config(path)


def test_read_non_utf8_project_link(tmp_path: Path) -> None:
    """Test that a link file with undecodable bytes raises ParseError."""
    path = tmp_path / ".v0"
    path.write_bytes(b"\xff\xfe{")

    with pytest.raises(ParseError, match="Failed to parse"):
        read_project_link(path)
