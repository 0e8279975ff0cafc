"""Collect local files to seed a chat with."""

import glob
import os
from pathlib import Path, PurePosixPath

import structlog

from v0_cli.models import FileContent

logger = structlog.get_logger()

EXCLUDED_DIRS = ("node_modules", ".git")


def is_excluded(name: str) -> bool:
    """Return True if any directory segment of the path is excluded."""
    return any(part in EXCLUDED_DIRS for part in PurePosixPath(name).parts[:-1])


def collect_files(patterns: list[str], root: str | os.PathLike[str] = ".") -> list[FileContent]:
    """Expand glob patterns and read every matching file.

    Paths are deduplicated across patterns, keeping the first match, and any
    path under ``node_modules`` or ``.git`` is skipped. A pattern without
    matches is not an error here.

    Args:
        patterns: Glob patterns relative to root, ``**`` matches any depth
        root: Directory the patterns are expanded against

    Returns:
        Files in first-match order, named by their POSIX path relative to root
    """
    root_path = Path(root)
    files: list[FileContent] = []
    seen: set[str] = set()

    for pattern in patterns:
        matches = glob.glob(pattern, root_dir=root_path, recursive=True)
        logger.debug("Expanded file pattern", pattern=pattern, matches=len(matches))

        for match in matches:
            name = Path(match).as_posix()
            if is_excluded(name) or name in seen:
                continue

            path = root_path / match
            if not path.is_file():
                continue

            seen.add(name)
            files.append(FileContent(name=name, content=path.read_text(encoding="utf-8")))

    logger.info("Collected files", count=len(files))
    return files
