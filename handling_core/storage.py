"""File-system and archive collaborators used to load and persist handling files."""

from __future__ import annotations

import datetime
import logging
import shutil
from pathlib import Path
from typing import List, Protocol, Tuple

logger = logging.getLogger(__name__)

# Maps every byte to one character.
DEFAULT_ENCODING = "latin-1"


class ArchiveStore(Protocol):
    """Named-blob store wrapping an archive that contains a handling file."""

    def extract_named_entry(self, archive_bytes: bytes, suffix: str) -> Tuple[str, bytes]:
        """Return ``(entry_name, payload)`` of the entry whose name ends with *suffix*."""

    def replace_named_entry(self, archive_bytes: bytes, name: str, payload: bytes) -> bytes:
        """Return a new archive with entry *name* replaced by *payload*."""


def read_bytes(path: str | Path) -> bytes:
    return Path(path).read_bytes()


def read_text(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> str:
    return read_bytes(path).decode(encoding)


def read_lines(path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> List[str]:
    """Return the lines of *path* without their terminators."""

    return read_text(path, encoding=encoding).splitlines()


def write_all(path: str | Path, text: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Overwrite *path* with *text*."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(text.encode(encoding))
    logger.info("Wrote %s (%s characters)", target, len(text))


def write_bytes(path: str | Path, payload: bytes) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(payload)
    logger.info("Wrote %s (%s bytes)", target, len(payload))


def backup_file(path: str | Path) -> Path | None:
    """Copy *path* to ``<path>_<timestamp>.bak`` if it exists."""

    source = Path(path)
    if not source.exists():
        return None
    timestamp = datetime.datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    backup_path = source.with_name(f"{source.name}_{timestamp}.bak")
    shutil.copy2(source, backup_path)
    logger.info("Backed up %s to %s", source, backup_path)
    return backup_path


__all__ = [
    "ArchiveStore",
    "DEFAULT_ENCODING",
    "backup_file",
    "read_bytes",
    "read_lines",
    "read_text",
    "write_all",
    "write_bytes",
]
