"""Targeted edits of ``settings.ini`` that keep comments and layout.

:meth:`configparser.ConfigParser.write` rewrites the whole file, so the
editor applies key updates line by line instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional, Tuple


def _is_header(stripped: str) -> bool:
    return stripped.startswith("[") and stripped.endswith("]")


def _section_bounds(lines: List[str], section: str) -> Optional[Tuple[int, int]]:
    """Return ``(header_index, end_index)`` of *section*, matched case-insensitively."""

    wanted = section.lower()
    start = None
    for index, line in enumerate(lines):
        stripped = line.strip()
        if not _is_header(stripped):
            continue
        if start is not None:
            return start, index
        if stripped[1:-1].strip().lower() == wanted:
            start = index
    if start is not None:
        return start, len(lines)
    return None


def _split_comment(line: str) -> Tuple[str, str]:
    positions = [pos for pos in (line.find(";"), line.find("#")) if pos != -1]
    if not positions:
        return line, ""
    pos = min(positions)
    return line[:pos], line[pos:]


def _replace_value(line: str, value: str) -> str:
    body, comment = _split_comment(line)
    key_part, _, value_part = body.partition("=")
    leading = value_part[: len(value_part) - len(value_part.lstrip())] or " "
    trailing = value_part[len(value_part.rstrip()) :]
    if comment and not trailing:
        trailing = " "
    return f"{key_part}={leading}{value}{trailing}{comment}"


def set_value(lines: List[str], section: str, key: str, value: str) -> None:
    """Set ``key = value`` in *section* of *lines*, editing in place."""

    bounds = _section_bounds(lines, section)
    if bounds is None:
        if lines and lines[-1].strip():
            lines.append("")
        lines.extend([f"[{section}]", f"{key} = {value}"])
        return

    start, end = bounds
    for index in range(start + 1, end):
        stripped = lines[index].strip()
        if not stripped or stripped.startswith((";", "#")) or "=" not in stripped:
            continue
        if stripped.split("=", 1)[0].strip().lower() == key.lower():
            lines[index] = _replace_value(lines[index], value)
            return

    insert_at = end
    while insert_at > start + 1 and not lines[insert_at - 1].strip():
        insert_at -= 1
    lines.insert(insert_at, f"{key} = {value}")


def update_ini_file(
    path: str | Path,
    updates: Mapping[str, Mapping[str, str]],
    *,
    encoding: str = "utf-8",
) -> None:
    """Apply ``{section: {key: value}}`` *updates* to the INI file at *path*."""

    ini_path = Path(path)
    if ini_path.exists():
        raw = ini_path.read_text(encoding=encoding)
        newline = "\r\n" if "\r\n" in raw else "\n"
        trailing_newline = raw.endswith(("\n", "\r"))
        lines = raw.splitlines()
    else:
        newline, trailing_newline, lines = "\n", True, []

    for section, values in updates.items():
        for key, value in values.items():
            set_value(lines, section, key, value)

    text = newline.join(lines)
    if lines and trailing_newline:
        text += newline
    ini_path.parent.mkdir(parents=True, exist_ok=True)
    ini_path.write_text(text, encoding=encoding, newline="")
