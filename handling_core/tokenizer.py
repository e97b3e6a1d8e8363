"""Line classification and whitespace tokenization for ``handling.cfg``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Sequence

# Comments and the boat/bike/plane/animation tables that are not modelled.
COMMENT_MARKERS = (";", "%", "!", "$", "^")

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class LineKind(Enum):
    SKIP = auto()
    DATA = auto()


def classify_line(line: str) -> LineKind:
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_MARKERS):
        return LineKind.SKIP
    return LineKind.DATA


def tokenize(line: str) -> List[str]:
    """Split *line* on runs of whitespace, dropping empty tokens."""

    return line.split()


@dataclass(frozen=True)
class SourceLines:
    """Lines of a text buffer together with each line's own terminator."""

    lines: tuple[str, ...]
    endings: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.lines)

    def join(self, lines: Sequence[str] | None = None) -> str:
        """Reassemble the buffer, optionally substituting *lines*."""

        body = self.lines if lines is None else lines
        if len(body) != len(self.endings):
            raise ValueError(
                f"expected {len(self.endings)} lines to rebuild the buffer, got {len(body)}"
            )
        return "".join(f"{line}{ending}" for line, ending in zip(body, self.endings))


def split_source(text: str) -> SourceLines:
    """Split *text* into lines, remembering ``\\r\\n``/``\\n``/``\\r`` per line.

    A buffer that ends with a terminator does not produce an extra empty line,
    so ``"a\\nb\\n"`` is two lines and ``""`` is none.
    """

    lines: list[str] = []
    endings: list[str] = []
    position = 0
    for match in _LINE_BREAK_RE.finditer(text):
        lines.append(text[position:match.start()])
        endings.append(match.group())
        position = match.end()
    if position < len(text):
        lines.append(text[position:])
        endings.append("")
    return SourceLines(lines=tuple(lines), endings=tuple(endings))


__all__ = [
    "COMMENT_MARKERS",
    "LineKind",
    "SourceLines",
    "classify_line",
    "split_source",
    "tokenize",
]
