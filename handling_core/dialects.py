"""Game dialects of ``handling.cfg`` and their column-count rules."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

# Lines with fewer tokens than this are never decoded.
MIN_DATA_TOKENS = 20


class GameDialect(Enum):
    """The three positional layouts, one per game engine version."""

    GTA3 = "gta3"
    GTAVC = "gtavc"
    GTASA = "gtasa"

    V1 = "gta3"
    V2 = "gtavc"
    V3 = "gtasa"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def full_name(self) -> str:
        return _FULL_NAMES[self]

    @classmethod
    def from_name(cls, text: str) -> "GameDialect":
        """Resolve *text* as a member name, alias, value or display name."""

        key = text.strip().upper()
        for name, member in cls.__members__.items():
            if key in (name, member.value.upper(), member.display_name.upper()):
                return member
        supported = ", ".join(member.name for member in cls)
        raise ValueError(f"Unknown game '{text}'. Supported games: {supported}")


_DISPLAY_NAMES = {
    GameDialect.GTA3: "GTA:III",
    GameDialect.GTAVC: "GTA:VC",
    GameDialect.GTASA: "GTA:SA",
}

_FULL_NAMES = {
    GameDialect.GTA3: "GTA III",
    GameDialect.GTAVC: "GTA: Vice City",
    GameDialect.GTASA: "GTA: San Andreas",
}

# Acceptable token counts per dialect. Wider than the written width so that
# files from other sub-versions with a missing or extra trailing field load.
_COLUMN_RANGES: Dict[GameDialect, Tuple[int, int]] = {
    GameDialect.GTA3: (31, 32),
    GameDialect.GTAVC: (32, 33),
    GameDialect.GTASA: (35, 38),
}

# Width produced by the encoder.
_EXPECTED_COLUMNS: Dict[GameDialect, int] = {
    GameDialect.GTA3: 32,
    GameDialect.GTAVC: 33,
    GameDialect.GTASA: 36,
}

# Disjoint count -> dialect table used only to word mismatch hints. 32 is
# valid for both GTA3 and GTAVC; it is attributed to GTA3.
_INFERENCE_TABLE: Dict[int, GameDialect] = {
    31: GameDialect.GTA3,
    32: GameDialect.GTA3,
    33: GameDialect.GTAVC,
    35: GameDialect.GTASA,
    36: GameDialect.GTASA,
    37: GameDialect.GTASA,
    38: GameDialect.GTASA,
}

_IDENTIFIER_WIDTHS: Dict[GameDialect, int] = {
    GameDialect.GTA3: 14,
    GameDialect.GTAVC: 14,
    GameDialect.GTASA: 12,
}


def column_range(dialect: GameDialect) -> Tuple[int, int]:
    """Return the inclusive ``(min, max)`` token count accepted for *dialect*."""

    return _COLUMN_RANGES[dialect]


def expected_column_count(dialect: GameDialect) -> int:
    return _EXPECTED_COLUMNS[dialect]


def infer_dialect(column_count: int) -> Optional[GameDialect]:
    """Best-effort guess of the dialect a line with *column_count* tokens came from."""

    return _INFERENCE_TABLE.get(column_count)


def identifier_width(dialect: GameDialect) -> int:
    return _IDENTIFIER_WIDTHS[dialect]


__all__ = [
    "GameDialect",
    "MIN_DATA_TOKENS",
    "column_range",
    "expected_column_count",
    "identifier_width",
    "infer_dialect",
]
