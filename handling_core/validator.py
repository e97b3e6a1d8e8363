"""Column-count checks that flag files opened under the wrong game."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from handling_core.dialects import MIN_DATA_TOKENS, GameDialect, column_range, infer_dialect


@dataclass(frozen=True)
class FormatCheck:
    """Outcome of comparing a line's token count with a dialect's range."""

    dialect: GameDialect
    count: int
    expected_min: int
    expected_max: int
    inferred_dialect: Optional[GameDialect] = None
    hint: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.hint is None

    @property
    def suggests_other_dialect(self) -> bool:
        return self.inferred_dialect is not None


def meets_floor(count: int) -> bool:
    return count >= MIN_DATA_TOKENS


def check_column_count(dialect: GameDialect, count: int) -> FormatCheck:
    """Compare *count* with the range accepted for *dialect*.

    The result is advisory. When the count is out of range and matches another
    dialect's inference entry the hint names that dialect; otherwise the hint
    only reports the column mismatch.
    """

    expected_min, expected_max = column_range(dialect)
    if expected_min <= count <= expected_max:
        return FormatCheck(dialect, count, expected_min, expected_max)

    detected = infer_dialect(count)
    if detected is not None and detected is not dialect:
        hint = (
            f"This appears to be a {detected.full_name} file (has {count} columns), "
            f"but you selected {dialect.full_name}."
        )
        return FormatCheck(dialect, count, expected_min, expected_max, detected, hint)

    hint = f"Line has {count} columns, expected {expected_min}-{expected_max} for {dialect.full_name}."
    return FormatCheck(dialect, count, expected_min, expected_max, None, hint)


__all__ = ["FormatCheck", "check_column_count", "meets_floor"]
