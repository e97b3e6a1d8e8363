"""Errors raised while loading ``handling.cfg`` files."""

from __future__ import annotations

from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from handling_core.dialects import GameDialect


class ParseErrorKind(Enum):
    FILE_NOT_FOUND = "File Not Found"
    FILE_EMPTY = "Empty File"
    FILE_UNREADABLE = "Cannot Read File"
    INVALID_FORMAT = "Invalid Format"
    WRONG_GAME_FORMAT = "Wrong Game Selected"
    NO_VEHICLES_FOUND = "No Vehicles Found"

    @property
    def title(self) -> str:
        return self.value


class HandlingParseError(ValueError):
    """Raised when a whole file cannot be loaded.

    ``kind`` categorizes the failure for the caller, ``details`` carries an
    optional technical explanation.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        details: Optional[str] = None,
        *,
        expected_min: Optional[int] = None,
        expected_max: Optional[int] = None,
        actual_columns: Optional[int] = None,
        inferred_dialect: Optional["GameDialect"] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_columns = actual_columns
        self.inferred_dialect = inferred_dialect

    def user_message(self) -> str:
        if self.details:
            return f"{self.message}\n\n{self.details}"
        return self.message

    @classmethod
    def file_not_found(cls, path: str) -> "HandlingParseError":
        return cls(ParseErrorKind.FILE_NOT_FOUND, f"File not found: {path}")

    @classmethod
    def file_empty(cls, path: str) -> "HandlingParseError":
        return cls(
            ParseErrorKind.FILE_EMPTY,
            "The file is empty or contains no data.",
            f"{path} has no vehicle lines.",
        )

    @classmethod
    def file_unreadable(cls, path: str, exc: BaseException) -> "HandlingParseError":
        return cls(
            ParseErrorKind.FILE_UNREADABLE,
            f"Cannot read file: {exc}",
            f"{path}: {exc.__class__.__name__}",
        )

    @classmethod
    def invalid_format(cls, details: str) -> "HandlingParseError":
        return cls(ParseErrorKind.INVALID_FORMAT, "The file format is invalid or corrupted.", details)

    @classmethod
    def wrong_game_format(
        cls,
        selected: "GameDialect",
        expected_min: int,
        expected_max: int,
        actual_columns: int,
        inferred: "GameDialect",
    ) -> "HandlingParseError":
        return cls(
            ParseErrorKind.WRONG_GAME_FORMAT,
            f"This file doesn't appear to be a valid {selected.full_name} handling.cfg file.",
            f"Expected {expected_min}-{expected_max} columns per vehicle, but found {actual_columns}, "
            f"which looks like {inferred.full_name}. "
            "Please check that you've selected the correct game.",
            expected_min=expected_min,
            expected_max=expected_max,
            actual_columns=actual_columns,
            inferred_dialect=inferred,
        )

    @classmethod
    def no_vehicles_found(cls) -> "HandlingParseError":
        return cls(
            ParseErrorKind.NO_VEHICLES_FOUND,
            "No vehicles found in the file.",
            "The file may be empty, contain only comments, or have an unrecognized format.",
        )


class LineDecodeError(ValueError):
    """Raised for a single line that cannot be decoded; never fatal to a file."""


__all__ = ["HandlingParseError", "LineDecodeError", "ParseErrorKind"]
