"""Decode ``handling.cfg`` lines into :class:`VehicleHandling` records.

Decoding is forgiving: malformed numbers become zero, unknown
enum codes fall back to a default and a line that cannot be decoded is
counted and skipped. Only whole-file problems raise
:class:`~handling_core.errors.HandlingParseError`.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from handling_core.dialects import GameDialect
from handling_core.enums import DriveType, EngineType, LightType
from handling_core.errors import HandlingParseError, LineDecodeError
from handling_core.field_definitions import (
    FieldDefinition,
    FieldType,
    column_order,
    get_field_definition,
    required_column_count,
)
from handling_core.storage import DEFAULT_ENCODING, read_bytes
from handling_core.tokenizer import (
    COMMENT_MARKERS,
    LineKind,
    SourceLines,
    classify_line,
    split_source,
    tokenize,
)
from handling_core.validator import FormatCheck, check_column_count, meets_floor
from handling_core.vehicle import VehicleHandling

logger = logging.getLogger(__name__)

_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_RE = re.compile(r"[+-]?\d+")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
MAX_IDENTIFIER_LENGTH = 14

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off"}


def parse_float_or_zero(token: str) -> float:
    """Parse an invariant-culture decimal, returning ``0.0`` on failure."""

    if not _FLOAT_RE.fullmatch(token):
        return 0.0
    value = float(token)
    if not math.isfinite(value):
        return 0.0
    return value


def parse_int_or_zero(token: str) -> int:
    """Parse a signed 32-bit integer, returning ``0`` on failure."""

    if not _INT_RE.fullmatch(token):
        return 0
    value = int(token)
    if value < _INT32_MIN or value > _INT32_MAX:
        return 0
    return value


def decode_value(field_type: FieldType, token: str) -> Any:
    """Decode one token according to *field_type*; never raises."""

    if field_type is FieldType.FLOAT:
        return parse_float_or_zero(token)
    if field_type is FieldType.INTEGER:
        return parse_int_or_zero(token)
    if field_type is FieldType.BOOLEAN:
        return token == "1"
    if field_type is FieldType.DRIVE_TYPE:
        return DriveType.from_wire(token)
    if field_type is FieldType.ENGINE_TYPE:
        return EngineType.from_wire(token)
    if field_type is FieldType.LIGHT_TYPE:
        return LightType.from_wire(token)
    return token


def decode_tokens(
    tokens: Sequence[str],
    dialect: GameDialect,
    *,
    line_number: int = 0,
    raw_line: str = "",
) -> VehicleHandling:
    """Build a vehicle from *tokens* in the column order of *dialect*.

    Raises :class:`LineDecodeError` when a required column is missing. Extra
    trailing tokens are ignored.
    """

    values: Dict[str, Any] = {}
    for index, name in enumerate(column_order(dialect)):
        definition = get_field_definition(name)
        if index >= len(tokens):
            if definition.optional:
                continue
            raise LineDecodeError(
                f"missing column {index + 1} ({definition.display_name}); line has {len(tokens)} columns"
            )
        values[name] = decode_value(definition.field_type, tokens[index])

    vehicle = VehicleHandling(
        **values,
        dialect=dialect,
        raw_line=raw_line,
        line_number=line_number,
    )
    vehicle.determine_category()
    return vehicle


@dataclass(frozen=True)
class LineResult:
    """Outcome of decoding one data line."""

    vehicle: Optional[VehicleHandling]
    column_count: int
    check: Optional[FormatCheck] = None
    error: Optional[str] = None


def decode_line(line: str, dialect: GameDialect, line_number: int = 0) -> LineResult:
    """Decode a single data line without raising."""

    tokens = tokenize(line)
    count = len(tokens)
    if not meets_floor(count):
        return LineResult(None, count, error=f"line has only {count} columns")

    check = check_column_count(dialect, count)
    try:
        vehicle = decode_tokens(tokens, dialect, line_number=line_number, raw_line=line)
    except LineDecodeError as exc:
        return LineResult(None, count, check, str(exc))
    return LineResult(vehicle, count, check)


@dataclass
class DecodeResult:
    """Vehicles decoded from one file plus everything needed to write it back."""

    vehicles: List[VehicleHandling]
    source_lines: SourceLines
    dialect: GameDialect
    parse_errors: int = 0
    format_hints: List[FormatCheck] = field(default_factory=list)
    source: str = "<memory>"

    @property
    def raw_lines(self) -> List[str]:
        return list(self.source_lines.lines)

    @property
    def vehicle_count(self) -> int:
        return len(self.vehicles)

    def summary(self) -> str:
        return f"Loaded {self.vehicle_count} vehicles from {Path(self.source).name}"


def _raise_for_empty_result(
    source: str, dialect: GameDialect, saw_data: bool, hints: Sequence[FormatCheck]
) -> None:
    if not saw_data:
        raise HandlingParseError.file_empty(source)

    mismatches = [check for check in hints if check.suggests_other_dialect]
    if mismatches:
        check = mismatches[-1]
        raise HandlingParseError.wrong_game_format(
            dialect,
            check.expected_min,
            check.expected_max,
            check.count,
            check.inferred_dialect,
        )
    if hints:
        raise HandlingParseError.invalid_format(hints[-1].hint)
    raise HandlingParseError.no_vehicles_found()


def decode_text(text: str, dialect: GameDialect, *, source: str = "<memory>") -> DecodeResult:
    """Decode a whole ``handling.cfg`` buffer.

    Succeeds as long as one vehicle decodes; individual bad lines only raise
    ``parse_errors``.
    """

    source_lines = split_source(text)
    if not len(source_lines):
        raise HandlingParseError.file_empty(source)

    vehicles: List[VehicleHandling] = []
    hints: List[FormatCheck] = []
    parse_errors = 0
    saw_data = False

    for line_number, line in enumerate(source_lines.lines, start=1):
        if classify_line(line) is LineKind.SKIP:
            continue
        saw_data = True

        result = decode_line(line, dialect, line_number)
        if result.check is not None and not result.check.ok:
            hints.append(result.check)
        if result.vehicle is None:
            parse_errors += 1
            logger.debug("Skipping line %s of %s: %s", line_number, source, result.error)
            continue
        vehicles.append(result.vehicle)

    if not vehicles:
        _raise_for_empty_result(source, dialect, saw_data, hints)

    logger.info(
        "Decoded %s vehicles from %s as %s (%s lines rejected)",
        len(vehicles),
        source,
        dialect.display_name,
        parse_errors,
    )
    return DecodeResult(
        vehicles=vehicles,
        source_lines=source_lines,
        dialect=dialect,
        parse_errors=parse_errors,
        format_hints=hints,
        source=source,
    )


def decode_bytes(
    data: bytes,
    dialect: GameDialect,
    *,
    encoding: str = DEFAULT_ENCODING,
    source: str = "<memory>",
) -> DecodeResult:
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise HandlingParseError.file_unreadable(source, exc) from exc
    return decode_text(text, dialect, source=source)


def parse_file(
    path: str | Path,
    dialect: GameDialect,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> DecodeResult:
    """Read and decode the handling file at *path*."""

    file_path = Path(path)
    if not file_path.exists():
        raise HandlingParseError.file_not_found(str(file_path))
    try:
        data = read_bytes(file_path)
    except OSError as exc:
        logger.error("Cannot read %s: %s", file_path, exc)
        raise HandlingParseError.file_unreadable(str(file_path), exc) from exc
    return decode_bytes(data, dialect, encoding=encoding, source=str(file_path))


def parse_pasted_line(text: str, dialect: GameDialect) -> VehicleHandling:
    """Decode a single line pasted by a user, ignoring a trailing ``;`` comment."""

    line = text.split(";", 1)[0].strip()
    if not line:
        raise HandlingParseError.invalid_format("No handling line to parse.")
    tokens = tokenize(line)
    required = required_column_count(dialect)
    if len(tokens) < required:
        raise HandlingParseError.invalid_format(
            f"Expected {required} columns for {dialect.full_name}, found {len(tokens)}."
        )
    return decode_tokens(tokens, dialect, raw_line=line)


def _checked_float(definition: FieldDefinition, value: float) -> float:
    if not math.isfinite(value):
        raise ValueError(f"{definition.display_name}: {value!r} is not a finite number")
    return value


def _checked_int(definition: FieldDefinition, value: int) -> int:
    if value < _INT32_MIN or value > _INT32_MAX:
        raise ValueError(
            f"{definition.display_name}: {value} is outside {_INT32_MIN} to {_INT32_MAX}"
        )
    return value


def coerce_field_value(definition: FieldDefinition, value: Any) -> Any:
    """Convert user input for *definition* into the stored type.

    Unlike file decoding this is strict and raises ``ValueError`` for input
    that does not fit the field or would not read back after a save.
    """

    field_type = definition.field_type
    if not isinstance(value, str):
        if field_type is FieldType.FLOAT:
            return _checked_float(definition, float(value))
        if field_type is FieldType.INTEGER:
            return _checked_int(definition, int(value))
        if field_type is FieldType.BOOLEAN:
            return bool(value)
        if field_type is FieldType.DRIVE_TYPE and isinstance(value, DriveType):
            return value
        if field_type is FieldType.ENGINE_TYPE and isinstance(value, EngineType):
            return value
        if field_type is FieldType.LIGHT_TYPE:
            return LightType(value)
        raise ValueError(f"{definition.display_name}: unsupported value {value!r}")

    text = value.strip()
    if field_type is FieldType.FLOAT:
        if not _FLOAT_RE.fullmatch(text):
            raise ValueError(f"{definition.display_name}: {value!r} is not a number")
        return _checked_float(definition, float(text))
    if field_type is FieldType.INTEGER:
        if not _INT_RE.fullmatch(text):
            raise ValueError(f"{definition.display_name}: {value!r} is not an integer")
        return _checked_int(definition, int(text))
    if field_type is FieldType.BOOLEAN:
        lowered = text.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ValueError(f"{definition.display_name}: expected 1/0, got {value!r}")
    if field_type in (FieldType.DRIVE_TYPE, FieldType.ENGINE_TYPE, FieldType.LIGHT_TYPE):
        enum_type = {
            FieldType.DRIVE_TYPE: DriveType,
            FieldType.ENGINE_TYPE: EngineType,
            FieldType.LIGHT_TYPE: LightType,
        }[field_type]
        for member in enum_type:
            if text.upper() in (member.name, member.to_wire().upper()):
                return member
        choices = ", ".join(member.to_wire() for member in enum_type)
        raise ValueError(f"{definition.display_name}: expected one of {choices}, got {value!r}")
    if field_type is FieldType.HEX_FLAGS:
        try:
            int(text, 16)
        except ValueError as exc:
            raise ValueError(f"{definition.display_name}: {value!r} is not hexadecimal") from exc
        return text
    if not text or len(text.split()) != 1:
        raise ValueError(f"{definition.display_name}: must be a single word")
    if text.startswith(COMMENT_MARKERS):
        raise ValueError(f"{definition.display_name}: {value!r} would be read as a comment")
    if len(text) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"{definition.display_name}: {value!r} is longer than {MAX_IDENTIFIER_LENGTH} characters"
        )
    return text


__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "DecodeResult",
    "LineResult",
    "coerce_field_value",
    "decode_bytes",
    "decode_line",
    "decode_text",
    "decode_tokens",
    "decode_value",
    "parse_file",
    "parse_float_or_zero",
    "parse_int_or_zero",
    "parse_pasted_line",
]
