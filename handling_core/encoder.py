"""Encode :class:`VehicleHandling` records back into ``handling.cfg`` lines."""

from __future__ import annotations

from enum import Enum
from typing import Any, List

from handling_core.dialects import GameDialect, identifier_width
from handling_core.field_definitions import FieldType, column_order, get_field_definition
from handling_core.vehicle import VehicleHandling

FLOAT_DECIMALS = 6


def format_float(value: float) -> str:
    """Render *value* with at most six decimals and at least one.

    ``5`` becomes ``"5.0"`` and ``0.123456789`` becomes ``"0.123457"``.
    """

    text = f"{value:.{FLOAT_DECIMALS}f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    if text in ("-0.0", "0.0"):
        return "0.0"
    return text


def encode_value(field_type: FieldType, value: Any) -> str:
    if field_type is FieldType.FLOAT:
        return format_float(float(value))
    if field_type is FieldType.INTEGER:
        return str(int(value))
    if field_type is FieldType.BOOLEAN:
        return "1" if value else "0"
    if isinstance(value, Enum):
        return value.to_wire()
    return str(value)


def encode_tokens(vehicle: VehicleHandling, dialect: GameDialect) -> List[str]:
    """Return the columns of *vehicle* in the wire order of *dialect*.

    The identifier column is left-justified to the dialect's display width.
    """

    tokens: List[str] = []
    for name in column_order(dialect):
        definition = get_field_definition(name)
        token = encode_value(definition.field_type, getattr(vehicle, name))
        if name == "identifier":
            token = token.ljust(identifier_width(dialect))
        tokens.append(token)
    return tokens


def encode_line(vehicle: VehicleHandling, dialect: GameDialect) -> str:
    return " ".join(encode_tokens(vehicle, dialect))


__all__ = ["FLOAT_DECIMALS", "encode_line", "encode_tokens", "encode_value", "format_float"]
