"""Codec for ``handling.cfg`` vehicle lines of GTA III, Vice City and San Andreas."""

from handling_core.decoder import DecodeResult, decode_text, parse_file, parse_pasted_line
from handling_core.dialects import GameDialect
from handling_core.encoder import encode_line
from handling_core.errors import HandlingParseError, ParseErrorKind
from handling_core.vehicle import VehicleHandling
from handling_core.writer import merge_text, save_file

__all__ = [
    "DecodeResult",
    "GameDialect",
    "HandlingParseError",
    "ParseErrorKind",
    "VehicleHandling",
    "decode_text",
    "encode_line",
    "merge_text",
    "parse_file",
    "parse_pasted_line",
    "save_file",
]
