"""Write edited vehicles back into the original ``handling.cfg`` text.

Only lines belonging to modified vehicles are re-encoded; every other line,
including comments and untouched vehicles, is written back exactly as it was
read so hand-formatted files keep their spacing.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from handling_core.decoder import DecodeResult
from handling_core.dialects import GameDialect
from handling_core.encoder import encode_line
from handling_core.storage import DEFAULT_ENCODING, backup_file, write_all
from handling_core.tokenizer import SourceLines
from handling_core.vehicle import VehicleHandling

logger = logging.getLogger(__name__)


def _vehicles_by_line(vehicles: Iterable[VehicleHandling]) -> Dict[int, VehicleHandling]:
    by_line: Dict[int, VehicleHandling] = {}
    for vehicle in vehicles:
        if vehicle.line_number in by_line:
            raise ValueError(f"two vehicles claim line {vehicle.line_number}")
        by_line[vehicle.line_number] = vehicle
    return by_line


def merge_lines(
    original_lines: Sequence[str],
    vehicles: Iterable[VehicleHandling],
    dialect: GameDialect,
) -> List[str]:
    """Return *original_lines* with modified vehicles' lines re-encoded."""

    by_line = _vehicles_by_line(vehicles)
    merged: List[str] = []
    replaced = 0
    for line_number, line in enumerate(original_lines, start=1):
        vehicle = by_line.get(line_number)
        if vehicle is not None and vehicle.is_modified:
            merged.append(encode_line(vehicle, dialect))
            replaced += 1
        else:
            merged.append(line)
    logger.debug("Merged %s lines, %s re-encoded", len(merged), replaced)
    return merged


def render_lines(lines: Sequence[str], source_lines: SourceLines | None = None) -> str:
    """Join *lines* using the terminators recorded in *source_lines*.

    Without *source_lines* every line ends with ``\\n``.
    """

    if source_lines is not None:
        return source_lines.join(lines)
    return "".join(f"{line}\n" for line in lines)


def merge_text(
    result: DecodeResult,
    vehicles: Iterable[VehicleHandling] | None = None,
    dialect: GameDialect | None = None,
) -> str:
    """Rebuild the full text of the file *result* was decoded from."""

    vehicles = result.vehicles if vehicles is None else vehicles
    dialect = result.dialect if dialect is None else dialect
    merged = merge_lines(result.source_lines.lines, vehicles, dialect)
    return render_lines(merged, result.source_lines)


def merge_bytes(
    result: DecodeResult,
    vehicles: Iterable[VehicleHandling] | None = None,
    dialect: GameDialect | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> bytes:
    return merge_text(result, vehicles, dialect).encode(encoding)


def save_file(
    path: str | Path,
    result: DecodeResult,
    vehicles: Iterable[VehicleHandling] | None = None,
    dialect: GameDialect | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
    backup: bool = False,
) -> Path:
    """Write the merged file to *path*, optionally keeping a ``.bak`` copy."""

    target = Path(path)
    text = merge_text(result, vehicles, dialect)
    if backup:
        backup_file(target)
    write_all(target, text, encoding=encoding)
    return target


__all__ = ["merge_bytes", "merge_lines", "merge_text", "render_lines", "save_file"]
