from __future__ import annotations

import argparse
import csv
from pathlib import Path
import sys
from typing import Iterable, List

from handling_core.decoder import parse_file
from handling_core.dialects import GameDialect
from handling_core.encoder import encode_value
from handling_core.errors import HandlingParseError
from handling_core.field_definitions import fields_for_dialect
from handling_core.storage import DEFAULT_ENCODING
from handling_core.vehicle import VehicleHandling


def csv_header(dialect: GameDialect) -> List[str]:
    return ["line", "category"] + [definition.name for definition in fields_for_dialect(dialect)]


def write_vehicles_csv(
    vehicles: Iterable[VehicleHandling], dialect: GameDialect, output_path: Path
) -> Path:
    """Write one row per vehicle with every column of *dialect* in wire order."""

    definitions = fields_for_dialect(dialect)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as output:
        writer = csv.writer(output)
        writer.writerow(csv_header(dialect))
        for vehicle in vehicles:
            row = [str(vehicle.line_number), vehicle.category.display_name]
            row.extend(
                encode_value(definition.field_type, getattr(vehicle, definition.name))
                for definition in definitions
            )
            writer.writerow(row)
    return output_path


def convert_handling_to_csv(
    handling_file: Path,
    output_path: Path,
    dialect: GameDialect,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Path:
    result = parse_file(handling_file, dialect, encoding=encoding)
    return write_vehicles_csv(result.vehicles, dialect, output_path)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export handling.cfg vehicles to CSV")
    parser.add_argument("handling_file", help="Path to handling.cfg")
    parser.add_argument("csv_file", nargs="?", help="Output CSV (defaults to <handling_file>.csv)")
    parser.add_argument("--game", default="GTA3", help="GTA3, GTAVC or GTASA")
    parser.add_argument("--encoding", default=DEFAULT_ENCODING)
    args = parser.parse_args(argv)

    try:
        dialect = GameDialect.from_name(args.game)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    handling_file = Path(args.handling_file)
    output_path = Path(args.csv_file) if args.csv_file else handling_file.with_suffix(".csv")
    try:
        convert_handling_to_csv(handling_file, output_path, dialect, encoding=args.encoding)
    except HandlingParseError as exc:
        print(f"{exc.kind.title}: {exc.user_message()}", file=sys.stderr)
        return 1
    print(f"Wrote {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
