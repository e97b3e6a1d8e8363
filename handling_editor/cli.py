"""Command line front-end for inspecting and editing ``handling.cfg`` files."""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys
from typing import List, Optional

from handling_core.dialects import GameDialect
from handling_core.encoder import encode_value
from handling_core.errors import HandlingParseError
from handling_core.field_definitions import categories, fields_by_category
from handling_core.handling2csv import write_vehicles_csv
from handling_core.vehicle import VehicleHandling
from handling_editor.config_backend import ConfigBackend
from handling_editor.config_store import ConfigStore, get_config_store
from handling_editor.session import EditorSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handling-edit", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--config", help="settings.ini to read defaults from")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", help="handling.cfg, or a .DAT archive with --archive")
    common.add_argument("--game", help="GTA3, GTAVC or GTASA (default from settings.ini)")
    common.add_argument("--archive", action="store_true", help="Treat FILE as a .DAT archive")
    common.add_argument("--encoding", help="Text encoding of the handling file")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("info", parents=[common], help="Summarize the vehicles in a file")

    show = sub.add_parser("show", parents=[common], help="Print every value of one vehicle")
    show.add_argument("identifier")

    set_cmd = sub.add_parser("set", parents=[common], help="Change one value and save")
    set_cmd.add_argument("identifier")
    set_cmd.add_argument("field", help="Attribute name, e.g. max_velocity")
    set_cmd.add_argument("value")
    set_cmd.add_argument("--no-backup", action="store_true", help="Do not keep a .bak copy")

    copy = sub.add_parser("copy", parents=[common], help="Copy values onto a vehicle and save")
    copy.add_argument("target")
    source = copy.add_mutually_exclusive_group(required=True)
    source.add_argument("--from", dest="source", help="Identifier of the vehicle to copy from")
    source.add_argument("--line", help="A complete handling line to copy from")
    copy.add_argument("--no-backup", action="store_true", help="Do not keep a .bak copy")

    sub.add_parser("check", parents=[common], help="List values outside their usual range")

    export = sub.add_parser("export", parents=[common], help="Write all vehicles to CSV")
    export.add_argument("csv_file")
    return parser


def _load_store(path: Optional[str]) -> ConfigStore:
    if path is None:
        return get_config_store()
    return ConfigStore(backend=ConfigBackend(path))


def _remember_last_file(store: ConfigStore, session: EditorSession) -> None:
    last_file = session.config.last_file
    if not last_file or last_file == store.config.last_file:
        return
    try:
        store.save_editor(last_file=last_file)
    except OSError as exc:
        logger.warning("Could not update %s: %s", store.backend.path, exc)


def _open_session(args: argparse.Namespace, store: ConfigStore) -> EditorSession:
    config = replace(store.config)
    if args.game:
        config.game = GameDialect.from_name(args.game)
    if args.encoding:
        config.encoding = args.encoding
    if getattr(args, "no_backup", False):
        config.backup_on_save = False

    session = EditorSession(config)
    if args.archive:
        session.load_archive(args.file)
    else:
        session.load_file(args.file)
    return session


def _require_vehicle(session: EditorSession, identifier: str) -> VehicleHandling:
    vehicle = session.find(identifier)
    if vehicle is None:
        raise KeyError(f"No vehicle named {identifier}")
    return vehicle


def _cmd_info(session: EditorSession, args: argparse.Namespace) -> int:
    result = session.decode_result
    print(result.summary())
    print(f"Game: {session.dialect.full_name}")
    if result.parse_errors:
        print(f"Lines skipped: {result.parse_errors}")
    for category, vehicles in session.grouped_vehicles():
        print(f"  {category.display_name}: {len(vehicles)}")
    if result.format_hints:
        print(f"Note: {result.format_hints[-1].hint}")
    return EXIT_OK


def _cmd_show(session: EditorSession, args: argparse.Namespace) -> int:
    vehicle = _require_vehicle(session, args.identifier)
    print(f"{vehicle.identifier} (line {vehicle.line_number}, {vehicle.category.display_name})")
    for category in categories():
        definitions = fields_by_category(category, session.dialect)
        if not definitions:
            continue
        print(f"[{category}]")
        for definition in definitions:
            value = encode_value(definition.field_type, getattr(vehicle, definition.name))
            unit = f" {definition.unit}" if definition.unit else ""
            print(f"  {definition.name:32} {value}{unit}")
    return EXIT_OK


def _cmd_set(session: EditorSession, args: argparse.Namespace) -> int:
    vehicle = _require_vehicle(session, args.identifier)
    session.set_value(vehicle, args.field, args.value)
    if not session.has_unsaved_changes:
        print(f"{args.identifier}: {args.field} unchanged")
        return EXIT_OK
    session.save()
    print(session.status_message)
    return EXIT_OK


def _cmd_copy(session: EditorSession, args: argparse.Namespace) -> int:
    target = _require_vehicle(session, args.target)
    if args.line:
        session.copy_from_line(args.line, target)
    else:
        session.copy_values(_require_vehicle(session, args.source), target)
    session.save()
    print(session.status_message)
    return EXIT_OK


def _cmd_check(session: EditorSession, args: argparse.Namespace) -> int:
    flagged = 0
    for vehicle in session.vehicles:
        for definition, value in session.out_of_range(vehicle):
            flagged += 1
            print(
                f"{vehicle.identifier}: {definition.display_name} = {value} "
                f"(usual range {definition.min_value} to {definition.max_value})"
            )
    print(f"{flagged} value(s) outside the usual range")
    return EXIT_OK


def _cmd_export(session: EditorSession, args: argparse.Namespace) -> int:
    output = write_vehicles_csv(session.vehicles, session.dialect, Path(args.csv_file))
    print(f"Wrote {output}")
    return EXIT_OK


_COMMANDS = {
    "info": _cmd_info,
    "show": _cmd_show,
    "set": _cmd_set,
    "copy": _cmd_copy,
    "check": _cmd_check,
    "export": _cmd_export,
}


def main(argv: List[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    store = _load_store(args.config)
    try:
        session = _open_session(args, store)
    except HandlingParseError as exc:
        print(f"{exc.kind.title}: {exc.user_message()}", file=sys.stderr)
        return EXIT_LOAD_FAILED
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug("Running %s on %s", args.command, args.file)
    _remember_last_file(store, session)
    try:
        return _COMMANDS[args.command](session, args)
    except HandlingParseError as exc:
        print(f"{exc.kind.title}: {exc.user_message()}", file=sys.stderr)
        return EXIT_USAGE
    except KeyError as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
