"""In-memory access to ``.DAT`` archives that carry a handling file.

This is an example backend for the
:class:`~handling_core.storage.ArchiveStore` protocol. The games themselves
ship ``handling.cfg`` as a plain file; any other container can be plugged
into :class:`~handling_editor.session.EditorSession` the same way.

Layout: a little-endian ``uint16`` entry count followed by one 27 byte
header per entry (``uint16`` flags, ``uint32`` length, ``uint32`` stored
length, 13 byte NUL padded ASCII name, ``uint32`` absolute offset) and the
entry payloads.
"""

from __future__ import annotations

import argparse
import logging
import struct
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Tuple

logger = logging.getLogger(__name__)

_COUNT = struct.Struct("<H")
_ENTRY = struct.Struct("<HLL13sL")
NAME_LENGTH = 13


class DatFormatError(ValueError):
    """Raised when the archive bytes do not follow the DAT layout."""


@dataclass(frozen=True)
class DatEntry:
    name: str
    offset: int
    length: int
    flags: int = 5
    stored_length: int = 0


def _decode_name(raw: bytes, index: int) -> str:
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as exc:
        logger.exception("Failed to decode DAT entry name: entry=%s raw=%s", index, raw.hex())
        raise DatFormatError(f"entry {index} has a non-ASCII name") from exc
    return text.split("\x00", 1)[0]


def _encode_name(name: str) -> bytes:
    raw = name.encode("ascii")
    if len(raw) > NAME_LENGTH:
        raise DatFormatError(f"entry name {name!r} is longer than {NAME_LENGTH} characters")
    return raw.ljust(NAME_LENGTH, b"\x00")


def list_entries(archive_bytes: bytes) -> List[DatEntry]:
    """Return the entries described by the archive header."""

    if len(archive_bytes) < _COUNT.size:
        raise DatFormatError("archive too small to contain an entry count")
    (count,) = _COUNT.unpack_from(archive_bytes, 0)
    header_end = _COUNT.size + count * _ENTRY.size
    if len(archive_bytes) < header_end:
        raise DatFormatError(f"archive header is truncated: {count} entries declared")

    entries: List[DatEntry] = []
    for index in range(count):
        flags, length, stored_length, raw_name, offset = _ENTRY.unpack_from(
            archive_bytes, _COUNT.size + index * _ENTRY.size
        )
        name = _decode_name(raw_name, index)
        if offset + length > len(archive_bytes):
            raise DatFormatError(f"entry {name or index} extends past the end of the archive")
        entries.append(DatEntry(name, offset, length, flags, stored_length))
        logger.debug("DAT entry %s: name=%s offset=0x%X length=%s", index, name or "<empty>", offset, length)
    return entries


def _payload(archive_bytes: bytes, entry: DatEntry) -> bytes:
    return archive_bytes[entry.offset : entry.offset + entry.length]


def find_entry(archive_bytes: bytes, suffix: str) -> DatEntry:
    """Return the first named entry whose name ends with *suffix* (case-insensitive)."""

    wanted = suffix.lower()
    for entry in list_entries(archive_bytes):
        if entry.name and entry.name.lower().endswith(wanted):
            return entry
    raise FileNotFoundError(f"no archive entry ending with {suffix}")


def extract_named_entry(archive_bytes: bytes, suffix: str) -> Tuple[str, bytes]:
    entry = find_entry(archive_bytes, suffix)
    logger.info("Extracted %s (%s bytes) from archive", entry.name, entry.length)
    return entry.name, _payload(archive_bytes, entry)


def build_archive(entries: List[Tuple[DatEntry, bytes]]) -> bytes:
    """Serialize ``(entry, payload)`` pairs, recomputing lengths and offsets.

    The stored length field is written as given by each entry.
    """

    offset = _COUNT.size + len(entries) * _ENTRY.size
    headers = [_COUNT.pack(len(entries))]
    payloads: List[bytes] = []
    for entry, payload in entries:
        headers.append(
            _ENTRY.pack(entry.flags, len(payload), entry.stored_length, _encode_name(entry.name), offset)
        )
        payloads.append(payload)
        offset += len(payload)
    return b"".join(headers + payloads)


def replace_named_entry(archive_bytes: bytes, name: str, payload: bytes) -> bytes:
    """Return a copy of the archive with entry *name* holding *payload*.

    Every other entry keeps its flags, name, order and bytes.
    """

    entries = list_entries(archive_bytes)
    rebuilt: List[Tuple[DatEntry, bytes]] = []
    found = False
    for entry in entries:
        if not found and entry.name.lower() == name.lower():
            rebuilt.append((replace(entry, length=len(payload), stored_length=len(payload)), payload))
            found = True
        else:
            rebuilt.append((entry, _payload(archive_bytes, entry)))
    if not found:
        raise FileNotFoundError(f"{name} not found in archive")
    logger.info("Replaced %s in archive (%s bytes)", name, len(payload))
    return build_archive(rebuilt)


class DatArchive:
    """:class:`~handling_core.storage.ArchiveStore` backed by the DAT layout."""

    def extract_named_entry(self, archive_bytes: bytes, suffix: str) -> Tuple[str, bytes]:
        return extract_named_entry(archive_bytes, suffix)

    def replace_named_entry(self, archive_bytes: bytes, name: str, payload: bytes) -> bytes:
        return replace_named_entry(archive_bytes, name, payload)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="handling-dat")
    parser.add_argument("dat_file_path", help="Path to the .dat file")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List archive entries")
    extract = sub.add_parser("extract", help="Write one entry to disk")
    extract.add_argument("suffix", help="Entry name or name suffix, e.g. handling.cfg")
    extract.add_argument("-o", "--output", help="Output file (defaults to the entry name)")
    replace_cmd = sub.add_parser("replace", help="Replace one entry with a file")
    replace_cmd.add_argument("name", help="Entry name")
    replace_cmd.add_argument("source", help="File holding the new entry contents")

    args = parser.parse_args(argv)
    dat_path = Path(args.dat_file_path)
    archive_bytes = dat_path.read_bytes()

    try:
        if args.command == "list":
            for entry in list_entries(archive_bytes):
                print(f"{entry.name}\t{entry.length}")
        elif args.command == "extract":
            name, payload = extract_named_entry(archive_bytes, args.suffix)
            output = Path(args.output) if args.output else dat_path.with_name(name)
            output.write_bytes(payload)
            print(f"Extracted {name} to {output}")
        else:
            payload = Path(args.source).read_bytes()
            dat_path.write_bytes(replace_named_entry(archive_bytes, args.name, payload))
            print(f"Replaced {args.name} in {dat_path}")
    except (DatFormatError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
