import struct

import pytest

from handling_core.dat.archive import (
    DatArchive,
    DatFormatError,
    build_archive,
    DatEntry,
    extract_named_entry,
    list_entries,
    main,
    replace_named_entry,
)


def _archive(*files):
    """Build a DAT archive the same way the game tools lay it out."""

    header = struct.pack("<H", len(files))
    offset = 2 + 27 * len(files)
    payloads = b""
    for name, payload in files:
        header += struct.pack("<HLL13sL", 5, len(payload), len(payload), name.encode("ascii"), offset)
        offset += len(payload)
        payloads += payload
    return header + payloads


def test_lists_entries_with_offsets():
    data = _archive(("TRACK.TRK", b"trk"), ("HANDLING.CFG", b"cfg-bytes"))

    entries = list_entries(data)

    assert [entry.name for entry in entries] == ["TRACK.TRK", "HANDLING.CFG"]
    assert entries[1].offset == 2 + 27 * 2 + 3
    assert entries[1].length == 9


def test_extract_matches_suffix_case_insensitively():
    data = _archive(("TRACK.TRK", b"trk"), ("HANDLING.CFG", b"cfg-bytes"))

    name, payload = extract_named_entry(data, "handling.cfg")

    assert name == "HANDLING.CFG"
    assert payload == b"cfg-bytes"


def test_missing_entry_raises_file_not_found():
    with pytest.raises(FileNotFoundError):
        extract_named_entry(_archive(("TRACK.TRK", b"trk")), "handling.cfg")


def test_replace_rebuilds_offsets_and_keeps_other_entries():
    data = _archive(("A.TXT", b"aaaa"), ("HANDLING.CFG", b"old"), ("Z.BIN", b"\x00\x01\x02"))

    rebuilt = replace_named_entry(data, "HANDLING.CFG", b"new and longer")

    entries = list_entries(rebuilt)
    assert [entry.name for entry in entries] == ["A.TXT", "HANDLING.CFG", "Z.BIN"]
    assert extract_named_entry(rebuilt, "A.TXT")[1] == b"aaaa"
    assert extract_named_entry(rebuilt, "HANDLING.CFG")[1] == b"new and longer"
    assert extract_named_entry(rebuilt, "Z.BIN")[1] == b"\x00\x01\x02"
    assert entries[2].offset == 2 + 27 * 3 + 4 + len(b"new and longer")


def test_replace_with_same_payload_is_identity():
    data = _archive(("A.TXT", b"aaaa"), ("HANDLING.CFG", b"old"))

    assert DatArchive().replace_named_entry(data, "handling.cfg", b"old") == data


def test_truncated_header_is_rejected():
    data = _archive(("A.TXT", b"aaaa"))

    with pytest.raises(DatFormatError):
        list_entries(data[:10])


def test_long_names_cannot_be_written():
    with pytest.raises(DatFormatError):
        build_archive([(DatEntry("FOURTEEN_CHARS", 0, 0), b"")])


def test_main_extracts_entry(tmp_path, capsys):
    dat = tmp_path / "GAME.DAT"
    dat.write_bytes(_archive(("HANDLING.CFG", b"cfg")))

    assert main([str(dat), "extract", "handling.cfg"]) == 0

    assert (tmp_path / "HANDLING.CFG").read_bytes() == b"cfg"
    assert "Extracted HANDLING.CFG" in capsys.readouterr().out
