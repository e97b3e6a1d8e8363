from handling_core.storage import backup_file, read_lines, read_text, write_all


def test_latin1_text_round_trips_every_byte(tmp_path):
    path = tmp_path / "handling.cfg"
    raw = bytes(range(256))
    path.write_bytes(raw)

    write_all(path, read_text(path))

    assert path.read_bytes() == raw


def test_read_lines_drops_terminators(tmp_path):
    path = tmp_path / "handling.cfg"
    path.write_bytes(b"; header\r\nINFERNUS 1.0\r\n")

    assert read_lines(path) == ["; header", "INFERNUS 1.0"]


def test_write_all_creates_parent_directories(tmp_path):
    path = tmp_path / "data" / "handling.cfg"

    write_all(path, "A 1\n")

    assert path.read_bytes() == b"A 1\n"


def test_backup_of_missing_file_is_skipped(tmp_path):
    assert backup_file(tmp_path / "absent.cfg") is None


def test_backup_copies_bytes(tmp_path):
    path = tmp_path / "handling.cfg"
    path.write_bytes(b"original")

    backup = backup_file(path)

    assert backup.name.startswith("handling.cfg_")
    assert backup.suffix == ".bak"
    assert backup.read_bytes() == b"original"
