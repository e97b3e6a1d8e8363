from pathlib import Path

from handling_editor.ini_preserver import set_value, update_ini_file


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_section_names_match_case_insensitively(tmp_path: Path):
    ini = tmp_path / "settings.ini"
    ini.write_text("[Editor]\ngame = GTA3\n", encoding="utf-8")

    update_ini_file(str(ini), {"editor": {"GAME": "GTASA"}})

    assert _read(ini) == "[Editor]\ngame = GTASA\n"


def test_inline_comment_is_split_at_first_marker(tmp_path: Path):
    ini = tmp_path / "settings.ini"
    ini.write_text(
        "[editor]\ngame = GTA3 # default game\nencoding = latin-1 ; legacy # files\n",
        encoding="utf-8",
    )

    update_ini_file(str(ini), {"editor": {"game": "GTAVC", "encoding": "cp1252"}})

    content = _read(ini)
    assert "game = GTAVC # default game" in content
    assert "encoding = cp1252 ; legacy # files" in content


def test_commented_out_key_is_left_alone(tmp_path: Path):
    ini = tmp_path / "settings.ini"
    ini.write_text("[editor]\n; game = GTA3\n#game = GTAVC\n", encoding="utf-8")

    update_ini_file(str(ini), {"editor": {"game": "GTASA"}})

    assert _read(ini) == "[editor]\n; game = GTA3\n#game = GTAVC\ngame = GTASA\n"


def test_new_key_goes_before_blank_lines_of_its_section():
    lines = ["[editor]", "game = GTA3", "", "[other]", "x = 1"]

    set_value(lines, "editor", "last_file", "handling.cfg")

    assert lines == ["[editor]", "game = GTA3", "last_file = handling.cfg", "", "[other]", "x = 1"]


def test_crlf_and_missing_trailing_newline_are_kept(tmp_path: Path):
    ini = tmp_path / "settings.ini"
    ini.write_bytes(b"[editor]\r\ngame = GTA3")

    update_ini_file(str(ini), {"editor": {"game": "GTAVC"}})

    assert ini.read_bytes() == b"[editor]\r\ngame = GTAVC"


def test_create_new_file(tmp_path: Path):
    ini = tmp_path / "new.ini"

    update_ini_file(str(ini), {"editor": {"game": "GTA3"}})

    assert _read(ini) == "[editor]\ngame = GTA3\n"
