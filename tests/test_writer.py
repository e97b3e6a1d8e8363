import pytest

from handling_core.decoder import decode_bytes, decode_text, parse_file
from handling_core.dialects import GameDialect
from handling_core.writer import merge_bytes, merge_lines, merge_text, render_lines, save_file

from handling_samples import GTA3_INFERNUS, GTA3_PREDATOR, GTA3_STINGER, gta3_file


@pytest.mark.parametrize("newline", ["\n", "\r\n"])
def test_unmodified_file_round_trips_byte_for_byte(newline):
    text = gta3_file(GTA3_INFERNUS, "", "% boats", GTA3_PREDATOR, newline=newline)
    data = (text + "; caf\xe9 comment").encode("latin-1")

    result = decode_bytes(data, GameDialect.GTA3)

    assert merge_bytes(result) == data


def test_file_without_trailing_newline_stays_that_way():
    text = gta3_file(GTA3_INFERNUS) + GTA3_STINGER

    result = decode_text(text, GameDialect.GTA3)

    assert merge_text(result) == text


def test_only_modified_vehicle_line_is_rewritten():
    text = gta3_file(GTA3_INFERNUS, GTA3_STINGER)
    result = decode_text(text, GameDialect.GTA3)
    infernus, stinger = result.vehicles

    infernus.max_velocity = 250.0
    merged = merge_text(result).splitlines()

    assert merged[3] == GTA3_STINGER
    assert merged[2].split()[13] == "250.0"
    assert merged[2].startswith("INFERNUS       1500.0 ")
    assert merged[:2] == text.splitlines()[:2]


def test_modified_file_decodes_to_edited_values():
    result = decode_text(gta3_file(GTA3_INFERNUS, GTA3_STINGER), GameDialect.GTA3)
    result.vehicles[1].mass = 1337.5

    again = decode_text(merge_text(result), GameDialect.GTA3)

    assert again.vehicles[1].mass == 1337.5
    assert again.vehicles[0].values() == result.vehicles[0].values()


def test_merge_lines_rejects_two_vehicles_on_one_line():
    result = decode_text(gta3_file(GTA3_INFERNUS), GameDialect.GTA3)
    vehicle = result.vehicles[0]

    with pytest.raises(ValueError):
        merge_lines(result.raw_lines, [vehicle, vehicle.clone()], GameDialect.GTA3)


def test_render_plain_lines_ends_every_line():
    assert render_lines(["a", "b"]) == "a\nb\n"


def test_save_file_writes_merged_text_and_backup(tmp_path):
    path = tmp_path / "handling.cfg"
    original = gta3_file(GTA3_INFERNUS, GTA3_PREDATOR, newline="\r\n").encode("latin-1")
    path.write_bytes(original)
    result = parse_file(path, GameDialect.GTA3)
    result.vehicles[0].has_abs = True

    save_file(path, result, backup=True)

    written = path.read_bytes()
    assert written.count(b"\r\n") == original.count(b"\r\n")
    assert parse_file(path, GameDialect.GTA3).vehicles[0].has_abs is True
    backups = list(tmp_path.glob("handling.cfg_*.bak"))
    assert len(backups) == 1
    assert backups[0].read_bytes() == original
