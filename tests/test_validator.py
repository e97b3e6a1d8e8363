from handling_core.dialects import GameDialect, column_range, expected_column_count, infer_dialect
from handling_core.validator import check_column_count, meets_floor


def test_column_ranges_per_game():
    assert column_range(GameDialect.GTA3) == (31, 32)
    assert column_range(GameDialect.GTAVC) == (32, 33)
    assert column_range(GameDialect.GTASA) == (35, 38)
    assert expected_column_count(GameDialect.GTASA) == 36


def test_version_aliases_are_the_same_members():
    assert GameDialect.V1 is GameDialect.GTA3
    assert GameDialect.V2 is GameDialect.GTAVC
    assert GameDialect.V3 is GameDialect.GTASA


def test_count_inside_range_has_no_hint():
    check = check_column_count(GameDialect.GTAVC, 32)

    assert check.ok
    assert check.hint is None


def test_san_andreas_width_under_gta3_names_san_andreas():
    check = check_column_count(GameDialect.GTA3, 36)

    assert not check.ok
    assert check.inferred_dialect is GameDialect.GTASA
    assert "GTA: San Andreas" in check.hint
    assert "you selected GTA III" in check.hint


def test_thirty_two_columns_are_attributed_to_gta3():
    assert infer_dialect(32) is GameDialect.GTA3

    check = check_column_count(GameDialect.GTASA, 32)
    assert check.inferred_dialect is GameDialect.GTA3


def test_unknown_width_gets_generic_hint():
    check = check_column_count(GameDialect.GTA3, 25)

    assert not check.ok
    assert not check.suggests_other_dialect
    assert check.hint == "Line has 25 columns, expected 31-32 for GTA III."


def test_floor_rejects_short_lines():
    assert not meets_floor(19)
    assert meets_floor(20)
