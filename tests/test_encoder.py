import pytest

from handling_core.decoder import decode_line
from handling_core.dialects import GameDialect
from handling_core.encoder import encode_line, encode_tokens, format_float
from handling_core.enums import DriveType, LightType
from handling_core.vehicle import VehicleHandling

from handling_samples import GTA3_INFERNUS, GTASA_NRG500, GTAVC_ANGEL


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, "5.0"),
        (0.123456789, "0.123457"),
        (-0.15, "-0.15"),
        (2725.3, "2725.3"),
        (-0.0, "0.0"),
        (1e-9, "0.0"),
    ],
)
def test_format_float(value, expected):
    assert format_float(value) == expected


def test_identifier_is_padded_without_changing_the_value():
    vehicle = VehicleHandling(identifier="INFERNUS", dialect=GameDialect.GTA3)

    line = encode_line(vehicle, GameDialect.GTA3)

    assert line.startswith("INFERNUS       1000.0 ")
    assert line.index("1000.0") == 15
    assert vehicle.identifier == "INFERNUS"


def test_san_andreas_identifier_width_is_twelve():
    tokens = encode_tokens(VehicleHandling(identifier="NRG500"), GameDialect.GTASA)

    assert tokens[0] == "NRG500      "


@pytest.mark.parametrize(
    "dialect, columns",
    [(GameDialect.GTA3, 32), (GameDialect.GTAVC, 33), (GameDialect.GTASA, 36)],
)
def test_encoded_width_matches_game(dialect, columns):
    assert len(encode_line(VehicleHandling(identifier="TEST"), dialect).split()) == columns


def test_enums_and_flags_use_wire_codes():
    vehicle = VehicleHandling(
        identifier="TEST",
        drive_type=DriveType.FOUR_WHEEL,
        has_abs=True,
        model_flags="C04000",
        front_lights=LightType.TALL,
    )

    tokens = encode_line(vehicle, GameDialect.GTA3).split()

    assert tokens[15] == "4"
    assert tokens[19] == "1"
    assert tokens[29] == "C04000"
    assert tokens[30] == "3"


@pytest.mark.parametrize(
    "line, dialect",
    [
        (GTA3_INFERNUS, GameDialect.GTA3),
        (GTAVC_ANGEL, GameDialect.GTAVC),
        (GTASA_NRG500, GameDialect.GTASA),
    ],
)
def test_reencoded_line_decodes_to_the_same_values(line, dialect):
    original = decode_line(line, dialect).vehicle

    again = decode_line(encode_line(original, dialect), dialect).vehicle

    assert again.values() == original.values()
