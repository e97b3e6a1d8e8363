import pytest

from handling_core.category import VehicleCategory, determine_category
from handling_core.decoder import decode_line
from handling_core.dialects import GameDialect

from handling_samples import GTASA_INFERNUS, GTASA_NRG500


def test_san_andreas_sample_categories():
    assert decode_line(GTASA_NRG500, GameDialect.GTASA).vehicle.category is VehicleCategory.BIKES
    assert decode_line(GTASA_INFERNUS, GameDialect.GTASA).vehicle.category is VehicleCategory.CARS


@pytest.mark.parametrize(
    "identifier, category",
    [
        ("PCJBIKE", VehicleCategory.BIKES),
        ("predator", VehicleCategory.BOATS),
        ("DODO", VehicleCategory.PLANES),
        ("MAVERICK", VehicleCategory.HELICOPTERS),
        ("ARTICT1", VehicleCategory.TRAILERS),
        ("BANSHEE", VehicleCategory.CARS),
    ],
)
def test_known_names(identifier, category):
    assert determine_category(identifier, "0", GameDialect.GTA3) is category


def test_boat_names_must_match_exactly():
    assert determine_category("PREDATOR2", "0", GameDialect.GTA3) is VehicleCategory.CARS


def test_model_flag_nibble_used_only_for_san_andreas():
    # 0x08000000: vehicle-type nibble 0x8, a boat.
    assert determine_category("MYBOAT", "8000000", GameDialect.GTASA) is VehicleCategory.BOATS
    assert determine_category("MYBOAT", "8000000", GameDialect.GTAVC) is VehicleCategory.CARS


def test_unparseable_model_flags_fall_back_to_cars():
    assert determine_category("ODD", "zz", GameDialect.GTASA) is VehicleCategory.CARS
    assert determine_category("ODD", "1FFFFFFFF", GameDialect.GTASA) is VehicleCategory.CARS


def test_categories_have_a_stable_display_order():
    assert [category.display_name for category in VehicleCategory] == [
        "Cars",
        "Bikes",
        "Boats",
        "Planes",
        "Helicopters",
        "Trailers",
        "Other",
    ]
