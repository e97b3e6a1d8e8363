from handling_core.dialects import GameDialect, expected_column_count
from handling_core.field_definitions import (
    FIELD_DEFINITIONS,
    categories,
    column_order,
    fields_by_category,
    fields_for_dialect,
    get_field_definition,
    required_column_count,
)
from handling_core.vehicle import VehicleHandling


def test_every_definition_is_a_vehicle_attribute():
    vehicle = VehicleHandling()

    for definition in FIELD_DEFINITIONS:
        assert hasattr(vehicle, definition.name)


def test_column_orders_match_written_widths():
    for dialect in (GameDialect.GTA3, GameDialect.GTAVC, GameDialect.GTASA):
        assert len(column_order(dialect)) == expected_column_count(dialect)


def test_vice_city_inserts_anti_dive_after_suspension_bias():
    gta3 = column_order(GameDialect.GTA3)
    vc = column_order(GameDialect.GTAVC)

    bias = vc.index("suspension_bias")
    assert vc[bias + 1] == "suspension_anti_dive_multiplier"
    assert "suspension_anti_dive_multiplier" not in gta3
    assert tuple(name for name in vc if name != "suspension_anti_dive_multiplier") == gta3


def test_san_andreas_only_fields():
    sa = {definition.name for definition in fields_for_dialect(GameDialect.GTASA)}

    assert {"engine_inertia", "handling_flags", "anim_group"} <= sa
    assert "dimension_z" not in sa
    assert required_column_count(GameDialect.GTASA) == 35


def test_dialect_membership_agrees_with_column_order():
    for definition in FIELD_DEFINITIONS:
        for dialect in (GameDialect.GTA3, GameDialect.GTAVC, GameDialect.GTASA):
            assert definition.is_available_for(dialect) == (definition.name in column_order(dialect))


def test_advisory_range_and_tooltip():
    mass = get_field_definition("mass")

    assert mass.is_in_range(1500.0)
    assert not mass.is_in_range(0.5)
    assert mass.tooltip == "Vehicle mass (kg)"
    assert get_field_definition("nope") is None


def test_categories_in_declaration_order():
    assert categories()[:3] == ["Identity", "Physics", "Centre of Mass"]
    assert categories()[-1] == "Animation"


def test_fields_by_category_filters_by_game():
    names = [definition.name for definition in fields_by_category("Transmission", GameDialect.GTA3)]

    assert "engine_inertia" not in names
    assert names[0] == "number_of_gears"
