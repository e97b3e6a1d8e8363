import pytest

from handling_core.category import VehicleCategory
from handling_core.decoder import decode_line
from handling_core.dialects import GameDialect
from handling_core.enums import EngineType

from handling_samples import GTA3_INFERNUS, GTA3_STINGER


def _infernus():
    return decode_line(GTA3_INFERNUS, GameDialect.GTA3, 7).vehicle


def test_fresh_vehicle_is_not_modified():
    assert _infernus().is_modified is False


def test_assigning_a_different_value_marks_modified():
    vehicle = _infernus()

    vehicle.engine_type = EngineType.DIESEL

    assert vehicle.is_modified is True


def test_assigning_the_same_value_keeps_clean():
    vehicle = _infernus()

    vehicle.mass = 1500.0
    vehicle.engine_type = EngineType.PETROL

    assert vehicle.is_modified is False


def test_source_line_metadata_is_read_only():
    vehicle = _infernus()

    with pytest.raises(AttributeError):
        vehicle.raw_line = "changed"
    with pytest.raises(AttributeError):
        vehicle.line_number = 1
    assert vehicle.line_number == 7


def test_copy_values_keeps_identifier():
    target = _infernus()
    source = decode_line(GTA3_STINGER, GameDialect.GTA3).vehicle

    target.copy_values_from(source)

    assert target.identifier == "INFERNUS"
    assert target.mass == 1200.0
    assert target.has_abs is True
    assert target.is_modified is True


def test_clone_is_independent_and_clean():
    vehicle = _infernus()

    twin = vehicle.clone()
    twin.mass = 1.0

    assert vehicle.mass == 1500.0
    assert twin.line_number == 7
    assert twin.raw_line == GTA3_INFERNUS


def test_mark_modified_without_value_change():
    vehicle = _infernus()

    vehicle.mark_modified()

    assert vehicle.is_modified is True


def test_category_is_derived_on_decode():
    assert _infernus().category is VehicleCategory.CARS
