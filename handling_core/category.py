"""Vehicle category inference from identifiers and model flags."""

from __future__ import annotations

from enum import Enum

from handling_core.dialects import GameDialect


class VehicleCategory(Enum):
    CARS = "Cars"
    BIKES = "Bikes"
    BOATS = "Boats"
    PLANES = "Planes"
    HELICOPTERS = "Helicopters"
    TRAILERS = "Trailers"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return self.value


# Bike names are matched as substrings, everything else must match exactly.
BIKE_NAMES = (
    "BIKE", "MOPED", "DIRTBIKE", "ANGEL", "FREEWAY", "FCR900", "NRG500",
    "HPV1000", "BF400", "WAYFARER", "QUADBIKE", "BMX", "CHOPPERB", "MTB",
)
BOAT_NAMES = frozenset({
    "PREDATOR", "SPEEDER", "REEFER", "RIO", "SQUALO", "TROPIC",
    "COASTGRD", "DINGHY", "MARQUIS", "CUPBOAT", "LAUNCH", "SEAPLANE",
})
PLANE_NAMES = frozenset({
    "DODO", "RUSTLER", "BEAGLE", "CROPDUST", "STUNT", "SHAMAL",
    "HYDRA", "NEVADA", "AT400", "ANDROM", "AIRTRAIN", "DEADDODO", "RCBARON",
})
HELICOPTER_NAMES = frozenset({
    "SPARROW", "SEASPAR", "MAVERICK", "COASTMAV", "POLMAV",
    "HUNTER", "LEVIATHN", "CARGOBOB", "RAINDANC", "RCGOBLIN",
    "RCCOPTER", "RCRAIDER", "HELI",
})
TRAILER_NAMES = frozenset({
    "ARTICT1", "ARTICT2", "ARTICT3", "PETROTR", "BAGBOXA", "BAGBOXB",
    "TUGSTAIR", "FARM_TR1", "UTIL_TR1", "FREIFLAT", "STREAK", "FREIGHT",
    "CSTREAK", "TRAIN",
})

# Vehicle-type nibble (bits 24-27) of San Andreas model flags.
_FLAG_CATEGORIES = (
    (0x1, VehicleCategory.BIKES),
    (0x2, VehicleCategory.HELICOPTERS),
    (0x4, VehicleCategory.PLANES),
    (0x8, VehicleCategory.BOATS),
)


def _category_from_model_flags(model_flags: str) -> VehicleCategory | None:
    try:
        flags = int(model_flags, 16)
    except ValueError:
        return None
    if flags < 0 or flags > 0xFFFFFFFF:
        return None
    vehicle_type = (flags >> 24) & 0xF
    for bit, category in _FLAG_CATEGORIES:
        if vehicle_type & bit:
            return category
    return None


def determine_category(identifier: str, model_flags: str, dialect: GameDialect) -> VehicleCategory:
    """Guess the category of a vehicle.

    Known names win; San Andreas files fall back to the vehicle-type bits of
    the model flags. Anything unmatched is a car.
    """

    name = identifier.strip().upper()

    if any(bike in name for bike in BIKE_NAMES):
        return VehicleCategory.BIKES
    for names, category in (
        (BOAT_NAMES, VehicleCategory.BOATS),
        (PLANE_NAMES, VehicleCategory.PLANES),
        (HELICOPTER_NAMES, VehicleCategory.HELICOPTERS),
        (TRAILER_NAMES, VehicleCategory.TRAILERS),
    ):
        if name in names:
            return category

    if dialect is GameDialect.GTASA and model_flags:
        category = _category_from_model_flags(model_flags)
        if category is not None:
            return category

    return VehicleCategory.CARS


__all__ = ["VehicleCategory", "determine_category"]
