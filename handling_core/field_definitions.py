"""Shared metadata describing each handling attribute and its column per dialect."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from handling_core.dialects import GameDialect


class FieldType(Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DRIVE_TYPE = "drive_type"
    ENGINE_TYPE = "engine_type"
    LIGHT_TYPE = "light_type"
    HEX_FLAGS = "hex_flags"


ALL_DIALECTS: FrozenSet[GameDialect] = frozenset(
    (GameDialect.GTA3, GameDialect.GTAVC, GameDialect.GTASA)
)
SA_ONLY: FrozenSet[GameDialect] = frozenset((GameDialect.GTASA,))
NOT_SA: FrozenSet[GameDialect] = frozenset((GameDialect.GTA3, GameDialect.GTAVC))
NOT_GTA3: FrozenSet[GameDialect] = frozenset((GameDialect.GTAVC, GameDialect.GTASA))


@dataclass(frozen=True)
class FieldDefinition:
    """Descriptor for one handling attribute.

    ``min_value``/``max_value`` are advisory bounds for editors; the decoder
    stores whatever the file contains.
    """

    name: str
    display_name: str
    description: str
    category: str
    field_type: FieldType
    column_index: int
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    unit: str = ""
    dialects: FrozenSet[GameDialect] = ALL_DIALECTS
    optional: bool = False

    @property
    def tooltip(self) -> str:
        if not self.unit:
            return self.description
        return f"{self.description} ({self.unit})"

    @property
    def is_numeric(self) -> bool:
        return self.field_type in (FieldType.INTEGER, FieldType.FLOAT)

    def is_available_for(self, dialect: GameDialect) -> bool:
        return dialect in self.dialects

    def is_in_range(self, value: float) -> bool:
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True


def _build_definitions() -> List[FieldDefinition]:
    F = FieldType
    return [
        # Identity
        FieldDefinition("identifier", "Vehicle ID", "Vehicle identifier (14 characters max)",
                        "Identity", F.STRING, 0),
        # Physics
        FieldDefinition("mass", "Mass", "Vehicle mass", "Physics", F.FLOAT, 1,
                        1.0, 50000.0, "kg"),
        FieldDefinition("turn_mass_or_dimension_x", "Turn Mass / Dimension X",
                        "SA: Turn Mass, GTA3/VC: Vehicle width", "Physics", F.FLOAT, 2,
                        0.0, 1000000.0, "SA: units, 3/VC: m"),
        FieldDefinition("drag_mult_or_dimension_y", "Drag Mult / Dimension Y",
                        "SA: Drag Multiplier, GTA3/VC: Vehicle length", "Physics", F.FLOAT, 3,
                        0.0, 50.0, "SA: mult, 3/VC: m"),
        FieldDefinition("dimension_z", "Dimension Z", "Vehicle height (not used in SA)",
                        "Physics", F.FLOAT, 4, 0.0, 20.0, "m", dialects=NOT_SA),
        # Centre of mass
        FieldDefinition("centre_of_mass_x", "Centre of Mass X", "Centre of mass X offset",
                        "Centre of Mass", F.FLOAT, 5, -10.0, 10.0, "m"),
        FieldDefinition("centre_of_mass_y", "Centre of Mass Y", "Centre of mass Y offset",
                        "Centre of Mass", F.FLOAT, 6, -10.0, 10.0, "m"),
        FieldDefinition("centre_of_mass_z", "Centre of Mass Z", "Centre of mass Z offset",
                        "Centre of Mass", F.FLOAT, 7, -10.0, 10.0, "m"),
        # Buoyancy
        FieldDefinition("percent_submerged", "Percent Submerged", "Buoyancy percent (>100% = sinks)",
                        "Buoyancy", F.INTEGER, 8, 10, 120, "%"),
        # Traction
        FieldDefinition("traction_multiplier", "Traction Multiplier", "Grip level multiplier",
                        "Traction", F.FLOAT, 9, 0.5, 3.0, "×"),
        FieldDefinition("traction_loss", "Traction Loss", "Grip loss when accelerating/braking",
                        "Traction", F.FLOAT, 10, 0.0, 1.0),
        FieldDefinition("traction_bias", "Traction Bias", "Grip distribution (0=rear, 1=front)",
                        "Traction", F.FLOAT, 11, 0.0, 1.0),
        # Transmission
        FieldDefinition("number_of_gears", "Number of Gears", "Number of transmission gears",
                        "Transmission", F.INTEGER, 12, 1, 5),
        FieldDefinition("max_velocity", "Max Velocity", "Maximum speed",
                        "Transmission", F.FLOAT, 13, 5.0, 300.0, "km/h"),
        FieldDefinition("engine_acceleration", "Engine Acceleration", "Acceleration rate",
                        "Transmission", F.FLOAT, 14, 0.1, 100.0, "m/s²"),
        FieldDefinition("engine_inertia", "Engine Inertia", "Engine response delay (SA only)",
                        "Transmission", F.FLOAT, 15, 0.0, 150.0, dialects=SA_ONLY),
        FieldDefinition("drive_type", "Drive Type", "Front/Rear/4-Wheel drive",
                        "Transmission", F.DRIVE_TYPE, 16),
        FieldDefinition("engine_type", "Engine Type", "Petrol/Diesel/Electric",
                        "Transmission", F.ENGINE_TYPE, 17),
        # Brakes
        FieldDefinition("brake_deceleration", "Brake Deceleration", "Braking power",
                        "Brakes", F.FLOAT, 18, 0.1, 50.0, "m/s²"),
        FieldDefinition("brake_bias", "Brake Bias", "Brake distribution (0=rear, 1=front)",
                        "Brakes", F.FLOAT, 19, 0.0, 1.0),
        FieldDefinition("has_abs", "ABS", "Anti-lock braking system", "Brakes", F.BOOLEAN, 20),
        # Steering
        FieldDefinition("steering_lock", "Steering Lock", "Maximum steering angle",
                        "Steering", F.FLOAT, 21, 10.0, 50.0, "°"),
        # Suspension
        FieldDefinition("suspension_force_level", "Suspension Force", "Spring stiffness",
                        "Suspension", F.FLOAT, 22, 0.0, 10.0),
        FieldDefinition("suspension_damping_level", "Suspension Damping", "Shock absorber strength",
                        "Suspension", F.FLOAT, 23, 0.0, 10.0),
        FieldDefinition("suspension_high_speed_com_damp", "High Speed Compression",
                        "High speed suspension damping (SA only)", "Suspension", F.FLOAT, 24,
                        0.0, 200.0, dialects=SA_ONLY),
        FieldDefinition("suspension_upper_limit", "Suspension Upper Limit", "Maximum suspension extension",
                        "Suspension", F.FLOAT, 25, -1.0, 2.0, "m"),
        FieldDefinition("suspension_lower_limit", "Suspension Lower Limit", "Maximum suspension compression",
                        "Suspension", F.FLOAT, 26, -2.0, 1.0, "m"),
        FieldDefinition("suspension_bias", "Suspension Bias", "Front/rear suspension balance",
                        "Suspension", F.FLOAT, 27, 0.0, 1.0),
        FieldDefinition("suspension_anti_dive_multiplier", "Anti-Dive Multiplier",
                        "Nose dive prevention under braking", "Suspension", F.FLOAT, 28,
                        0.0, 1.0, dialects=NOT_GTA3),
        # Misc
        FieldDefinition("seat_offset_distance", "Seat Offset", "Ped seat position offset",
                        "Miscellaneous", F.FLOAT, 29, -1.0, 2.0, "m"),
        FieldDefinition("collision_damage_multiplier", "Collision Damage Mult",
                        "Damage taken from collisions", "Miscellaneous", F.FLOAT, 30, 0.0, 5.0, "×"),
        FieldDefinition("monetary_value", "Monetary Value", "Vehicle value in $",
                        "Miscellaneous", F.INTEGER, 31, 1, 1000000, "$"),
        # Flags
        FieldDefinition("model_flags", "Model Flags", "Vehicle model flags (hex)",
                        "Flags", F.HEX_FLAGS, 32),
        FieldDefinition("handling_flags", "Handling Flags", "Handling flags (hex, SA only)",
                        "Flags", F.HEX_FLAGS, 33, dialects=SA_ONLY),
        # Lights
        FieldDefinition("front_lights", "Front Lights", "Front light style", "Lights", F.LIGHT_TYPE, 34),
        FieldDefinition("rear_lights", "Rear Lights", "Rear light style", "Lights", F.LIGHT_TYPE, 35),
        # SA animation group, an optional trailing column
        FieldDefinition("anim_group", "Animation Group", "Vehicle animation group (SA only)",
                        "Animation", F.INTEGER, 36, 0, 30, dialects=SA_ONLY, optional=True),
    ]


FIELD_DEFINITIONS: List[FieldDefinition] = _build_definitions()
FIELD_DEFINITIONS_BY_NAME: Dict[str, FieldDefinition] = {
    definition.name: definition for definition in FIELD_DEFINITIONS
}

_GTA3_ORDER: Tuple[str, ...] = (
    "identifier",
    "mass",
    "turn_mass_or_dimension_x",
    "drag_mult_or_dimension_y",
    "dimension_z",
    "centre_of_mass_x",
    "centre_of_mass_y",
    "centre_of_mass_z",
    "percent_submerged",
    "traction_multiplier",
    "traction_loss",
    "traction_bias",
    "number_of_gears",
    "max_velocity",
    "engine_acceleration",
    "drive_type",
    "engine_type",
    "brake_deceleration",
    "brake_bias",
    "has_abs",
    "steering_lock",
    "suspension_force_level",
    "suspension_damping_level",
    "seat_offset_distance",
    "collision_damage_multiplier",
    "monetary_value",
    "suspension_upper_limit",
    "suspension_lower_limit",
    "suspension_bias",
    "model_flags",
    "front_lights",
    "rear_lights",
)

# Vice City inserts the anti-dive multiplier after the suspension bias.
_GTAVC_ORDER: Tuple[str, ...] = (
    _GTA3_ORDER[: _GTA3_ORDER.index("suspension_bias") + 1]
    + ("suspension_anti_dive_multiplier",)
    + _GTA3_ORDER[_GTA3_ORDER.index("suspension_bias") + 1 :]
)

# San Andreas drops dimension Z, adds engine inertia, high-speed compression
# damping and handling flags, and moves the suspension block before the seat
# offset.
_GTASA_ORDER: Tuple[str, ...] = (
    "identifier",
    "mass",
    "turn_mass_or_dimension_x",
    "drag_mult_or_dimension_y",
    "centre_of_mass_x",
    "centre_of_mass_y",
    "centre_of_mass_z",
    "percent_submerged",
    "traction_multiplier",
    "traction_loss",
    "traction_bias",
    "number_of_gears",
    "max_velocity",
    "engine_acceleration",
    "engine_inertia",
    "drive_type",
    "engine_type",
    "brake_deceleration",
    "brake_bias",
    "has_abs",
    "steering_lock",
    "suspension_force_level",
    "suspension_damping_level",
    "suspension_high_speed_com_damp",
    "suspension_upper_limit",
    "suspension_lower_limit",
    "suspension_bias",
    "suspension_anti_dive_multiplier",
    "seat_offset_distance",
    "collision_damage_multiplier",
    "monetary_value",
    "model_flags",
    "handling_flags",
    "front_lights",
    "rear_lights",
    "anim_group",
)

DIALECT_COLUMN_ORDER: Dict[GameDialect, Tuple[str, ...]] = {
    GameDialect.GTA3: _GTA3_ORDER,
    GameDialect.GTAVC: _GTAVC_ORDER,
    GameDialect.GTASA: _GTASA_ORDER,
}


def get_field_definition(name: str) -> Optional[FieldDefinition]:
    """Look up a field definition by attribute name."""

    return FIELD_DEFINITIONS_BY_NAME.get(name)


def column_order(dialect: GameDialect) -> Tuple[str, ...]:
    return DIALECT_COLUMN_ORDER[dialect]


def fields_for_dialect(dialect: GameDialect) -> List[FieldDefinition]:
    """Return the definitions present in *dialect*, in wire order."""

    return [FIELD_DEFINITIONS_BY_NAME[name] for name in DIALECT_COLUMN_ORDER[dialect]]


def required_column_count(dialect: GameDialect) -> int:
    return sum(1 for definition in fields_for_dialect(dialect) if not definition.optional)


def categories() -> List[str]:
    """Return the display categories in declaration order, without duplicates."""

    seen: List[str] = []
    for definition in FIELD_DEFINITIONS:
        if definition.category not in seen:
            seen.append(definition.category)
    return seen


def fields_by_category(category: str, dialect: GameDialect) -> List[FieldDefinition]:
    return [
        definition
        for definition in FIELD_DEFINITIONS
        if definition.category == category and definition.is_available_for(dialect)
    ]


EDITABLE_FIELD_NAMES: Tuple[str, ...] = tuple(definition.name for definition in FIELD_DEFINITIONS)


__all__ = [
    "DIALECT_COLUMN_ORDER",
    "EDITABLE_FIELD_NAMES",
    "FIELD_DEFINITIONS",
    "FIELD_DEFINITIONS_BY_NAME",
    "FieldDefinition",
    "FieldType",
    "categories",
    "column_order",
    "fields_by_category",
    "fields_for_dialect",
    "get_field_definition",
    "required_column_count",
]
