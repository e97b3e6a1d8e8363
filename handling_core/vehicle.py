"""In-memory representation of one decoded ``handling.cfg`` vehicle line."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict

from handling_core.category import VehicleCategory, determine_category
from handling_core.dialects import GameDialect
from handling_core.enums import DriveType, EngineType, LightType
from handling_core.field_definitions import EDITABLE_FIELD_NAMES

_EDITABLE = frozenset(EDITABLE_FIELD_NAMES)
_IMMUTABLE_METADATA = frozenset({"raw_line", "line_number"})


@dataclass(eq=False)
class VehicleHandling:
    """Handling attributes of a single vehicle plus where it came from.

    Once constructed, assigning a different value to any handling attribute
    flips :attr:`is_modified`; the writer relies on that flag to decide which
    lines are re-encoded. ``raw_line`` and ``line_number`` are fixed at
    construction time.
    """

    identifier: str = ""

    mass: float = 1000.0
    turn_mass_or_dimension_x: float = 2.0
    drag_mult_or_dimension_y: float = 5.0
    dimension_z: float = 1.5

    centre_of_mass_x: float = 0.0
    centre_of_mass_y: float = 0.0
    centre_of_mass_z: float = 0.0

    percent_submerged: int = 75

    traction_multiplier: float = 1.0
    traction_loss: float = 0.8
    traction_bias: float = 0.5

    number_of_gears: int = 5
    max_velocity: float = 160.0
    engine_acceleration: float = 20.0
    engine_inertia: float = 5.0
    drive_type: DriveType = DriveType.REAR
    engine_type: EngineType = EngineType.PETROL

    brake_deceleration: float = 8.0
    brake_bias: float = 0.5
    has_abs: bool = False

    steering_lock: float = 30.0

    suspension_force_level: float = 1.5
    suspension_damping_level: float = 0.1
    suspension_high_speed_com_damp: float = 0.0
    suspension_upper_limit: float = 0.3
    suspension_lower_limit: float = -0.15
    suspension_bias: float = 0.5
    suspension_anti_dive_multiplier: float = 0.0

    seat_offset_distance: float = 0.2
    collision_damage_multiplier: float = 0.5
    monetary_value: int = 25000

    model_flags: str = "0"
    handling_flags: str = "0"

    front_lights: LightType = LightType.LONG
    rear_lights: LightType = LightType.SMALL

    anim_group: int = 0

    dialect: GameDialect = GameDialect.GTA3
    raw_line: str = ""
    line_number: int = 0
    is_modified: bool = False
    category: VehicleCategory = VehicleCategory.CARS

    _tracking: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tracking", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_tracking", False):
            if name in _IMMUTABLE_METADATA:
                raise AttributeError(f"{name} cannot be changed after decoding")
            if name in _EDITABLE and getattr(self, name) != value:
                object.__setattr__(self, name, value)
                object.__setattr__(self, "is_modified", True)
                return
        object.__setattr__(self, name, value)

    def mark_modified(self) -> None:
        self.is_modified = True

    def determine_category(self) -> VehicleCategory:
        self.category = determine_category(self.identifier, self.model_flags, self.dialect)
        return self.category

    def values(self) -> Dict[str, Any]:
        """Return ``{attribute: value}`` for every handling attribute."""

        return {name: getattr(self, name) for name in EDITABLE_FIELD_NAMES}

    def copy_values_from(self, source: "VehicleHandling") -> None:
        """Copy every handling value except the identifier from *source*."""

        for name in EDITABLE_FIELD_NAMES:
            if name == "identifier":
                continue
            setattr(self, name, getattr(source, name))
        self.mark_modified()

    def clone(self) -> "VehicleHandling":
        values = {
            f.name: copy.copy(getattr(self, f.name)) for f in fields(self) if f.init
        }
        return VehicleHandling(**values)


__all__ = ["VehicleHandling"]
